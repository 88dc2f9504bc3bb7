import logging
import mimetypes
import re
from io import BytesIO
from pathlib import Path

from resume_optimizer.errors import DecodeError
from resume_optimizer.models.document import RawDocument

logger = logging.getLogger(__name__)

TEXT_MIME = "text/plain"
MARKDOWN_MIME = "text/markdown"
PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_SUFFIX_MIME = {
    ".txt": TEXT_MIME,
    ".md": MARKDOWN_MIME,
    ".pdf": PDF_MIME,
    ".docx": DOCX_MIME,
    ".doc": "application/msword",
}

# Contact icons pasted from word processors / online resume builders
EMOJI_PATTERN = (
    r"[\U0001f4e7\U0001f4de\U0001f4cd\U0001f4bc\U0001f4c5\U0001f393"
    r"\U0001f3e2\U0001f4dd\U0001f4c4\U0001f517\U0001f310\U0001f4f1"
    r"\u260e\u2709\u2706\u2702]\s*"
)


def parse_resume(file_path: str | Path) -> str:
    """Parse a resume file (PDF, DOCX, TXT, MD) and return clean plain text."""
    return load_document(file_path).text


def load_document(file_path: str | Path) -> RawDocument:
    """Read a resume file from disk and decode it."""
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Could not read {path.name}: {e}", path.name) from e
    return decode_document(path.name, data)


def decode_document(
    file_name: str,
    data: bytes,
    mime_type: str | None = None,
) -> RawDocument:
    """Decode uploaded bytes into a RawDocument.

    The MIME type is trusted when it is one we decode; otherwise it is guessed
    from the file suffix. Anything that cannot produce text raises DecodeError.
    """
    resolved = _resolve_mime(file_name, mime_type)

    if resolved in (TEXT_MIME, MARKDOWN_MIME):
        raw = _decode_text(file_name, data)
    elif resolved == DOCX_MIME:
        raw = _decode_docx(file_name, data)
    elif resolved == PDF_MIME:
        raw = _decode_pdf(file_name, data)
    else:
        raise DecodeError(
            f"Unsupported file format: {Path(file_name).suffix or resolved}", file_name
        )

    text = clean_text(raw)
    if not text:
        raise DecodeError(f"No text could be extracted from {file_name}", file_name)

    logger.info("Decoded %s (%s): %d chars", file_name, resolved, len(text))
    return RawDocument(file_name=file_name, mime_type=resolved, text=text)


def _resolve_mime(file_name: str, mime_type: str | None) -> str:
    known = (TEXT_MIME, MARKDOWN_MIME, PDF_MIME, DOCX_MIME)
    if mime_type in known:
        return mime_type
    suffix = Path(file_name).suffix.lower()
    guessed = _SUFFIX_MIME.get(suffix) or mimetypes.guess_type(file_name)[0]
    if mime_type and guessed != mime_type:
        logger.warning("Unrecognized MIME type %r for %s, using %r", mime_type, file_name, guessed)
    return guessed or "application/octet-stream"


def clean_text(text: str) -> str:
    """Normalize decoded resume text.

    Handles: unicode artifacts, emoji icons, inconsistent bullet glyphs,
    runs of spaces, trailing whitespace and excessive blank lines.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)

    text = re.sub(EMOJI_PATTERN, "", text)

    # ●, ◦, ◆, ■, ▪, ★, ○ and spacing variants all become "• "
    text = re.sub(r"^(\s*)[●•◦◆■▪★○][ \t]*", r"\1• ", text, flags=re.MULTILINE)

    lines = []
    for line in text.split("\n"):
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)].replace("\t", "    ")
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).rstrip()
        lines.append(f"{indent}{stripped}" if stripped else "")
    text = "\n".join(lines)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _decode_text(file_name: str, data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError(f"{file_name} is not valid UTF-8 text", file_name) from e


def _decode_docx(file_name: str, data: bytes) -> str:
    from docx import Document

    try:
        doc = Document(BytesIO(data))
    except Exception as e:
        raise DecodeError(f"Corrupt or unreadable DOCX file: {file_name}", file_name) from e
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())


def _decode_pdf(file_name: str, data: bytes) -> str:
    import fitz  # pymupdf

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise DecodeError(f"Corrupt or unreadable PDF file: {file_name}", file_name) from e
    try:
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()
    logger.debug("Extracted %d PDF pages from %s", len(pages), file_name)
    return "\n".join(pages)
