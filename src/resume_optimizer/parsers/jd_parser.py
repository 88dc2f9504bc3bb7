import re
from pathlib import Path


def parse_jd(text: str) -> str:
    """Clean and normalize job description text.

    Line structure is kept because keyword extraction reads the lines that
    follow "Requirements:"-style headers.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    lines = [line.strip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def load_jd_file(file_path: str | Path) -> str:
    """Load a job description from a text file."""
    return parse_jd(Path(file_path).read_text(encoding="utf-8"))
