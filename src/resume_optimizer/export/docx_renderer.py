"""DOCX output - real Word documents written with python-docx."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from docx import Document
from docx.shared import Pt, RGBColor

from resume_optimizer.export.layout import parse_layout


def build_docx(text: str) -> Document:
    doc = Document()

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(10.5)

    for block in parse_layout(text):
        if block.kind == "heading":
            heading = doc.add_heading(block.text, level=2)
            heading.runs[0].font.color.rgb = RGBColor(0x1A, 0x1A, 0x1A)
        elif block.kind == "bullets":
            for item in block.items:
                doc.add_paragraph(item, style="List Bullet")
        else:
            doc.add_paragraph(block.text)
    return doc


def generate_docx(text: str, output_path: str | Path) -> Path:
    """Write resume text to a .docx file: headers as headings, bullets as list items."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    build_docx(text).save(str(output_path))
    return output_path


def docx_bytes(text: str) -> bytes:
    buffer = BytesIO()
    build_docx(text).save(buffer)
    return buffer.getvalue()
