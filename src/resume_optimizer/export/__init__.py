"""Resume export: plain text, HTML and DOCX."""
from resume_optimizer.export.docx_renderer import docx_bytes, generate_docx
from resume_optimizer.export.html_renderer import render_html, write_html
from resume_optimizer.export.layout import parse_layout, write_text

__all__ = ["docx_bytes", "generate_docx", "parse_layout", "render_html", "write_html", "write_text"]
