from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from resume_optimizer.export.layout import parse_layout

TEMPLATE_DIR = Path(__file__).parent / "html_templates"


def render_html(text: str, title: str = "Resume") -> str:
    """Render resume text to a standalone HTML page."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("resume.html")
    return template.render(title=title, blocks=parse_layout(text))


def write_html(text: str, output_path: str | Path, title: str = "Resume") -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(text, title), encoding="utf-8")
    return output_path
