"""Split rewritten resume text into headings, bullet lists and paragraphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from resume_optimizer.analysis.sections import BULLET_LINE, split_sections
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary


@dataclass
class Block:
    kind: str  # "heading", "bullets" or "paragraph"
    text: str = ""
    items: list[str] = field(default_factory=list)


def parse_layout(text: str, vocabulary: Vocabulary | None = None) -> list[Block]:
    vocabulary = vocabulary or load_vocabulary()
    headers = {s.start: s for s in split_sections(text, vocabulary)}
    blocks: list[Block] = []
    offset = 0
    for line in text.split("\n"):
        start, offset = offset, offset + len(line) + 1
        if not line.strip():
            continue
        bullet = BULLET_LINE.match(line)
        if bullet:
            if not blocks or blocks[-1].kind != "bullets":
                blocks.append(Block("bullets"))
            blocks[-1].items.append(bullet.group("body"))
            continue
        header = headers.get(start)
        if header is not None:
            body_offset = min(header.body_start - start, len(line))
            blocks.append(Block("heading", line[:body_offset].strip().rstrip(":")))
            inline = line[body_offset:].strip()
            if inline:
                blocks.append(Block("paragraph", inline))
            continue
        blocks.append(Block("paragraph", line.strip()))
    return blocks


def write_text(text: str, output_path: str | Path) -> Path:
    """Write resume text as UTF-8 ``.txt``."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path
