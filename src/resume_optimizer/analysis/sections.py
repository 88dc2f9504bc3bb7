"""Section extraction from plain resume text.

Section boundaries come from a line-level header grammar instead of lookahead
regexes: a header is a line equal to a known alias (optionally followed by a
colon and inline content) or a short all-caps line. A section body runs until
the next header or the end of the document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from resume_optimizer.config import AnalysisConfig
from resume_optimizer.models.document import ExtractedSections
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary

EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")
PHONE_PATTERN = re.compile(r"(?:\+\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")
NAME_PATTERN = re.compile(r"[A-Za-z ]{2,50}")
ALL_CAPS_HEADER = re.compile(r"[A-Z][A-Z &/]+")

# "- " and "* " need a following space so "-5%" or "**bold**" are not bullets
BULLET_LINE = re.compile(
    r"^(?P<marker>[ \t]*(?:[•▪●◦][ \t]*|[-*][ \t]+))(?P<body>\S.*?)[ \t]*$",
    re.MULTILINE,
)
_BULLET_PREFIX = re.compile(r"^(?:[•▪●◦]|[-*](?=\s))\s*")
_SKILL_SPLIT = re.compile(r"[,;•▪●◦]|\s[-–*]\s")


@dataclass(frozen=True)
class SectionBlock:
    """A header-delimited block; offsets index into the text it was split from."""

    name: str | None  # canonical section, None for an unrecognized all-caps header
    header: str
    start: int
    body_start: int
    end: int

    def body(self, text: str) -> str:
        return text[self.body_start:self.end]


def _alias_map(vocabulary: Vocabulary) -> dict[str, str]:
    return {
        alias.lower(): canonical
        for canonical, aliases in vocabulary.section_aliases.items()
        for alias in aliases
    }


def match_header(line: str, aliases: dict[str, str]) -> tuple[str | None, int] | None:
    """Classify a line as a section header.

    Returns ``(canonical_name, body_offset)`` where ``body_offset`` is the
    position in ``line`` where inline content starts (``len(line)`` when the
    header has none), or None when the line is not a header.
    """
    stripped = line.strip()
    if not stripped:
        return None

    head, sep, rest = stripped.partition(":")
    canonical = aliases.get(head.strip().lower())
    if canonical is not None:
        if sep and rest.strip():
            colon = line.index(":")
            inline = len(line[colon + 1:]) - len(line[colon + 1:].lstrip())
            return canonical, colon + 1 + inline
        return canonical, len(line)

    if sep and rest.strip():
        return None
    candidate = head.strip()
    if (
        ALL_CAPS_HEADER.fullmatch(candidate)
        and sum(c.isalpha() for c in candidate) >= 4
        and len(candidate.split()) <= 5
    ):
        return None, len(line)
    return None


def _is_sub_label(
    line: str, found: tuple[str | None, int], current: str | None, previous_blank: bool
) -> bool:
    """Whether an alias line with inline content is a label inside the open section.

    "Languages: Python, Java" directly under SKILLS is skills content, not a
    new section. Such a line starts a section only before any recognized
    section, after a blank line (unless it names the open section), or when
    its label is all caps.
    """
    name, body_offset = found
    if name is None or body_offset >= len(line) or current is None:
        return False
    if line.partition(":")[0].strip().isupper():
        return False
    if previous_blank:
        return name == current
    return True


def split_sections(text: str, vocabulary: Vocabulary | None = None) -> list[SectionBlock]:
    """Split resume text into header-delimited blocks in document order."""
    vocabulary = vocabulary or load_vocabulary()
    aliases = _alias_map(vocabulary)

    headers: list[tuple[str | None, str, int, int]] = []
    current: str | None = None
    previous_blank = True
    offset = 0
    for line in text.split("\n"):
        found = match_header(line, aliases)
        if found is not None and _is_sub_label(line, found, current, previous_blank):
            found = None
        if found is not None:
            name, body_offset = found
            headers.append((name, line.strip(), offset, offset + body_offset))
            if name is not None:
                current = name
        previous_blank = not line.strip()
        offset += len(line) + 1

    blocks = []
    for i, (name, header, start, body_start) in enumerate(headers):
        end = headers[i + 1][2] if i + 1 < len(headers) else len(text)
        # Body begins on the line after a bare header
        if body_start < end and text[body_start:body_start + 1] == "\n":
            body_start += 1
        blocks.append(SectionBlock(name, header, start, min(body_start, end), end))
    return blocks


def owning_section(blocks: list[SectionBlock], position: int) -> str | None:
    """Canonical section a position belongs to.

    Unrecognized all-caps headers (employer names, job titles) do not end the
    recognized section above them.
    """
    owner = None
    for block in blocks:
        if block.start > position:
            break
        if block.name is not None:
            owner = block.name
    return owner


def strip_bullet(line: str) -> str:
    return _BULLET_PREFIX.sub("", line.strip()).strip()


def _first_block(blocks: list[SectionBlock], name: str) -> SectionBlock | None:
    return next((b for b in blocks if b.name == name), None)


def _parse_skills(body: str, limit: int) -> list[str]:
    skills: list[str] = []
    for line in body.split("\n"):
        line = strip_bullet(line)
        label, sep, rest = line.partition(":")
        if sep and label.strip() and len(label.split()) <= 4:
            line = rest
        for fragment in _SKILL_SPLIT.split(line):
            fragment = fragment.strip()
            if not fragment or ":" in fragment:
                continue
            skills.append(fragment)
            if len(skills) >= limit:
                return skills
    return skills


def _parse_name(text: str, aliases: dict[str, str]) -> str | None:
    first = next((line.strip() for line in text.split("\n") if line.strip()), "")
    if not NAME_PATTERN.fullmatch(first) or not 1 <= len(first.split()) <= 4:
        return None
    # A document that opens with a section header has no name line
    found = match_header(first, aliases)
    if found is not None and found[0] is not None:
        return None
    return first


def extract_bullets(text: str, min_length: int = 10) -> list[str]:
    """Every bullet-introduced line fragment, marker stripped, short ones dropped."""
    return [
        m.group("body").strip()
        for m in BULLET_LINE.finditer(text)
        if len(m.group("body").strip()) >= min_length
    ]


def extract_sections(
    text: str,
    config: AnalysisConfig | None = None,
    vocabulary: Vocabulary | None = None,
) -> ExtractedSections:
    """Parse raw resume text into contact info, skills, bullets and education.

    Missing sections produce empty lists or None; this never raises for a
    string input.
    """
    config = config or AnalysisConfig()
    vocabulary = vocabulary or load_vocabulary()
    blocks = split_sections(text, vocabulary)

    email = EMAIL_PATTERN.search(text)
    phone = PHONE_PATTERN.search(text)

    skills_block = _first_block(blocks, "skills")
    skills = _parse_skills(skills_block.body(text), config.max_skills) if skills_block else []

    education_block = _first_block(blocks, "education")
    education_lines = []
    if education_block:
        education_lines = [
            strip_bullet(line)
            for line in education_block.body(text).split("\n")
            if strip_bullet(line)
        ]

    return ExtractedSections(
        name=_parse_name(text, _alias_map(vocabulary)),
        email=email.group(0) if email else None,
        phone=phone.group(0).strip() if phone else None,
        skills=skills,
        experience_bullets=extract_bullets(text, config.min_bullet_length),
        education_lines=education_lines,
    )
