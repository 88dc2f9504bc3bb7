"""Job-description keyword extraction and keyword-gap analysis."""

from __future__ import annotations

import re

from resume_optimizer.config import AnalysisConfig
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary

REQUIREMENT_HEADER = re.compile(
    r"^\s*(?:[A-Za-z]+\s+){0,3}?(?:requirements?|qualifications?|skills?|experience)"
    r"\s*(?::\s*(?P<rest>.*))?$",
    re.IGNORECASE,
)
_GENERIC_HEADER = re.compile(r"^\s*[A-Za-z][\w &/()-]{0,60}:\s*$")
_TOKEN_SPLIT = re.compile(r"[,;•▪●◦*]|(?:^|\s)[-–](?:\s|$)")

TITLE_PATTERNS = (
    re.compile(r"\b(?:position|role|job title)\s*:\s*([^\n.]+)", re.IGNORECASE),
    re.compile(
        r"\b(?:seeking|hiring|looking for)\s+(?:an?\s+)?([^.\n]+?)(?=\s+to\b|\s+who\b|[.\n]|$)",
        re.IGNORECASE,
    ),
    re.compile(r"^([A-Z][^.\n]+?)(?:\s+-|\s*\||\n)", re.MULTILINE),
)
MAX_TITLE_LENGTH = 60


def _requirement_bodies(job_description: str) -> list[str]:
    """Text following each Requirements/Qualifications/Skills/Experience header.

    A body is the inline remainder of the header line plus the lines below it,
    up to a blank line or the next header.
    """
    bodies = []
    lines = job_description.split("\n")
    i = 0
    while i < len(lines):
        m = REQUIREMENT_HEADER.match(lines[i])
        if not m:
            i += 1
            continue
        body = [m.group("rest") or ""]
        i += 1
        while i < len(lines):
            line = lines[i]
            if not line.strip() or REQUIREMENT_HEADER.match(line) or _GENERIC_HEADER.match(line):
                break
            body.append(line)
            i += 1
        bodies.append("\n".join(body))
    return bodies


def _tokens(body: str) -> list[str]:
    tokens = []
    for line in body.split("\n"):
        for fragment in _TOKEN_SPLIT.split(line):
            token = fragment.strip().rstrip(".").strip().lower()
            if 3 <= len(token) <= 29:
                tokens.append(token)
    return tokens


def extract_job_keywords(
    job_description: str,
    config: AnalysisConfig | None = None,
    vocabulary: Vocabulary | None = None,
) -> list[str]:
    """Extract lower-cased keywords from a job description, first-seen order."""
    config = config or AnalysisConfig()
    vocabulary = vocabulary or load_vocabulary()

    seen: dict[str, None] = {}
    for pattern in vocabulary.all_keyword_patterns():
        for match in re.finditer(pattern, job_description, re.IGNORECASE):
            keyword = match.group(0).strip().lower()
            if keyword:
                seen.setdefault(keyword, None)

    for body in _requirement_bodies(job_description):
        for token in _tokens(body):
            seen.setdefault(token, None)

    return list(seen)[: config.max_keywords]


def find_missing_keywords(resume_text: str, keywords: list[str]) -> list[str]:
    """Keywords that do not occur, case-insensitively, anywhere in the resume."""
    haystack = resume_text.lower()
    return [k for k in keywords if k.lower() not in haystack]


def count_present(text: str, keywords: list[str]) -> int:
    haystack = text.lower()
    return sum(1 for k in keywords if k.lower() in haystack)


def extract_job_title(job_description: str, vocabulary: Vocabulary | None = None) -> str:
    """Best-effort target role for a job description, "Professional" if none."""
    for pattern in TITLE_PATTERNS:
        m = pattern.search(job_description)
        if m:
            title = m.group(1).strip(" \t:-|")
            if title:
                return title[:MAX_TITLE_LENGTH].rstrip()

    vocabulary = vocabulary or load_vocabulary()
    lowered = job_description.lower()
    for title in vocabulary.common_titles:
        if title.lower() in lowered:
            return title
    return "Professional"
