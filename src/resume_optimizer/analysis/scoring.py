"""Bounded heuristic scores and per-section suggestions.

Every score function is total and returns an int in [0, 100]. Degenerate
inputs (no keywords, no skills, no bullets) get a conservative default rather
than zero.
"""

from __future__ import annotations

import math
import re
from functools import lru_cache

from resume_optimizer.config import ScoringConfig
from resume_optimizer.vocabulary.loader import Vocabulary

_STANDARD_HEADERS = re.compile(r"\b(?:experience|education|skills)\b", re.IGNORECASE)
_THREE_DIGITS = re.compile(r"\d{3}")
_METRIC = re.compile(r"\d+%|\d+\+|\$[\d,]+")


def clamp(value: float, low: int = 0, high: int = 100) -> int:
    """Round half up and clamp into [low, high]."""
    return max(low, min(high, math.floor(value + 0.5)))


@lru_cache(maxsize=16)
def _quantification_pattern(units: tuple[str, ...]) -> re.Pattern:
    unit_alt = "|".join(re.escape(u) for u in sorted(units, key=len, reverse=True))
    return re.compile(rf"\d+%|\d+\+|\$[\d,]+|\b\d+ (?:{unit_alt})\b", re.IGNORECASE)


@lru_cache(maxsize=16)
def _verb_pattern(verbs: tuple[str, ...]) -> re.Pattern:
    return re.compile(rf"\b(?:{'|'.join(re.escape(v) for v in verbs)})\b", re.IGNORECASE)


def is_quantified(text: str, vocabulary: Vocabulary) -> bool:
    return bool(_quantification_pattern(tuple(vocabulary.quantity_units)).search(text))


def has_action_verbs(text: str, vocabulary: Vocabulary) -> bool:
    return bool(_verb_pattern(tuple(vocabulary.action_verbs)).search(text))


def _match_ratio(text: str, keywords: list[str]) -> float:
    haystack = text.lower()
    return sum(1 for k in keywords if k.lower() in haystack) / len(keywords)


def overall_score(
    resume_text: str, keywords: list[str], config: ScoringConfig, vocabulary: Vocabulary
) -> int:
    base = _match_ratio(resume_text, keywords) * 100 if keywords else config.no_keywords_default
    bonus = 0
    if is_quantified(resume_text, vocabulary):
        bonus += config.quantification_bonus
    if has_action_verbs(resume_text, vocabulary):
        bonus += config.action_verb_bonus
    return clamp(base + bonus, config.overall_floor, config.overall_cap)


def skills_score(skills: list[str], keywords: list[str], config: ScoringConfig) -> int:
    if not skills:
        return clamp(config.skills_empty_default)
    if not keywords:
        return clamp(config.no_keywords_default)
    ratio = _match_ratio(" ".join(skills), keywords)
    return clamp(ratio * 100 + config.skills_bonus, config.skills_floor, config.skills_cap)


def experience_score(
    bullets: list[str], keywords: list[str], config: ScoringConfig, vocabulary: Vocabulary
) -> int:
    if not bullets:
        return clamp(config.experience_empty_default)
    quantified = any(is_quantified(b, vocabulary) for b in bullets)
    base = config.experience_quantified_base if quantified else config.experience_base
    text = " ".join(bullets).lower()
    found = sum(1 for k in keywords if k.lower() in text)
    return clamp(base + found * config.experience_keyword_bonus, 0, config.experience_cap)


def education_score(education_lines: list[str], config: ScoringConfig) -> int:
    if not education_lines:
        return clamp(config.education_empty_default)
    return clamp(config.education_present_score)


def keyword_score(resume_text: str, keywords: list[str], config: ScoringConfig) -> int:
    if not keywords:
        return clamp(config.no_keywords_default)
    return clamp(_match_ratio(resume_text, keywords) * 100)


def ats_compatibility(resume_text: str, keywords: list[str], config: ScoringConfig) -> int:
    """Literal ATS-parsing heuristics, not a real ATS engine."""
    score = keyword_score(resume_text, keywords, config) * config.ats_keyword_weight
    if _STANDARD_HEADERS.search(resume_text):
        score += config.ats_section_bonus
    if "@" in resume_text and _THREE_DIGITS.search(resume_text):
        score += config.ats_contact_bonus
    if "•" in resume_text or "\n" in resume_text:
        score += config.ats_structure_bonus
    return clamp(score, config.ats_floor, config.ats_cap)


# ---------------------------------------------------------------------------
# Section suggestions
# ---------------------------------------------------------------------------

def skills_suggestions(
    skills: list[str], keywords: list[str], job_title: str, vocabulary: Vocabulary
) -> list[str]:
    suggestions = []
    skills_text = " ".join(skills).lower()
    technical = {s.lower() for s in vocabulary.technical_skills}
    missing_tech = [
        vocabulary.display_form(k)
        for k in keywords
        if k.lower() in technical and k.lower() not in skills_text
    ]
    if missing_tech:
        suggestions.append(f"Add relevant technical skills: {', '.join(missing_tech[:3])}")
    if "communication" not in skills_text:
        suggestions.append("Include communication and collaboration skills")
    if "manager" in job_title.lower() and "leadership" not in skills_text:
        suggestions.append("Add leadership and management skills")
    return suggestions or ["Consider adding more industry-specific skills"]


def experience_suggestions(bullets: list[str], job_title: str) -> list[str]:
    suggestions = []
    text = " ".join(bullets).lower()
    if not _METRIC.search(text):
        suggestions.append("Quantify your achievements with specific numbers and percentages")
    if "team" not in text and "collaborat" not in text:
        suggestions.append("Highlight teamwork and collaboration experience")
    if "senior" in job_title.lower() and "led" not in text and "managed" not in text:
        suggestions.append("Emphasize leadership and mentoring responsibilities")
    return suggestions or ["Strong experience section with good detail"]


def education_suggestions(education_lines: list[str], job_title: str) -> list[str]:
    suggestions = []
    title = job_title.lower()
    if not education_lines:
        suggestions.append("Add an Education section with your degree and institution")
    if "data" in title or "analyst" in title:
        suggestions.append("Consider adding data analysis or statistics courses")
    if "manager" in title:
        suggestions.append("Include any management or leadership training")
    suggestions.append("Add relevant certifications for your field")
    return suggestions


def keyword_suggestions(missing_keywords: list[str]) -> list[str]:
    if not missing_keywords:
        return ["Excellent keyword coverage for this role"]
    return [
        f"Add these important keywords: {', '.join(missing_keywords[:5])}",
        "Incorporate job-specific terminology naturally throughout your resume",
        "Use industry-standard terms and acronyms where appropriate",
    ]
