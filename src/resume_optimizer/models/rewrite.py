"""Pydantic models for RewriteEngine output."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

ChangeType = Literal["keyword", "achievement", "skill", "formatting"]


class RewriteChange(BaseModel):
    """One atomic substitution: the first occurrence of `original` became `improved`."""

    type: ChangeType
    section: str
    original: str
    improved: str
    reason: str

    model_config = {"frozen": True}


class Improvements(BaseModel):
    keywords_added: int = 0
    achievements_quantified: int = 0
    skills_enhanced: int = 0
    total_changes: int = 0

    model_config = {"frozen": True}


class RewriteResult(BaseModel):
    rewritten_text: str
    changes: list[RewriteChange]
    counts: Improvements
