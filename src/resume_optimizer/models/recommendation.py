"""Pydantic models for advisory recommendations."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Impact = Literal["high", "medium", "low"]

IMPACT_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


class MLRecommendation(BaseModel):
    type: Literal["keyword", "achievement", "skill", "formatting", "semantic"]
    section: str
    original: str
    improved: str
    reason: str
    confidence: int = Field(ge=0, le=100)
    impact: Impact


class Synthesis(BaseModel):
    strengths: list[str]
    improvements: list[str]
    recommendations: list[MLRecommendation]
