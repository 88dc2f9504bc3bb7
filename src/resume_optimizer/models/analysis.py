"""Pydantic models for analysis output."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SectionAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    suggestions: list[str]


class SectionScores(BaseModel):
    skills: SectionAnalysis
    experience: SectionAnalysis
    education: SectionAnalysis
    keywords: SectionAnalysis


class SemanticAnalysis(BaseModel):
    """Synthetic similarity signals; string containment, not a language model."""

    semantic_similarity: int = Field(ge=0, le=100)
    contextual_matches: list[str]
    industry_alignment: int = Field(ge=0, le=100)
    skill_relevance: int = Field(ge=0, le=100)
    experience_depth: int = Field(ge=0, le=100)
    confidence_score: int = Field(ge=0, le=100)


class AnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    sections: SectionScores
    missing_keywords: list[str]
    strength_areas: list[str]
    improvement_areas: list[str]
    ats_compatibility: int = Field(ge=0, le=100)
    semantic: SemanticAnalysis | None = None
