"""Pydantic models for accepted-rewrite snapshots."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from resume_optimizer.models.analysis import AnalysisResult
from resume_optimizer.models.rewrite import Improvements


class ResumeVersion(BaseModel):
    id: str = Field(default_factory=lambda: f"version-{uuid.uuid4().hex[:12]}")
    name: str
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    analysis_result: AnalysisResult
    improvements: Improvements = Field(default_factory=Improvements)
    ml_score: int = Field(ge=0, le=100)
    version: int = Field(ge=1)

    model_config = {"frozen": True}


class VersionComparison(BaseModel):
    baseline: ResumeVersion
    current: ResumeVersion
    score_increase: int
    keyword_improvement: int
    ats_improvement: int
    semantic_improvement: int
    recommendations: list[str]
