"""Data models for the resume optimizer pipeline."""

from resume_optimizer.models.analysis import (
    AnalysisResult,
    SectionAnalysis,
    SectionScores,
    SemanticAnalysis,
)
from resume_optimizer.models.document import ExtractedSections, RawDocument
from resume_optimizer.models.recommendation import MLRecommendation, Synthesis
from resume_optimizer.models.rewrite import Improvements, RewriteChange, RewriteResult
from resume_optimizer.models.version import ResumeVersion, VersionComparison

__all__ = [
    "AnalysisResult",
    "ExtractedSections",
    "Improvements",
    "MLRecommendation",
    "RawDocument",
    "ResumeVersion",
    "RewriteChange",
    "RewriteResult",
    "SectionAnalysis",
    "SectionScores",
    "SemanticAnalysis",
    "Synthesis",
    "VersionComparison",
]
