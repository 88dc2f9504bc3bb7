"""Assemble an AnalysisResult from the analysis engines."""

from __future__ import annotations

import random
from dataclasses import dataclass

from resume_optimizer.analysis import scoring
from resume_optimizer.analysis.keywords import (
    extract_job_keywords,
    extract_job_title,
    find_missing_keywords,
)
from resume_optimizer.analysis.sections import extract_sections
from resume_optimizer.analysis.semantic import analyze_semantics
from resume_optimizer.config import AppConfig
from resume_optimizer.models.analysis import AnalysisResult, SectionAnalysis, SectionScores
from resume_optimizer.models.document import ExtractedSections
from resume_optimizer.models.recommendation import MLRecommendation
from resume_optimizer.pipeline.recommender import Signals, synthesize
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary


@dataclass
class AnalysisReport:
    """Everything one analyze pass produced."""

    sections: ExtractedSections
    keywords: list[str]
    job_title: str
    analysis: AnalysisResult
    recommendations: list[MLRecommendation]
    elapsed_seconds: float = 0.0


def analyze_resume(
    resume_text: str,
    job_description: str,
    sections: ExtractedSections | None = None,
    *,
    config: AppConfig | None = None,
    vocabulary: Vocabulary | None = None,
    rng: random.Random | None = None,
) -> AnalysisReport:
    """Score a resume against a job description. Pure; never raises for str input."""
    config = config or AppConfig()
    vocabulary = vocabulary or load_vocabulary(config.vocabulary)
    if sections is None:
        sections = extract_sections(resume_text, config.analysis, vocabulary)

    keywords = extract_job_keywords(job_description, config.analysis, vocabulary)
    missing = find_missing_keywords(resume_text, keywords)
    job_title = extract_job_title(job_description, vocabulary)
    sc = config.scoring

    section_scores = SectionScores(
        skills=SectionAnalysis(
            score=scoring.skills_score(sections.skills, keywords, sc),
            suggestions=scoring.skills_suggestions(sections.skills, keywords, job_title, vocabulary),
        ),
        experience=SectionAnalysis(
            score=scoring.experience_score(sections.experience_bullets, keywords, sc, vocabulary),
            suggestions=scoring.experience_suggestions(sections.experience_bullets, job_title),
        ),
        education=SectionAnalysis(
            score=scoring.education_score(sections.education_lines, sc),
            suggestions=scoring.education_suggestions(sections.education_lines, job_title),
        ),
        keywords=SectionAnalysis(
            score=scoring.keyword_score(resume_text, keywords, sc),
            suggestions=scoring.keyword_suggestions(missing),
        ),
    )

    semantic = analyze_semantics(
        resume_text, job_description, sections, keywords, vocabulary=vocabulary, rng=rng
    )
    synthesis = synthesize(
        Signals(
            resume_text=resume_text,
            job_description=job_description,
            sections=sections,
            keywords=keywords,
            missing_keywords=missing,
            job_title=job_title,
            semantic=semantic,
        ),
        vocabulary,
    )

    analysis = AnalysisResult(
        overall_score=scoring.overall_score(resume_text, keywords, sc, vocabulary),
        sections=section_scores,
        missing_keywords=missing,
        strength_areas=synthesis.strengths,
        improvement_areas=synthesis.improvements,
        ats_compatibility=scoring.ats_compatibility(resume_text, keywords, sc),
        semantic=semantic,
    )
    return AnalysisReport(
        sections=sections,
        keywords=keywords,
        job_title=job_title,
        analysis=analysis,
        recommendations=synthesis.recommendations,
    )
