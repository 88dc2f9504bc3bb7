"""Session state as an explicit value, updated by ``reduce(state, event)``.

The UI keeps one ``AppState`` and replaces it with the reducer's result; the
analysis engines never read or write it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from resume_optimizer.errors import EmptyInputError
from resume_optimizer.models.document import ExtractedSections, RawDocument
from resume_optimizer.models.rewrite import Improvements, RewriteResult
from resume_optimizer.models.version import ResumeVersion, VersionComparison
from resume_optimizer.pipeline.analyzer import AnalysisReport

TABS = ("analysis", "insights", "versions")


@dataclass(frozen=True)
class AppState:
    document: RawDocument | None = None
    sections: ExtractedSections | None = None
    job_description: str = ""
    active_tab: str = "analysis"
    report: AnalysisReport | None = None
    rewrite: RewriteResult | None = None
    versions: tuple[ResumeVersion, ...] = ()
    selected_version_id: str | None = None

    @property
    def candidate_name(self) -> str:
        return self.sections.display_name if self.sections else "Candidate"

    @property
    def selected_version(self) -> ResumeVersion | None:
        return next((v for v in self.versions if v.id == self.selected_version_id), None)


# -- events -------------------------------------------------------------------

@dataclass(frozen=True)
class ResumeUploaded:
    document: RawDocument
    sections: ExtractedSections


@dataclass(frozen=True)
class JobDescriptionChanged:
    text: str


@dataclass(frozen=True)
class TabSelected:
    tab: str


@dataclass(frozen=True)
class AnalysisCompleted:
    report: AnalysisReport


@dataclass(frozen=True)
class RewriteAccepted:
    rewrite: RewriteResult
    report: AnalysisReport  # re-analysis of the rewritten text


@dataclass(frozen=True)
class VersionSelected:
    version_id: str


Event = (
    ResumeUploaded
    | JobDescriptionChanged
    | TabSelected
    | AnalysisCompleted
    | RewriteAccepted
    | VersionSelected
)


def can_analyze(state: AppState) -> bool:
    return bool(state.document and state.document.text.strip() and state.job_description.strip())


def _ml_score(report: AnalysisReport) -> int:
    semantic = report.analysis.semantic
    return semantic.confidence_score if semantic else report.analysis.overall_score


def reduce(state: AppState, event: Event) -> AppState:
    """Return the state after ``event``; ``state`` itself is never modified."""
    if isinstance(event, ResumeUploaded):
        return replace(
            state,
            document=event.document,
            sections=event.sections,
            report=None,
            rewrite=None,
            versions=(),
            selected_version_id=None,
        )

    if isinstance(event, JobDescriptionChanged):
        return replace(state, job_description=event.text)

    if isinstance(event, TabSelected):
        if event.tab not in TABS:
            raise ValueError(f"Unknown tab: {event.tab}")
        return replace(state, active_tab=event.tab)

    if isinstance(event, AnalysisCompleted):
        if state.document is None or not state.document.text.strip():
            raise EmptyInputError("Resume text")
        if not state.job_description.strip():
            raise EmptyInputError("Job description")
        original = ResumeVersion(
            name=f"Original Resume - {state.candidate_name}",
            content=state.document.text,
            analysis_result=event.report.analysis,
            improvements=Improvements(),
            ml_score=_ml_score(event.report),
            version=1,
        )
        return replace(
            state,
            report=event.report,
            rewrite=None,
            versions=(original,),
            selected_version_id=original.id,
            active_tab="analysis",
        )

    if isinstance(event, RewriteAccepted):
        if not state.versions:
            raise ValueError("A rewrite can only be accepted after an analysis")
        number = len(state.versions) + 1
        version = ResumeVersion(
            name=f"Optimized v{number} - {state.candidate_name}",
            content=event.rewrite.rewritten_text,
            analysis_result=event.report.analysis,
            improvements=event.rewrite.counts,
            ml_score=_ml_score(event.report),
            version=number,
        )
        return replace(
            state,
            rewrite=event.rewrite,
            versions=(*state.versions, version),
            selected_version_id=version.id,
        )

    if isinstance(event, VersionSelected):
        if not any(v.id == event.version_id for v in state.versions):
            raise ValueError(f"Unknown version: {event.version_id}")
        return replace(state, selected_version_id=event.version_id)

    raise TypeError(f"Unhandled event: {type(event).__name__}")


def compare_versions(baseline: ResumeVersion, current: ResumeVersion) -> VersionComparison:
    """Score, keyword, ATS and semantic deltas from ``baseline`` to ``current``."""
    base, cur = baseline.analysis_result, current.analysis_result
    score_increase = cur.overall_score - base.overall_score
    keyword_improvement = len(base.missing_keywords) - len(cur.missing_keywords)
    ats_improvement = cur.ats_compatibility - base.ats_compatibility
    semantic_improvement = (
        (cur.semantic.semantic_similarity if cur.semantic else 0)
        - (base.semantic.semantic_similarity if base.semantic else 0)
    )

    advice = []
    if score_increase > 0:
        advice.append(f"Overall score improved by {score_increase} points")
    else:
        advice.append("No overall score gain; review the remaining missing keywords")
    if keyword_improvement > 0:
        advice.append(f"{keyword_improvement} previously missing keywords are now covered")
    if cur.missing_keywords:
        advice.append(f"Still missing: {', '.join(cur.missing_keywords[:5])}")
    if ats_improvement < 0:
        advice.append("ATS compatibility dropped; check section headers and contact details")

    return VersionComparison(
        baseline=baseline,
        current=current,
        score_increase=score_increase,
        keyword_improvement=keyword_improvement,
        ats_improvement=ats_improvement,
        semantic_improvement=semantic_improvement,
        recommendations=advice,
    )


def version_filename(version: ResumeVersion, ext: str) -> str:
    """``Name_With_Underscores_YYYY-MM-DD.ext`` for a version download."""
    stem = re.sub(r"\s+", "_", version.name.strip())
    return f"{stem}_{version.timestamp:%Y-%m-%d}.{ext.lstrip('.')}"
