"""Streamlit Web UI for resume-optimizer.

Upload a resume and paste a job description, then:
  - Analysis       : scores, section suggestions, missing keywords
  - AI Insights    : synthetic similarity signals and ranked recommendations
  - Version History: accepted rewrites, comparison and downloads
"""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st

nest_asyncio.apply()

from resume_optimizer.analysis.sections import extract_sections
from resume_optimizer.config import load_config
from resume_optimizer.errors import DecodeError, EmptyInputError
from resume_optimizer.export import docx_bytes, render_html
from resume_optimizer.parsers.jd_parser import parse_jd
from resume_optimizer.parsers.resume_parser import DOCX_MIME, decode_document
from resume_optimizer.pipeline.orchestrator import PipelineOrchestrator
from resume_optimizer.session import (
    AnalysisCompleted,
    AppState,
    JobDescriptionChanged,
    ResumeUploaded,
    RewriteAccepted,
    TabSelected,
    VersionSelected,
    can_analyze,
    compare_versions,
    reduce,
    version_filename,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Optimizer",
    page_icon=":page_facing_up:",
    layout="wide",
)

config = load_config()

if "app_state" not in st.session_state:
    st.session_state.app_state = AppState()
if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = PipelineOrchestrator(config)


def _dispatch(event) -> None:
    st.session_state.app_state = reduce(st.session_state.app_state, event)


def _state() -> AppState:
    return st.session_state.app_state


# ---------------------------------------------------------------------------
# Sidebar - upload + job description
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("Resume Optimizer")
    st.caption("Heuristic resume analysis and keyword-aware rewriting")

    resume_file = st.file_uploader(
        "Upload your resume",
        type=["pdf", "docx", "txt", "md"],
        help=f"PDF, DOCX, TXT or MD ({config.ui.max_upload_mb}MB max)",
    )
    if resume_file and resume_file.size > config.ui.max_upload_mb * 1024 * 1024:
        st.error(f"Resume file exceeds {config.ui.max_upload_mb}MB.")
        st.stop()

    if resume_file and st.session_state.get("uploaded_name") != resume_file.name:
        try:
            document = decode_document(resume_file.name, resume_file.getvalue(), resume_file.type)
        except DecodeError as e:
            st.error(str(e))
            st.stop()
        _dispatch(ResumeUploaded(document, extract_sections(document.text, config.analysis)))
        st.session_state.uploaded_name = resume_file.name

    jd_text = st.text_area(
        "Job description",
        key="jd_input",
        height=260,
        placeholder="Paste the full job description here...",
        max_chars=20000,
    )
    if parse_jd(jd_text) != _state().job_description:
        _dispatch(JobDescriptionChanged(parse_jd(jd_text)))

    analyze_clicked = st.button("Analyze", type="primary", disabled=not can_analyze(_state()))


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def _run_analyze() -> None:
    state = _state()
    progress_bar = st.progress(0, text="Preparing...")

    def on_phase(phase: str, detail: str) -> None:
        progress_bar.progress(1.0 if phase == "done" else 0.4, text=detail)

    try:
        report = asyncio.run(
            st.session_state.orchestrator.analyze(
                state.document, state.job_description, on_phase=on_phase
            )
        )
        _dispatch(AnalysisCompleted(report))
    except EmptyInputError as e:
        st.warning(str(e))
        return
    except Exception:
        logger.exception("Analysis failed")
        st.error("Something went wrong during analysis. Please try again.")
        return
    progress_bar.progress(1.0, text=f"Analysis complete for {report.job_title}")


def _run_optimize() -> None:
    state = _state()
    orchestrator = st.session_state.orchestrator
    with st.spinner("Rewriting resume..."):
        try:
            result = asyncio.run(
                orchestrator.optimize(state.document, state.job_description, state.report)
            )
            reanalysis = orchestrator.run_analysis(result.rewritten_text, state.job_description)
            _dispatch(RewriteAccepted(result, reanalysis))
        except Exception:
            logger.exception("Rewrite failed")
            st.error("Something went wrong while rewriting. Please try again.")


if analyze_clicked:
    _run_analyze()


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


def _render_analysis(state: AppState) -> None:
    result = state.report.analysis
    cols = st.columns(3)
    cols[0].metric("Overall", result.overall_score)
    cols[1].metric("ATS compatibility", result.ats_compatibility)
    cols[2].metric("Missing keywords", len(result.missing_keywords))

    for name in ("skills", "experience", "education", "keywords"):
        section = getattr(result.sections, name)
        with st.expander(f"{name.title()} - {section.score}", expanded=False):
            for suggestion in section.suggestions:
                st.markdown(f"- {suggestion}")

    if result.missing_keywords:
        st.subheader("Missing keywords")
        st.write(", ".join(result.missing_keywords))

    left, right = st.columns(2)
    with left:
        st.subheader("Strengths")
        for item in result.strength_areas:
            st.markdown(f"- {item}")
    with right:
        st.subheader("Areas to improve")
        for item in result.improvement_areas:
            st.markdown(f"- {item}")

    st.divider()
    if st.button("Enhance resume", type="primary"):
        _run_optimize()

    rewrite = _state().rewrite
    if rewrite is None:
        return
    counts = rewrite.counts
    cols = st.columns(4)
    cols[0].metric("Keywords added", counts.keywords_added)
    cols[1].metric("Achievements", counts.achievements_quantified)
    cols[2].metric("Sections enhanced", counts.skills_enhanced)
    cols[3].metric("Total changes", counts.total_changes)

    st.text_area("Enhanced resume", rewrite.rewritten_text, height=400)
    for change in rewrite.changes:
        with st.expander(f"{change.section} ({change.type})"):
            st.markdown("**Before**")
            st.code(change.original, language=None)
            st.markdown("**After**")
            st.code(change.improved, language=None)
            st.caption(change.reason)

    name = state.candidate_name.replace(" ", "_")
    dl = st.columns(3)
    dl[0].download_button("TXT", rewrite.rewritten_text.encode("utf-8"), f"{name}_optimized.txt", "text/plain")
    dl[1].download_button(
        "HTML", render_html(rewrite.rewritten_text, state.candidate_name), f"{name}_optimized.html", "text/html"
    )
    dl[2].download_button("DOCX", docx_bytes(rewrite.rewritten_text), f"{name}_optimized.docx", DOCX_MIME)


def _render_insights(state: AppState) -> None:
    semantic = state.report.analysis.semantic
    if semantic:
        cols = st.columns(5)
        cols[0].metric("Semantic similarity", semantic.semantic_similarity)
        cols[1].metric("Industry alignment", semantic.industry_alignment)
        cols[2].metric("Skill relevance", semantic.skill_relevance)
        cols[3].metric("Experience depth", semantic.experience_depth)
        cols[4].metric("Confidence", semantic.confidence_score)
        if semantic.contextual_matches:
            st.markdown("**Contextual matches:** " + ", ".join(semantic.contextual_matches))

    st.subheader("Recommendations")
    for rec in state.report.recommendations:
        with st.expander(f"[{rec.impact.upper()}] {rec.section} - {rec.confidence}%"):
            st.markdown(f"**Current:** {rec.original}")
            st.markdown(f"**Suggested:** {rec.improved}")
            st.caption(rec.reason)


def _render_versions(state: AppState) -> None:
    labels = {v.id: f"v{v.version} - {v.name} ({v.analysis_result.overall_score})" for v in state.versions}
    ids = list(labels)
    selected = st.radio(
        "Versions",
        ids,
        index=ids.index(state.selected_version_id) if state.selected_version_id in ids else 0,
        format_func=labels.get,
    )
    if selected != state.selected_version_id:
        _dispatch(VersionSelected(selected))

    version = _state().selected_version
    if version is not None:
        st.text_area("Content", version.content, height=300, key=f"content_{version.id}")
        st.download_button(
            "Download",
            version.content.encode("utf-8"),
            version_filename(version, "txt"),
            "text/plain",
        )

    if len(state.versions) >= 2:
        st.subheader("Compare")
        a, b = st.columns(2)
        baseline_id = a.selectbox("Baseline", ids, index=0, format_func=labels.get)
        current_id = b.selectbox("Current", ids, index=len(ids) - 1, format_func=labels.get)
        by_id = {v.id: v for v in state.versions}
        comparison = compare_versions(by_id[baseline_id], by_id[current_id])
        cols = st.columns(4)
        cols[0].metric("Score", comparison.current.analysis_result.overall_score, comparison.score_increase)
        cols[1].metric("Keywords covered", comparison.keyword_improvement)
        cols[2].metric("ATS", comparison.current.analysis_result.ats_compatibility, comparison.ats_improvement)
        cols[3].metric("Semantic", comparison.semantic_improvement)
        for line in comparison.recommendations:
            st.markdown(f"- {line}")


state = _state()
if state.report is None:
    st.header("Resume Optimizer")
    st.markdown("Upload a resume and paste a job description in the sidebar, then press **Analyze**.")
    st.stop()

TAB_LABELS = {"analysis": "Analysis", "insights": "AI Insights", "versions": "Version History"}
tab = st.radio(
    "View",
    list(TAB_LABELS),
    index=list(TAB_LABELS).index(state.active_tab),
    format_func=TAB_LABELS.get,
    horizontal=True,
    label_visibility="collapsed",
)
if tab != state.active_tab:
    _dispatch(TabSelected(tab))

if tab == "analysis":
    _render_analysis(_state())
elif tab == "insights":
    _render_insights(_state())
else:
    _render_versions(_state())
