"""Pipeline orchestrator - input checks, artificial latency, supersession."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from resume_optimizer.analysis.sections import extract_sections
from resume_optimizer.config import AppConfig
from resume_optimizer.errors import EmptyInputError
from resume_optimizer.models.document import RawDocument
from resume_optimizer.models.rewrite import RewriteResult
from resume_optimizer.pipeline.analyzer import AnalysisReport, analyze_resume
from resume_optimizer.pipeline.rewriter import RewriteEngine
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Runs analyze and optimize requests for one session.

    A new request of the same kind cancels the one still in flight; the
    superseded caller gets ``asyncio.CancelledError``.
    """

    def __init__(self, config: AppConfig | None = None, vocabulary: Vocabulary | None = None):
        self.config = config or AppConfig()
        self.vocabulary = vocabulary or load_vocabulary(self.config.vocabulary)
        self.rewriter = RewriteEngine(self.config, self.vocabulary)
        self._inflight: dict[str, asyncio.Task] = {}

    @staticmethod
    def validate_inputs(resume_text: str, job_description: str) -> None:
        if not resume_text or not resume_text.strip():
            raise EmptyInputError("Resume text")
        if not job_description or not job_description.strip():
            raise EmptyInputError("Job description")

    def run_analysis(self, resume_text: str, job_description: str, rng=None) -> AnalysisReport:
        self.validate_inputs(resume_text, job_description)
        start = time.monotonic()
        sections = extract_sections(resume_text, self.config.analysis, self.vocabulary)
        report = analyze_resume(
            resume_text,
            job_description,
            sections,
            config=self.config,
            vocabulary=self.vocabulary,
            rng=rng,
        )
        report.elapsed_seconds = time.monotonic() - start
        logger.info(
            "Analysis complete: overall=%d ats=%d missing=%d",
            report.analysis.overall_score,
            report.analysis.ats_compatibility,
            len(report.analysis.missing_keywords),
        )
        return report

    def run_rewrite(
        self, resume_text: str, job_description: str, report: AnalysisReport
    ) -> RewriteResult:
        self.validate_inputs(resume_text, job_description)
        return self.rewriter.enhance(
            resume_text, job_description, report.analysis.missing_keywords, report.sections
        )

    async def analyze(
        self,
        document: RawDocument,
        job_description: str,
        *,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> AnalysisReport:
        """Analyze after the configured delay."""
        self.validate_inputs(document.text, job_description)

        async def _run() -> AnalysisReport:
            _notify(on_phase, "analyze", f"Analyzing {document.file_name}")
            await asyncio.sleep(self.config.ui.analyze_delay_seconds)
            report = self.run_analysis(document.text, job_description)
            _notify(on_phase, "done", f"Overall score {report.analysis.overall_score}")
            return report

        return await self._supersede("analyze", _run())

    async def optimize(
        self,
        document: RawDocument,
        job_description: str,
        report: AnalysisReport,
        *,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> RewriteResult:
        """Rewrite after the configured delay."""
        self.validate_inputs(document.text, job_description)

        async def _run() -> RewriteResult:
            _notify(on_phase, "optimize", "Rewriting resume")
            await asyncio.sleep(self.config.ui.optimize_delay_seconds)
            result = self.run_rewrite(document.text, job_description, report)
            _notify(on_phase, "done", f"{result.counts.total_changes} changes")
            return result

        return await self._supersede("optimize", _run())

    async def _supersede(self, kind: str, coro):
        previous = self._inflight.get(kind)
        if previous is not None and not previous.done():
            logger.warning("Superseding in-flight %s request", kind)
            previous.cancel()

        task = asyncio.ensure_future(coro)
        self._inflight[kind] = task
        try:
            return await task
        finally:
            if self._inflight.get(kind) is task:
                del self._inflight[kind]


def _notify(on_phase, phase: str, detail: str = "") -> None:
    if on_phase:
        on_phase(phase, detail)
