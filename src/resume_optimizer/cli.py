"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from resume_optimizer.config import AppConfig, load_config
from resume_optimizer.errors import ResumeOptimizerError
from resume_optimizer.export import generate_docx, write_html, write_text
from resume_optimizer.models.document import RawDocument
from resume_optimizer.parsers.jd_parser import load_jd_file
from resume_optimizer.parsers.resume_parser import load_document
from resume_optimizer.pipeline.analyzer import AnalysisReport
from resume_optimizer.pipeline.orchestrator import PipelineOrchestrator

app = typer.Typer(
    name="resume-optimizer",
    help="Heuristic resume analysis and keyword-aware rewriting",
    no_args_is_help=True,
)
console = Console()


def _setup(config_path: Path | None, delay: float, verbose: bool) -> AppConfig:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = load_config(config_path)
    return replace(
        config,
        ui=replace(config.ui, analyze_delay_seconds=delay, optimize_delay_seconds=delay),
    )


def _load_inputs(resume: Path, jd: Path) -> tuple[RawDocument, str]:
    if not resume.exists():
        console.print(f"[red]Resume file not found: {escape(str(resume))}[/red]")
        raise typer.Exit(1)
    if not jd.exists():
        console.print(f"[red]Job description file not found: {escape(str(jd))}[/red]")
        raise typer.Exit(1)
    try:
        return load_document(resume), load_jd_file(jd)
    except ResumeOptimizerError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def _run_analysis(orchestrator: PipelineOrchestrator, document: RawDocument, jd_text: str) -> AnalysisReport:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Analyzing resume...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        return asyncio.run(orchestrator.analyze(document, jd_text, on_phase=on_phase))


def _print_report(report: AnalysisReport) -> None:
    result = report.analysis
    console.print(
        Panel(
            f"Target role: [bold]{escape(report.job_title)}[/bold]\n"
            f"Overall: [bold]{result.overall_score}[/bold] | ATS: {result.ats_compatibility}",
            title="Analysis",
        )
    )

    table = Table(title="Sections")
    table.add_column("Section")
    table.add_column("Score", justify="right")
    table.add_column("Suggestions")
    for name in ("skills", "experience", "education", "keywords"):
        section = getattr(result.sections, name)
        table.add_row(name.title(), str(section.score), escape("\n".join(section.suggestions)))
    console.print(table)

    if result.missing_keywords:
        console.print(f"[yellow]Missing keywords:[/yellow] {escape(', '.join(result.missing_keywords))}")
    else:
        console.print("[green]No missing keywords[/green]")

    if result.semantic:
        s = result.semantic
        console.print(
            f"[dim]Similarity {s.semantic_similarity} | Industry {s.industry_alignment} | "
            f"Skills {s.skill_relevance} | Depth {s.experience_depth} | "
            f"Confidence {s.confidence_score}[/dim]"
        )

    if report.recommendations:
        console.print("\n[bold]Recommendations[/bold]")
        for rec in report.recommendations:
            console.print(f"  ({rec.impact}) {rec.section}: {escape(rec.improved)} ({rec.confidence}%)")


@app.command()
def analyze(
    resume: Path = typer.Argument(help="Resume file (TXT/MD/DOCX/PDF)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
    delay: float = typer.Option(0.0, "--delay", help="Artificial analysis delay in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline phases"),
) -> None:
    """Score a resume against a job description."""
    config = _setup(config_path, delay, verbose)
    document, jd_text = _load_inputs(resume, jd)
    orchestrator = PipelineOrchestrator(config)

    try:
        report = _run_analysis(orchestrator, document, jd_text)
    except ResumeOptimizerError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    _print_report(report)


@app.command()
def optimize(
    resume: Path = typer.Argument(help="Resume file (TXT/MD/DOCX/PDF)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file (.txt, .html or .docx)"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
    delay: float = typer.Option(0.0, "--delay", help="Artificial delay per phase in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline phases"),
) -> None:
    """Rewrite a resume with job keywords and quantified achievements."""
    config = _setup(config_path, delay, verbose)
    document, jd_text = _load_inputs(resume, jd)
    orchestrator = PipelineOrchestrator(config)

    try:
        report = _run_analysis(orchestrator, document, jd_text)
        result = asyncio.run(orchestrator.optimize(document, jd_text, report))
    except ResumeOptimizerError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    counts = result.counts
    console.print(
        Panel(
            f"Keywords added: {counts.keywords_added} | "
            f"Achievements quantified: {counts.achievements_quantified} | "
            f"Sections enhanced: {counts.skills_enhanced} | "
            f"Total changes: {counts.total_changes}",
            title="Rewrite",
        )
    )

    if result.changes:
        table = Table(title="Changes")
        table.add_column("Type")
        table.add_column("Section")
        table.add_column("Before")
        table.add_column("After")
        for change in result.changes:
            table.add_row(change.type, change.section, escape(change.original), escape(change.improved))
        console.print(table)

    if output is None:
        output = Path(f"./output/{resume.stem}_optimized.txt")

    suffix = output.suffix.lower()
    if suffix == ".docx":
        generate_docx(result.rewritten_text, output)
    elif suffix in (".html", ".htm"):
        write_html(result.rewritten_text, output, title=report.sections.display_name)
    else:
        write_text(result.rewritten_text, output)
    console.print(f"\n[green]Saved: {escape(str(output))}[/green]")
