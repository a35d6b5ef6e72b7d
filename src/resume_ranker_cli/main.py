"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from resume_ranker_agents.observability import configure_logging
from resume_ranker_agents.services.scoring import ScoringService
from resume_ranker_agents.tools.pdf_parser import PDFParser
from resume_ranker_core.config.settings import Settings
from resume_ranker_core.exceptions import ResumeRankerError, ScannedPDFError
from resume_ranker_core.models.resume import ResumeInput
from resume_ranker_core.models.run import EvaluationResult
from resume_ranker_core.models.scoring import ScorerOutput

app = typer.Typer(
    name="resume-ranker",
    help="Rank candidate resumes against a job posting",
)
console = Console()
logger = structlog.get_logger()

VERSION = "0.1.0"


def _load_settings(verbose: bool) -> Settings:
    settings = Settings()  # type: ignore[call-arg]
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    return settings


@app.command("parse-job")
def parse_job(
    job_file: Path = typer.Argument(..., help="Text file with the job posting", exists=True),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Parse a job posting and print it as JSON."""
    settings = _load_settings(verbose)
    text = job_file.read_text(encoding="utf-8")

    try:
        posting = asyncio.run(ScoringService(settings).parse_job(text))
    except ResumeRankerError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print_json(posting.model_dump_json())


@app.command()
def evaluate(
    job: Path = typer.Option(..., "--job", help="Text file with the job posting", exists=True),
    resumes: list[Path] = typer.Option(
        ..., "--resume", help="Resume PDF (repeat for several)", exists=True
    ),
    threshold: float | None = typer.Option(
        None, "--threshold", min=0, max=100, help="Minimum composite score to match"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Parse the job, structure and score every resume, print the ranking."""
    settings = _load_settings(verbose)
    job_text = job.read_text(encoding="utf-8")

    try:
        result = asyncio.run(_evaluate(settings, job_text, resumes, threshold))
    except ResumeRankerError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        console.print_json(result.model_dump_json())
        return

    if result.job_posting is not None:
        console.print(
            f"[bold]{result.job_posting.job_title}[/bold]"
            f" at {result.job_posting.company or 'unknown company'}"
        )
    if result.scoring_result is not None:
        console.print(_ranking_table(result.scoring_result))
        best = result.scoring_result.best_match
        status = "[green]meets[/green]" if best.meets_threshold else "[yellow]below[/yellow]"
        console.print(
            f"\nBest match: [bold]{best.id}[/bold] "
            f"({best.composite_score:.1f}, {status} threshold)"
        )
    console.print(
        f"[dim]Tokens: {result.total_tokens}  "
        f"Cost: ${result.estimated_cost_usd:.2f}  "
        f"Duration: {result.duration_seconds:.1f}s[/dim]"
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Start the JSON API server."""
    from resume_ranker_web.app import create_app

    settings = _load_settings(verbose)
    bind_host = host or settings.web_host
    bind_port = port or settings.web_port
    console.print(f"[bold green]Serving on[/bold green] http://{bind_host}:{bind_port}")
    create_app(settings).run(host=bind_host, port=bind_port)


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"resume-ranker v{VERSION}")


async def _evaluate(
    settings: Settings,
    job_text: str,
    resume_paths: list[Path],
    threshold: float | None,
) -> EvaluationResult:
    """Extract each PDF and run the full pipeline."""
    parser = PDFParser()
    inputs: list[ResumeInput] = []
    for path in resume_paths:
        text = await parser.extract_text(path)
        if not text:
            msg = f"No text could be extracted from '{path.name}'."
            raise ScannedPDFError(msg)
        inputs.append(ResumeInput(id=path.name, text=text))

    return await ScoringService(settings).evaluate(
        job_posting_text=job_text,
        threshold=threshold,
        resumes=inputs,
    )


def _ranking_table(result: ScorerOutput) -> Table:
    """Render ranked scores as a rich table."""
    table = Table(title=f"Ranking (threshold {result.threshold:g})")
    table.add_column("#", justify="right")
    table.add_column("Resume")
    table.add_column("Composite", justify="right")
    table.add_column("Skills", justify="right")
    table.add_column("Experience", justify="right")
    table.add_column("Education", justify="right")
    table.add_column("Keywords", justify="right")
    table.add_column("Match")

    for rank, score in enumerate(result.scores, start=1):
        table.add_row(
            str(rank),
            score.id,
            f"{score.composite_score:.1f}",
            f"{score.skills_match_score:g}",
            f"{score.experience_relevance_score:g}",
            f"{score.education_match_score:g}",
            f"{score.keyword_density_score:g}",
            "[green]yes[/green]" if score.meets_threshold else "[red]no[/red]",
        )
    return table


if __name__ == "__main__":
    app()
