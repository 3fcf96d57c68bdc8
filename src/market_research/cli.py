"""CLI for the Market Research Agent."""

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from .document import (
    DEFAULT_FILENAME,
    render_html_document,
    render_text_document,
    report_to_dict,
    write_document,
)
from .errors import ResearchError, ValidationError
from .extractor import ReportExtractor
from .models import Report, ResearchRequest
from .orchestrator import DEFAULT_MODEL, SessionOrchestrator
from .prompts import PRESET_QUERIES

app = typer.Typer(
    name="market-research",
    help="Startup market research agent: web-search backed competitor and positioning reports.",
    no_args_is_help=True,
)
console = Console()


class ExportFormat(str, Enum):
    txt = "txt"
    html = "html"
    json = "json"


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


@app.callback()
def main() -> None:
    """Load environment from .env before any command runs."""
    load_dotenv()


def _make_progress_callback(status_obj=None):
    """Create a progress callback that updates console or status spinner."""
    def callback(message: str) -> None:
        if status_obj:
            status_obj.update(f"[bold blue]{message}[/bold blue]")
        else:
            console.print(f"[dim]→ {message}[/dim]")
    return callback


def _resolve_query(query: str | None, preset: int | None) -> str:
    if preset is None:
        return query or ""
    if not 1 <= preset <= len(PRESET_QUERIES):
        console.print(f"[red]Error:[/red] Preset must be between 1 and {len(PRESET_QUERIES)}")
        raise typer.Exit(1)
    return PRESET_QUERIES[preset - 1]


def _render_export(report: Report, request: ResearchRequest, fmt: ExportFormat) -> str:
    if fmt == ExportFormat.html:
        return render_html_document(report, request)
    if fmt == ExportFormat.json:
        payload = {
            "subject_description": request.subject_description,
            "query": request.query,
            "report": report_to_dict(report),
        }
        return json.dumps(payload, indent=2)
    return render_text_document(report, request)


def _print_report(report: Report) -> None:
    shown = 0
    for title, content in report.sections():
        if not content:
            continue
        console.print(Panel(Markdown(content), title=f"[bold]{title}[/bold]", border_style="cyan"))
        shown += 1

    if shown == 0:
        if report.is_empty:
            console.print("[yellow]Warning:[/yellow] The service returned an empty answer")
        else:
            console.print("[yellow]Warning:[/yellow] No report sections recognised, showing raw answer")
            console.print(Markdown(report.raw_text))


@app.command("research")
def research(
    description: str = typer.Option("", "--description", "-d", help="Free-form description of the startup"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Research question"),
    preset: Optional[int] = typer.Option(None, "--preset", "-p", help="Use a preset query (see 'presets')"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to this file"),
    export_format: ExportFormat = typer.Option(ExportFormat.txt, "--format", "-f", help="Export format for --output"),
    model: str = typer.Option(DEFAULT_MODEL, "--model", "-m", envvar="MARKET_RESEARCH_MODEL", help="Model identifier (overrides the built-in default, which may be retired by the provider)"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for JSON logs of each API call"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print progress instead of a spinner"),
) -> None:
    """Run a research session and show or save the structured report.

    The model defaults to the one the report prompts were written for; pass
    --model or set MARKET_RESEARCH_MODEL to use a current model instead.
    """
    request = ResearchRequest(subject_description=description, query=_resolve_query(query, preset))
    try:
        request.validate()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    orchestrator = SessionOrchestrator(
        model=model,
        on_progress=_make_progress_callback() if verbose else None,
        llm_log_dir=log_dir,
    )

    try:
        if verbose:
            raw_text = orchestrator.run(request)
        else:
            with console.status("[bold blue]Researching...[/bold blue]", spinner="dots") as status:
                orchestrator._on_progress = _make_progress_callback(status)
                raw_text = orchestrator.run(request)
    except ResearchError as e:
        console.print(f"[red]Research failed:[/red] {e}")
        raise typer.Exit(1)

    report = ReportExtractor().extract(raw_text)

    if output is not None:
        if output.is_dir():
            output = output / DEFAULT_FILENAME
        path = write_document(output, _render_export(report, request, export_format))
        console.print(f"[green]✓[/green] Report written to {path}")
    else:
        _print_report(report)


@app.command("presets")
def presets() -> None:
    """List the preset research queries."""
    table = Table(title="Preset queries")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Query")
    for idx, text in enumerate(PRESET_QUERIES, 1):
        table.add_row(str(idx), text)
    console.print(table)


@app.command("extract")
def extract(
    input_file: Path = typer.Argument(..., help="File containing a raw research answer"),
    format: OutputFormat = typer.Option(OutputFormat.table, "--format", "-f", help="Output format"),
) -> None:
    """Split a saved research answer into report sections."""
    if not input_file.exists():
        console.print(f"[red]Error:[/red] File not found: {input_file}")
        raise typer.Exit(1)

    report = ReportExtractor().extract(input_file.read_text())

    if format == OutputFormat.json:
        print(json.dumps(report_to_dict(report), indent=2))
        return

    table = Table(title=f"Sections in {input_file.name}")
    table.add_column("Section", style="cyan")
    table.add_column("Found", justify="center")
    table.add_column("Characters", justify="right")
    for title, content in report.sections():
        found = "[green]yes[/green]" if content else "[dim]no[/dim]"
        table.add_row(title, found, str(len(content)))
    console.print(table)


if __name__ == "__main__":
    app()
