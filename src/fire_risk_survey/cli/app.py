# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for fire-survey."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from fire_risk_survey.config import load_survey_file, weightings_path
from fire_risk_survey.data.generator import SurveyGenerator
from fire_risk_survey.data.models import Dimension, SurveyResult
from fire_risk_survey.data.sectors import DEFAULT_SECTOR
from fire_risk_survey.data.weightings import (
    ADMIN_WEIGHT_MAX,
    ADMIN_WEIGHT_MIN,
    SectorWeightingStore,
)
from fire_risk_survey.pipeline import assess_survey
from fire_risk_survey.reporting.terminal import TerminalRenderer

DIMENSION_CHOICES = [d.value for d in Dimension]


def _load_store(ctx: click.Context) -> SectorWeightingStore:
    return SectorWeightingStore.load_or_default(weightings_path(ctx.obj["store_path"]))


def _run_survey(
    ctx: click.Context,
    file: str | None,
    demo: bool,
    sector: str,
    seed: int | None,
    buildings: int,
) -> SurveyResult:
    """Load (or generate) a survey, score it and return the result."""
    console: Console = ctx.obj["console"]
    store = _load_store(ctx)
    library = None

    if file:
        try:
            with console.status("[bold cyan]Loading survey file..."):
                survey_file = load_survey_file(file)
        except (FileNotFoundError, ValueError) as exc:
            console.print(f"[red]{escape(str(exc))}[/]")
            raise SystemExit(1)
        survey = survey_file.survey
        store = survey_file.build_store(store)
        library = survey_file.build_library()
    elif demo:
        with console.status("[bold cyan]Generating demo survey..."):
            survey = SurveyGenerator(sector=sector, seed=seed, building_count=buildings).generate()
    else:
        console.print("[red]Provide a survey FILE or use --demo[/]")
        raise SystemExit(1)

    with console.status("[bold cyan]Scoring survey..."):
        return assess_survey(survey, store=store, library=library)


def _survey_options(func):
    """Shared options selecting the survey to score."""
    options = [
        click.argument("file", type=click.Path(), required=False),
        click.option("--demo", is_flag=True, help="Score a generated demo survey"),
        click.option(
            "--sector", default=DEFAULT_SECTOR, show_default=True,
            help="Industry sector for the demo survey",
        ),
        click.option("--seed", "-s", type=int, default=None, help="Random seed for reproducibility"),
        click.option(
            "--buildings", "building_count", type=click.IntRange(min=0), default=3,
            show_default=True, help="Number of buildings in the demo survey",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version="0.1.0")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--store", "store_path", type=click.Path(), default=None, envvar="FIRE_SURVEY_STORE",
    help="Sector weightings JSON file (default: ~/.fire-risk-survey/sector_weightings.json)",
)
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool, store_path: str | None) -> None:
    """fire-survey: Fire & Property Risk Survey Tool

    Score a site survey across six risk dimensions:

    \b
      Construction & Combustibility   Fire Protection
      Detection Systems               Management Systems
      Special Hazards                 Business Interruption
    """
    ctx.ensure_object(dict)
    console = Console(no_color=no_color)
    ctx.obj["console"] = console
    ctx.obj["store_path"] = store_path

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )


@cli.command()
@_survey_options
@click.option(
    "--export-pdf", type=click.Path(), default=None,
    help="Export results to PDF at this path",
)
@click.option(
    "--export-json", type=click.Path(), default=None,
    help="Export raw results as JSON at this path",
)
@click.option(
    "--export-text", type=click.Path(), default=None,
    help="Export a plain-text client report at this path",
)
@click.option("--show-details/--no-details", default=True, help="Show building material breakdowns")
@click.pass_context
def run(
    ctx: click.Context,
    file: str | None,
    demo: bool,
    sector: str,
    seed: int | None,
    building_count: int,
    export_pdf: str | None,
    export_json: str | None,
    export_text: str | None,
    show_details: bool,
) -> None:
    """Score a survey file (or a --demo survey) and show the full report."""
    console: Console = ctx.obj["console"]
    result = _run_survey(ctx, file, demo, sector, seed, building_count)

    renderer = TerminalRenderer(console)
    renderer.render(result, show_details=show_details)

    if export_pdf:
        _export_pdf(result, export_pdf, console)

    if export_json:
        _export_json(result, export_json, console)

    if export_text:
        _export_text(result, export_text, console)


@cli.command()
@_survey_options
@click.pass_context
def buildings(
    ctx: click.Context,
    file: str | None,
    demo: bool,
    sector: str,
    seed: int | None,
    building_count: int,
) -> None:
    """Show construction and combustibility for each building."""
    console: Console = ctx.obj["console"]
    result = _run_survey(ctx, file, demo, sector, seed, building_count)
    renderer = TerminalRenderer(console)
    renderer.render_buildings(result)


@cli.command()
@click.option("--custom-only", is_flag=True, help="Only list customised sectors")
@click.pass_context
def sectors(ctx: click.Context, custom_only: bool) -> None:
    """List sector weightings."""
    console: Console = ctx.obj["console"]
    rows = _load_store(ctx).rows()
    if custom_only:
        rows = [r for r in rows if r.is_custom]
    TerminalRenderer(console).render_weightings(rows)


@cli.command()
@_survey_options
@click.option(
    "--format", "-f",
    type=click.Choice(["pdf", "json", "text"]),
    default="pdf",
    help="Export format",
)
@click.option("--output", "-o", type=click.Path(), required=True, help="Output file path")
@click.pass_context
def export(
    ctx: click.Context,
    file: str | None,
    demo: bool,
    sector: str,
    seed: int | None,
    building_count: int,
    format: str,
    output: str,
) -> None:
    """Export a survey report to PDF, JSON or plain text."""
    console: Console = ctx.obj["console"]
    result = _run_survey(ctx, file, demo, sector, seed, building_count)

    if format == "pdf":
        _export_pdf(result, output, console)
    elif format == "json":
        _export_json(result, output, console)
    elif format == "text":
        _export_text(result, output, console)


# ---------------------------------------------------------------------------
# Sector weighting administration
# ---------------------------------------------------------------------------

@cli.group()
def weightings() -> None:
    """Administer sector weightings."""


@weightings.command("show")
@click.argument("sector", required=False)
@click.pass_context
def weightings_show(ctx: click.Context, sector: str | None) -> None:
    """Show weightings for SECTOR, or for every sector."""
    console: Console = ctx.obj["console"]
    store = _load_store(ctx)
    if sector is None:
        rows = store.rows()
    else:
        row = store.get(sector)
        if row is None:
            console.print(f"[red]Unknown sector: {sector}[/]")
            raise SystemExit(1)
        rows = [row]
    TerminalRenderer(console).render_weightings(rows)


@weightings.command("set")
@click.argument("sector")
@click.option(
    "--dimension", "-d", "dimensions",
    type=click.Choice(DIMENSION_CHOICES), multiple=True,
    help="Dimension to change (repeatable; default: all six)",
)
@click.option(
    "--value", type=int, required=True,
    help=f"Weight from {ADMIN_WEIGHT_MIN} (low) to {ADMIN_WEIGHT_MAX} (high)",
)
@click.pass_context
def weightings_set(
    ctx: click.Context, sector: str, dimensions: tuple[str, ...], value: int
) -> None:
    """Set one or more dimension weights for SECTOR."""
    console: Console = ctx.obj["console"]
    store = _load_store(ctx)
    try:
        for name in dimensions or DIMENSION_CHOICES:
            row = store.set_weight(sector, Dimension(name), value)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise SystemExit(1)

    path = store.save(weightings_path(ctx.obj["store_path"]))
    console.print(f"  [green]Updated weightings for[/green] {sector} -> {path}")
    TerminalRenderer(console).render_weightings([row])


@weightings.command("reset")
@click.argument("sector")
@click.pass_context
def weightings_reset(ctx: click.Context, sector: str) -> None:
    """Reset SECTOR to uniform weights and the Default row."""
    console: Console = ctx.obj["console"]
    store = _load_store(ctx)
    try:
        row = store.reset(sector)
    except KeyError:
        console.print(f"[red]Unknown sector: {sector}[/]")
        raise SystemExit(1)

    path = store.save(weightings_path(ctx.obj["store_path"]))
    console.print(f"  [green]Reset weightings for[/green] {sector} -> {path}")
    TerminalRenderer(console).render_weightings([row])


# ---------------------------------------------------------------------------
# REST API
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", type=int, default=8000, show_default=True, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the REST API server."""
    from fire_risk_survey.api import check_dependency
    check_dependency("fastapi")
    check_dependency("uvicorn")

    console: Console = ctx.obj["console"]
    console.print(f"[bold cyan]Starting API server on {host}:{port}...[/]")

    from fire_risk_survey.api.server import create_app
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)


# ---------------------------------------------------------------------------
# Export helpers
# ---------------------------------------------------------------------------

def _export_pdf(result: SurveyResult, path: str, console: Console) -> None:
    """Export to PDF."""
    try:
        from fire_risk_survey.reporting.pdf_report import PDFReportGenerator

        with console.status("[bold cyan]Generating PDF report..."):
            generator = PDFReportGenerator()
            generator.generate(result, path)
        console.print(f"  [green]PDF report exported to:[/green] {path}")
    except ImportError:
        console.print("[red]PDF export requires reportlab. Install with: pip install reportlab[/red]")


def _export_json(result: SurveyResult, path: str, console: Console) -> None:
    """Export to JSON."""
    with open(path, "w") as f:
        f.write(result.model_dump_json(indent=2))
    console.print(f"  [green]JSON report exported to:[/green] {path}")


def _export_text(result: SurveyResult, path: str, console: Console) -> None:
    """Export a plain-text client report."""
    from fire_risk_survey.reporting.text_report import write_text_report

    write_text_report(result, path)
    console.print(f"  [green]Text report exported to:[/green] {path}")
