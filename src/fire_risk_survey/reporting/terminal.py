"""Rich terminal report renderer.

Composes Rich tables, panels, and ASCII charts into the primary
user-facing terminal output for a fire risk survey.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from fire_risk_survey import __version__
from fire_risk_survey.data.models import (
    BuildingScore,
    Recommendation,
    SectorWeighting,
    SurveyResult,
)
from fire_risk_survey.reporting.ascii_charts import (
    combustibility_gauge,
    material_bar,
    mini_gauge,
    score_gauge,
)
from fire_risk_survey.scoring.thresholds import construction_rating_label


class TerminalRenderer:
    """Renders survey results to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, result: SurveyResult, show_details: bool = True) -> None:
        """Render the full survey report to the terminal."""
        self._render_header(result)
        self._render_overall_score(result)
        self._render_dimensions(result)
        self._render_buildings(result, show_materials=show_details)
        self._render_warnings(result)
        self._render_recommendations(result.recommendations)
        self._render_executive_summary(result)
        self._render_footer(result)

    def render_buildings(self, result: SurveyResult) -> None:
        """Render only the construction and combustibility section."""
        self._render_header(result)
        self._render_buildings(result, show_materials=True)
        self._render_warnings(result)

    def render_weightings(self, rows: list[SectorWeighting]) -> None:
        """Render the sector weightings table."""
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Sector", style="bold", min_width=24)
        for label in ("Constr.", "Fire Prot.", "Detect.", "Mgmt.", "Special", "BI"):
            table.add_column(label, justify="right", min_width=7)
        table.add_column("Custom", justify="center")

        for row in rows:
            values = [f"{v:g}" for v in row.weights.as_dict().values()]
            custom = "[green]yes[/green]" if row.is_custom else "[dim]default[/dim]"
            table.add_row(row.sector_name, *values, custom)

        self.console.print()
        self.console.print(Panel(table, title="[bold]SECTOR WEIGHTINGS[/bold]"))

    # ------------------------------------------------------------------
    # Private rendering methods
    # ------------------------------------------------------------------

    def _render_header(self, result: SurveyResult) -> None:
        survey = result.survey
        header_text = Text()
        header_text.append("FIRE RISK SURVEY", style="bold red")
        header_text.append(" | ", style="dim")
        header_text.append(survey.name, style="bold")
        if survey.location:
            header_text.append(f" ({survey.location})", style="dim")
        header_text.append(" | ", style="dim")
        header_text.append(survey.sector)
        header_text.append(f" | {len(survey.buildings)} buildings")
        header_text.append(f" | {survey.total_area_sqm:,.0f} m²")

        self.console.print()
        self.console.print(Panel(header_text, title="Property Risk Assessment"))

    def _render_overall_score(self, result: SurveyResult) -> None:
        gauge = score_gauge(result.risk.overall_score, width=30)
        self.console.print()
        self.console.print(f"  [bold]OVERALL RISK SCORE[/bold]: {gauge}")
        self.console.print(
            f"  [bold]SITE COMBUSTIBILITY[/bold]: "
            f"{combustibility_gauge(result.site_combustibility, width=30)}/100"
        )
        self.console.print(
            f"  [bold]SECTION GRADE[/bold]: {result.overall_grade:.1f}/5 "
            f"({result.grade_band.value} priority)"
        )

    def _render_dimensions(self, result: SurveyResult) -> None:
        self.console.print()
        self.console.print(Rule(f"[bold]RISK DIMENSIONS[/bold] - {result.risk.sector}"))

        lowest = {c.dimension for c in result.risk.lowest_contributors}
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Dimension", style="bold", min_width=28)
        table.add_column("Score", justify="center", min_width=15)
        table.add_column("Weight", justify="right", min_width=7)
        table.add_column("Contribution", justify="right", min_width=12)

        for c in result.risk.contributions:
            name = f"[red]{c.name}[/red]" if c.dimension in lowest else c.name
            table.add_row(name, mini_gauge(c.score), c.percentage, f"{c.contribution:.1f}")

        self.console.print(table)

    def _render_buildings(self, result: SurveyResult, show_materials: bool) -> None:
        self.console.print()
        self.console.print(Rule("[bold]CONSTRUCTION & COMBUSTIBILITY[/bold]"))

        if not result.building_scores:
            self.console.print("  [dim]No buildings recorded.[/dim]")
            return

        buildings = {b.id: b for b in result.survey.buildings}
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Building", style="bold", min_width=14)
        table.add_column("Area m²", justify="right")
        if show_materials:
            table.add_column("Walls", min_width=20)
            table.add_column("Roof / Ceiling", min_width=20)
        table.add_column("Combustibility", justify="center", min_width=15)
        table.add_column("Rating", justify="center")

        for bs in result.building_scores:
            row = [bs.name or bs.building_id, f"{bs.total_area_sqm:,.0f}"]
            building = buildings.get(bs.building_id)
            if show_materials:
                if building is not None:
                    row.append(material_bar(building.construction.walls))
                    row.append(material_bar(building.construction.roof_ceiling))
                else:
                    row.extend(["", ""])
            row.append(combustibility_gauge(bs.combustibility))
            row.append(_rating_cell(bs))
            table.add_row(*row)

        self.console.print(table)
        self.console.print(
            "  [dim]Materials:[/dim] [green]█[/green] non-combustible "
            "[yellow]█[/yellow] approved foam/plastic [red]█[/red] combustible"
        )
        self.console.print(
            f"  [bold]Site construction rating:[/bold] {result.construction_rating}/5 "
            f"({construction_rating_label(result.construction_rating)})"
        )

    def _render_warnings(self, result: SurveyResult) -> None:
        if not result.warnings:
            return
        self.console.print()
        for warning in result.warnings:
            self.console.print(f"  [yellow]⚠ {warning}[/yellow]")

    def _render_recommendations(self, recommendations: list[Recommendation]) -> None:
        """Render ranked recommendations table."""
        self.console.print()
        self.console.print(Rule("[bold]RECOMMENDATIONS[/bold]"))

        if not recommendations:
            self.console.print("  [green]No recommendations raised.[/green]")
            return

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("#", justify="right", style="bold", width=3)
        table.add_column("Priority", justify="center", width=9)
        table.add_column("Recommendation", min_width=30)
        table.add_column("Category", min_width=14)
        table.add_column("Source", justify="center", width=12)

        for rec in recommendations:
            if rec.priority is not None:
                color = rec.priority.color
                priority = f"[{color}]{rec.priority.value}[/{color}]"
            else:
                priority = "[dim]-[/dim]"
            table.add_row(
                str(rec.rank), priority, rec.title, rec.category, rec.source.value
            )

        self.console.print(table)

    def _render_executive_summary(self, result: SurveyResult) -> None:
        """Render the executive summary in a panel."""
        self.console.print()
        self.console.print(
            Panel(
                result.executive_summary,
                title="[bold]EXECUTIVE SUMMARY[/bold]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def _render_footer(self, result: SurveyResult) -> None:
        self.console.print()
        self.console.print(Rule(style="dim"))
        self.console.print(
            f"  [dim]Generated: {result.timestamp.strftime('%Y-%m-%d %H:%M UTC')} | "
            f"fire-risk-survey v{__version__}[/dim]"
        )
        self.console.print()


def _rating_cell(bs: BuildingScore) -> str:
    rating = bs.construction_rating
    color = "red" if rating <= 2 else "yellow" if rating == 3 else "green"
    return f"[{color}]{rating} {construction_rating_label(rating)}[/{color}]"
