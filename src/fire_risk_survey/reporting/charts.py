"""Matplotlib chart generators for the survey PDF report.

This module provides a ``ChartGenerator`` class that transforms a
``SurveyResult`` into a collection of Matplotlib figures suitable for
embedding in a ReportLab PDF or saving as standalone PNG images.

The Agg backend is selected unconditionally so that chart rendering works
in headless / server environments without a display.
"""

from __future__ import annotations

import math
import os
from collections import Counter

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from fire_risk_survey.data.models import Priority, SurveyResult  # noqa: E402
from fire_risk_survey.scoring.thresholds import (  # noqa: E402
    COMBUSTIBILITY_LOW_MAX,
    COMBUSTIBILITY_MODERATE_MAX,
    GOOD_MIN,
    POOR_MIN,
    TOLERABLE_MIN,
)

# ---------------------------------------------------------------------------
# Style / palette constants
# ---------------------------------------------------------------------------

_STYLE_CANDIDATES = ["seaborn-v0_8-whitegrid", "seaborn-whitegrid"]

_BLUE = "#2196F3"
_GREEN = "#4CAF50"
_ORANGE = "#FF9800"
_RED = "#F44336"
_PURPLE = "#9C27B0"
_CYAN = "#00BCD4"
_GREY = "#9E9E9E"

_PALETTE = [_BLUE, _GREEN, _ORANGE, _RED, _PURPLE, _CYAN]

_PRIORITY_COLORS = {
    Priority.critical: _RED,
    Priority.high: _ORANGE,
    Priority.medium: "#FFC107",
    Priority.low: _BLUE,
}

_DPI = 150


def _apply_style() -> None:
    """Apply the best available Matplotlib style."""
    for style in _STYLE_CANDIDATES:
        if style in plt.style.available:
            plt.style.use(style)
            return


_apply_style()


def _score_color(score: float) -> str:
    if score >= GOOD_MIN:
        return _GREEN
    if score >= TOLERABLE_MIN:
        return "#FFC107"
    if score >= POOR_MIN:
        return _ORANGE
    return _RED


def _combustibility_color(value: float) -> str:
    if value <= COMBUSTIBILITY_LOW_MAX:
        return _GREEN
    if value <= COMBUSTIBILITY_MODERATE_MAX:
        return _ORANGE
    return _RED


# ---------------------------------------------------------------------------
# ChartGenerator
# ---------------------------------------------------------------------------


class ChartGenerator:
    """Generate all charts required by the survey PDF report.

    Each public method returns a :class:`matplotlib.figure.Figure`.

    Parameters
    ----------
    result:
        A fully populated ``SurveyResult``.
    """

    def __init__(self, result: SurveyResult) -> None:
        self.result = result

    # -- 1. Radar chart for dimension scores -------------------------------

    def dimension_radar(self) -> Figure:
        """Radar chart of the six dimension scores."""
        contributions = self.result.risk.contributions
        labels = [c.name.replace(" & ", " &\n") for c in contributions]
        scores = [c.score for c in contributions]

        num_vars = len(labels)
        angles = [n / float(num_vars) * 2 * math.pi for n in range(num_vars)]
        angles += angles[:1]
        scores_closed = scores + scores[:1]

        fig, ax = plt.subplots(figsize=(8, 8), dpi=_DPI, subplot_kw={"polar": True})
        ax.set_theta_offset(math.pi / 2)
        ax.set_theta_direction(-1)

        ax.set_xticks(angles[:-1])
        ax.set_xticklabels(labels, fontsize=10, fontweight="bold")
        ax.set_ylim(0, 100)
        ax.set_yticks([20, 40, 60, 80, 100])
        ax.set_yticklabels(["20", "40", "60", "80", "100"], fontsize=8, color="grey")

        ax.plot(angles, scores_closed, color=_BLUE, linewidth=2.5)
        ax.fill(angles, scores_closed, color=_BLUE, alpha=0.25)

        for angle, score in zip(angles[:-1], scores):
            ax.annotate(
                f"{score:.0f}",
                xy=(angle, score),
                fontsize=12,
                fontweight="bold",
                ha="center",
                va="bottom",
                color=_BLUE,
            )

        ax.set_title("Risk Dimension Scores", fontsize=16, fontweight="bold", pad=24)
        fig.tight_layout()
        return fig

    # -- 2. Weighted contributions -----------------------------------------

    def contribution_bar(self) -> Figure:
        """Horizontal bars of each dimension's weighted contribution."""
        contributions = self.result.risk.contributions
        names = [c.name for c in contributions]
        values = [c.contribution for c in contributions]
        colors = [_score_color(c.score) for c in contributions]

        fig, ax = plt.subplots(figsize=(10, 5), dpi=_DPI)
        y = np.arange(len(names))
        bars = ax.barh(y, values, color=colors, edgecolor="white")
        ax.set_yticks(y)
        ax.set_yticklabels(names, fontsize=10)
        ax.invert_yaxis()

        for bar, c in zip(bars, contributions):
            ax.text(
                bar.get_width() + 0.3,
                bar.get_y() + bar.get_height() / 2,
                f"{c.contribution:.1f} ({c.percentage})",
                va="center",
                fontsize=9,
            )

        ax.set_xlabel("Contribution to overall score", fontsize=11)
        ax.set_title(
            f"Weighted Contributions: overall {self.result.risk.overall_score:.1f}/100",
            fontsize=14,
            fontweight="bold",
        )
        ax.set_xlim(0, max(values + [1.0]) * 1.25)
        fig.tight_layout()
        return fig

    # -- 3. Building combustibility ----------------------------------------

    def building_combustibility_bar(self) -> Figure:
        """Bar chart of combustibility per building with the site figure overlaid."""
        scores = self.result.building_scores
        names = [b.name or b.building_id for b in scores] or ["No buildings"]
        values = [b.combustibility for b in scores] or [0.0]
        colors = [_combustibility_color(v) for v in values]

        fig, ax = plt.subplots(figsize=(10, 5), dpi=_DPI)
        x = np.arange(len(names))
        ax.bar(x, values, color=colors, edgecolor="white", width=0.6)
        ax.axhline(
            self.result.site_combustibility,
            color=_PURPLE,
            linestyle="--",
            linewidth=1.5,
            label=f"Site (area-weighted): {self.result.site_combustibility:.1f}",
        )
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=20, ha="right", fontsize=9)
        ax.set_ylim(0, 100)
        ax.set_ylabel("Combustibility (0-100)", fontsize=11)
        ax.set_title("Building Combustibility", fontsize=14, fontweight="bold")
        ax.legend(loc="upper right", fontsize=9)
        fig.tight_layout()
        return fig

    # -- 4. Material tiers -------------------------------------------------

    def material_tiers_stacked(self) -> Figure:
        """Stacked bars of wall and roof material tiers for each building."""
        buildings = self.result.survey.buildings
        labels: list[str] = []
        tiers: list[tuple[float, float, float]] = []
        for b in buildings:
            for surface, breakdown in (
                ("walls", b.construction.walls),
                ("roof", b.construction.roof_ceiling),
            ):
                labels.append(f"{b.name or b.id}\n{surface}")
                tiers.append(
                    (
                        breakdown.non_combustible_pct,
                        breakdown.transitional_pct,
                        breakdown.combustible_pct,
                    )
                )
        if not tiers:
            labels, tiers = ["No buildings"], [(0.0, 0.0, 0.0)]

        data = np.array(tiers)
        x = np.arange(len(labels))
        fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.9), 5), dpi=_DPI)
        ax.bar(x, data[:, 0], color=_GREEN, label="Non-combustible")
        ax.bar(x, data[:, 1], bottom=data[:, 0], color="#FFC107", label="Approved foam/plastic")
        ax.bar(
            x, data[:, 2], bottom=data[:, 0] + data[:, 1], color=_RED, label="Combustible"
        )
        ax.set_xticks(x)
        ax.set_xticklabels(labels, fontsize=8)
        ax.set_ylabel("% of surface", fontsize=11)
        ax.set_title("Construction Materials by Surface", fontsize=14, fontweight="bold")
        ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.15), ncol=3, fontsize=9)
        fig.tight_layout()
        return fig

    # -- 5. Recommendations by priority ------------------------------------

    def priority_pie(self) -> Figure:
        """Pie chart of recommendations by priority."""
        counts = Counter(
            r.priority for r in self.result.recommendations if r.priority is not None
        )
        labels = [p.value for p in Priority if counts.get(p)]
        sizes = [counts[p] for p in Priority if counts.get(p)]
        colors = [_PRIORITY_COLORS[p] for p in Priority if counts.get(p)]
        if not sizes:
            labels, sizes, colors = ["None"], [1], [_GREY]

        fig, ax = plt.subplots(figsize=(7, 7), dpi=_DPI)
        ax.pie(
            sizes,
            labels=labels,
            colors=colors,
            autopct=lambda pct: f"{pct * sum(sizes) / 100:.0f}" if sum(sizes) > 1 else "",
            startangle=90,
            wedgeprops={"edgecolor": "white", "linewidth": 1.5},
        )
        ax.set_title("Recommendations by Priority", fontsize=14, fontweight="bold")
        fig.tight_layout()
        return fig

    # -- Convenience methods -----------------------------------------------

    def generate_all(self) -> dict[str, Figure]:
        """Generate all charts and return as a name -> figure dict."""
        return {
            "dimension_radar": self.dimension_radar(),
            "contribution_bar": self.contribution_bar(),
            "building_combustibility_bar": self.building_combustibility_bar(),
            "material_tiers_stacked": self.material_tiers_stacked(),
            "priority_pie": self.priority_pie(),
        }

    def save_all(self, output_dir: str) -> dict[str, str]:
        """Save all charts as PNG files.

        Returns
        -------
        dict[str, str]
            Mapping of chart name to the absolute file path of the saved PNG.
        """
        os.makedirs(output_dir, exist_ok=True)
        charts = self.generate_all()
        paths: dict[str, str] = {}
        for name, fig in charts.items():
            filepath = os.path.join(output_dir, f"{name}.png")
            fig.savefig(filepath, dpi=_DPI, bbox_inches="tight", facecolor="white")
            plt.close(fig)
            paths[name] = os.path.abspath(filepath)
        return paths
