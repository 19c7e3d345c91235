# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as bars and
gauges in the terminal via the Rich library.
"""

from __future__ import annotations

from fire_risk_survey.data.models import MaterialBreakdown
from fire_risk_survey.scoring.thresholds import (
    combustibility_to_color,
    score_to_band,
)

_FULL = "█"
_EMPTY = "░"


def _bar(value: float, width: int) -> tuple[float, str]:
    clamped = max(0.0, min(100.0, value))
    filled = int(clamped / 100 * width)
    return clamped, _FULL * filled + _EMPTY * (width - filled)


def horizontal_bar(
    label: str,
    value: float,
    max_value: float,
    width: int = 40,
    color: str = "green",
) -> str:
    """Render a horizontal bar chart line using Unicode block characters.

    Returns a Rich-markup string like:
        Fire Protection......... [green]████████████░░░░░░░░[/]   65.0/100
    """
    if max_value <= 0:
        return f"  {label:.<30} [dim]no data[/]"
    ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    bar = _FULL * filled + _EMPTY * (width - filled)
    return f"  {label:.<30} [{color}]{bar}[/] {value:>6.1f}/{max_value:.0f}"


def score_gauge(score: float, width: int = 20) -> str:
    """Large gauge for an overall 0-100 risk score with its band.

    Returns something like: [green]████████████░░░░░░░░[/] 78/100 [green]Good[/]
    """
    clamped, bar = _bar(score, width)
    band = score_to_band(clamped)
    return f"[{band.color}]{bar}[/] {clamped:.0f}/100 [{band.color}]{band.value}[/]"


def mini_gauge(score: float, width: int = 10) -> str:
    """Compact gauge for inline use in tables."""
    clamped, bar = _bar(score, width)
    color = score_to_band(clamped).color
    return f"[{color}]{bar}[/] {clamped:.0f}"


def combustibility_gauge(value: float, width: int = 10) -> str:
    """Compact gauge for a 0-100 combustibility figure (fuller = worse)."""
    clamped, bar = _bar(value, width)
    color = combustibility_to_color(clamped)
    return f"[{color}]{bar}[/] {clamped:.1f}"


def material_bar(breakdown: MaterialBreakdown, width: int = 20) -> str:
    """Stacked bar of non-combustible / transitional / combustible shares."""
    total = breakdown.total_pct
    if total <= 0:
        return f"[dim]{_EMPTY * width}[/]"
    nc = int(breakdown.non_combustible_pct / total * width)
    tr = int(breakdown.transitional_pct / total * width)
    co = max(0, width - nc - tr) if breakdown.combustible_pct > 0 else 0
    rest = width - nc - tr - co
    return (
        f"[green]{_FULL * nc}[/][yellow]{_FULL * tr}[/][red]{_FULL * co}[/]"
        f"[dim]{_EMPTY * rest}[/]"
    )
