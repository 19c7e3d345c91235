# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Building and site combustibility.

Each building surface (walls, roof / ceiling) is reduced to a 0-100
badness figure from its material tiers.  The two surfaces combine into
a building figure with the roof weighted more heavily, and buildings
combine into a site figure weighted by construction area.

All functions here are total over numeric input: percentages that do not
add up to 100 are scored exactly as entered and only produce warnings.
"""

from __future__ import annotations

from typing import Iterable

from fire_risk_survey.data.models import Building, MaterialBreakdown
from fire_risk_survey.scoring.weights import (
    COMBUSTIBILITY_MAX,
    COMBUSTIBILITY_MIN,
    COMBUSTIBLE_MULTIPLIER,
    NON_COMBUSTIBLE_MULTIPLIER,
    PERCENTAGE_TOLERANCE,
    PERCENTAGE_TOTAL,
    ROOF_FACTOR,
    SCORE_DECIMALS,
    TRANSITIONAL_MULTIPLIER,
    WALL_FACTOR_ROOF_LED,
    WALL_FACTOR_WALL_ONLY,
)


def _clamp(value: float) -> float:
    return max(COMBUSTIBILITY_MIN, min(COMBUSTIBILITY_MAX, value))


def surface_tiers(breakdown: MaterialBreakdown) -> tuple[float, float, float]:
    """Return ``(non_combustible, transitional, combustible)`` percentages."""
    return (
        breakdown.non_combustible_pct,
        breakdown.transitional_pct,
        breakdown.combustible_pct,
    )


def surface_combustibility(breakdown: MaterialBreakdown) -> float:
    """Badness of one surface: combustible in full, transitional at half."""
    non_combustible, transitional, combustible = surface_tiers(breakdown)
    return (
        non_combustible * NON_COMBUSTIBLE_MULTIPLIER
        + transitional * TRANSITIONAL_MULTIPLIER
        + combustible * COMBUSTIBLE_MULTIPLIER
    )


def is_fully_non_combustible(breakdown: MaterialBreakdown) -> bool:
    """True when the surface has no transitional or combustible content."""
    _, transitional, combustible = surface_tiers(breakdown)
    return transitional <= 0 and combustible <= 0


def building_combustibility(building: Building) -> float:
    """0-100 combustibility for a single building.

    When the roof / ceiling carries any combustible or transitional
    material it leads the score and walls add a smaller share.  With a
    fully non-combustible roof the walls alone drive the figure, at a
    slightly higher factor but still well below the bare wall badness.
    """
    walls = building.construction.walls
    roof = building.construction.roof_ceiling
    wall_badness = surface_combustibility(walls)

    if is_fully_non_combustible(roof):
        raw = wall_badness * WALL_FACTOR_WALL_ONLY
    else:
        raw = surface_combustibility(roof) * ROOF_FACTOR + wall_badness * WALL_FACTOR_ROOF_LED

    return round(_clamp(raw), SCORE_DECIMALS)


def building_total_area(building: Building) -> float:
    """Floor plus roof area, with negative entries treated as zero."""
    return max(0.0, building.floor_area_sqm) + max(0.0, building.roof_area_sqm)


def site_total_area(buildings: Iterable[Building]) -> float:
    return sum(building_total_area(b) for b in buildings)


def site_combustibility(buildings: Iterable[Building]) -> float:
    """Area-weighted mean building combustibility for the whole site.

    Buildings without area carry no weight.  Returns 0.0 for an empty
    site or one whose buildings have no recorded area.
    """
    weighted = 0.0
    total_area = 0.0
    for building in buildings:
        area = building_total_area(building)
        if area <= 0:
            continue
        weighted += building_combustibility(building) * area
        total_area += area

    if total_area <= 0:
        return 0.0
    return round(_clamp(weighted / total_area), SCORE_DECIMALS)


def _surface_warning(label: str, breakdown: MaterialBreakdown) -> str | None:
    total = breakdown.total_pct
    if abs(total - PERCENTAGE_TOTAL) <= PERCENTAGE_TOLERANCE:
        return None
    return f"{label} construction percentages should total 100%. Current total: {total:.1f}%."


def percentage_warnings(building: Building) -> list[str]:
    """Advisory messages for surfaces whose percentages do not total 100."""
    warnings: list[str] = []
    for label, breakdown in (
        ("Wall", building.construction.walls),
        ("Roof/ceiling", building.construction.roof_ceiling),
    ):
        message = _surface_warning(label, breakdown)
        if message:
            prefix = f"{building.name or building.id}: "
            warnings.append(prefix + message)
    return warnings
