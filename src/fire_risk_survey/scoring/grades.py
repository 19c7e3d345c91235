# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Section grades and the construction rating heuristic."""

from __future__ import annotations

import math
from typing import Iterable, Mapping

from fire_risk_survey.data.models import Building, GradeBand, Priority
from fire_risk_survey.scoring.combustibility import (
    building_combustibility,
    is_fully_non_combustible,
)
from fire_risk_survey.scoring.thresholds import (
    DEFAULT_OVERALL_GRADE,
    construction_rating_label,
    grade_to_band,
    grade_to_priority,
)

RATING_MIN = 1
RATING_MAX = 5
RATING_DEFAULT = 3
POOR_RATING_MAX = 2

_NON_COMBUSTIBLE_FRAMES = ("steel", "concrete", "reinforced")
_COMBUSTIBLE_FRAMES = ("timber", "wood")


def calculate_overall_grade(section_grades: Mapping[str, int]) -> float:
    """Mean of all graded sections; ungraded (0) sections are ignored."""
    graded = [g for g in section_grades.values() if g and g > 0]
    if not graded:
        return DEFAULT_OVERALL_GRADE
    return round(sum(graded) / len(graded), 2)


def grade_risk_band(grade: float) -> GradeBand:
    return grade_to_band(grade)


def grade_priority(grade: int) -> Priority:
    return grade_to_priority(grade)


def construction_rating(building: Building) -> int:
    """Estimate a 1-5 construction rating from frame, materials and combustibility.

    Starts from an average rating of 3 and adjusts up for non-combustible
    frames and surfaces, down for timber frames and combustible content.
    """
    rating = float(RATING_DEFAULT)

    frame = (building.frame_type or "").lower()
    if any(token in frame for token in _NON_COMBUSTIBLE_FRAMES):
        rating += 1
    elif any(token in frame for token in _COMBUSTIBLE_FRAMES):
        rating -= 2

    roof = building.construction.roof_ceiling
    if is_fully_non_combustible(roof):
        rating += 0.5
    elif roof.combustible_pct > 0:
        rating -= 1.5

    walls = building.construction.walls
    if is_fully_non_combustible(walls):
        rating += 0.5
    elif walls.combustible_pct > 0:
        rating -= 0.5

    combustibility = building_combustibility(building)
    if combustibility < 10:
        rating += 1
    elif combustibility < 25:
        rating += 0.5
    elif combustibility > 50:
        rating -= 1

    rounded = math.floor(rating + 0.5)  # half up
    return max(RATING_MIN, min(RATING_MAX, rounded))


def site_construction_rating(buildings: Iterable[Building]) -> int:
    """Worst construction rating on the site, or 3 with no buildings."""
    ratings = [construction_rating(b) for b in buildings]
    if not ratings:
        return RATING_DEFAULT
    return min(ratings)


def has_poor_construction_rating(buildings: Iterable[Building]) -> bool:
    return any(construction_rating(b) <= POOR_RATING_MAX for b in buildings)


__all__ = [
    "calculate_overall_grade",
    "construction_rating",
    "construction_rating_label",
    "grade_priority",
    "grade_risk_band",
    "has_poor_construction_rating",
    "site_construction_rating",
]
