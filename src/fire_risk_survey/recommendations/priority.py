# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Recommendation priority helpers."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from fire_risk_survey.data.models import Dimension, DimensionScores, Priority, Recommendation
from fire_risk_survey.scoring.thresholds import score_to_priority

T = TypeVar("T", Recommendation, dict)

# Trigger priority levels (1-5) onto the four report priorities
_LEVEL_PRIORITY = {
    5: Priority.critical,
    4: Priority.high,
    3: Priority.medium,
}

_UNPRIORITISED = 99


def calculate_priority(score: float) -> Priority:
    """Priority for a 0-100 dimension score: the lower the score, the higher the priority."""
    return score_to_priority(score)


def priority_for_dimension(
    dimension: Dimension, scores: Optional[DimensionScores]
) -> Optional[Priority]:
    """Priority of one dimension, or ``None`` when it has not been scored."""
    if scores is None:
        return None
    score = scores.get(dimension)
    if not score:
        return None
    return calculate_priority(score)


def priority_from_level(level: int) -> Priority:
    return _LEVEL_PRIORITY.get(level, Priority.low)


def _order(item: Recommendation | dict) -> int:
    priority = item.get("priority") if isinstance(item, dict) else item.priority
    if priority is None:
        return _UNPRIORITISED
    return Priority(priority).order


def sort_by_priority(items: Sequence[T]) -> list[T]:
    """Stable sort, most urgent first; items without a priority go last."""
    return sorted(items, key=_order)
