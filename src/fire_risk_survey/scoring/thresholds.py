# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Band thresholds, priority cut-offs and display mappings.

Every step function used when turning a number into a label lives here so
that surveyors can trace each band back to a single constant.
"""

from fire_risk_survey.data.models import GradeBand, Priority, RiskBand

# ---------------------------------------------------------------------------
# Overall risk score bands (0-100, higher = better)
# ---------------------------------------------------------------------------
VERY_GOOD_MIN = 85
GOOD_MIN = 70
TOLERABLE_MIN = 55
POOR_MIN = 40
# Below 40 = Very Poor

# ---------------------------------------------------------------------------
# Dimension priority cut-offs (score strictly below the value)
# ---------------------------------------------------------------------------
CRITICAL_BELOW = 40
HIGH_BELOW = 55
MEDIUM_BELOW = 70

# ---------------------------------------------------------------------------
# Section grade bands (1-5, higher = better)
# ---------------------------------------------------------------------------
GRADE_CRITICAL_BELOW = 2
GRADE_HIGH_BELOW = 3
GRADE_MEDIUM_BELOW = 4
DEFAULT_OVERALL_GRADE = 3.0

# ---------------------------------------------------------------------------
# Combustibility display thresholds (0-100, higher = worse)
# ---------------------------------------------------------------------------
COMBUSTIBILITY_LOW_MAX = 25
COMBUSTIBILITY_MODERATE_MAX = 50

CONSTRUCTION_RATING_LABELS: dict[int, str] = {
    5: "Excellent",
    4: "Good",
    3: "Average",
    2: "Below Average",
    1: "Poor",
}


def score_to_band(score: float) -> RiskBand:
    """Convert a 0-100 overall score to its :class:`RiskBand`."""
    if score >= VERY_GOOD_MIN:
        return RiskBand.very_good
    if score >= GOOD_MIN:
        return RiskBand.good
    if score >= TOLERABLE_MIN:
        return RiskBand.tolerable
    if score >= POOR_MIN:
        return RiskBand.poor
    return RiskBand.very_poor


def score_to_priority(score: float) -> Priority:
    """Priority for a 0-100 dimension score."""
    if score < CRITICAL_BELOW:
        return Priority.critical
    if score < HIGH_BELOW:
        return Priority.high
    if score < MEDIUM_BELOW:
        return Priority.medium
    return Priority.low


def score_to_color(score: float) -> str:
    """Traffic-light color for a 0-100 score."""
    return score_to_band(score).color


def grade_to_band(grade: float) -> GradeBand:
    """Band for an averaged 1-5 section grade."""
    if grade < GRADE_CRITICAL_BELOW:
        return GradeBand.critical
    if grade < GRADE_HIGH_BELOW:
        return GradeBand.high
    if grade < GRADE_MEDIUM_BELOW:
        return GradeBand.medium
    return GradeBand.low


def grade_to_priority(grade: int) -> Priority:
    """Priority for a single 1-5 grade (1 = worst)."""
    if grade == 1:
        return Priority.critical
    if grade == 2:
        return Priority.high
    if grade == 3:
        return Priority.medium
    return Priority.low


def combustibility_to_color(value: float) -> str:
    """Color for a 0-100 combustibility figure (higher = worse)."""
    if value <= COMBUSTIBILITY_LOW_MAX:
        return "green"
    if value <= COMBUSTIBILITY_MODERATE_MAX:
        return "yellow"
    return "red"


def combustibility_to_label(value: float) -> str:
    if value <= COMBUSTIBILITY_LOW_MAX:
        return "Low"
    if value <= COMBUSTIBILITY_MODERATE_MAX:
        return "Moderate"
    return "High"


def construction_rating_label(rating: int) -> str:
    """Text label for a 1-5 construction rating."""
    return CONSTRUCTION_RATING_LABELS.get(rating, "Unknown")
