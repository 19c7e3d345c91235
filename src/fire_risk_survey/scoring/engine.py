# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Master scoring orchestrator for a fire risk survey.

Delegates to the combustibility aggregator, the sector risk scorer and the
section grade helpers, and bundles their outputs.
"""

from __future__ import annotations

import logging

from fire_risk_survey.data.models import Building, BuildingScore, RiskScore, Survey
from fire_risk_survey.data.weightings import SectorWeightingStore
from fire_risk_survey.scoring.combustibility import (
    building_combustibility,
    building_total_area,
    percentage_warnings,
    site_combustibility,
    surface_combustibility,
)
from fire_risk_survey.scoring.grades import calculate_overall_grade, construction_rating
from fire_risk_survey.scoring.sector import score_sector_risk
from fire_risk_survey.scoring.weights import (
    COMBUSTIBILITY_MAX,
    COMBUSTIBILITY_MIN,
    SCORE_DECIMALS,
)

logger = logging.getLogger(__name__)


def _bounded(value: float) -> float:
    return max(COMBUSTIBILITY_MIN, min(COMBUSTIBILITY_MAX, value))


def score_building(building: Building) -> BuildingScore:
    """Score a single building, collecting advisory percentage warnings."""
    warnings = percentage_warnings(building)
    for message in warnings:
        logger.warning(message)

    return BuildingScore(
        building_id=building.id,
        name=building.name,
        walls_combustibility=round(
            _bounded(surface_combustibility(building.construction.walls)), SCORE_DECIMALS
        ),
        roof_combustibility=round(
            _bounded(surface_combustibility(building.construction.roof_ceiling)), SCORE_DECIMALS
        ),
        combustibility=building_combustibility(building),
        total_area_sqm=building_total_area(building),
        construction_rating=construction_rating(building),
        warnings=warnings,
    )


class ScoringEngine:
    """Orchestrates scoring of one survey.

    Usage::

        engine = ScoringEngine()
        buildings, site, risk, grade = engine.score(survey)
    """

    def __init__(self, store: SectorWeightingStore | None = None) -> None:
        self.store = store or SectorWeightingStore.default()

    def score(
        self, survey: Survey
    ) -> tuple[list[BuildingScore], float, RiskScore, float]:
        """Run the full scoring pipeline.

        Args:
            survey: A populated ``Survey``.

        Returns:
            A 4-tuple of ``(building_scores, site_combustibility, risk,
            overall_grade)`` where *risk* carries the sector-weighted
            overall score and band, and *overall_grade* is the mean
            section grade on the 1-5 scale.
        """
        building_scores = [score_building(b) for b in survey.buildings]
        site = site_combustibility(survey.buildings)

        weights = self.store.resolve(survey.sector)
        risk = score_sector_risk(survey.dimension_scores, weights, sector=survey.sector)
        grade = calculate_overall_grade(survey.section_grades)

        logger.debug(
            "Scored survey %s: site combustibility %.2f, risk %.2f (%s)",
            survey.id, site, risk.overall_score, risk.band.value,
        )
        return building_scores, site, risk, grade
