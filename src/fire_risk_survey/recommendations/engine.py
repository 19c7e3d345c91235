# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Recommendation engine.

Collects score-driven recommendations (weak dimensions, combustible
buildings) and rating-triggered recommendations from the register, and
produces a ranked list of :class:`~fire_risk_survey.data.models.Recommendation`
objects for the report.
"""

from __future__ import annotations

from fire_risk_survey.data.models import (
    BuildingScore,
    Priority,
    Recommendation,
    RecommendationSource,
    RiskScore,
    Survey,
)
from fire_risk_survey.recommendations.priority import (
    priority_for_dimension,
    sort_by_priority,
)
from fire_risk_survey.recommendations.templates import (
    COMBUSTIBLE_CONSTRUCTION,
    DIMENSION_TEMPLATES,
    TriggerLibrary,
)
from fire_risk_survey.recommendations.triggers import RecommendationRegister, TriggerEvaluator
from fire_risk_survey.scoring.combustibility import site_combustibility
from fire_risk_survey.scoring.grades import (
    POOR_RATING_MAX,
    construction_rating_label,
    grade_priority,
)

# Maximum number of recommendations to return.
_MAX_RECOMMENDATIONS = 15

_ACTIONABLE = (Priority.critical, Priority.high, Priority.medium)


class RecommendationEngine:
    """Generate ranked recommendations for a scored survey.

    Usage::

        engine = RecommendationEngine()
        recommendations = engine.generate(survey, building_scores, risk, register)
    """

    def __init__(self, library: TriggerLibrary | None = None) -> None:
        self.library = library or TriggerLibrary.default()

    def generate(
        self,
        survey: Survey,
        building_scores: list[BuildingScore],
        risk: RiskScore,
        register: RecommendationRegister | None = None,
    ) -> list[Recommendation]:
        """Generate ranked recommendations.

        Parameters
        ----------
        survey:
            The survey being reported on.
        building_scores:
            Per-building combustibility output from the scoring engine.
        risk:
            Sector-weighted risk score, used for the dimension weights.
        register:
            Recommendation register holding triggered and manual entries.
            The survey's ratings are re-evaluated into it first.  A fresh
            register is used when omitted.

        Returns
        -------
        list[Recommendation]
            Up to 15 recommendations, most urgent first, ranked from 1.
        """
        candidates: list[Recommendation] = []

        # ---------------------------------------------------------------
        # 1. Weak dimensions
        # ---------------------------------------------------------------
        site = site_combustibility(survey.buildings)
        for contribution in risk.contributions:
            priority = priority_for_dimension(contribution.dimension, survey.dimension_scores)
            if priority not in _ACTIONABLE:
                continue
            template = DIMENSION_TEMPLATES[contribution.dimension]
            description = template.description_template.format(
                score=contribution.score,
                weight_pct=contribution.percentage,
                site_combustibility=site,
            )
            candidates.append(
                Recommendation(
                    title=template.title,
                    description=description,
                    action=template.action,
                    category=template.category,
                    priority=priority,
                    dimension=contribution.dimension,
                    source=RecommendationSource.dimension,
                    context={"score": contribution.score, "weight": contribution.weight},
                )
            )

        # ---------------------------------------------------------------
        # 2. Combustible buildings
        # ---------------------------------------------------------------
        for bs in building_scores:
            if bs.construction_rating > POOR_RATING_MAX:
                continue
            name = bs.name or bs.building_id
            candidates.append(
                Recommendation(
                    title=COMBUSTIBLE_CONSTRUCTION.title.format(building=name),
                    description=COMBUSTIBLE_CONSTRUCTION.description_template.format(
                        building=name,
                        rating=bs.construction_rating,
                        label=construction_rating_label(bs.construction_rating),
                        combustibility=bs.combustibility,
                        walls=bs.walls_combustibility,
                        roof=bs.roof_combustibility,
                    ),
                    action=COMBUSTIBLE_CONSTRUCTION.action,
                    category=COMBUSTIBLE_CONSTRUCTION.category,
                    priority=grade_priority(bs.construction_rating),
                    source=RecommendationSource.construction,
                    context={"building_id": bs.building_id},
                )
            )

        # ---------------------------------------------------------------
        # 3. Rating triggers
        # ---------------------------------------------------------------
        register = register if register is not None else RecommendationRegister()
        evaluator = TriggerEvaluator(self.library, register)
        evaluator.retire_changed(survey.id, survey.ratings)
        evaluator.reevaluate_all(survey.id, survey.ratings)
        candidates.extend(r.model_copy() for r in register.active(survey.id))

        # ---------------------------------------------------------------
        # Sort by priority and assign ranks
        # ---------------------------------------------------------------
        ranked = sort_by_priority(candidates)[:_MAX_RECOMMENDATIONS]
        for rank, rec in enumerate(ranked, start=1):
            rec.rank = rank
        return ranked
