# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Score a survey end to end and assemble a :class:`SurveyResult`."""

from __future__ import annotations

import logging

from fire_risk_survey.data.models import Survey, SurveyResult
from fire_risk_survey.data.weightings import SectorWeightingStore
from fire_risk_survey.recommendations.engine import RecommendationEngine
from fire_risk_survey.recommendations.templates import TriggerLibrary
from fire_risk_survey.recommendations.triggers import RecommendationRegister
from fire_risk_survey.reporting.executive_summary import generate_executive_summary
from fire_risk_survey.scoring.engine import ScoringEngine
from fire_risk_survey.scoring.grades import grade_risk_band, site_construction_rating

logger = logging.getLogger(__name__)


def assess_survey(
    survey: Survey,
    store: SectorWeightingStore | None = None,
    library: TriggerLibrary | None = None,
    register: RecommendationRegister | None = None,
) -> SurveyResult:
    """Run scoring, recommendations and the executive summary for *survey*.

    Args:
        survey: The survey to score.
        store: Sector weightings; the built-in defaults when omitted.
        library: Recommendation templates and rating triggers.
        register: Register of triggered and manual recommendations.  Pass
            one in to keep trigger state across repeated assessments.
    """
    engine = ScoringEngine(store)
    building_scores, site, risk, grade = engine.score(survey)

    rec_engine = RecommendationEngine(library)
    recommendations = rec_engine.generate(survey, building_scores, risk, register)

    executive_summary = generate_executive_summary(
        survey, building_scores, site, risk, grade, recommendations
    )

    result = SurveyResult(
        survey=survey,
        building_scores=building_scores,
        site_combustibility=site,
        risk=risk,
        overall_grade=grade,
        grade_band=grade_risk_band(grade),
        construction_rating=site_construction_rating(survey.buildings),
        recommendations=recommendations,
        executive_summary=executive_summary,
    )
    logger.info(
        "Assessed survey %s: score %.2f (%s), %d recommendation(s)",
        survey.id, risk.overall_score, risk.band.value, len(recommendations),
    )
    return result
