# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Recommendation engine, templates and rating triggers."""

from fire_risk_survey.recommendations.engine import RecommendationEngine
from fire_risk_survey.recommendations.templates import (
    RecommendationTemplate,
    RecommendationTrigger,
    TriggerLibrary,
)
from fire_risk_survey.recommendations.triggers import (
    RecommendationRegister,
    TriggerEvaluation,
    TriggerEvaluator,
)

__all__ = [
    "RecommendationEngine",
    "RecommendationRegister",
    "RecommendationTemplate",
    "RecommendationTrigger",
    "TriggerEvaluation",
    "TriggerEvaluator",
    "TriggerLibrary",
]
