# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Fire Risk Survey - property fire risk scoring and reporting tool."""

__version__ = "0.1.0"

from fire_risk_survey.data.models import (
    Building,
    BuildingConstruction,
    Dimension,
    DimensionScores,
    MaterialBreakdown,
    Priority,
    Recommendation,
    RiskBand,
    SectorWeights,
    Survey,
    SurveyResult,
)
from fire_risk_survey.data.sectors import SECTOR_PROFILES, get_sector_profile
from fire_risk_survey.data.generator import SurveyGenerator
from fire_risk_survey.data.weightings import SectorWeightingStore
from fire_risk_survey.scoring.engine import ScoringEngine
from fire_risk_survey.recommendations.engine import RecommendationEngine
from fire_risk_survey.pipeline import assess_survey

__all__ = [
    "Building",
    "BuildingConstruction",
    "Dimension",
    "DimensionScores",
    "MaterialBreakdown",
    "Priority",
    "Recommendation",
    "RecommendationEngine",
    "RiskBand",
    "SECTOR_PROFILES",
    "ScoringEngine",
    "SectorWeightingStore",
    "SectorWeights",
    "Survey",
    "SurveyGenerator",
    "SurveyResult",
    "assess_survey",
    "get_sector_profile",
]
