# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models, sector profiles, weightings store and demo survey generator."""

from fire_risk_survey.data.models import (
    Building,
    BuildingConstruction,
    BuildingScore,
    Dimension,
    DimensionScores,
    MaterialBreakdown,
    Recommendation,
    RiskScore,
    SectorWeighting,
    SectorWeights,
    Survey,
    SurveyResult,
)
from fire_risk_survey.data.sectors import SECTOR_PROFILES, SectorProfile, get_sector_profile
from fire_risk_survey.data.weightings import SectorWeightingStore
from fire_risk_survey.data.generator import SurveyGenerator

__all__ = [
    "Building",
    "BuildingConstruction",
    "BuildingScore",
    "Dimension",
    "DimensionScores",
    "MaterialBreakdown",
    "Recommendation",
    "RiskScore",
    "SECTOR_PROFILES",
    "SectorProfile",
    "SectorWeighting",
    "SectorWeightingStore",
    "SectorWeights",
    "Survey",
    "SurveyGenerator",
    "SurveyResult",
    "get_sector_profile",
]
