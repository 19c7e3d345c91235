# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""API request/response Pydantic models for the REST interface."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from fire_risk_survey.data.models import (
    Building,
    BuildingScore,
    DimensionScores,
    SectorWeights,
    Survey,
)
from fire_risk_survey.data.sectors import DEFAULT_SECTOR


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class SiteCombustibilityRequest(BaseModel):
    """Request body for the ``POST /api/v1/combustibility/site`` endpoint."""

    buildings: list[Building] = Field(
        default_factory=list,
        description="Ordered buildings on the site.",
    )


class RiskScoreRequest(BaseModel):
    """Request body for the ``POST /api/v1/risk-score`` endpoint."""

    sector: str = Field(
        default=DEFAULT_SECTOR,
        description="Industry sector used to look up weights.",
    )
    dimension_scores: DimensionScores = Field(
        ..., description="Per-dimension scores on a 0-100 scale."
    )
    weights: Optional[SectorWeights] = Field(
        default=None,
        description="Explicit weights; overrides the sector lookup when given.",
    )


class SurveyRequest(BaseModel):
    """Request body for the ``POST /api/v1/survey`` endpoint."""

    survey: Optional[Survey] = Field(
        default=None,
        description="Survey to score. A demo survey is generated when omitted.",
    )
    sector: str = Field(
        default=DEFAULT_SECTOR,
        description="Sector for the generated demo survey.",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducible demo survey generation.",
    )
    building_count: int = Field(
        default=3, ge=0, le=50,
        description="Number of buildings in the generated demo survey.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class SiteCombustibilityResponse(BaseModel):
    """Response body returned by ``POST /api/v1/combustibility/site``."""

    site_combustibility: float = Field(
        ..., ge=0, le=100, description="Area-weighted site combustibility (0-100)."
    )
    total_area_sqm: float = Field(
        ..., ge=0, description="Floor plus roof area counted in the weighting."
    )
    buildings: list[BuildingScore] = Field(
        default_factory=list,
        description="Per-building combustibility breakdown.",
    )


class HealthResponse(BaseModel):
    """Response body returned by the ``GET /api/v1/health`` endpoint."""

    status: str = Field(
        ..., description="Service health status (e.g. 'ok')."
    )
    version: str = Field(
        ..., description="Application version string."
    )
    sector_count: int = Field(
        ..., ge=0, description="Number of sector weighting rows available."
    )
