# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the fire risk survey tool.

This module defines the complete data contract used by the scoring,
recommendations, reporting, API and CLI layers.  Survey form values
arrive loosely typed (blank strings, ``None``, numeric strings), so the
numeric fields coerce anything unparseable to zero instead of failing.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


def coerce_number(value: Any) -> float:
    """Parse a loosely typed form value, returning 0.0 when it is not numeric."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Dimension(str, Enum):
    """The six risk dimensions feeding the overall site risk score."""

    construction = "construction"
    fire_protection = "fire_protection"
    detection = "detection"
    management = "management"
    special_hazards = "special_hazards"
    business_interruption = "business_interruption"

    @property
    def label(self) -> str:
        """Human-readable dimension name used in reports."""
        return DIMENSION_LABELS[self]


DIMENSION_LABELS: dict[Dimension, str] = {
    Dimension.construction: "Construction & Combustibility",
    Dimension.fire_protection: "Fire Protection",
    Dimension.detection: "Detection Systems",
    Dimension.management: "Management Systems",
    Dimension.special_hazards: "Special Hazards",
    Dimension.business_interruption: "Business Interruption",
}


class RiskBand(str, Enum):
    """Band assigned to an overall 0-100 risk score."""

    very_good = "Very Good"
    good = "Good"
    tolerable = "Tolerable"
    poor = "Poor"
    very_poor = "Very Poor"

    @property
    def color(self) -> str:
        """Terminal / report color associated with this band."""
        if self in (RiskBand.very_good, RiskBand.good):
            return "green"
        if self is RiskBand.tolerable:
            return "yellow"
        return "red"


class GradeBand(str, Enum):
    """Band assigned to an averaged 1-5 section grade."""

    critical = "Critical"
    high = "High"
    medium = "Medium"
    low = "Low"


class Priority(str, Enum):
    """Recommendation priority, most urgent first."""

    critical = "Critical"
    high = "High"
    medium = "Medium"
    low = "Low"

    @property
    def order(self) -> int:
        return _PRIORITY_ORDER[self]

    @property
    def color(self) -> str:
        if self is Priority.critical:
            return "red"
        if self is Priority.high:
            return "dark_orange"
        if self is Priority.medium:
            return "yellow"
        return "blue"


_PRIORITY_ORDER = {
    Priority.critical: 1,
    Priority.high: 2,
    Priority.medium: 3,
    Priority.low: 4,
}


class RecommendationStatus(str, Enum):
    open = "open"
    deferred = "deferred"
    closed = "closed"


class RecommendationSource(str, Enum):
    """Where a recommendation came from."""

    triggered = "triggered"
    dimension = "dimension"
    construction = "construction"
    manual = "manual"


# ---------------------------------------------------------------------------
# Construction models
# ---------------------------------------------------------------------------

class MaterialBreakdown(BaseModel):
    """Percentages of one building surface by material class.

    The five values are expected to total 100 but this is advisory only;
    the scoring layer uses them exactly as entered.
    """

    model_config = {"frozen": False, "populate_by_name": True}

    heavy_non_combustible_pct: float = Field(
        default=0.0, description="Heavy non-combustible construction (%)"
    )
    light_non_combustible_pct: float = Field(
        default=0.0, description="Light non-combustible construction (%)"
    )
    foam_plastic_approved_pct: float = Field(
        default=0.0, description="Approved (certified) foam / plastic (%)"
    )
    foam_plastic_unapproved_pct: float = Field(
        default=0.0, description="Unapproved foam / plastic (%)"
    )
    other_combustible_pct: float = Field(
        default=0.0, description="Other combustible materials (%)"
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_number(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def non_combustible_pct(self) -> float:
        return self.heavy_non_combustible_pct + self.light_non_combustible_pct

    @computed_field  # type: ignore[prop-decorator]
    @property
    def transitional_pct(self) -> float:
        return self.foam_plastic_approved_pct

    @computed_field  # type: ignore[prop-decorator]
    @property
    def combustible_pct(self) -> float:
        return self.foam_plastic_unapproved_pct + self.other_combustible_pct

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pct(self) -> float:
        """Sum of all five material percentages."""
        return round(
            self.non_combustible_pct + self.transitional_pct + self.combustible_pct, 4
        )


class BuildingConstruction(BaseModel):
    """Wall and roof / ceiling material breakdowns for one building."""

    walls: MaterialBreakdown = Field(default_factory=MaterialBreakdown)
    roof_ceiling: MaterialBreakdown = Field(default_factory=MaterialBreakdown)


class Building(BaseModel):
    """A single building on the surveyed site."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique building identifier")
    name: str = Field(default="", description="Building reference or description")
    construction: BuildingConstruction = Field(default_factory=BuildingConstruction)
    floor_area_sqm: float = Field(default=0.0, description="Floor area in m2")
    roof_area_sqm: float = Field(default=0.0, description="Roof area in m2")
    frame_type: str = Field(
        default="unknown", description="Structural frame, e.g. steel, concrete, timber"
    )

    @field_validator("floor_area_sqm", "roof_area_sqm", mode="before")
    @classmethod
    def _coerce_area(cls, value: Any) -> float:
        return coerce_number(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_area_sqm(self) -> float:
        """Total construction area (floor + roof) used for site weighting."""
        return self.floor_area_sqm + self.roof_area_sqm


# ---------------------------------------------------------------------------
# Dimension scores and weights
# ---------------------------------------------------------------------------

class _DimensionValues(BaseModel):
    construction: float = 0.0
    fire_protection: float = 0.0
    detection: float = 0.0
    management: float = 0.0
    special_hazards: float = 0.0
    business_interruption: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_number(value)

    def get(self, dimension: Dimension) -> float:
        return getattr(self, dimension.value)

    def as_dict(self) -> dict[Dimension, float]:
        """Values keyed by :class:`Dimension`, in canonical order."""
        return {d: self.get(d) for d in Dimension}


class DimensionScores(_DimensionValues):
    """Six 0-100 dimension sub-scores (lower = worse)."""


class SectorWeights(_DimensionValues):
    """Relative per-dimension weights for one industry sector.

    Weights need not sum to any particular total; the scorer divides by
    :attr:`total`.
    """

    @field_validator("*", mode="after")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("sector weights must be non-negative")
        return value

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())

    def share(self, dimension: Dimension) -> float:
        """Fraction of the total weight held by *dimension* (0.0 if no weight)."""
        total = self.total
        if total <= 0:
            return 0.0
        return self.get(dimension) / total

    @classmethod
    def uniform(cls, value: float = 3.0) -> "SectorWeights":
        return cls(**{d.value: value for d in Dimension})


class SectorWeighting(BaseModel):
    """One row of the sector weightings table."""

    sector_name: str = Field(..., description="Industry sector name")
    is_custom: bool = Field(
        default=False,
        description="When False the sector falls back to the Default row",
    )
    weights: SectorWeights = Field(default_factory=lambda: SectorWeights.uniform())
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class DimensionContribution(BaseModel):
    """How much one dimension adds to the overall risk score."""

    dimension: Dimension
    name: str
    score: float
    weight: float = Field(..., description="Raw sector weight")
    share: float = Field(..., description="Normalized weight (0-1)")
    contribution: float = Field(..., description="score x share")
    percentage: str = Field(..., description="Weight share label, e.g. '35%'")


# ---------------------------------------------------------------------------
# Survey input
# ---------------------------------------------------------------------------

class Survey(BaseModel):
    """A site survey: ordered buildings plus graded observations."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Survey identifier")
    name: str = Field(..., description="Site / survey name")
    client: str = Field(default="", description="Client organisation")
    location: str = Field(default="", description="Site address or location label")
    sector: str = Field(default="Default", description="Industry sector")
    buildings: list[Building] = Field(default_factory=list)
    dimension_scores: DimensionScores = Field(default_factory=DimensionScores)
    section_grades: dict[str, int] = Field(
        default_factory=dict,
        description="Section key -> grade on a 1-5 scale (1 = worst, 0 = ungraded)",
    )
    ratings: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Section key -> field key -> rating text (e.g. 'Poor')",
    )

    @field_validator("section_grades", mode="after")
    @classmethod
    def _grades_in_range(cls, value: dict[str, int]) -> dict[str, int]:
        for section, grade in value.items():
            if not 0 <= grade <= 5:
                raise ValueError(
                    f"section grade for '{section}' must be between 0 and 5, got {grade}"
                )
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_area_sqm(self) -> float:
        return sum(b.total_area_sqm for b in self.buildings)


# ---------------------------------------------------------------------------
# Scoring outputs
# ---------------------------------------------------------------------------

class BuildingScore(BaseModel):
    """Computed combustibility figures for one building."""

    building_id: str
    name: str = ""
    walls_combustibility: float = Field(..., ge=0, le=100)
    roof_combustibility: float = Field(..., ge=0, le=100)
    combustibility: float = Field(..., ge=0, le=100)
    total_area_sqm: float = Field(default=0.0, ge=0)
    construction_rating: int = Field(..., ge=1, le=5)
    warnings: list[str] = Field(default_factory=list)


class RiskScore(BaseModel):
    """Sector-weighted overall risk score and its breakdown."""

    sector: str
    weights: SectorWeights
    overall_score: float
    band: RiskBand
    contributions: list[DimensionContribution] = Field(default_factory=list)
    lowest_contributors: list[DimensionContribution] = Field(default_factory=list)


class Recommendation(BaseModel):
    """A single recommendation carried into the survey report."""

    model_config = {"frozen": False, "populate_by_name": True}

    rank: int = Field(default=0, ge=0, description="Position in the report (1 = first)")
    title: str = Field(..., description="Hazard / short title")
    description: str = Field(..., description="Observation supporting the recommendation")
    action: str = Field(default="", description="Recommended action")
    category: str = Field(default="General")
    priority: Optional[Priority] = Field(default=None)
    dimension: Optional[Dimension] = Field(default=None)
    source: RecommendationSource = Field(default=RecommendationSource.manual)
    status: RecommendationStatus = Field(default=RecommendationStatus.open)
    include_in_report: bool = Field(default=True)
    trigger_key: Optional[str] = Field(default=None)
    template_id: Optional[str] = Field(default=None)
    client_response: str = Field(default="")
    context: dict[str, Any] = Field(default_factory=dict)


class SurveyResult(BaseModel):
    """Complete output of scoring one survey.

    This is the top-level object consumed by the reporting, API and CLI
    layers to produce terminal output, PDF / text reports and JSON exports.
    """

    model_config = {"frozen": False, "populate_by_name": True}

    survey: Survey
    building_scores: list[BuildingScore] = Field(default_factory=list)
    site_combustibility: float = Field(..., ge=0, le=100)
    risk: RiskScore
    overall_grade: float = Field(..., ge=0, le=5)
    grade_band: GradeBand
    construction_rating: int = Field(..., ge=1, le=5)
    recommendations: list[Recommendation] = Field(default_factory=list)
    executive_summary: str = Field(default="")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp when the survey was scored",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warnings(self) -> list[str]:
        """All advisory data-entry warnings across buildings."""
        return [w for b in self.building_scores for w in b.warnings]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def critical_recommendation_count(self) -> int:
        return sum(1 for r in self.recommendations if r.priority is Priority.critical)
