# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Demo survey generator.

Builds a realistic :class:`Survey` for a sector: buildings with material
splits, areas and frames, dimension sub-scores, section grades and
management ratings.

All randomness flows through a seeded :class:`numpy.random.Generator`
so that identical seeds always produce identical surveys.
"""

from __future__ import annotations

import uuid

import numpy as np

from fire_risk_survey.data.models import (
    Building,
    BuildingConstruction,
    Dimension,
    DimensionScores,
    MaterialBreakdown,
    Survey,
)
from fire_risk_survey.data.sections import MANAGEMENT_FIELDS, MANAGEMENT_SECTION, SECTION_LABELS
from fire_risk_survey.data.sectors import DEFAULT_SECTOR

_FRAME_TYPES = ("steel", "reinforced concrete", "timber", "masonry")
_FRAME_PROBS = (0.45, 0.25, 0.10, 0.20)

_RATING_CHOICES = ("Good", "Fair", "Poor", "Inadequate")
_RATING_PROBS = (0.55, 0.25, 0.15, 0.05)

# Dirichlet concentrations over the five material classes (heavy NC, light NC,
# approved foam, unapproved foam, other combustible).
_WALL_ALPHA = (4.0, 3.0, 0.6, 0.4, 0.6)
_ROOF_ALPHA = (1.5, 4.0, 1.0, 0.5, 0.5)

# Sectors with historically combustible building stock
_COMBUSTIBLE_SECTORS = ("Food & Beverage", "Logistics / Warehouse", "Expanded Plastics", "Woodworking")

_SITE_NAMES = (
    "Riverside Works",
    "Northgate Distribution Centre",
    "Meadow Lane Plant",
    "Harbour Road Facility",
    "Eastfield Industrial Park",
)
_CLIENTS = ("Acme Holdings", "Brightwater Group", "Castle Manufacturing", "Delta Logistics")
_LOCATIONS = ("Leeds, UK", "Bristol, UK", "Cork, IE", "Glasgow, UK", "Rotterdam, NL")


def _uid() -> str:
    """Return a short unique id string."""
    return uuid.uuid4().hex[:8]


class SurveyGenerator:
    """Generate a fully-populated :class:`Survey` for a sector.

    Parameters
    ----------
    sector:
        Industry sector name recorded on the survey.
    seed:
        Optional RNG seed for reproducibility.  When *None*, a random
        seed is chosen by NumPy.
    building_count:
        Number of buildings on the site.
    """

    def __init__(
        self,
        sector: str = DEFAULT_SECTOR,
        seed: int | None = None,
        building_count: int = 3,
    ) -> None:
        if building_count < 0:
            raise ValueError("building_count must be non-negative")
        self.sector = sector
        self.seed = seed
        self.building_count = building_count
        self.rng = np.random.default_rng(seed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self) -> Survey:
        """Orchestrate full survey generation and return the result."""
        buildings = [self._generate_building(i) for i in range(self.building_count)]
        return Survey(
            id=self._survey_id(),
            name=str(self.rng.choice(_SITE_NAMES)),
            client=str(self.rng.choice(_CLIENTS)),
            location=str(self.rng.choice(_LOCATIONS)),
            sector=self.sector,
            buildings=buildings,
            dimension_scores=self._generate_dimension_scores(),
            section_grades=self._generate_section_grades(),
            ratings=self._generate_ratings(),
        )

    # ------------------------------------------------------------------
    # Buildings
    # ------------------------------------------------------------------

    def _survey_id(self) -> str:
        if self.seed is None:
            return f"SRV-{_uid()}"
        return f"SRV-{self.seed:06d}"

    def _split(self, alpha: tuple[float, ...]) -> list[float]:
        """Draw a five-way material split that sums to exactly 100."""
        shares = self.rng.dirichlet(np.array(alpha)) * 100.0
        values = [round(float(v), 1) for v in shares]
        # Push the rounding remainder onto the largest class
        largest = int(np.argmax(values))
        values[largest] = round(values[largest] + 100.0 - sum(values), 1)
        return values

    def _breakdown(self, alpha: tuple[float, ...]) -> MaterialBreakdown:
        heavy, light, approved, unapproved, other = self._split(alpha)
        return MaterialBreakdown(
            heavy_non_combustible_pct=heavy,
            light_non_combustible_pct=light,
            foam_plastic_approved_pct=approved,
            foam_plastic_unapproved_pct=unapproved,
            other_combustible_pct=other,
        )

    def _generate_building(self, index: int) -> Building:
        combustible_bias = self.sector in _COMBUSTIBLE_SECTORS
        wall_alpha = _WALL_ALPHA
        roof_alpha = _ROOF_ALPHA
        if combustible_bias:
            wall_alpha = wall_alpha[:3] + (1.2, 1.0)
            roof_alpha = roof_alpha[:3] + (1.5, 0.8)

        # About a third of roofs are entirely non-combustible
        if self.rng.random() < 0.35:
            heavy = round(float(self.rng.uniform(0, 100)), 1)
            roof = MaterialBreakdown(
                heavy_non_combustible_pct=heavy,
                light_non_combustible_pct=round(100.0 - heavy, 1),
            )
        else:
            roof = self._breakdown(roof_alpha)

        floor_area = round(float(self.rng.lognormal(mean=7.5, sigma=0.8)), 0)
        roof_area = round(floor_area * float(self.rng.uniform(0.9, 1.1)), 0)

        return Building(
            id=f"B{index + 1:02d}",
            name=f"Building {index + 1}",
            construction=BuildingConstruction(walls=self._breakdown(wall_alpha), roof_ceiling=roof),
            floor_area_sqm=floor_area,
            roof_area_sqm=roof_area,
            frame_type=str(self.rng.choice(_FRAME_TYPES, p=_FRAME_PROBS)),
        )

    # ------------------------------------------------------------------
    # Scores, grades and ratings
    # ------------------------------------------------------------------

    def _generate_dimension_scores(self) -> DimensionScores:
        values = self.rng.normal(loc=65.0, scale=15.0, size=len(Dimension))
        values = np.clip(values, 5.0, 100.0)
        return DimensionScores(
            **{d.value: round(float(v), 1) for d, v in zip(Dimension, values)}
        )

    def _generate_section_grades(self) -> dict[str, int]:
        grades = self.rng.choice([1, 2, 3, 4, 5], size=len(SECTION_LABELS), p=[0.05, 0.15, 0.35, 0.3, 0.15])
        return {key: int(g) for key, g in zip(SECTION_LABELS, grades)}

    def _generate_ratings(self) -> dict[str, dict[str, str]]:
        picks = self.rng.choice(_RATING_CHOICES, size=len(MANAGEMENT_FIELDS), p=_RATING_PROBS)
        return {
            MANAGEMENT_SECTION: {field: str(r) for field, r in zip(MANAGEMENT_FIELDS, picks)}
        }
