# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the fire risk survey test suite."""

from __future__ import annotations

import pytest

from fire_risk_survey.data.generator import SurveyGenerator
from fire_risk_survey.data.models import (
    Building,
    BuildingConstruction,
    DimensionScores,
    MaterialBreakdown,
    Survey,
    SurveyResult,
)
from fire_risk_survey.data.weightings import SectorWeightingStore
from fire_risk_survey.pipeline import assess_survey


def breakdown(
    heavy: float = 0.0,
    light: float = 0.0,
    approved: float = 0.0,
    unapproved: float = 0.0,
    other: float = 0.0,
) -> MaterialBreakdown:
    """Shorthand for a five-way material breakdown."""
    return MaterialBreakdown(
        heavy_non_combustible_pct=heavy,
        light_non_combustible_pct=light,
        foam_plastic_approved_pct=approved,
        foam_plastic_unapproved_pct=unapproved,
        other_combustible_pct=other,
    )


def make_building(
    building_id: str = "B01",
    walls: MaterialBreakdown | None = None,
    roof: MaterialBreakdown | None = None,
    floor_area: float = 1000.0,
    roof_area: float = 1000.0,
    frame_type: str = "steel",
) -> Building:
    return Building(
        id=building_id,
        name=f"Building {building_id}",
        construction=BuildingConstruction(
            walls=walls if walls is not None else breakdown(heavy=100),
            roof_ceiling=roof if roof is not None else breakdown(heavy=100),
        ),
        floor_area_sqm=floor_area,
        roof_area_sqm=roof_area,
        frame_type=frame_type,
    )


@pytest.fixture()
def demo_survey() -> Survey:
    """A Default-sector survey generated with seed 42."""
    return SurveyGenerator(seed=42).generate()


@pytest.fixture()
def store() -> SectorWeightingStore:
    return SectorWeightingStore.default()


@pytest.fixture()
def weak_survey() -> Survey:
    """Hand-built survey with poor management ratings and one timber building."""
    return Survey(
        id="SRV-TEST",
        name="Test Works",
        client="Test Client",
        sector="Food & Beverage",
        buildings=[
            make_building("B01"),
            make_building(
                "B02",
                walls=breakdown(heavy=20, unapproved=50, other=30),
                roof=breakdown(light=10, unapproved=60, other=30),
                frame_type="timber",
            ),
        ],
        dimension_scores=DimensionScores(
            construction=35,
            fire_protection=50,
            detection=65,
            management=80,
            special_hazards=90,
            business_interruption=75,
        ),
        section_grades={"FP_01_Location": 4, "FP_09_Management": 2},
        ratings={
            "FP_09_Management": {
                "controlHotWork_rating": "Poor",
                "smokingControls_rating": "Good",
                "changeManagement_rating": "Fair",
            }
        },
    )


@pytest.fixture()
def scored_result(demo_survey: Survey) -> SurveyResult:
    """A fully assessed SurveyResult for the seed-42 demo survey."""
    return assess_survey(demo_survey)
