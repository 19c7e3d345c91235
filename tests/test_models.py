# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for data model validation and computed fields."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fire_risk_survey.data.models import (
    Building,
    Dimension,
    DimensionScores,
    MaterialBreakdown,
    Priority,
    RiskBand,
    SectorWeights,
    Survey,
    coerce_number,
)


class TestCoerceNumber:
    """Loose form values become floats, unparseable ones become zero."""

    def test_numbers_pass_through(self):
        assert coerce_number(12) == 12.0
        assert coerce_number(4.5) == 4.5

    def test_numeric_strings(self):
        assert coerce_number(" 37.5 ") == 37.5

    def test_blank_and_garbage_are_zero(self):
        assert coerce_number("") == 0.0
        assert coerce_number(None) == 0.0
        assert coerce_number("n/a") == 0.0
        assert coerce_number(True) == 0.0


class TestMaterialBreakdown:
    def test_tiers(self):
        b = MaterialBreakdown(
            heavy_non_combustible_pct=60,
            light_non_combustible_pct=20,
            foam_plastic_approved_pct=5,
            foam_plastic_unapproved_pct=10,
            other_combustible_pct=5,
        )
        assert b.non_combustible_pct == 80
        assert b.transitional_pct == 5
        assert b.combustible_pct == 15
        assert b.total_pct == 100

    def test_string_inputs_coerced(self):
        b = MaterialBreakdown(heavy_non_combustible_pct="50", other_combustible_pct="")
        assert b.heavy_non_combustible_pct == 50.0
        assert b.other_combustible_pct == 0.0

    def test_totals_other_than_100_accepted(self):
        b = MaterialBreakdown(heavy_non_combustible_pct=30)
        assert b.total_pct == 30


class TestBuilding:
    def test_total_area(self):
        b = Building(id="B1", floor_area_sqm=1200, roof_area_sqm="800")
        assert b.total_area_sqm == 2000

    def test_defaults(self):
        b = Building(id="B1")
        assert b.frame_type == "unknown"
        assert b.construction.walls.total_pct == 0


class TestSectorWeights:
    def test_share_normalizes(self):
        w = SectorWeights(construction=2, fire_protection=2)
        assert w.total == 4
        assert w.share(Dimension.construction) == pytest.approx(0.5)
        assert w.share(Dimension.detection) == 0.0

    def test_zero_total_share(self):
        assert SectorWeights().share(Dimension.construction) == 0.0

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            SectorWeights(construction=-1)

    def test_uniform(self):
        w = SectorWeights.uniform(3)
        assert all(v == 3 for v in w.as_dict().values())
        assert list(w.as_dict()) == list(Dimension)


class TestSurvey:
    def test_total_area_sums_buildings(self):
        survey = Survey(
            id="S1",
            name="Site",
            buildings=[
                Building(id="B1", floor_area_sqm=100, roof_area_sqm=100),
                Building(id="B2", floor_area_sqm=50),
            ],
        )
        assert survey.total_area_sqm == 250

    def test_section_grades_in_range(self):
        survey = Survey(id="S1", name="Site", section_grades={"construction": 0, "management": 5})
        assert survey.section_grades == {"construction": 0, "management": 5}

    @pytest.mark.parametrize("grade", [-1, 6])
    def test_section_grade_out_of_range_rejected(self, grade):
        with pytest.raises(ValidationError, match="must be between 0 and 5"):
            Survey(id="S1", name="Site", section_grades={"construction": grade})

    def test_dimension_scores_coerced(self):
        scores = DimensionScores(construction="55", detection=None)
        assert scores.get(Dimension.construction) == 55
        assert scores.get(Dimension.detection) == 0


class TestEnums:
    def test_dimension_labels(self):
        assert Dimension.construction.label == "Construction & Combustibility"
        assert Dimension.business_interruption.label == "Business Interruption"

    def test_priority_order(self):
        ordered = sorted(Priority, key=lambda p: p.order)
        assert ordered == [Priority.critical, Priority.high, Priority.medium, Priority.low]

    def test_band_colors(self):
        assert RiskBand.very_good.color == "green"
        assert RiskBand.tolerable.color == "yellow"
        assert RiskBand.very_poor.color == "red"
