# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for surface, building and site combustibility."""

from __future__ import annotations

import pytest

from conftest import breakdown, make_building
from fire_risk_survey.scoring.combustibility import (
    building_combustibility,
    building_total_area,
    is_fully_non_combustible,
    percentage_warnings,
    site_combustibility,
    surface_combustibility,
)


class TestSurfaceCombustibility:
    """Surface badness from the three material tiers."""

    def test_all_heavy_non_combustible_is_best(self):
        assert surface_combustibility(breakdown(heavy=100)) == 0.0

    def test_all_unapproved_is_worst(self):
        assert surface_combustibility(breakdown(unapproved=100)) == 100.0

    def test_transitional_counts_half(self):
        assert surface_combustibility(breakdown(heavy=50, approved=50)) == 25.0

    def test_light_non_combustible_counts_nothing(self):
        assert surface_combustibility(breakdown(light=100)) == 0.0

    @pytest.mark.parametrize("step", [0, 10, 25, 40, 60])
    def test_monotonic_in_combustible_content(self, step):
        base = surface_combustibility(breakdown(heavy=100 - step, unapproved=step))
        worse = surface_combustibility(breakdown(heavy=90 - step, unapproved=step + 10))
        assert worse >= base

    def test_other_combustible_monotonic(self):
        low = surface_combustibility(breakdown(heavy=80, other=20))
        high = surface_combustibility(breakdown(heavy=70, other=30))
        assert high >= low

    def test_totals_not_100_scored_as_entered(self):
        assert surface_combustibility(breakdown(other=40)) == 40.0


class TestBuildingCombustibility:
    def test_worked_example_closer_to_zero(self):
        walls = breakdown(heavy=60, light=20, unapproved=10, other=10)
        roof = breakdown(heavy=100)
        wall_badness = surface_combustibility(walls)
        score = building_combustibility(make_building(walls=walls, roof=roof))

        assert wall_badness > 0
        assert surface_combustibility(roof) == 0
        assert score == pytest.approx(9.0)
        assert abs(score - 0) < abs(score - wall_badness)

    def test_roof_led(self):
        walls = breakdown(heavy=80, other=20)
        roof = breakdown(heavy=50, unapproved=50)
        # roof 50 + walls 20 * 0.4
        assert building_combustibility(make_building(walls=walls, roof=roof)) == 58.0

    def test_clamped_to_100(self):
        b = make_building(walls=breakdown(unapproved=100), roof=breakdown(unapproved=100))
        assert building_combustibility(b) == 100.0

    def test_oversized_percentages_clamped(self):
        b = make_building(walls=breakdown(other=300), roof=breakdown(heavy=100))
        assert building_combustibility(b) == 100.0

    def test_non_combustible_building(self):
        assert building_combustibility(make_building()) == 0.0

    def test_fully_non_combustible_check(self):
        assert is_fully_non_combustible(breakdown(heavy=40, light=60))
        assert not is_fully_non_combustible(breakdown(heavy=90, approved=10))

    def test_rounded_to_two_decimals(self):
        walls = breakdown(heavy=66.667, other=33.333)
        score = building_combustibility(make_building(walls=walls))
        assert score == round(score, 2)


class TestSiteCombustibility:
    def test_empty_site(self):
        assert site_combustibility([]) == 0.0

    def test_zero_area_site(self):
        b = make_building(walls=breakdown(other=100), floor_area=0, roof_area=0)
        assert site_combustibility([b]) == 0.0

    def test_uniform_scores_unchanged_by_areas(self):
        walls = breakdown(heavy=50, other=50)
        small = make_building("B1", walls=walls, floor_area=100, roof_area=100)
        large = make_building("B2", walls=walls, floor_area=5000, roof_area=5000)
        expected = building_combustibility(small)
        assert site_combustibility([small, large]) == pytest.approx(expected)

    def test_weighted_towards_larger_building(self):
        clean = make_building("B1", floor_area=9000, roof_area=9000)
        dirty = make_building(
            "B2", walls=breakdown(other=100), roof=breakdown(other=100),
            floor_area=1000, roof_area=1000,
        )
        low = building_combustibility(clean)
        high = building_combustibility(dirty)
        site = site_combustibility([clean, dirty])

        assert low < site < high
        assert abs(site - low) < abs(site - high)
        assert site == pytest.approx(10.0)

    def test_buildings_without_area_ignored(self):
        clean = make_building("B1", floor_area=500, roof_area=500)
        dirty = make_building("B2", walls=breakdown(other=100), floor_area=0, roof_area=0)
        assert site_combustibility([clean, dirty]) == 0.0

    def test_negative_area_treated_as_zero(self):
        b = make_building(floor_area=-50, roof_area=200)
        assert building_total_area(b) == 200


class TestPercentageWarnings:
    def test_no_warning_at_100(self):
        assert percentage_warnings(make_building()) == []

    def test_wall_warning_message(self):
        b = make_building(walls=breakdown(heavy=60, other=20))
        warnings = percentage_warnings(b)
        assert len(warnings) == 1
        assert "Wall construction percentages should total 100%" in warnings[0]
        assert "Current total: 80.0%" in warnings[0]
        assert warnings[0].startswith("Building B01: ")

    def test_both_surfaces_warn(self):
        b = make_building(walls=breakdown(heavy=10), roof=breakdown(heavy=120))
        warnings = percentage_warnings(b)
        assert len(warnings) == 2
        assert "Roof/ceiling" in warnings[1]
