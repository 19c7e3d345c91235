# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for section grades and the construction rating heuristic."""

from __future__ import annotations

from conftest import breakdown, make_building
from fire_risk_survey.data.models import GradeBand, Priority
from fire_risk_survey.scoring.grades import (
    calculate_overall_grade,
    construction_rating,
    construction_rating_label,
    grade_priority,
    grade_risk_band,
    has_poor_construction_rating,
    site_construction_rating,
)


class TestOverallGrade:
    def test_mean_of_graded_sections(self):
        assert calculate_overall_grade({"a": 4, "b": 5}) == 4.5

    def test_ungraded_sections_ignored(self):
        assert calculate_overall_grade({"a": 4, "b": 2, "c": 0}) == 3.0

    def test_default_when_nothing_graded(self):
        assert calculate_overall_grade({}) == 3.0
        assert calculate_overall_grade({"a": 0}) == 3.0

    def test_rounded(self):
        assert calculate_overall_grade({"a": 1, "b": 2, "c": 2}) == 1.67


class TestGradeMappings:
    def test_grade_risk_band(self):
        assert grade_risk_band(1.9) is GradeBand.critical
        assert grade_risk_band(2.5) is GradeBand.high
        assert grade_risk_band(3.5) is GradeBand.medium
        assert grade_risk_band(4.5) is GradeBand.low

    def test_grade_priority(self):
        assert grade_priority(1) is Priority.critical
        assert grade_priority(2) is Priority.high
        assert grade_priority(3) is Priority.medium
        assert grade_priority(4) is Priority.low
        assert grade_priority(5) is Priority.low


class TestConstructionRating:
    """Heuristic 1-5 rating from frame, surfaces and combustibility."""

    def test_non_combustible_steel_building_is_excellent(self):
        assert construction_rating(make_building()) == 5

    def test_timber_combustible_building_is_poor(self):
        b = make_building(
            walls=breakdown(heavy=20, unapproved=50, other=30),
            roof=breakdown(unapproved=100),
            frame_type="timber",
        )
        assert construction_rating(b) == 1

    def test_half_rounds_up(self):
        # 3 + 0.5 (roof) + 1 (combustibility 4.5) = 4.5
        b = make_building(walls=breakdown(heavy=80, approved=20), frame_type="unknown")
        assert construction_rating(b) == 5

    def test_transitional_roof(self):
        # 3 + 0.5 (walls); roof-led combustibility of exactly 50 adds nothing
        b = make_building(roof=breakdown(approved=100), frame_type="masonry")
        assert construction_rating(b) == 4

    def test_frame_match_is_case_insensitive(self):
        b = make_building(frame_type="Reinforced Concrete")
        assert construction_rating(b) == 5

    def test_labels(self):
        assert construction_rating_label(5) == "Excellent"
        assert construction_rating_label(2) == "Below Average"
        assert construction_rating_label(1) == "Poor"
        assert construction_rating_label(0) == "Unknown"


class TestSiteConstructionRating:
    def test_worst_building_wins(self):
        good = make_building("B1")
        bad = make_building("B2", roof=breakdown(other=100), frame_type="wood")
        assert site_construction_rating([good, bad]) == construction_rating(bad)

    def test_default_without_buildings(self):
        assert site_construction_rating([]) == 3

    def test_has_poor_rating(self):
        bad = make_building(roof=breakdown(other=100), frame_type="timber")
        assert has_poor_construction_rating([make_building(), bad])
        assert not has_poor_construction_rating([make_building()])
