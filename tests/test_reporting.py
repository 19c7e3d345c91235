# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for terminal, text, chart and PDF reporting."""

from __future__ import annotations

import os

from rich.console import Console

from conftest import breakdown
from fire_risk_survey.data.models import (
    Dimension,
    DimensionScores,
    SectorWeights,
    Survey,
    SurveyResult,
)
from fire_risk_survey.data.weightings import SectorWeightingStore
from fire_risk_survey.pipeline import assess_survey
from fire_risk_survey.reporting.ascii_charts import (
    combustibility_gauge,
    material_bar,
    score_gauge,
)
from fire_risk_survey.reporting.terminal import TerminalRenderer
from fire_risk_survey.reporting.text_report import render_text_report, write_text_report


def _record(render) -> str:
    console = Console(record=True, width=140, no_color=True)
    render(TerminalRenderer(console))
    return console.export_text()


class TestAsciiCharts:
    def test_score_gauge_shows_band(self):
        assert "Good" in score_gauge(75)
        assert "75/100" in score_gauge(75)

    def test_gauge_clamped(self):
        assert "100/100" in score_gauge(140)

    def test_combustibility_gauge_color(self):
        assert combustibility_gauge(10).startswith("[green]")
        assert combustibility_gauge(80).startswith("[red]")

    def test_material_bar_width(self):
        bar = material_bar(breakdown(heavy=50, approved=25, other=25), width=20)
        assert bar.count("█") == 20

    def test_material_bar_empty(self):
        assert "█" not in material_bar(breakdown(), width=10)


class TestExecutiveSummary:
    def test_sections(self, weak_survey: Survey):
        result = assess_survey(weak_survey)
        summary = result.executive_summary

        assert "Test Works" in summary
        assert "CONSTRUCTION:" in summary
        assert "AREAS DEPRESSING THE SCORE:" in summary
        assert "PRIORITY ACTIONS:" in summary
        assert "1. Reduce Combustible Construction [Critical]" in summary
        assert "CRITICAL ACTION NEEDED:" in summary

    def test_no_critical_call_out_for_strong_site(self, demo_survey: Survey):
        strong = demo_survey.model_copy(
            update={
                "dimension_scores": DimensionScores(**{d.value: 95.0 for d in Dimension}),
                "buildings": [],
                "ratings": {},
            }
        )
        result = assess_survey(strong)
        assert "CRITICAL ACTION NEEDED" not in result.executive_summary
        assert "very good risk" in result.executive_summary


class TestPipeline:
    def test_result_fields(self, scored_result: SurveyResult):
        assert scored_result.survey.id == "SRV-000042"
        assert len(scored_result.building_scores) == 3
        assert 1 <= scored_result.construction_rating <= 5
        assert scored_result.executive_summary
        assert scored_result.critical_recommendation_count == sum(
            1 for r in scored_result.recommendations if r.priority and r.priority.value == "Critical"
        )

    def test_custom_store(self, demo_survey: Survey):
        store = SectorWeightingStore.default()
        store.set_weights("Default", SectorWeights())
        result = assess_survey(demo_survey, store=store)
        assert result.risk.overall_score == 0.0

    def test_json_round_trip(self, scored_result: SurveyResult):
        restored = SurveyResult.model_validate_json(scored_result.model_dump_json())
        assert restored.risk.overall_score == scored_result.risk.overall_score


class TestTerminalRenderer:
    def test_full_render(self, scored_result: SurveyResult):
        output = _record(lambda r: r.render(scored_result))
        assert "FIRE RISK SURVEY" in output
        assert "OVERALL RISK SCORE" in output
        assert "RISK DIMENSIONS" in output
        assert "CONSTRUCTION & COMBUSTIBILITY" in output
        assert "EXECUTIVE SUMMARY" in output

    def test_buildings_only(self, scored_result: SurveyResult):
        output = _record(lambda r: r.render_buildings(scored_result))
        assert "Building 1" in output
        assert "RECOMMENDATIONS" not in output

    def test_weightings_table(self):
        rows = SectorWeightingStore.default().rows()
        output = _record(lambda r: r.render_weightings(rows))
        assert "SECTOR WEIGHTINGS" in output
        assert "Food & Beverage" in output


class TestTextReport:
    def test_plain_text(self, weak_survey: Survey):
        text = render_text_report(assess_survey(weak_survey))
        assert "FIRE & PROPERTY RISK SURVEY REPORT" in text
        assert "Site:      Test Works" in text
        assert "Hot Work Controls" in text
        assert "[red]" not in text
        assert "Site Response: ____" in text

    def test_write(self, scored_result: SurveyResult, tmp_path):
        path = write_text_report(scored_result, tmp_path / "out" / "report.txt")
        assert path.exists()
        assert "RECOMMENDATIONS" in path.read_text()


class TestCharts:
    def test_save_all(self, scored_result: SurveyResult, tmp_path):
        from fire_risk_survey.reporting.charts import ChartGenerator

        paths = ChartGenerator(scored_result).save_all(str(tmp_path))
        assert set(paths) == {
            "dimension_radar",
            "contribution_bar",
            "building_combustibility_bar",
            "material_tiers_stacked",
            "priority_pie",
        }
        assert all(os.path.getsize(p) > 0 for p in paths.values())

    def test_empty_site(self, tmp_path):
        from fire_risk_survey.reporting.charts import ChartGenerator

        survey = Survey(id="S0", name="Empty")
        paths = ChartGenerator(assess_survey(survey)).save_all(str(tmp_path))
        assert len(paths) == 5


class TestPDFReport:
    def test_generate(self, scored_result: SurveyResult, tmp_path):
        from fire_risk_survey.reporting.pdf_report import PDFReportGenerator

        path = tmp_path / "report.pdf"
        PDFReportGenerator().generate(scored_result, str(path))
        assert path.exists()
        assert path.read_bytes()[:4] == b"%PDF"
