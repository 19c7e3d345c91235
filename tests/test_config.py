# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for survey file loading and data directory configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from fire_risk_survey.config import (
    HOME_ENV_VAR,
    data_dir,
    load_survey,
    load_survey_file,
    weightings_path,
)
from fire_risk_survey.data.models import SectorWeights

SURVEY = {
    "id": "SRV-100",
    "name": "Riverside Plant",
    "sector": "Hotel",
    "buildings": [
        {
            "id": "B1",
            "construction": {
                "walls": {"heavy_non_combustible_pct": 100},
                "roof_ceiling": {"other_combustible_pct": "40", "heavy_non_combustible_pct": 60},
            },
            "floor_area_sqm": 500,
            "roof_area_sqm": 500,
        }
    ],
    "dimension_scores": {"construction": 50, "fire_protection": 70},
}


def _write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestLoadSurveyFile:
    def test_yaml(self, tmp_path):
        path = _write_yaml(tmp_path / "survey.yaml", {"survey": SURVEY})
        survey_file = load_survey_file(path)
        assert survey_file.survey.id == "SRV-100"
        assert survey_file.survey.buildings[0].construction.roof_ceiling.other_combustible_pct == 40

    def test_json(self, tmp_path):
        path = tmp_path / "survey.json"
        path.write_text(json.dumps({"survey": SURVEY}))
        assert load_survey_file(path).survey.name == "Riverside Plant"

    def test_bare_survey_accepted(self, tmp_path):
        path = _write_yaml(tmp_path / "survey.yml", SURVEY)
        assert load_survey(path).sector == "Hotel"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_survey_file(tmp_path / "missing.yaml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "survey.txt"
        path.write_text("id: x")
        with pytest.raises(ValueError):
            load_survey_file(path)

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "survey.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            load_survey_file(path)


class TestSurveyFileOverrides:
    def test_sector_weightings_applied(self, tmp_path):
        data = {
            "survey": SURVEY,
            "sector_weightings": [
                {"sector_name": "Hotel", "is_custom": True, "weights": {"construction": 5}},
            ],
        }
        store = load_survey_file(_write_yaml(tmp_path / "s.yaml", data)).build_store()
        assert store.resolve("Hotel") == SectorWeights(construction=5)

    def test_non_custom_row_resets(self, tmp_path):
        data = {
            "survey": SURVEY,
            "sector_weightings": [{"sector_name": "Food & Beverage", "is_custom": False}],
        }
        store = load_survey_file(_write_yaml(tmp_path / "s.yaml", data)).build_store()
        assert not store.get("Food & Beverage").is_custom

    def test_triggers_added(self, tmp_path):
        data = {
            "survey": SURVEY,
            "templates": [
                {"id": "tpl-x", "hazard": "X", "description": "d", "action": "a"},
            ],
            "triggers": [
                {
                    "id": "trg-x", "section_key": "FP_10_ProcessRisk",
                    "field_key": "x_rating", "rating_value": "Fair", "template_id": "tpl-x",
                },
            ],
        }
        library = load_survey_file(_write_yaml(tmp_path / "s.yaml", data)).build_library()
        assert "tpl-x" in library.templates
        assert library.match("FP_10_ProcessRisk", "x_rating", "fair")


class TestDataDir:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))
        assert data_dir() == tmp_path
        assert weightings_path() == tmp_path / "sector_weightings.json"

    def test_explicit_path(self, tmp_path):
        assert weightings_path(tmp_path / "w.json") == tmp_path / "w.json"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(HOME_ENV_VAR, raising=False)
        assert data_dir().name == ".fire-risk-survey"
