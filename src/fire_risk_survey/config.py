# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Survey input files and YAML / JSON loaders."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from fire_risk_survey.data.models import SectorWeighting, Survey
from fire_risk_survey.data.weightings import (
    HOME_ENV_VAR,  # noqa: F401
    WEIGHTINGS_FILE_NAME,
    SectorWeightingStore,
    data_dir,
)
from fire_risk_survey.recommendations.templates import (
    RecommendationTemplate,
    RecommendationTrigger,
    TriggerLibrary,
)

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")
_JSON_SUFFIXES = (".json",)


class SurveyFile(BaseModel):
    """A survey plus optional weighting and trigger overrides."""

    survey: Survey
    sector_weightings: list[SectorWeighting] = Field(
        default_factory=list,
        description="Rows applied on top of the weightings store",
    )
    templates: list[RecommendationTemplate] = Field(default_factory=list)
    triggers: list[RecommendationTrigger] = Field(default_factory=list)

    def build_store(self, base: SectorWeightingStore | None = None) -> SectorWeightingStore:
        """Return *base* (or the default store) with this file's rows applied."""
        store = base or SectorWeightingStore.default()
        for row in self.sector_weightings:
            if row.is_custom:
                store.set_weights(row.sector_name, row.weights)
            elif row.sector_name in store:
                store.reset(row.sector_name)
        return store

    def build_library(self, base: TriggerLibrary | None = None) -> TriggerLibrary:
        """Return *base* (or the built-in library) extended with this file's entries."""
        library = base or TriggerLibrary.default()
        return library.extend(self.templates, self.triggers)


def weightings_path(path: str | Path | None = None) -> Path:
    return Path(path) if path else data_dir() / WEIGHTINGS_FILE_NAME


def _read_raw(path: Path) -> dict:
    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        import yaml

        with open(path) as f:
            return yaml.safe_load(f) or {}
    if suffix in _JSON_SUFFIXES:
        return json.loads(path.read_text())
    raise ValueError(
        f"Unsupported survey file type '{path.suffix}'. Use .yaml, .yml or .json"
    )


def load_survey_file(path: str | Path) -> SurveyFile:
    """Load a :class:`SurveyFile` from YAML or JSON.

    A file holding a bare survey (no top-level ``survey`` key) is accepted
    as well.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: For unsupported extensions or invalid content.
    """
    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Survey file not found: {source}")

    raw = _read_raw(source)
    if not isinstance(raw, dict):
        raise ValueError(f"Survey file {source} must contain a mapping")
    if "survey" not in raw:
        raw = {"survey": raw}

    survey_file = SurveyFile.model_validate(raw)
    logger.debug(
        "Loaded survey %s with %d building(s) from %s",
        survey_file.survey.id, len(survey_file.survey.buildings), source,
    )
    return survey_file


def load_survey(path: str | Path) -> Survey:
    return load_survey_file(path).survey
