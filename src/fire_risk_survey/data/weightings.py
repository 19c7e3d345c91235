# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Sector weightings store.

Holds one :class:`SectorWeighting` row per industry sector plus a
``Default`` fallback row.  Rows are persisted as JSON, by default at
``~/.fire-risk-survey/sector_weightings.json``.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from fire_risk_survey.data.models import Dimension, SectorWeighting, SectorWeights
from fire_risk_survey.data.sectors import (
    DEFAULT_SECTOR,
    FALLBACK_SECTOR,
    SECTOR_CATALOGUE,
    SECTOR_PROFILES,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_DIR = Path.home() / ".fire-risk-survey"
HOME_ENV_VAR = "FIRE_SURVEY_HOME"
WEIGHTINGS_FILE_NAME = "sector_weightings.json"

ADMIN_WEIGHT_MIN = 1
ADMIN_WEIGHT_MAX = 5
ADMIN_WEIGHT_DEFAULT = 3


def data_dir() -> Path:
    """Directory for persisted state; ``$FIRE_SURVEY_HOME`` overrides the default."""
    override = os.environ.get(HOME_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_BASE_DIR


def validate_admin_weight(value: int) -> int:
    """Check a weight entered through the admin interface (integer 1-5)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"weight must be an integer, got {value!r}")
    if not ADMIN_WEIGHT_MIN <= value <= ADMIN_WEIGHT_MAX:
        raise ValueError(
            f"weight must be between {ADMIN_WEIGHT_MIN} and {ADMIN_WEIGHT_MAX}, got {value}"
        )
    return value


class _WeightingsFile(BaseModel):
    rows: list[SectorWeighting] = Field(default_factory=list)


class SectorWeightingStore:
    """In-process replacement for the ``sector_weightings`` table.

    Usage::

        store = SectorWeightingStore.default()
        weights = store.resolve("Food & Beverage")
    """

    def __init__(self, rows: list[SectorWeighting] | None = None) -> None:
        self._rows: dict[str, SectorWeighting] = {}
        for row in rows or []:
            self._rows[row.sector_name] = row

    @classmethod
    def default(cls) -> "SectorWeightingStore":
        """Store seeded with the built-in profiles, the catalogue and a Default row."""
        rows = [
            SectorWeighting(
                sector_name=DEFAULT_SECTOR,
                is_custom=True,
                weights=SectorWeights.uniform(ADMIN_WEIGHT_DEFAULT),
            )
        ]
        for name in SECTOR_CATALOGUE:
            if name not in SECTOR_PROFILES:
                rows.append(SectorWeighting(sector_name=name))
        for profile in SECTOR_PROFILES.values():
            rows.append(
                SectorWeighting(
                    sector_name=profile.name,
                    is_custom=True,
                    weights=profile.weights.model_copy(),
                )
            )
        return cls(rows)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __contains__(self, sector: str) -> bool:
        return sector in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, sector: str) -> SectorWeighting | None:
        return self._rows.get(sector)

    def rows(self) -> list[SectorWeighting]:
        """All rows ordered by sector name."""
        return sorted(self._rows.values(), key=lambda r: r.sector_name)

    def resolve(self, sector: str) -> SectorWeights:
        """Weights to score *sector* with.

        A sector's own row is only used once it has been customised;
        otherwise the Default row applies.
        """
        row = self._rows.get(sector)
        if row is not None and row.is_custom:
            return row.weights

        default_row = self._rows.get(DEFAULT_SECTOR)
        if default_row is not None:
            logger.debug("Sector %r uses the %s weighting row", sector, DEFAULT_SECTOR)
            return default_row.weights

        logger.warning(
            "No %s weighting row; scoring sector %r with %r weights",
            DEFAULT_SECTOR, sector, FALLBACK_SECTOR,
        )
        return SECTOR_PROFILES[FALLBACK_SECTOR].weights

    # ------------------------------------------------------------------
    # Admin edits
    # ------------------------------------------------------------------

    def set_weights(self, sector: str, weights: SectorWeights) -> SectorWeighting:
        """Store custom *weights* for *sector*, creating the row if needed."""
        row = SectorWeighting(
            sector_name=sector,
            is_custom=True,
            weights=weights,
            updated_at=datetime.now(timezone.utc),
        )
        self._rows[sector] = row
        logger.info("Updated sector weighting for %r", sector)
        return row

    def set_weight(self, sector: str, dimension: Dimension, value: int) -> SectorWeighting:
        """Set a single admin weight (1-5) on *sector*."""
        validate_admin_weight(value)
        current = self._rows.get(sector)
        base = current.weights if current is not None else SectorWeights.uniform(
            ADMIN_WEIGHT_DEFAULT
        )
        return self.set_weights(sector, base.model_copy(update={dimension.value: float(value)}))

    def reset(self, sector: str) -> SectorWeighting:
        """Reset *sector* to uniform weights and hand it back to the Default row."""
        if sector not in self._rows:
            raise KeyError(f"Unknown sector: {sector!r}")
        row = SectorWeighting(
            sector_name=sector,
            is_custom=False,
            weights=SectorWeights.uniform(ADMIN_WEIGHT_DEFAULT),
            updated_at=datetime.now(timezone.utc),
        )
        self._rows[sector] = row
        logger.info("Reset sector weighting for %r", sector)
        return row

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Write all rows to *path* as JSON and return the path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(_WeightingsFile(rows=self.rows()).model_dump_json(indent=2))
        return target

    @classmethod
    def load(cls, path: str | Path) -> "SectorWeightingStore":
        """Load rows previously written by :meth:`save`."""
        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Weightings file not found: {source}")
        data = json.loads(source.read_text())
        return cls(_WeightingsFile.model_validate(data).rows)

    @classmethod
    def load_or_default(cls, path: str | Path | None = None) -> "SectorWeightingStore":
        """Load the store at *path*, seeding the defaults when it does not exist yet."""
        source = Path(path) if path else data_dir() / WEIGHTINGS_FILE_NAME
        if source.exists():
            return cls.load(source)
        return cls.default()
