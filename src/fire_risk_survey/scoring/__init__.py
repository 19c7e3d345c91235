# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Combustibility and sector risk scoring."""

from fire_risk_survey.scoring.combustibility import (
    building_combustibility,
    site_combustibility,
    surface_combustibility,
)
from fire_risk_survey.scoring.engine import ScoringEngine
from fire_risk_survey.scoring.sector import overall_score, risk_band

__all__ = [
    "ScoringEngine",
    "building_combustibility",
    "overall_score",
    "risk_band",
    "site_combustibility",
    "surface_combustibility",
]
