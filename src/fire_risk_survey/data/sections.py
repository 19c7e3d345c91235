# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Survey form sections and the rating vocabulary used in them."""

from __future__ import annotations

SECTION_LABELS: dict[str, str] = {
    "FP_01_Location": "Location & Exposures",
    "FP_02_Construction": "Construction",
    "FP_03_Compartmentation": "Compartmentation",
    "FP_04_ExternalFire": "External Fire Spread",
    "FP_05_InternalFinish": "Internal Linings & Finishes",
    "FP_06_FireProtection": "Fire Protection",
    "FP_07_FirefightingAccess": "Firefighting Access",
    "FP_08_MeansOfEscape": "Means of Escape",
    "FP_09_Management": "Management Systems",
    "FP_10_ProcessRisk": "Process Risk",
}

MANAGEMENT_SECTION = "FP_09_Management"

MANAGEMENT_FIELDS: dict[str, str] = {
    "commitmentLossPrevention_rating": "Commitment to loss prevention",
    "fireEquipmentTesting_rating": "Fire equipment testing",
    "controlHotWork_rating": "Control of hot work",
    "electricalMaintenance_rating": "Electrical maintenance",
    "generalMaintenance_rating": "General maintenance",
    "smokingControls_rating": "Smoking controls",
    "fireSafetyHousekeeping_rating": "Fire safety housekeeping",
    "selfInspections_rating": "Self-inspections",
    "changeManagement_rating": "Change management",
    "contractorControls_rating": "Contractor controls",
}

RATING_VALUES: tuple[str, ...] = ("Good", "Fair", "Poor", "Inadequate")

# Ratings whose triggers are re-checked during a full re-evaluation
PROBLEM_RATINGS: tuple[str, ...] = ("Poor", "Inadequate", "Fair")


def section_label(key: str) -> str:
    return SECTION_LABELS.get(key, key)


def field_label(field_key: str) -> str:
    """Readable label for a rating field key."""
    if field_key in MANAGEMENT_FIELDS:
        return MANAGEMENT_FIELDS[field_key]
    return field_key.removesuffix("_rating").replace("_", " ")
