# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Built-in industry sector profiles.

Each profile carries the relative dimension weights used by the sector
risk scorer together with the narrative shown in reports.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from fire_risk_survey.data.models import SectorWeights

logger = logging.getLogger(__name__)

DEFAULT_SECTOR = "Default"
FALLBACK_SECTOR = "General Industrial"


class SectorProfile(BaseModel):
    """Weighting profile and report narrative for one industry sector."""

    name: str = Field(description="Sector name as shown in the survey form")
    weights: SectorWeights = Field(description="Relative dimension weights")
    description: str = Field(description="Why the weights are set this way")
    emphasis: list[str] = Field(
        default_factory=list,
        description="Dimensions given greatest emphasis, most important first",
    )


FOOD_AND_BEVERAGE = SectorProfile(
    name="Food & Beverage",
    weights=SectorWeights(
        construction=0.35,
        fire_protection=0.30,
        detection=0.15,
        management=0.10,
        special_hazards=0.05,
        business_interruption=0.05,
    ),
    description=(
        "Food processing and storage occupancies are historically associated "
        "with severe fire losses driven by combustible construction, insulated "
        "panels, ceiling void fire spread, and smoke contamination. "
        "Construction materials and fire protection coverage are therefore "
        "weighted more heavily in the overall risk score."
    ),
    emphasis=[
        "Construction & Combustibility (High)",
        "Fire Protection (High)",
        "Detection Systems (Medium)",
    ],
)

FOUNDRY_METAL = SectorProfile(
    name="Foundry / Metal",
    weights=SectorWeights(
        construction=0.15,
        fire_protection=0.20,
        detection=0.15,
        management=0.25,
        special_hazards=0.15,
        business_interruption=0.10,
    ),
    description=(
        "Foundry operations are typically characterised by non-combustible "
        "construction but elevated process hazards, including molten metal, "
        "high-energy equipment, and dependency on critical plant. Management "
        "systems and special hazards therefore carry increased weighting."
    ),
    emphasis=[
        "Management Systems (High)",
        "Fire Protection (Medium)",
        "Special Hazards (Medium)",
    ],
)

CHEMICAL_ATEX = SectorProfile(
    name="Chemical / ATEX",
    weights=SectorWeights(
        construction=0.15,
        fire_protection=0.25,
        detection=0.15,
        management=0.20,
        special_hazards=0.20,
        business_interruption=0.05,
    ),
    description=(
        "Chemical manufacturing and ATEX-classified environments present "
        "elevated risks from flammable materials, explosive atmospheres, and "
        "reactive processes. Fire protection systems, management controls, and "
        "special hazard management are prioritised."
    ),
    emphasis=[
        "Fire Protection (High)",
        "Special Hazards (High)",
        "Management Systems (High)",
    ],
)

LOGISTICS_WAREHOUSE = SectorProfile(
    name="Logistics / Warehouse",
    weights=SectorWeights(
        construction=0.30,
        fire_protection=0.35,
        detection=0.15,
        management=0.10,
        special_hazards=0.05,
        business_interruption=0.05,
    ),
    description=(
        "Warehousing and logistics operations typically involve high-piled "
        "storage in large open spaces, making fire protection coverage and "
        "building construction the critical factors."
    ),
    emphasis=[
        "Fire Protection (Very High)",
        "Construction & Combustibility (High)",
        "Detection Systems (Medium)",
    ],
)

OFFICE_COMMERCIAL = SectorProfile(
    name="Office / Commercial",
    weights=SectorWeights(
        construction=0.20,
        fire_protection=0.20,
        detection=0.20,
        management=0.15,
        special_hazards=0.05,
        business_interruption=0.20,
    ),
    description=(
        "Office and commercial occupancies generally present lower fire risks "
        "but may have significant business interruption exposure. Weighting is "
        "balanced across protection systems with emphasis on business continuity."
    ),
    emphasis=[
        "Business Interruption (High)",
        "Detection Systems (Medium)",
        "Fire Protection (Medium)",
    ],
)

GENERAL_INDUSTRIAL = SectorProfile(
    name="General Industrial",
    weights=SectorWeights(
        construction=0.25,
        fire_protection=0.25,
        detection=0.15,
        management=0.15,
        special_hazards=0.10,
        business_interruption=0.10,
    ),
    description=(
        "General industrial occupancies employ balanced weighting across all "
        "risk factors, reflecting typical manufacturing environments without "
        "specific elevated hazards."
    ),
    emphasis=[
        "Construction & Combustibility (Medium)",
        "Fire Protection (Medium)",
        "Management Systems (Medium)",
    ],
)

OTHER = SectorProfile(
    name="Other",
    weights=GENERAL_INDUSTRIAL.weights.model_copy(),
    description="Default weighting profile applies balanced emphasis across all risk factors.",
    emphasis=[
        "Construction & Combustibility (Medium)",
        "Fire Protection (Medium)",
        "All other factors equally weighted",
    ],
)

SECTOR_PROFILES: dict[str, SectorProfile] = {
    p.name: p
    for p in (
        FOOD_AND_BEVERAGE,
        FOUNDRY_METAL,
        CHEMICAL_ATEX,
        LOGISTICS_WAREHOUSE,
        OFFICE_COMMERCIAL,
        GENERAL_INDUSTRIAL,
        OTHER,
    )
}

AVAILABLE_SECTORS: tuple[str, ...] = tuple(SECTOR_PROFILES)

# Industry sectors offered in the survey form.  Those without a built-in
# profile score against the Default weighting row until an admin customises
# them.
SECTOR_CATALOGUE: tuple[str, ...] = (
    "Aircraft Assembly",
    "Aircraft Maintenance",
    "Aircraft Painting",
    "Aluminium",
    "Auto Assembly",
    "Auto Body",
    "Auto Paint",
    "Auto Press",
    "Chemical",
    "Data Centre",
    "Electrical Equipment Assembly",
    "Expanded Plastics",
    "Food & Beverage",
    "Foundry and Forge",
    "Glass Manufacturing",
    "Hospital",
    "Hotel",
    "Machine shops",
    "Mining",
    "Mixed use",
    "Office",
    "Other",
    "Paper",
    "Pharmaceutical",
    "Power Generation",
    "Printing",
    "Retail",
    "Residential",
    "Semiconductor",
    "Sheet Metal Working",
    "Ship Building",
    "Steel Mill",
    "Textiles",
    "Unexpanded Plastics",
    "Vacant Plants",
    "Warehouse - Ceiling sprinklers only",
    "Waste Industry",
    "Woodworking",
)


def get_sector_profile(name: str) -> SectorProfile | None:
    """Look up a built-in profile by sector name, or ``None`` if unknown."""
    profile = SECTOR_PROFILES.get(name)
    if profile is None and name:
        logger.debug("No built-in profile for sector %r", name)
    return profile


def get_sector_weights(name: str) -> SectorWeights:
    """Return built-in weights for *name*, falling back to General Industrial."""
    profile = SECTOR_PROFILES.get(name)
    if profile is None:
        logger.warning(
            "Unknown sector %r, falling back to %r", name, FALLBACK_SECTOR
        )
        return GENERAL_INDUSTRIAL.weights
    return profile.weights
