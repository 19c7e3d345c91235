# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Recommendation template and trigger definitions.

Two kinds of template live here:

* :class:`RecommendationTemplate` -- library text attached to a survey
  when a rating trigger fires (hazard, observation, action).
* :class:`DimensionTemplate` -- text with ``{placeholder}`` fields used
  for score-driven recommendations (weak dimensions, combustible
  buildings).

:class:`TriggerLibrary` holds the active templates and the triggers that
link a ``(section, field, rating)`` to a template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from fire_risk_survey.data.models import Dimension
from fire_risk_survey.data.sections import MANAGEMENT_SECTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationTemplate:
    """Immutable library entry for a triggered recommendation."""

    id: str
    hazard: str
    description: str
    action: str
    client_response_prompt: str = "Site Response"
    category: str = "Management Systems"
    default_priority: int = 3  # 1-5, 5 = most urgent


@dataclass(frozen=True)
class RecommendationTrigger:
    """Links one field rating to a template."""

    id: str
    section_key: str
    field_key: str
    rating_value: str
    template_id: str
    priority: int = 3
    is_active: bool = True

    def matches(self, section_key: str, field_key: str, rating: str) -> bool:
        """Case-insensitive, whitespace-trimmed rating match on an active trigger."""
        return (
            self.is_active
            and self.section_key == section_key
            and self.field_key == field_key
            and self.rating_value.strip().lower() == rating.strip().lower()
        )


@dataclass(frozen=True)
class DimensionTemplate:
    """Template for score-driven recommendations."""

    title: str
    description_template: str
    action: str
    category: str


# ---------------------------------------------------------------------------
# Score-driven templates
# ---------------------------------------------------------------------------

DIMENSION_TEMPLATES: dict[Dimension, DimensionTemplate] = {
    Dimension.construction: DimensionTemplate(
        title="Reduce Combustible Construction",
        description_template=(
            "Construction & Combustibility scored {score:.0f}/100 against a "
            "{weight_pct} sector weighting. Site combustibility stands at "
            "{site_combustibility:.1f}/100."
        ),
        action=(
            "Replace unapproved foam / plastic and other combustible elements with "
            "non-combustible or certified materials, prioritising roof and ceiling "
            "linings, and improve compartmentation between buildings."
        ),
        category="Construction",
    ),
    Dimension.fire_protection: DimensionTemplate(
        title="Improve Fire Protection Coverage",
        description_template=(
            "Fire Protection scored {score:.0f}/100 against a {weight_pct} sector "
            "weighting."
        ),
        action=(
            "Extend automatic sprinkler protection to unprotected areas, verify "
            "water supply adequacy and bring systems up to a recognised installation "
            "standard."
        ),
        category="Fire Protection & Detection",
    ),
    Dimension.detection: DimensionTemplate(
        title="Upgrade Fire Detection Systems",
        description_template=(
            "Detection Systems scored {score:.0f}/100 against a {weight_pct} sector "
            "weighting."
        ),
        action=(
            "Install automatic fire detection throughout with monitoring to a "
            "permanently staffed receiving centre, and review coverage after any "
            "layout change."
        ),
        category="Fire Protection & Detection",
    ),
    Dimension.management: DimensionTemplate(
        title="Strengthen Management Systems",
        description_template=(
            "Management Systems scored {score:.0f}/100 against a {weight_pct} sector "
            "weighting."
        ),
        action=(
            "Formalise loss prevention responsibilities, self-inspections, hot work "
            "permits and impairment handling with documented procedures and audits."
        ),
        category="Management Systems",
    ),
    Dimension.special_hazards: DimensionTemplate(
        title="Control Special Hazards",
        description_template=(
            "Special Hazards scored {score:.0f}/100 against a {weight_pct} sector "
            "weighting."
        ),
        action=(
            "Provide dedicated protection and segregation for flammable liquids, "
            "dust, thermal oil and other process hazards, with emergency isolation."
        ),
        category="Special Hazards",
    ),
    Dimension.business_interruption: DimensionTemplate(
        title="Develop Business Continuity Planning",
        description_template=(
            "Business Interruption scored {score:.0f}/100 against a {weight_pct} "
            "sector weighting."
        ),
        action=(
            "Prepare a tested business continuity plan covering critical plant, "
            "single points of failure, spares holdings and alternative supply."
        ),
        category="Business Interruption",
    ),
}

COMBUSTIBLE_CONSTRUCTION = DimensionTemplate(
    title="Combustible Construction: {building}",
    description_template=(
        "{building} has a construction rating of {rating}/5 ({label}) with a "
        "combustibility of {combustibility:.1f}/100 (walls {walls:.1f}, roof / "
        "ceiling {roof:.1f})."
    ),
    action=(
        "Review the building's combustible wall and roof elements. Replace "
        "unapproved insulated panels, or provide sprinkler protection and fire "
        "separation sized to the combustible load."
    ),
    category="Construction",
)


# ---------------------------------------------------------------------------
# Built-in triggered templates (management section)
# ---------------------------------------------------------------------------

_SEED_TEMPLATES: tuple[tuple[str, RecommendationTemplate], ...] = (
    (
        "commitmentLossPrevention_rating",
        RecommendationTemplate(
            id="tpl-loss-prevention",
            hazard="Loss Prevention Programme",
            description=(
                "Management commitment to loss prevention requires enhancement "
                "through a more formal and structured approach."
            ),
            action=(
                "Enhance management commitment to loss prevention by implementing a "
                "formal risk management programme with documented procedures, regular "
                "reviews, and clear accountability structures."
            ),
        ),
    ),
    (
        "fireEquipmentTesting_rating",
        RecommendationTemplate(
            id="tpl-fire-equipment-testing",
            hazard="Fire Equipment Testing",
            description=(
                "Fire protection and detection equipment testing and maintenance "
                "programme requires improvement."
            ),
            action=(
                "Establish a comprehensive fire equipment testing and maintenance "
                "programme with documented schedules, qualified personnel, and regular "
                "third-party verification to ensure all systems remain operational."
            ),
            category="Fire Protection & Detection",
            default_priority=4,
        ),
    ),
    (
        "controlHotWork_rating",
        RecommendationTemplate(
            id="tpl-hot-work",
            hazard="Hot Work Controls",
            description=(
                "Hot work activities present ignition risks during maintenance and "
                "operational activities."
            ),
            action=(
                "Implement a formal hot work permit system with pre-work inspections, "
                "fire watch procedures, and post-work monitoring to reduce ignition "
                "risks during maintenance activities."
            ),
            default_priority=4,
        ),
    ),
    (
        "electricalMaintenance_rating",
        RecommendationTemplate(
            id="tpl-electrical-maintenance",
            hazard="Electrical Maintenance",
            description=(
                "Electrical systems require enhanced maintenance to prevent failures "
                "that could lead to fire."
            ),
            action=(
                "Upgrade the electrical maintenance programme to include thermal "
                "imaging surveys, regular testing by qualified electricians, and "
                "immediate remediation of identified defects."
            ),
        ),
    ),
    (
        "generalMaintenance_rating",
        RecommendationTemplate(
            id="tpl-general-maintenance",
            hazard="General Maintenance",
            description=(
                "General maintenance standards impact overall fire safety and property "
                "condition."
            ),
            action=(
                "Develop a maintenance programme with scheduled inspections, "
                "preventive maintenance tasks, and prompt repairs."
            ),
        ),
    ),
    (
        "smokingControls_rating",
        RecommendationTemplate(
            id="tpl-smoking-controls",
            hazard="Smoking Controls",
            description=(
                "Smoking activities can create ignition risks if not properly "
                "controlled and managed."
            ),
            action=(
                "Designate safe smoking areas away from combustible materials, provide "
                "proper disposal receptacles, and enforce no-smoking policies in "
                "high-risk zones."
            ),
        ),
    ),
    (
        "fireSafetyHousekeeping_rating",
        RecommendationTemplate(
            id="tpl-housekeeping",
            hazard="Housekeeping Standards",
            description=(
                "Poor housekeeping can increase fire risk through accumulation of "
                "combustible materials and inadequate separation from ignition sources."
            ),
            action=(
                "Improve housekeeping standards with regular cleaning schedules, "
                "proper waste management, and storage procedures that maintain "
                "separation from ignition sources."
            ),
        ),
    ),
    (
        "selfInspections_rating",
        RecommendationTemplate(
            id="tpl-self-inspection",
            hazard="Self-Inspection Programme",
            description=(
                "Regular self-inspections are needed to proactively identify and "
                "address fire safety deficiencies."
            ),
            action=(
                "Establish a structured self-inspection programme with trained "
                "personnel, documented checklists, and corrective action tracking."
            ),
        ),
    ),
    (
        "changeManagement_rating",
        RecommendationTemplate(
            id="tpl-change-management",
            hazard="Change Management",
            description=(
                "Changes to operations, processes, or facilities can introduce new "
                "fire safety risks if not properly assessed."
            ),
            action=(
                "Implement a formal change management process requiring a fire risk "
                "assessment before any operational, process, or facility change."
            ),
        ),
    ),
    (
        "contractorControls_rating",
        RecommendationTemplate(
            id="tpl-contractor-controls",
            hazard="Contractor Controls",
            description=(
                "Contractor activities can introduce fire risks if not properly "
                "controlled and supervised."
            ),
            action=(
                "Require contractor site inductions, hot work permits, supervision "
                "during high-risk activities, and verification of contractor "
                "insurance and qualifications."
            ),
        ),
    ),
)

_SEED_RATINGS = ("Poor", "Inadequate")


@dataclass
class TriggerLibrary:
    """Active recommendation templates and the triggers that fire them.

    Usage::

        library = TriggerLibrary.default()
        triggers = library.match("FP_09_Management", "controlHotWork_rating", "poor")
    """

    templates: dict[str, RecommendationTemplate] = field(default_factory=dict)
    triggers: list[RecommendationTrigger] = field(default_factory=list)

    @classmethod
    def default(cls) -> "TriggerLibrary":
        """Library seeded with the built-in management-section triggers."""
        library = cls()
        for field_key, template in _SEED_TEMPLATES:
            library.add_template(template)
            for rating in _SEED_RATINGS:
                library.add_trigger(
                    RecommendationTrigger(
                        id=f"trg-{template.id.removeprefix('tpl-')}-{rating.lower()}",
                        section_key=MANAGEMENT_SECTION,
                        field_key=field_key,
                        rating_value=rating,
                        template_id=template.id,
                        priority=template.default_priority,
                    )
                )
        return library

    def add_template(self, template: RecommendationTemplate) -> None:
        self.templates[template.id] = template

    def add_trigger(self, trigger: RecommendationTrigger) -> None:
        """Add *trigger*, replacing any trigger with the same id.

        Raises:
            ValueError: If the trigger refers to an unknown template.
        """
        if trigger.template_id not in self.templates:
            raise ValueError(
                f"Trigger {trigger.id!r} refers to unknown template {trigger.template_id!r}"
            )
        self.triggers = [t for t in self.triggers if t.id != trigger.id]
        self.triggers.append(trigger)

    def extend(
        self,
        templates: Iterable[RecommendationTemplate] = (),
        triggers: Iterable[RecommendationTrigger] = (),
    ) -> "TriggerLibrary":
        """Add extra templates then triggers; returns ``self`` for chaining."""
        for template in templates:
            self.add_template(template)
        for trigger in triggers:
            self.add_trigger(trigger)
        return self

    def extend_from_yaml(self, path: str | Path) -> "TriggerLibrary":
        """Add templates and triggers from a YAML file.

        The file holds top-level ``templates`` and ``triggers`` lists whose
        entries use the dataclass field names.
        """
        import yaml

        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Trigger library file not found: {source}")
        with open(source) as fh:
            raw = yaml.safe_load(fh) or {}

        templates = [RecommendationTemplate(**t) for t in raw.get("templates", [])]
        triggers = [RecommendationTrigger(**t) for t in raw.get("triggers", [])]
        logger.info(
            "Loaded %d templates and %d triggers from %s", len(templates), len(triggers), source
        )
        return self.extend(templates, triggers)

    def match(self, section_key: str, field_key: str, rating: str) -> list[RecommendationTrigger]:
        """Active triggers for a field rating, in library order."""
        return [t for t in self.triggers if t.matches(section_key, field_key, rating)]

    def template_for(self, trigger: RecommendationTrigger) -> RecommendationTemplate | None:
        return self.templates.get(trigger.template_id)
