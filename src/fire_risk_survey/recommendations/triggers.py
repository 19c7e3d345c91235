# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Rating-triggered recommendations.

When a surveyor rates a field (for example hot work control as "Poor"),
every active trigger for that ``(section, field, rating)`` attaches its
template to the survey's recommendation register.  Improving the rating
later soft-deletes those recommendations again.

Upserts are idempotent: each recommendation is keyed by
``"section:field:rating:template_id"`` within a survey, so evaluating the
same rating twice updates rather than duplicates.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from fire_risk_survey.data.models import (
    Recommendation,
    RecommendationSource,
    RecommendationStatus,
)
from fire_risk_survey.data.sections import PROBLEM_RATINGS, field_label as default_field_label
from fire_risk_survey.recommendations.priority import priority_from_level
from fire_risk_survey.recommendations.templates import TriggerLibrary

logger = logging.getLogger(__name__)


def make_trigger_key(section_key: str, field_key: str, rating: str, template_id: str) -> str:
    return f"{section_key}:{field_key}:{rating}:{template_id}"


class TriggerEvaluation(BaseModel):
    """Outcome of evaluating one field rating."""

    success: bool = True
    matched: int = 0
    added: int = 0
    error: Optional[str] = None


class EvaluationLogEntry(BaseModel):
    """One row of the trigger evaluation log."""

    survey_id: str
    section_key: str
    field_key: str
    rating_value: str
    matched_trigger_count: int = 0
    recommendations_added: int = 0
    error_message: Optional[str] = None
    evaluation_context: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class _RegisterFile(BaseModel):
    surveys: dict[str, list[Recommendation]] = Field(default_factory=dict)


class RecommendationRegister:
    """Per-survey store of recommendations keyed by trigger key.

    Recommendations without a trigger key (manual entries) are appended
    and never deduplicated.
    """

    def __init__(self) -> None:
        self._keyed: dict[str, dict[str, Recommendation]] = {}
        self._manual: dict[str, list[Recommendation]] = {}

    def upsert(self, survey_id: str, recommendation: Recommendation) -> bool:
        """Insert or replace by trigger key; returns True if the key was new."""
        key = recommendation.trigger_key
        if key is None:
            self._manual.setdefault(survey_id, []).append(recommendation)
            return True
        survey_recs = self._keyed.setdefault(survey_id, {})
        is_new = key not in survey_recs
        survey_recs[key] = recommendation
        return is_new

    def get(self, survey_id: str, trigger_key: str) -> Recommendation | None:
        return self._keyed.get(survey_id, {}).get(trigger_key)

    def all(self, survey_id: str) -> list[Recommendation]:
        """Every recommendation for *survey_id*, including soft-deleted ones."""
        return list(self._keyed.get(survey_id, {}).values()) + list(
            self._manual.get(survey_id, [])
        )

    def active(self, survey_id: str) -> list[Recommendation]:
        """Recommendations that will appear in the report."""
        return [r for r in self.all(survey_id) if r.include_in_report]

    def soft_delete_prefix(self, survey_id: str, prefix: str) -> int:
        """Hide every keyed recommendation whose trigger key starts with *prefix*."""
        count = 0
        for key, rec in self._keyed.get(survey_id, {}).items():
            if key.startswith(prefix):
                rec.include_in_report = False
                rec.status = RecommendationStatus.deferred
                count += 1
        return count

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        surveys = {sid: self.all(sid) for sid in set(self._keyed) | set(self._manual)}
        target.write_text(_RegisterFile(surveys=surveys).model_dump_json(indent=2))
        return target

    @classmethod
    def load(cls, path: str | Path) -> "RecommendationRegister":
        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Recommendation register not found: {source}")
        data = _RegisterFile.model_validate(json.loads(source.read_text()))
        register = cls()
        for survey_id, recs in data.surveys.items():
            for rec in recs:
                register.upsert(survey_id, rec)
        return register


class TriggerEvaluator:
    """Evaluate field ratings against a :class:`TriggerLibrary`.

    Usage::

        evaluator = TriggerEvaluator(TriggerLibrary.default(), register)
        result = evaluator.evaluate("SRV-1", "FP_09_Management", "controlHotWork_rating", "Poor")
    """

    def __init__(
        self,
        library: TriggerLibrary | None = None,
        register: RecommendationRegister | None = None,
    ) -> None:
        self.library = library or TriggerLibrary.default()
        self.register = register if register is not None else RecommendationRegister()
        self.log: list[EvaluationLogEntry] = []

    def _log(
        self,
        survey_id: str,
        section_key: str,
        field_key: str,
        rating: str,
        matched: int,
        added: int,
        error: str | None,
        context: dict[str, Any],
    ) -> None:
        self.log.append(
            EvaluationLogEntry(
                survey_id=survey_id,
                section_key=section_key,
                field_key=field_key,
                rating_value=rating,
                matched_trigger_count=matched,
                recommendations_added=added,
                error_message=error,
                evaluation_context=context,
            )
        )

    def evaluate(
        self,
        survey_id: str,
        section_key: str,
        field_key: str,
        rating: str,
        field_label: str | None = None,
    ) -> TriggerEvaluation:
        """Attach recommendations for every trigger matching this rating."""
        normalized = rating.strip().lower()
        context: dict[str, Any] = {"normalized_rating": normalized, "field_label": field_label}
        triggers = self.library.match(section_key, field_key, rating)
        added = 0

        try:
            for trigger in triggers:
                template = self.library.template_for(trigger)
                if template is None:
                    logger.warning("Trigger %s has no template; skipped", trigger.id)
                    continue

                trigger_key = make_trigger_key(section_key, field_key, rating.strip(), trigger.template_id)
                self.register.upsert(
                    survey_id,
                    Recommendation(
                        title=template.hazard,
                        description=template.description,
                        action=template.action,
                        category=template.category,
                        priority=priority_from_level(trigger.priority),
                        source=RecommendationSource.triggered,
                        status=RecommendationStatus.open,
                        include_in_report=True,
                        trigger_key=trigger_key,
                        template_id=trigger.template_id,
                        client_response=template.client_response_prompt,
                        context={
                            "section_key": section_key,
                            "field_key": field_key,
                            "rating_value": rating.strip(),
                            "field_label": field_label or default_field_label(field_key),
                        },
                    ),
                )
                added += 1
        except ValueError as exc:
            logger.warning(
                "Trigger evaluation failed for %s/%s", section_key, field_key, exc_info=True
            )
            self._log(survey_id, section_key, field_key, rating, len(triggers), added, str(exc), context)
            return TriggerEvaluation(success=False, matched=len(triggers), added=added, error=str(exc))

        context["trigger_ids"] = [t.id for t in triggers]
        self._log(survey_id, section_key, field_key, rating, len(triggers), added, None, context)
        if added:
            logger.debug(
                "%d recommendation(s) attached for %s:%s=%s", added, section_key, field_key, rating
            )
        return TriggerEvaluation(matched=len(triggers), added=added)

    def remove(self, survey_id: str, section_key: str, field_key: str, old_rating: str) -> int:
        """Soft-delete recommendations raised by a previous rating; returns the count."""
        prefix = f"{section_key}:{field_key}:{old_rating.strip()}:"
        return self.register.soft_delete_prefix(survey_id, prefix)

    def update_rating(
        self,
        survey_id: str,
        section_key: str,
        field_key: str,
        new_rating: str,
        old_rating: str | None = None,
    ) -> TriggerEvaluation:
        """Handle a rating change: retire the old rating's recommendations, evaluate the new one."""
        if old_rating and old_rating != new_rating:
            self.remove(survey_id, section_key, field_key, old_rating)
        return self.evaluate(survey_id, section_key, field_key, new_rating)

    def retire_changed(
        self, survey_id: str, ratings: Mapping[str, Mapping[str, Any]]
    ) -> int:
        """Retire triggered recommendations whose field rating has since changed."""
        retired = 0
        for rec in self.register.active(survey_id):
            if rec.source is not RecommendationSource.triggered:
                continue
            section_key = rec.context.get("section_key")
            field_key = rec.context.get("field_key")
            old_rating = rec.context.get("rating_value")
            if not (section_key and field_key and old_rating):
                continue
            fields = ratings.get(section_key)
            current = fields.get(field_key) if isinstance(fields, Mapping) else None
            if isinstance(current, str) and current.strip().lower() == old_rating.strip().lower():
                continue
            retired += self.remove(survey_id, section_key, field_key, old_rating)
        if retired:
            logger.debug("Retired %d recommendation(s) for changed ratings on %s", retired, survey_id)
        return retired

    def reevaluate_all(
        self, survey_id: str, ratings: Mapping[str, Mapping[str, Any]]
    ) -> int:
        """Evaluate every Poor / Inadequate / Fair rating; returns the total added."""
        total = 0
        for section_key, fields in ratings.items():
            if not isinstance(fields, Mapping):
                continue
            for field_key, value in fields.items():
                if isinstance(value, str) and value in PROBLEM_RATINGS:
                    result = self.evaluate(survey_id, section_key, field_key, value)
                    if result.success:
                        total += result.added
        return total
