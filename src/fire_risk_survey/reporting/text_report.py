# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Plain-text client report.

Produces a markup-free report suitable for pasting into emails or
document templates.
"""

from __future__ import annotations

from pathlib import Path

from rich.text import Text

from fire_risk_survey.data.models import SurveyResult
from fire_risk_survey.data.sections import section_label
from fire_risk_survey.scoring.thresholds import (
    combustibility_to_label,
    construction_rating_label,
)

_WIDTH = 72


def _plain(markup: str) -> str:
    return Text.from_markup(markup).plain


def _heading(title: str) -> list[str]:
    return ["", title.upper(), "=" * len(title)]


def render_text_report(result: SurveyResult) -> str:
    """Build the full plain-text report for *result*."""
    survey = result.survey
    risk = result.risk
    lines: list[str] = [
        "FIRE & PROPERTY RISK SURVEY REPORT",
        "-" * _WIDTH,
        f"Site:      {survey.name}",
        f"Client:    {survey.client or '-'}",
        f"Location:  {survey.location or '-'}",
        f"Sector:    {survey.sector}",
        f"Survey ID: {survey.id}",
        f"Date:      {result.timestamp.strftime('%Y-%m-%d')}",
    ]

    lines += _heading("Executive Summary")
    lines.append(_plain(result.executive_summary))

    lines += _heading("Overall Risk")
    lines.append(f"Overall score: {risk.overall_score:.1f}/100 ({risk.band.value})")
    lines.append(
        f"Section grade: {result.overall_grade:.1f}/5 ({result.grade_band.value} priority)"
    )
    lines.append("")
    lines.append(f"{'Dimension':<32}{'Score':>8}{'Weight':>9}{'Contrib.':>10}")
    for c in risk.contributions:
        lines.append(f"{c.name:<32}{c.score:>8.1f}{c.percentage:>9}{c.contribution:>10.1f}")
    if risk.lowest_contributors:
        names = ", ".join(c.name for c in risk.lowest_contributors)
        lines.append("")
        lines.append(f"Lowest contributors: {names}")

    lines += _heading("Construction")
    lines.append(
        f"Site combustibility: {result.site_combustibility:.1f}/100 "
        f"({combustibility_to_label(result.site_combustibility)})"
    )
    lines.append(
        f"Site construction rating: {result.construction_rating}/5 "
        f"({construction_rating_label(result.construction_rating)})"
    )
    for bs in result.building_scores:
        lines.append(
            f"  - {bs.name or bs.building_id}: {bs.combustibility:.1f}/100 "
            f"(walls {bs.walls_combustibility:.1f}, roof {bs.roof_combustibility:.1f}), "
            f"{bs.total_area_sqm:,.0f} m2, rating {bs.construction_rating}/5"
        )
    for warning in result.warnings:
        lines.append(f"  ! {warning}")

    if survey.section_grades:
        lines += _heading("Section Grades")
        for key, grade in survey.section_grades.items():
            lines.append(f"  {section_label(key):<36}{grade}/5")

    lines += _heading("Recommendations")
    if not result.recommendations:
        lines.append("No recommendations raised.")
    for rec in result.recommendations:
        priority = rec.priority.value if rec.priority else "Unrated"
        lines.append("")
        lines.append(f"{rec.rank}. {rec.title} [{priority}] ({rec.category})")
        lines.append(f"   Observation: {rec.description}")
        if rec.action:
            lines.append(f"   Action: {rec.action}")
        if rec.client_response:
            lines.append(f"   {rec.client_response}: ____________________")

    lines.append("")
    return "\n".join(lines)


def write_text_report(result: SurveyResult, output_path: str | Path) -> Path:
    """Write the plain-text report and return its path."""
    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_text_report(result), encoding="utf-8")
    return target
