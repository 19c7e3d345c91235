"""Generate a short executive summary for a scored survey."""

from __future__ import annotations

from fire_risk_survey.data.models import (
    BuildingScore,
    Priority,
    Recommendation,
    RiskBand,
    RiskScore,
    Survey,
)
from fire_risk_survey.scoring.thresholds import combustibility_to_label


def generate_executive_summary(
    survey: Survey,
    building_scores: list[BuildingScore],
    site_combustibility: float,
    risk: RiskScore,
    overall_grade: float,
    recommendations: list[Recommendation],
) -> str:
    """Build the executive summary text.

    Structure:
    1. One-sentence verdict
    2. Site combustibility and the worst building
    3. Dimensions most depressing the score
    4. Priority actions (top 3 recommendations)
    5. Critical call-out (if any Critical recommendations)
    """
    parts: list[str] = []

    # --- 1. Verdict ---
    band_desc = {
        RiskBand.very_good: "a very good risk, well controlled across all areas",
        RiskBand.good: "a good risk with minor improvement opportunities",
        RiskBand.tolerable: "a tolerable risk with several areas needing attention",
        RiskBand.poor: "a poor risk requiring a structured improvement programme",
        RiskBand.very_poor: "a very poor risk requiring urgent action",
    }
    parts.append(
        f"The site '{survey.name}' ({risk.sector}) scores {risk.overall_score:.0f}/100 "
        f"([{risk.band.color}]{risk.band.value}[/{risk.band.color}]), "
        f"rated as {band_desc[risk.band]}. "
        f"Average section grade is {overall_grade:.1f}/5."
    )

    # --- 2. Construction ---
    parts.append("")
    parts.append("CONSTRUCTION:")
    parts.append(
        f"  Site combustibility {site_combustibility:.1f}/100 "
        f"({combustibility_to_label(site_combustibility)}) across "
        f"{len(building_scores)} building(s)."
    )
    if building_scores:
        worst = max(building_scores, key=lambda b: b.combustibility)
        parts.append(
            f"  Most combustible: {worst.name or worst.building_id} at "
            f"{worst.combustibility:.1f}/100 (construction rating {worst.construction_rating}/5)."
        )

    # --- 3. Lowest contributors ---
    if risk.lowest_contributors:
        parts.append("")
        parts.append("AREAS DEPRESSING THE SCORE:")
        for c in risk.lowest_contributors:
            parts.append(
                f"  - {c.name}: scored {c.score:.0f}/100 at {c.percentage} weighting"
            )

    # --- 4. Priority actions ---
    top = [r for r in recommendations if r.include_in_report][:3]
    if top:
        parts.append("")
        parts.append("PRIORITY ACTIONS:")
        for r in top:
            label = r.priority.value if r.priority else "Unrated"
            parts.append(f"  {r.rank}. {r.title} [{label}]")

    # --- 5. Critical call-out ---
    critical = [r for r in recommendations if r.priority is Priority.critical]
    if critical:
        parts.append("")
        parts.append("CRITICAL ACTION NEEDED:")
        parts.append(
            f"  {len(critical)} critical recommendation(s) should be addressed "
            f"before the next survey."
        )

    return "\n".join(parts)
