# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Sector-weighted overall risk score.

Weights are relative: the weighted sum is divided by the total weight, so
admin-entered 1-5 weights and fractional profile weights score the same
way.  Scaling every weight by a positive constant leaves the result
unchanged.
"""

from __future__ import annotations

from fire_risk_survey.data.models import (
    DimensionContribution,
    DimensionScores,
    RiskBand,
    RiskScore,
    SectorWeights,
)
from fire_risk_survey.scoring.thresholds import score_to_band
from fire_risk_survey.scoring.weights import SCORE_DECIMALS

LOWEST_CONTRIBUTOR_COUNT = 2


def overall_score(scores: DimensionScores, weights: SectorWeights) -> float:
    """Weighted mean of the six dimension scores (0.0 when no weight is set)."""
    total_weight = weights.total
    if total_weight <= 0:
        return 0.0
    weighted = sum(scores.get(d) * w for d, w in weights.as_dict().items())
    return round(weighted / total_weight, SCORE_DECIMALS)


def risk_band(score: float) -> RiskBand:
    return score_to_band(score)


def dimension_contributions(
    scores: DimensionScores, weights: SectorWeights
) -> list[DimensionContribution]:
    """Per-dimension share of the overall score, in canonical dimension order."""
    contributions: list[DimensionContribution] = []
    for dimension, weight in weights.as_dict().items():
        share = weights.share(dimension)
        score = scores.get(dimension)
        contributions.append(
            DimensionContribution(
                dimension=dimension,
                name=dimension.label,
                score=score,
                weight=weight,
                share=share,
                contribution=score * share,
                percentage=f"{share * 100:.0f}%",
            )
        )
    return contributions


def lowest_contributors(
    contributions: list[DimensionContribution],
    count: int = LOWEST_CONTRIBUTOR_COUNT,
) -> list[DimensionContribution]:
    """Dimensions adding least to the overall score, smallest first."""
    ranked = sorted(contributions, key=lambda c: c.contribution)
    return ranked[: max(0, count)]


def score_sector_risk(
    scores: DimensionScores, weights: SectorWeights, sector: str = "Default"
) -> RiskScore:
    """Compute the full :class:`RiskScore` for one survey."""
    score = overall_score(scores, weights)
    contributions = dimension_contributions(scores, weights)
    return RiskScore(
        sector=sector,
        weights=weights,
        overall_score=score,
        band=risk_band(score),
        contributions=contributions,
        lowest_contributors=lowest_contributors(contributions),
    )
