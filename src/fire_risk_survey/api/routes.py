# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI router with REST endpoints for the fire risk survey API."""

from __future__ import annotations

from typing import Any, Callable

from fire_risk_survey.api import check_dependency

check_dependency("fastapi")

from fastapi import APIRouter, Depends, HTTPException  # noqa: E402

from fire_risk_survey.api.models import (  # noqa: E402
    HealthResponse,
    RiskScoreRequest,
    SiteCombustibilityRequest,
    SiteCombustibilityResponse,
    SurveyRequest,
)
from fire_risk_survey.config import weightings_path  # noqa: E402
from fire_risk_survey.data.models import (  # noqa: E402
    Building,
    BuildingScore,
    RiskScore,
    SectorWeighting,
    SurveyResult,
)
from fire_risk_survey.data.weightings import SectorWeightingStore  # noqa: E402
from fire_risk_survey.scoring.combustibility import (  # noqa: E402
    site_combustibility,
    site_total_area,
)
from fire_risk_survey.scoring.engine import score_building  # noqa: E402
from fire_risk_survey.scoring.sector import score_sector_risk  # noqa: E402

router = APIRouter(prefix="/api/v1", tags=["fire-risk-survey"])


# ---------------------------------------------------------------------------
# Dependency injection: weightings store and survey runner
# ---------------------------------------------------------------------------

def _default_store() -> SectorWeightingStore:
    """Return the persisted weightings store, or the built-in defaults.

    Used as a FastAPI dependency so tests and custom deployments can
    supply their own store.
    """
    return SectorWeightingStore.load_or_default(weightings_path())


def _default_survey_runner() -> Callable[..., Any]:
    """Return the default survey runner callable."""
    return _run_survey


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _run_survey(request: SurveyRequest, store: SectorWeightingStore) -> SurveyResult:
    """Score the supplied survey, or a generated demo survey."""
    from fire_risk_survey.pipeline import assess_survey

    survey = request.survey
    if survey is None:
        from fire_risk_survey.data.generator import SurveyGenerator

        generator = SurveyGenerator(
            sector=request.sector,
            seed=request.seed,
            building_count=request.building_count,
        )
        survey = generator.generate()

    return assess_survey(survey, store=store)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
async def health(
    store: SectorWeightingStore = Depends(_default_store),
) -> HealthResponse:
    """Return service health status and version information."""
    import fire_risk_survey

    return HealthResponse(
        status="ok",
        version=fire_risk_survey.__version__,
        sector_count=len(store),
    )


@router.get("/sectors", response_model=list[SectorWeighting])
async def sectors(
    store: SectorWeightingStore = Depends(_default_store),
) -> list[SectorWeighting]:
    """List every sector weighting row, ordered by sector name."""
    return store.rows()


@router.get("/sectors/{sector_name}", response_model=SectorWeighting)
async def sector(
    sector_name: str,
    store: SectorWeightingStore = Depends(_default_store),
) -> SectorWeighting:
    """Return the weighting row for one sector."""
    row = store.get(sector_name)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Unknown sector: {sector_name!r}")
    return row


@router.post("/combustibility/building", response_model=BuildingScore)
async def building_combustibility(building: Building) -> BuildingScore:
    """Score one building's wall and roof construction.

    Percentage totals other than 100 are reported in ``warnings`` and
    never rejected.
    """
    return score_building(building)


@router.post("/combustibility/site", response_model=SiteCombustibilityResponse)
async def site(request: SiteCombustibilityRequest) -> SiteCombustibilityResponse:
    """Area-weighted combustibility across all buildings on a site."""
    return SiteCombustibilityResponse(
        site_combustibility=site_combustibility(request.buildings),
        total_area_sqm=site_total_area(request.buildings),
        buildings=[score_building(b) for b in request.buildings],
    )


@router.post("/risk-score", response_model=RiskScore)
async def risk_score(
    request: RiskScoreRequest,
    store: SectorWeightingStore = Depends(_default_store),
) -> RiskScore:
    """Sector-weighted overall risk score with its dimension breakdown."""
    weights = request.weights if request.weights is not None else store.resolve(request.sector)
    return score_sector_risk(request.dimension_scores, weights, sector=request.sector)


@router.post("/survey", response_model=SurveyResult)
async def survey(
    request: SurveyRequest,
    store: SectorWeightingStore = Depends(_default_store),
    runner: Callable[..., Any] = Depends(_default_survey_runner),
) -> SurveyResult:
    """Run the full survey pipeline: scoring, recommendations and summary."""
    try:
        return runner(request, store)
    except (FileNotFoundError, KeyError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Survey scoring failed: {exc}") from exc
