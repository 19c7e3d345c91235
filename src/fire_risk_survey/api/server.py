# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI application factory for the fire risk survey REST API."""

from __future__ import annotations

from fire_risk_survey.api import check_dependency

check_dependency("fastapi")

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from fire_risk_survey import __version__  # noqa: E402
from fire_risk_survey.api.routes import router  # noqa: E402


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        A fully configured application instance with CORS middleware
        and all API routes included.
    """
    app = FastAPI(
        title="Fire Risk Survey API",
        description=(
            "REST API for fire and property risk surveys. Score building "
            "combustibility, compute sector-weighted risk and run full "
            "survey assessments programmatically."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app
