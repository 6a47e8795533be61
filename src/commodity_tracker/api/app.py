"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from commodity_tracker.api.deps import AppState, api_key_middleware
from commodity_tracker.api.routes import router
from commodity_tracker.api.schemas import ErrorResponse
from commodity_tracker.core.config import TrackerConfig, load_config
from commodity_tracker.core.exceptions import (
    CommodityTrackerError,
    ConfigError,
    ProviderError,
    ReportError,
)
from commodity_tracker.dashboard import Dashboard


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    config = app.state._pending_config or load_config()
    dashboard = app.state._pending_dashboard or Dashboard(config)

    app.state.app_state = AppState(config=config, dashboard=dashboard)

    yield

    await dashboard.close()


def create_app(
    config: TrackerConfig | None = None,
    dashboard: Dashboard | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    import commodity_tracker

    app = FastAPI(
        title="Commodity Tracker API",
        description="Commodity prices, tariff schedules, and trade news",
        version=commodity_tracker.__version__,
        lifespan=lifespan,
    )

    # Stash config so lifespan can retrieve it
    app.state._pending_config = config or (dashboard.config if dashboard else None)
    app.state._pending_dashboard = dashboard

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(api_key_middleware)

    app.include_router(router, prefix="/api")

    @app.exception_handler(CommodityTrackerError)
    async def tracker_exception_handler(request: Request, exc: CommodityTrackerError):
        status_map = {
            ConfigError: 400,
            ProviderError: 502,
            ReportError: 500,
        }
        status = status_map.get(type(exc), 500)
        return JSONResponse(
            status_code=status,
            content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump(),
        )

    return app
