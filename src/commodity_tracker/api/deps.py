"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import JSONResponse

from commodity_tracker.api.schemas import ErrorResponse
from commodity_tracker.core.config import TrackerConfig
from commodity_tracker.dashboard import Dashboard


@dataclass
class AppState:
    """Shared application state, attached to app.state during lifespan."""

    config: TrackerConfig
    dashboard: Dashboard


def get_config(request: Request) -> TrackerConfig:
    """Dependency: retrieve config."""
    return request.app.state.app_state.config


def get_dashboard(request: Request) -> Dashboard:
    """Dependency: retrieve the session dashboard."""
    return request.app.state.app_state.dashboard


EXEMPT_PATHS = {"/api/health"}


async def api_key_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Middleware: validate X-API-Key header when authentication is enabled.

    Installed on every app; the key is read from the config resolved at
    startup, so an app without a key passes every request through.
    """
    if request.url.path in EXEMPT_PATHS:
        return await call_next(request)

    expected = get_config(request).api.api_key
    if expected and request.headers.get("X-API-Key") != expected:
        return JSONResponse(
            status_code=401,
            content=ErrorResponse(
                error="Unauthorized", detail="Invalid or missing API key"
            ).model_dump(),
        )
    return await call_next(request)
