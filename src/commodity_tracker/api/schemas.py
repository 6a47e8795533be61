"""API-specific request/response schemas (Pydantic v2)."""

from __future__ import annotations

from pydantic import BaseModel

from commodity_tracker.core.models import (
    NewsArticle,
    ProviderStatus,
    ResolvedQuote,
    TariffRecord,
    TrackedItem,
)


# -- Error --


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    error: str
    detail: str | None = None


# -- Health --


class HealthResponse(BaseModel):
    """System health summary."""

    status: str
    version: str
    tracked_items: int
    providers_configured: int


# -- Catalog --


class CommodityListResponse(BaseModel):
    total: int
    items: list[TrackedItem]


class TariffListResponse(BaseModel):
    total: int
    items: list[TariffRecord]


# -- Prices --


class QuoteListResponse(BaseModel):
    """One resolution cycle's quotes with a provenance breakdown."""

    total: int
    api_count: int
    simulated_count: int
    items: list[ResolvedQuote]


# -- News --


class NewsListResponse(BaseModel):
    total: int
    items: list[NewsArticle]


# -- Providers --


class ProviderStatusResponse(BaseModel):
    providers: dict[str, ProviderStatus]


class ConnectivityResponse(BaseModel):
    providers: dict[str, bool]
