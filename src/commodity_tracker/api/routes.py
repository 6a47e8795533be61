"""FastAPI route definitions for the Commodity Tracker API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

import commodity_tracker
from commodity_tracker.api.deps import get_dashboard
from commodity_tracker.api.schemas import (
    CommodityListResponse,
    ConnectivityResponse,
    HealthResponse,
    NewsListResponse,
    ProviderStatusResponse,
    QuoteListResponse,
    TariffListResponse,
)
from commodity_tracker.catalog import (
    COMMODITY_DATABASE,
    TARIFF_DATABASE,
    commodities_by_category,
    get_commodity,
    get_tariff,
    search_commodities,
    search_tariffs,
    tariff_categories,
    tariffs_by_category,
    tariffs_by_country_rate,
)
from commodity_tracker.core.models import (
    CommodityCategory,
    Country,
    NewsCategory,
    Provenance,
    TariffRecord,
    TrackedItem,
)
from commodity_tracker.dashboard import Dashboard
from commodity_tracker.news.filters import news_by_category, news_by_country
from commodity_tracker.reports.builder import Report

router = APIRouter()


def _split_ids(ids: str | None) -> list[str] | None:
    if ids is None:
        return None
    return [i.strip() for i in ids.split(",") if i.strip()]


# -- Health --


@router.get("/health", response_model=HealthResponse)
async def health_check(dashboard: Dashboard = Depends(get_dashboard)):
    """System health and basic statistics."""
    status = dashboard.check_provider_configuration()
    return HealthResponse(
        status="ok",
        version=commodity_tracker.__version__,
        tracked_items=len(dashboard.tracker),
        providers_configured=sum(1 for s in status.values() if s.configured),
    )


# -- Catalog --


@router.get("/commodities", response_model=CommodityListResponse)
async def list_commodities(
    category: CommodityCategory | None = Query(None),
    q: str | None = Query(None, min_length=1, description="Search text"),
):
    """Reference catalog, optionally filtered by category or search text."""
    items = list(COMMODITY_DATABASE)
    if q is not None:
        items = search_commodities(q)
    if category is not None:
        items = [c for c in items if c in commodities_by_category(category)]
    return CommodityListResponse(total=len(items), items=items)


@router.get("/commodities/{commodity_id}", response_model=TrackedItem)
async def get_commodity_detail(commodity_id: str):
    item = get_commodity(commodity_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Unknown commodity: {commodity_id}")
    return item


@router.get("/tariffs", response_model=TariffListResponse)
async def list_tariffs(
    q: str | None = Query(None, min_length=1),
    category: str | None = Query(None),
    country: str | None = Query(None, description="Jurisdiction code, e.g. US"),
    min_rate: float = Query(0.0, ge=0.0),
):
    """Tariff schedule with optional search, category, and jurisdiction filters."""
    records: list[TariffRecord] = list(TARIFF_DATABASE.values())
    if q is not None:
        records = search_tariffs(q)
    if category is not None:
        allowed = {t.hs_code for t in tariffs_by_category(category)}
        records = [t for t in records if t.hs_code in allowed]
    if country is not None:
        allowed = {t.hs_code for t in tariffs_by_country_rate(country.upper(), min_rate)}
        records = [t for t in records if t.hs_code in allowed]
    return TariffListResponse(total=len(records), items=records)


@router.get("/tariffs/categories", response_model=list[str])
async def list_tariff_categories():
    return tariff_categories()


@router.get("/tariffs/{hs_code}", response_model=TariffRecord)
async def get_tariff_detail(hs_code: str):
    record = get_tariff(hs_code)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Unknown HS code: {hs_code}")
    return record


# -- Prices --


@router.get("/prices", response_model=QuoteListResponse)
async def list_prices(
    ids: str | None = Query(None, description="Comma-separated commodity ids"),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Run one resolution cycle for the requested (or default) commodities."""
    quotes = await dashboard.resolve_prices(_split_ids(ids))
    api_count = sum(1 for q in quotes if q.provenance == Provenance.API)
    return QuoteListResponse(
        total=len(quotes),
        api_count=api_count,
        simulated_count=len(quotes) - api_count,
        items=quotes,
    )


# -- News --


@router.get("/news", response_model=NewsListResponse)
async def list_news(
    country: Country | None = Query(None),
    category: NewsCategory | None = Query(None),
    dashboard: Dashboard = Depends(get_dashboard),
):
    articles = await dashboard.resolve_news()
    if country is not None:
        articles = news_by_country(articles, country)
    if category is not None:
        articles = news_by_category(articles, category)
    return NewsListResponse(total=len(articles), items=articles)


# -- Providers --


@router.get("/providers/status", response_model=ProviderStatusResponse)
async def provider_status(dashboard: Dashboard = Depends(get_dashboard)):
    return ProviderStatusResponse(providers=dashboard.check_provider_configuration())


@router.get("/providers/test", response_model=ConnectivityResponse)
async def provider_connectivity(dashboard: Dashboard = Depends(get_dashboard)):
    """Probe each upstream provider once. For display only."""
    return ConnectivityResponse(providers=await dashboard.test_provider_connectivity())


# -- Report --


@router.get("/report", response_model=Report)
async def report(
    ids: str | None = Query(None, description="Comma-separated commodity ids"),
    dashboard: Dashboard = Depends(get_dashboard),
):
    return await dashboard.build_report(_split_ids(ids))
