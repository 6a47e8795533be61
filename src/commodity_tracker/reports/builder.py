"""Dashboard report composition.

Builds the structured content of the downloadable report: a header, an
executive summary, commodity, tariff and news sections, and a short market
analysis. Turning a ``Report`` into a PDF (or any other document format)
is the presentation layer's job.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

from commodity_tracker.catalog.tariffs import country_name, format_tariff_rate
from commodity_tracker.core.exceptions import ReportError
from commodity_tracker.core.models import (
    Impact,
    NewsArticle,
    ResolvedQuote,
    TariffRecord,
    Trend,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

REPORT_TITLE = "CommodityTracker Pro Report"
REPORT_FOOTER = (
    "Generated by CommodityTracker Pro - Professional Intelligence for "
    "Canadian PVF Manufacturers"
)
MAX_NEWS_ITEMS = 5


class CommodityLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: str
    unit: str
    change: str
    trend: str
    exchange: str
    provenance: str


class TariffLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    hs_code: str
    description: str
    category: str
    rates: dict[str, str]
    notes: str = ""


class NewsLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    source: str
    country: str
    impact: str
    summary: str
    published_at: datetime


class Report(BaseModel):
    """Structured report content, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    title: str
    generated_at: datetime
    file_name: str
    executive_summary: str
    commodities: list[CommodityLine]
    tariffs: list[TariffLine]
    news: list[NewsLine]
    market_analysis: str
    footer: str


def format_price(price: float, unit: str) -> str:
    """Currency-prefixed price; 4 decimals for per-pound quotes."""
    if "USD/lb" in unit:
        return f"${price:.4f}"
    if "CNY" in unit:
        return f"¥{price:.2f}"
    return f"${price:.2f}"


def format_change(change: float) -> str:
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f}%"


def report_file_name(generated_at: datetime) -> str:
    return f"CommodityTracker_Report_{generated_at.date().isoformat()}.pdf"


def build_report(
    quotes: Sequence[ResolvedQuote],
    news: Sequence[NewsArticle],
    tariffs: Sequence[TariffRecord],
    generated_at: datetime | None = None,
) -> Report:
    """Compose the full report.

    Raises:
        ReportError: if any section cannot be built.
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    commodity_lines = _section("commodities", lambda: [_commodity_line(q) for q in quotes])
    tariff_lines = _section("tariffs", lambda: [_tariff_line(t) for t in tariffs])
    news_lines = _section("news", lambda: _news_lines(news))

    summary = (
        f"This report provides a comprehensive overview of {len(quotes)} tracked "
        f"commodities, {len(tariffs)} active tariff schedules, and {len(news)} recent "
        "trade news developments. The data reflects current market conditions and "
        "trade policy impacts on global commodity markets."
    )

    report = Report(
        title=REPORT_TITLE,
        generated_at=generated_at,
        file_name=report_file_name(generated_at),
        executive_summary=summary,
        commodities=commodity_lines,
        tariffs=tariff_lines,
        news=news_lines,
        market_analysis=market_analysis(quotes, news),
        footer=REPORT_FOOTER,
    )
    logger.info(
        "Built report %s (%d commodities, %d tariffs, %d news)",
        report.file_name,
        len(commodity_lines),
        len(tariff_lines),
        len(news_lines),
    )
    return report


def market_analysis(quotes: Sequence[ResolvedQuote], news: Sequence[NewsArticle]) -> str:
    up = sum(1 for q in quotes if q.trend == Trend.UP)
    down = sum(1 for q in quotes if q.trend == Trend.DOWN)
    high_impact = sum(1 for n in news if n.impact == Impact.HIGH)
    return (
        f"Market Overview: Of the {len(quotes)} tracked commodities, {up} are showing "
        f"upward trends while {down} are declining. Current trade tensions, as reflected "
        f"in {high_impact} high-impact news items, continue to influence commodity "
        "markets. The ongoing US-Canada trade negotiations and global tariff policies "
        "are creating volatility across industrial metals and energy sectors."
    )


def _section(name: str, build: Callable[[], T]) -> T:
    try:
        return build()
    except Exception as e:
        raise ReportError(
            f"Failed to build report section {name!r}: {e}",
            context={"section": name},
        ) from e


def _commodity_line(quote: ResolvedQuote) -> CommodityLine:
    return CommodityLine(
        name=quote.name,
        price=format_price(quote.price, quote.unit),
        unit=quote.unit,
        change=format_change(quote.change_percent),
        trend="Upward" if quote.trend == Trend.UP else "Downward",
        exchange=quote.exchange,
        provenance=quote.provenance.value,
    )


def _tariff_line(record: TariffRecord) -> TariffLine:
    return TariffLine(
        hs_code=record.hs_code,
        description=record.description,
        category=record.category,
        rates={
            country_name(code): format_tariff_rate(entry.rate)
            for code, entry in record.current_rates.items()
        },
        notes=record.notes,
    )


def _news_lines(news: Sequence[NewsArticle]) -> list[NewsLine]:
    recent = sorted(news, key=lambda n: n.published_at, reverse=True)[:MAX_NEWS_ITEMS]
    return [
        NewsLine(
            title=n.title,
            source=n.source,
            country=country_name(n.country.value),
            impact=n.impact.value,
            summary=n.summary,
            published_at=n.published_at,
        )
        for n in recent
    ]
