"""Dashboard service: the public entry point for prices, news, and status.

Owns the session's ``PriceHistoryTracker`` and the shared HTTP client used
by every provider. Use via ``async with Dashboard(config) as dashboard:``.
"""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime
from typing import Sequence

import httpx

from commodity_tracker.catalog.tariffs import TARIFF_DATABASE
from commodity_tracker.core.config import TrackerConfig, describe_key
from commodity_tracker.core.models import (
    CommodityId,
    NewsArticle,
    ProviderStatus,
    ResolvedQuote,
)
from commodity_tracker.news.newsapi import NewsApiProvider
from commodity_tracker.news.resolver import NewsResolver
from commodity_tracker.prices.alphavantage import AlphaVantageProvider
from commodity_tracker.prices.history import PriceHistoryTracker
from commodity_tracker.prices.metals import MetalsApiProvider
from commodity_tracker.prices.provider import QuoteProvider
from commodity_tracker.prices.resolver import PriceResolver
from commodity_tracker.reports.builder import Report, build_report

logger = logging.getLogger(__name__)


class Dashboard:
    """Composes providers, resolvers, and the price history for one session.

    Parameters
    ----------
    config : TrackerConfig
        Loaded configuration.
    price_providers : Sequence[QuoteProvider] | None
        Override the quote adapters (tests). Built from config if None.
    news_provider : NewsApiProvider | None
        Override the news adapter (tests). Built from config if None.
    tracker : PriceHistoryTracker | None
        Price history to use. A fresh one is created if None.
    rng : random.Random | None
        Random source for simulated prices.
    """

    def __init__(
        self,
        config: TrackerConfig,
        price_providers: Sequence[QuoteProvider] | None = None,
        news_provider: NewsApiProvider | None = None,
        tracker: PriceHistoryTracker | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        pc = config.providers
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(pc.request_timeout),
            headers={"User-Agent": "commodity-tracker/0.1"},
        )
        if price_providers is None:
            price_providers = [
                MetalsApiProvider(
                    pc.metals_api_key, timeout=pc.request_timeout, client=self._client
                ),
                AlphaVantageProvider(
                    pc.alpha_vantage_key,
                    rate_limit=pc.alpha_vantage_rate_limit,
                    timeout=pc.request_timeout,
                    client=self._client,
                ),
            ]
        if news_provider is None:
            news_provider = NewsApiProvider(
                pc.news_api_key, timeout=pc.request_timeout, client=self._client
            )

        self._price_providers = list(price_providers)
        self._news_provider = news_provider
        self._tracker = tracker or PriceHistoryTracker()
        self._prices = PriceResolver(
            self._price_providers,
            self._tracker,
            provider_timeout=pc.request_timeout,
            rng=rng,
        )
        self._news = NewsResolver(news_provider, config.news)

    async def __aenter__(self) -> Dashboard:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the shared HTTP client. Called automatically by __aexit__."""
        await self._client.aclose()

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def tracker(self) -> PriceHistoryTracker:
        return self._tracker

    # --- Prices & News ---

    async def resolve_prices(
        self, item_ids: Sequence[CommodityId] | None = None
    ) -> list[ResolvedQuote]:
        """Resolve tracked ids (default: the configured dashboard set)."""
        if item_ids is None:
            item_ids = self._config.dashboard.default_commodities
        return await self._prices.resolve_prices(item_ids)

    async def resolve_news(self) -> list[NewsArticle]:
        return await self._news.resolve_news()

    def untrack(self, item_id: CommodityId) -> None:
        """Drop an item's history when it leaves the tracked set."""
        self._tracker.remove(item_id)

    # --- Provider Status ---

    def check_provider_configuration(self) -> dict[str, ProviderStatus]:
        """Configured/unconfigured state per provider. Never raises."""
        pc = self._config.providers
        keys = {
            "alpha_vantage": pc.alpha_vantage_key,
            "metals_api": pc.metals_api_key,
            "news_api": pc.news_api_key,
        }
        status: dict[str, ProviderStatus] = {}
        for provider in [*self._price_providers, self._news_provider]:
            if provider.name in keys:
                key_text = describe_key(keys[provider.name])
            else:
                key_text = "API key configured" if provider.configured else "No API key set"
            status[provider.name] = ProviderStatus(
                configured=provider.configured, key=key_text
            )
        logger.debug("Provider configuration: %s", status)
        return status

    async def test_provider_connectivity(self) -> dict[str, bool]:
        """Probe each provider once. Unconfigured providers report False."""
        names = [p.name for p in self._price_providers] + [self._news_provider.name]
        probes = [self._probe_quote(p) for p in self._price_providers]
        probes.append(self._news_provider.probe())
        outcomes = await asyncio.gather(*probes, return_exceptions=True)

        results: dict[str, bool] = {}
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Connectivity probe for %s raised: %s", name, outcome)
                results[name] = False
            else:
                results[name] = bool(outcome)
        logger.info("Provider connectivity: %s", results)
        return results

    async def _probe_quote(self, provider: QuoteProvider) -> bool:
        if not provider.configured:
            return False
        quote = await asyncio.wait_for(
            provider.fetch_quote(provider.probe_symbol),
            self._config.providers.request_timeout,
        )
        return quote is not None

    # --- Report ---

    async def build_report(
        self,
        item_ids: Sequence[CommodityId] | None = None,
        generated_at: datetime | None = None,
    ) -> Report:
        """Resolve prices and news together, then compose the report."""
        quotes, news = await asyncio.gather(
            self.resolve_prices(item_ids), self.resolve_news()
        )
        return build_report(
            quotes, news, list(TARIFF_DATABASE.values()), generated_at=generated_at
        )
