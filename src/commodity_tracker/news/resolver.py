"""Trade-news resolution: live search → classification → curated fallback."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable

from commodity_tracker.core.config import NewsConfig
from commodity_tracker.core.exceptions import ProviderError
from commodity_tracker.core.models import Country, NewsArticle, RawArticle
from commodity_tracker.news.classifier import classify
from commodity_tracker.news.fallback import fallback_articles
from commodity_tracker.news.newsapi import NewsApiProvider

logger = logging.getLogger(__name__)

SUPPORTED_COUNTRIES: frozenset[Country] = frozenset(Country)


class NewsResolver:
    """Produces the dashboard's headline list. Never raises.

    Parameters
    ----------
    provider : NewsApiProvider | None
        Live search provider. None or unconfigured means curated-only.
    config : NewsConfig | None
        Queries, page size, and result cap.
    supported_countries : Iterable[Country] | None
        Country filter applied to both live and curated results.
    clock : Callable[[], datetime] | None
        "Now" for curated publication times.
    """

    def __init__(
        self,
        provider: NewsApiProvider | None = None,
        config: NewsConfig | None = None,
        supported_countries: Iterable[Country] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._provider = provider
        self._config = config or NewsConfig()
        self._countries = (
            frozenset(supported_countries)
            if supported_countries is not None
            else SUPPORTED_COUNTRIES
        )
        self._clock = clock

    @property
    def live_enabled(self) -> bool:
        return self._provider is not None and self._provider.configured

    async def resolve_news(self) -> list[NewsArticle]:
        """Live headlines when available, otherwise the curated set."""
        if self.live_enabled:
            try:
                articles = await self.fetch_live()
            except ProviderError as e:
                logger.error("Live news search failed: %s", e)
                articles = []
            except Exception:
                logger.exception("Unexpected error during live news search")
                articles = []

            if articles:
                logger.info("Fetched %d live news articles", len(articles))
                return articles
            logger.warning("No usable live news, using curated headlines")

        return self.fallback()

    async def fetch_live(self) -> list[NewsArticle]:
        """Run every configured query in order, merge, dedupe, classify, filter, cap.

        Raises:
            ProviderError: if any query fails.
        """
        if self._provider is None:
            raise ProviderError("No live news provider", context={"provider": None})
        merged: list[RawArticle] = []
        seen: set[str] = set()
        for query in self._config.queries:
            for raw in await self._provider.search(
                query,
                page_size=self._config.page_size,
                language=self._config.language,
            ):
                if raw.id in seen:
                    continue
                seen.add(raw.id)
                merged.append(raw)

        classified = [classify(raw) for raw in merged]
        supported = [a for a in classified if a.country in self._countries]
        return supported[: self._config.max_articles]

    def fallback(self) -> list[NewsArticle]:
        now = self._clock() if self._clock is not None else None
        return [a for a in fallback_articles(now) if a.country in self._countries]
