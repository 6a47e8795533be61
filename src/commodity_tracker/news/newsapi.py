"""NewsAPI headline search (newsapi.org ``/v2/everything``)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from commodity_tracker.core.config import is_configured_key
from commodity_tracker.core.exceptions import ProviderError
from commodity_tracker.core.http import get_json
from commodity_tracker.core.models import RawArticle

logger = logging.getLogger(__name__)

_BASE_URL = "https://newsapi.org"
_EVERYTHING_PATH = "/v2/everything"

PROVIDER_NAME = "news_api"

_SUMMARY_CHARS = 200


class NewsApiProvider:
    """Searches newsapi.org for recent articles.

    Unlike the quote providers, ``search`` raises ``ProviderError``: the
    news resolver runs several queries as one unit and falls back to the
    curated set if any of them fails.

    Parameters
    ----------
    api_key : str | None
        API key. Missing or ``"demo"`` marks the provider unconfigured.
    timeout : float
        HTTP request timeout in seconds.
    base_url : str
        Override base URL (useful for testing).
    client : httpx.AsyncClient | None
        Shared client; a short-lived client is used per call if None.
    """

    def __init__(
        self,
        api_key: str | None,
        timeout: float = 10.0,
        base_url: str = _BASE_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._base_url = base_url
        self._client = client

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    @property
    def configured(self) -> bool:
        return is_configured_key(self._api_key)

    async def search(
        self,
        query: str,
        page_size: int = 10,
        language: str = "en",
    ) -> list[RawArticle]:
        """Return articles for a query, newest first.

        Raises:
            ProviderError: transport failure, HTTP error, or API error status.
        """
        data = await get_json(
            PROVIDER_NAME,
            f"{self._base_url}{_EVERYTHING_PATH}",
            {
                "q": query,
                "language": language,
                "sortBy": "publishedAt",
                "pageSize": str(page_size),
                "apiKey": self._api_key or "",
            },
            self._timeout,
            self._client,
        )

        if data.get("status") == "error":
            raise ProviderError(
                f"NewsAPI error: {data.get('message') or data.get('code')}",
                context={"provider": PROVIDER_NAME, "query": query, "code": data.get("code")},
            )

        articles: list[RawArticle] = []
        for raw in data.get("articles") or []:
            article = _to_raw_article(raw)
            if article is not None:
                articles.append(article)
        return articles

    async def probe(self) -> bool:
        """One-article query to check reachability and credentials."""
        if not self.configured:
            return False
        try:
            await self.search("test", page_size=1)
        except ProviderError as e:
            logger.error("NewsAPI probe failed: %s", e)
            return False
        return True


def _to_raw_article(raw: dict[str, Any]) -> RawArticle | None:
    """Normalize one NewsAPI article. Entries without a title or url are dropped."""
    title = raw.get("title")
    url = raw.get("url")
    if not title or not url:
        return None

    summary = raw.get("description")
    if not summary:
        content = raw.get("content") or ""
        summary = content[:_SUMMARY_CHARS] + "..." if content else ""

    return RawArticle(
        id=url,
        title=title,
        summary=summary,
        source=(raw.get("source") or {}).get("name") or "Unknown",
        published_at=_parse_date(raw.get("publishedAt")),
        url=url,
    )


def _parse_date(value: object) -> datetime:
    """Parse ``publishedAt`` as an aware datetime. Offset-less stamps are UTC."""
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable publishedAt %r", value)
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    return datetime.now(timezone.utc)
