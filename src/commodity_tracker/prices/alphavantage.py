"""Alpha Vantage price provider (GLOBAL_QUOTE endpoint).

Covers the energy and agricultural commodities. The free tier allows a
handful of calls per minute and answers over-quota requests with HTTP 200
and a ``Note`` (or ``Information``) field instead of data, so requests
are throttled client-side and that notice is treated as a failure.
"""

from __future__ import annotations

import logging

import httpx
from aiolimiter import AsyncLimiter

from commodity_tracker.core.config import is_configured_key
from commodity_tracker.core.exceptions import ProviderError, RateLimitError
from commodity_tracker.core.http import get_json, parse_float
from commodity_tracker.core.models import CommodityId, ProviderQuote

logger = logging.getLogger(__name__)

_BASE_URL = "https://www.alphavantage.co"
_QUERY_PATH = "/query"

PROVIDER_NAME = "alpha_vantage"

ALPHAVANTAGE_SYMBOLS: dict[CommodityId, str] = {
    "crude_oil": "WTI",
    "natural_gas": "NATURAL_GAS",
    "heating_oil": "HEATING_OIL",
    "wheat": "WHEAT",
    "corn": "CORN",
    "soybeans": "SOYBEANS",
}


class AlphaVantageProvider:
    """Fetches quotes from Alpha Vantage.

    Parameters
    ----------
    api_key : str | None
        API key. Missing or ``"demo"`` marks the provider unconfigured.
    rate_limit : int
        Maximum requests per minute. Default: 5 (free tier).
    timeout : float
        HTTP request timeout in seconds.
    base_url : str
        Override base URL (useful for testing).
    client : httpx.AsyncClient | None
        Shared client; a short-lived client is used per call if None.
    """

    probe_symbol = "AAPL"

    def __init__(
        self,
        api_key: str | None,
        rate_limit: int = 5,
        timeout: float = 10.0,
        base_url: str = _BASE_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._limiter = AsyncLimiter(max_rate=rate_limit, time_period=60.0)
        self._timeout = timeout
        self._base_url = base_url
        self._client = client

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    @property
    def configured(self) -> bool:
        return is_configured_key(self._api_key)

    def symbol_for(self, item_id: CommodityId) -> str | None:
        return ALPHAVANTAGE_SYMBOLS.get(item_id)

    async def fetch_quote(self, symbol: str) -> ProviderQuote | None:
        try:
            return await self._fetch(symbol)
        except RateLimitError as e:
            logger.warning("Alpha Vantage rate limit for %s: %s", symbol, e.context.get("note"))
            return None
        except ProviderError as e:
            logger.error("Alpha Vantage failed for %s: %s", symbol, e)
            return None

    async def _fetch(self, symbol: str) -> ProviderQuote:
        await self._limiter.acquire()
        data = await get_json(
            PROVIDER_NAME,
            f"{self._base_url}{_QUERY_PATH}",
            {
                "function": "GLOBAL_QUOTE",
                "symbol": symbol,
                "apikey": self._api_key or "",
            },
            self._timeout,
            self._client,
        )

        if "Error Message" in data:
            raise ProviderError(
                f"Alpha Vantage error: {data['Error Message']}",
                context={"provider": PROVIDER_NAME, "symbol": symbol},
            )

        note = data.get("Note") or data.get("Information")
        if note:
            raise RateLimitError(
                "Alpha Vantage rate limit notice",
                context={"provider": PROVIDER_NAME, "symbol": symbol, "note": note},
            )

        quote = data.get("Global Quote")
        if not quote:
            logger.debug("Alpha Vantage response fields: %s", sorted(data))
            raise ProviderError(
                f"No quote data for {symbol}",
                context={"provider": PROVIDER_NAME, "symbol": symbol},
            )
        if not isinstance(quote, dict):
            raise ProviderError(
                f"Alpha Vantage quote is {type(quote).__name__}, expected object",
                context={"provider": PROVIDER_NAME, "symbol": symbol},
            )

        price = parse_float(PROVIDER_NAME, quote.get("05. price"), "05. price")
        change_raw = quote.get("10. change percent")
        change = (
            parse_float(PROVIDER_NAME, change_raw, "10. change percent")
            if change_raw is not None
            else None
        )
        trading_day = quote.get("07. latest trading day")

        return ProviderQuote(
            price=price,
            change_percent=change,
            as_of=str(trading_day) if trading_day is not None else None,
            provider=PROVIDER_NAME,
        )
