"""Metals-API price provider (metals-api.com).

Uses the ``/latest`` endpoint, which returns ``rates`` keyed
``USD<SYMBOL>``. Industrial metals come from the LME symbol set and need a
fixed per-symbol multiplier to land in the catalog's canonical unit;
precious metals are already quoted in USD per troy ounce.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from commodity_tracker.core.config import is_configured_key
from commodity_tracker.core.exceptions import ProviderError
from commodity_tracker.core.http import get_json, parse_float
from commodity_tracker.core.models import CommodityId, ProviderQuote

logger = logging.getLogger(__name__)

_BASE_URL = "https://metals-api.com/api"
_LATEST_PATH = "/latest"

PROVIDER_NAME = "metals_api"

METALS_API_SYMBOLS: dict[CommodityId, str] = {
    "gold": "XAU",
    "silver": "XAG",
    "platinum": "XPT",
    "palladium": "XPD",
    "copper": "LME-XCU",
    "aluminum": "LME-ALU",
    "nickel": "LME-NI",
    "zinc": "LME-ZNC",
    "lead": "LME-LEAD",
    "tin": "LME-TIN",
}

# Raw rate -> catalog unit. LME tonnage metals land in USD/ton, copper in USD/lb.
CONVERSION_FACTORS: dict[str, float] = {
    "LME-ALU": 32150.0,
    "LME-XCU": 14.583,
    "LME-NI": 32150.0,
    "LME-ZNC": 32150.0,
    "LME-LEAD": 32150.0,
    "LME-TIN": 32150.0,
    "XAU": 1.0,
    "XAG": 1.0,
    "XPT": 1.0,
    "XPD": 1.0,
}


def convert_rate(symbol: str, raw_rate: float) -> float:
    """Apply the per-symbol multiplier. Unknown symbols pass through unscaled."""
    factor = CONVERSION_FACTORS.get(symbol)
    if factor is None:
        logger.warning("No conversion factor for %s, using raw rate", symbol)
        return raw_rate
    return raw_rate * factor


class MetalsApiProvider:
    """Fetches spot metal prices from metals-api.com.

    Parameters
    ----------
    api_key : str | None
        Access key. Missing or ``"demo"`` marks the provider unconfigured.
    timeout : float
        HTTP request timeout in seconds.
    base_url : str
        Override base URL (useful for testing).
    client : httpx.AsyncClient | None
        Shared client; a short-lived client is used per call if None.
    """

    probe_symbol = "XAU"

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

    def symbol_for(self, item_id: CommodityId) -> str | None:
        return METALS_API_SYMBOLS.get(item_id)

    async def fetch_quote(self, symbol: str) -> ProviderQuote | None:
        try:
            return await self._fetch(symbol)
        except ProviderError as e:
            logger.error("Metals-API failed for %s: %s", symbol, e)
            return None

    async def _fetch(self, symbol: str) -> ProviderQuote:
        data = await get_json(
            PROVIDER_NAME,
            f"{self._base_url}{_LATEST_PATH}",
            {"access_key": self._api_key or "", "symbols": symbol},
            self._timeout,
            self._client,
        )

        if data.get("success") is False:
            err = data.get("error")
            if not isinstance(err, dict):
                err = {"info": str(err) if err else None}
            raise ProviderError(
                f"Metals-API error: {err.get('info') or err.get('type') or 'unknown'}",
                context={"provider": PROVIDER_NAME, "symbol": symbol, "code": err.get("code")},
            )

        rates = data.get("rates") or {}
        if not isinstance(rates, dict):
            raise ProviderError(
                f"Metals-API rates is {type(rates).__name__}, expected object",
                context={"provider": PROVIDER_NAME, "symbol": symbol},
            )
        raw = rates.get(f"USD{symbol}")
        if not raw:
            logger.debug("Metals-API rates available: %s", sorted(rates))
            raise ProviderError(
                f"No rate for {symbol} in Metals-API response",
                context={"provider": PROVIDER_NAME, "symbol": symbol},
            )

        price = convert_rate(symbol, parse_float(PROVIDER_NAME, raw, f"USD{symbol}"))
        return ProviderQuote(
            price=price,
            change_percent=0.0,
            as_of=_as_of(data.get("timestamp")),
            provider=PROVIDER_NAME,
        )


def _as_of(timestamp: object) -> str:
    """ISO time for a payload's epoch timestamp; now if absent or out of range."""
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        try:
            return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            logger.debug("Ignoring out-of-range Metals-API timestamp %r", timestamp)
    return datetime.now(timezone.utc).isoformat()
