"""Shared async HTTP helpers for upstream providers."""

from __future__ import annotations

from typing import Any

import httpx

from commodity_tracker.core.exceptions import ProviderError

_USER_AGENT = "Mozilla/5.0 (compatible; commodity-tracker/0.1)"


async def get_json(
    provider: str,
    url: str,
    params: dict[str, str],
    timeout: float,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """GET a JSON object, raising ProviderError on any transport or HTTP failure.

    Uses the shared ``client`` when given, otherwise a short-lived one.
    """
    symbol = params.get("symbols") or params.get("symbol") or params.get("q")
    try:
        if client is not None:
            resp = await client.get(url, params=params, timeout=timeout)
        else:
            async with httpx.AsyncClient(
                timeout=timeout, headers={"User-Agent": _USER_AGENT}
            ) as c:
                resp = await c.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as e:
        raise ProviderError(
            f"{provider} HTTP {e.response.status_code}",
            context={
                "provider": provider,
                "symbol": symbol,
                "status_code": e.response.status_code,
                "response_body": e.response.text[:200],
            },
        ) from e
    except httpx.RequestError as e:
        raise ProviderError(
            f"{provider} request error: {e}",
            context={"provider": provider, "symbol": symbol},
        ) from e
    except ValueError as e:
        raise ProviderError(
            f"{provider} returned invalid JSON",
            context={"provider": provider, "symbol": symbol},
        ) from e

    if not isinstance(data, dict):
        raise ProviderError(
            f"{provider} returned {type(data).__name__}, expected object",
            context={"provider": provider, "symbol": symbol},
        )
    return data


def parse_float(provider: str, value: Any, field: str) -> float:
    """Coerce a payload field to float, raising ProviderError if impossible."""
    if value is None:
        raise ProviderError(
            f"{provider} response missing {field!r}",
            context={"provider": provider, "field": field},
        )
    try:
        return float(str(value).strip().rstrip("%"))
    except ValueError as e:
        raise ProviderError(
            f"{provider} field {field!r} is not numeric: {value!r}",
            context={"provider": provider, "field": field},
        ) from e
