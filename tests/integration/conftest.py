"""Integration test fixtures: real providers over mocked HTTP."""

from __future__ import annotations

import random

import httpx
import pytest
import respx

from commodity_tracker.core.config import (
    NewsConfig,
    ProvidersConfig,
    TrackerConfig,
)
from commodity_tracker.dashboard import Dashboard

METALS_URL = "https://metals-api.com/api/latest"
ALPHA_URL = "https://www.alphavantage.co/query"
NEWS_URL = "https://newsapi.org/v2/everything"


def _metals_response(request: httpx.Request) -> httpx.Response:
    symbol = request.url.params["symbols"]
    rates = {"USDXAU": 2400.0, "USDLME-XCU": 0.33, "USDLME-ALU": 0.08}
    if f"USD{symbol}" not in rates:
        return httpx.Response(200, json={"success": True, "rates": {}})
    return httpx.Response(
        200,
        json={"success": True, "timestamp": 1750075200, "rates": {f"USD{symbol}": rates[f"USD{symbol}"]}},
    )


def _alpha_response(request: httpx.Request) -> httpx.Response:
    symbol = request.url.params["symbol"]
    if symbol == "WTI":
        return httpx.Response(
            200,
            json={"Global Quote": {"05. price": "71.20", "10. change percent": "0.5%"}},
        )
    return httpx.Response(200, json={"Note": "API call frequency exceeded"})


@pytest.fixture
def live_config() -> TrackerConfig:
    return TrackerConfig(
        providers=ProvidersConfig(
            alpha_vantage_key="av",
            metals_api_key="metals",
            news_api_key="news",
            request_timeout=2.0,
            alpha_vantage_rate_limit=100,
        ),
        news=NewsConfig(queries=("tariff", "trade"), max_articles=10),
    )


@pytest.fixture
def mocked_upstreams():
    with respx.mock(assert_all_called=False) as router:
        router.get(METALS_URL).mock(side_effect=_metals_response)
        router.get(ALPHA_URL).mock(side_effect=_alpha_response)
        router.get(NEWS_URL, name="news").mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "ok",
                    "articles": [
                        {
                            "title": "Canada weighs major steel tariff response",
                            "description": "Ottawa considers countermeasures.",
                            "url": "https://example.com/ca-steel",
                            "source": {"name": "Globe"},
                            "publishedAt": "2025-06-16T08:00:00Z",
                        },
                        {
                            "title": "EU and Japan sign accord",
                            "description": "Brussels and Tokyo agree terms.",
                            "url": "https://example.com/eu-japan",
                            "source": {"name": "FT"},
                            "publishedAt": "2025-06-16T07:00:00Z",
                        },
                    ],
                },
            )
        )
        yield router


@pytest.fixture
async def live_dashboard(live_config, mocked_upstreams):
    async with Dashboard(live_config, rng=random.Random(1)) as dashboard:
        yield dashboard
