"""Shared pytest fixtures for commodity-tracker."""

import os
import random
from datetime import datetime

import pytest

from commodity_tracker.core.config import (
    NewsConfig,
    ProvidersConfig,
    TrackerConfig,
)
from commodity_tracker.prices.history import PriceHistoryTracker
from fakes import FIXED_NOW


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def tracker() -> PriceHistoryTracker:
    return PriceHistoryTracker(clock=lambda: FIXED_NOW)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def unconfigured_config() -> TrackerConfig:
    return TrackerConfig()


@pytest.fixture
def configured_config() -> TrackerConfig:
    return TrackerConfig(
        providers=ProvidersConfig(
            alpha_vantage_key="av-test-key",
            metals_api_key="metals-test-key",
            news_api_key="news-test-key",
            request_timeout=0.5,
            alpha_vantage_rate_limit=100,
        ),
        news=NewsConfig(queries=("tariff",), max_articles=5),
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep host credentials and config files out of every test."""
    for var in ("ALPHAVANTAGE_API_KEY", "METALS_API_KEY", "NEWS_API_KEY"):
        monkeypatch.delenv(var, raising=False)

    for var in list(os.environ):
        if var.startswith("COMMODITY_TRACKER_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
