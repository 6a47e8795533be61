"""Tests for the FastAPI REST API module."""

from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from commodity_tracker.api.app import create_app
from commodity_tracker.core.config import APIConfig, TrackerConfig
from commodity_tracker.core.exceptions import ReportError
from commodity_tracker.dashboard import Dashboard
from fakes import FakeNewsProvider, FakeQuoteProvider


# -- Fixtures --


def _make_dashboard(config, price_providers=None):
    return Dashboard(
        config,
        price_providers=price_providers or [],
        news_provider=FakeNewsProvider(configured=False),
        rng=random.Random(0),
    )


@pytest.fixture
def config():
    return TrackerConfig()


@pytest.fixture
def app(config):
    return create_app(dashboard=_make_dashboard(config))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


# -- Health --


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["tracked_items"] == 0
        assert data["providers_configured"] == 0

    def test_tracked_items_after_prices(self, client):
        client.get("/api/prices?ids=gold,silver")
        assert client.get("/api/health").json()["tracked_items"] == 2


# -- Catalog --


class TestCommodities:
    def test_list_all(self, client):
        data = client.get("/api/commodities").json()
        assert data["total"] == 17

    def test_filter_category(self, client):
        data = client.get("/api/commodities?category=energy").json()
        assert {i["id"] for i in data["items"]} == {"crude_oil", "natural_gas", "heating_oil"}

    def test_search(self, client):
        data = client.get("/api/commodities?q=gold").json()
        assert [i["id"] for i in data["items"]] == ["gold"]

    def test_invalid_category(self, client):
        assert client.get("/api/commodities?category=gems").status_code == 422

    def test_detail(self, client):
        data = client.get("/api/commodities/copper").json()
        assert data["unit"] == "USD/lb"

    def test_detail_404(self, client):
        assert client.get("/api/commodities/unobtainium").status_code == 404


class TestTariffs:
    def test_list_all(self, client):
        assert client.get("/api/tariffs").json()["total"] == 7

    def test_categories_route_not_shadowed(self, client):
        resp = client.get("/api/tariffs/categories")
        assert resp.status_code == 200
        assert "PVC Pipes" in resp.json()

    def test_detail(self, client):
        data = client.get("/api/tariffs/3917.23.00").json()
        assert data["category"] == "PVC Pipes"
        assert data["current_rates"]["US"]["rate"] == 5.3

    def test_detail_404(self, client):
        assert client.get("/api/tariffs/0000.00").status_code == 404

    def test_country_and_min_rate(self, client):
        data = client.get("/api/tariffs?country=us&min_rate=5").json()
        assert {i["hs_code"] for i in data["items"]} == {
            "7326.90.8688",
            "3926.90.99.90",
            "3917.23.00",
        }

    def test_search_and_category(self, client):
        data = client.get("/api/tariffs?q=copper&category=Copper Products").json()
        assert data["total"] == 2


# -- Prices --


class TestPrices:
    def test_default_set(self, client):
        data = client.get("/api/prices").json()
        assert data["total"] == 4
        assert data["simulated_count"] == 4
        assert data["api_count"] == 0
        assert [i["item_id"] for i in data["items"]] == ["steel", "copper", "aluminum", "pvc"]

    def test_ids_with_unknown(self, client):
        data = client.get("/api/prices?ids=gold, unobtainium ,wheat").json()
        assert [i["item_id"] for i in data["items"]] == ["gold", "wheat"]

    def test_api_provenance(self, config):
        metals = FakeQuoteProvider("metals_api", {"gold": "XAU"}, {"XAU": 2310.0})
        app = create_app(dashboard=_make_dashboard(config, [metals]))
        with TestClient(app) as c:
            data = c.get("/api/prices?ids=gold").json()
        assert data["api_count"] == 1
        assert data["items"][0]["provider"] == "metals_api"
        assert data["items"][0]["price"] == 2310.0


# -- News --


class TestNews:
    def test_fallback(self, client):
        assert client.get("/api/news").json()["total"] == 8

    def test_filter_country(self, client):
        data = client.get("/api/news?country=CA").json()
        assert data["total"] == 3
        assert {i["country"] for i in data["items"]} == {"CA"}

    def test_filter_category(self, client):
        data = client.get("/api/news?category=tariff").json()
        assert data["total"] == 3


# -- Providers --


class TestProviders:
    def test_status(self, client):
        data = client.get("/api/providers/status").json()["providers"]
        assert data["news_api"] == {"configured": False, "key": "No API key set"}

    def test_connectivity(self, client):
        data = client.get("/api/providers/test").json()["providers"]
        assert data == {"news_api": False}


# -- Report --


class TestReport:
    def test_report(self, client):
        data = client.get("/api/report?ids=gold,steel").json()
        assert data["title"] == "CommodityTracker Pro Report"
        assert [c["name"] for c in data["commodities"]] == ["Gold", "Steel"]
        assert len(data["tariffs"]) == 7
        assert len(data["news"]) == 5

    def test_report_error_envelope(self, client, monkeypatch):
        async def broken(*args, **kwargs):
            raise ReportError("section failed", context={"section": "news"})

        dashboard = client.app.state.app_state.dashboard
        monkeypatch.setattr(dashboard, "build_report", broken)
        resp = client.get("/api/report")
        assert resp.status_code == 500
        assert resp.json() == {"error": "ReportError", "detail": "section failed"}


# -- Auth --


class TestApiKey:
    @pytest.fixture
    def secured(self):
        config = TrackerConfig(api=APIConfig(api_key="s3cret"))
        with TestClient(create_app(dashboard=_make_dashboard(config))) as c:
            yield c

    def test_health_exempt(self, secured):
        assert secured.get("/api/health").status_code == 200

    def test_missing_key_rejected(self, secured):
        resp = secured.get("/api/commodities")
        assert resp.status_code == 401
        assert resp.json()["error"] == "Unauthorized"

    def test_valid_key(self, secured):
        resp = secured.get("/api/commodities", headers={"X-API-Key": "s3cret"})
        assert resp.status_code == 200

    def test_key_from_environment_enforced(self, monkeypatch):
        # create_app() with no arguments resolves config at startup, as under `serve`
        monkeypatch.setenv("COMMODITY_TRACKER_API__API_KEY", "from-env")
        with TestClient(create_app()) as c:
            assert c.get("/api/commodities").status_code == 401
            resp = c.get("/api/commodities", headers={"X-API-Key": "from-env"})
            assert resp.status_code == 200
            assert c.get("/api/health").status_code == 200

    def test_no_key_configured_allows_all(self):
        with TestClient(create_app()) as c:
            assert c.get("/api/commodities").status_code == 200

    def test_unauthorized_envelope(self, secured):
        resp = secured.get("/api/commodities", headers={"X-API-Key": "wrong"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized", "detail": "Invalid or missing API key"}
