"""Tests for the news package: classifier, NewsAPI provider, resolver, filters."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest
import respx

from commodity_tracker.core.config import NewsConfig
from commodity_tracker.core.exceptions import ProviderError
from commodity_tracker.core.models import Country, Impact, NewsCategory
from commodity_tracker.news.classifier import (
    classify,
    determine_category,
    determine_country,
    determine_impact,
)
from commodity_tracker.news.fallback import fallback_articles
from commodity_tracker.news.filters import (
    format_time_ago,
    news_by_category,
    news_by_country,
)
from commodity_tracker.news.newsapi import NewsApiProvider
from commodity_tracker.news.resolver import NewsResolver
from fakes import FIXED_NOW, FakeNewsProvider, make_raw_article

NEWS_URL = "https://news.test/v2/everything"


# --- Classifier ---


class TestClassifier:
    def test_country_canada(self):
        assert determine_country("Canadian steel exports fall") == Country.CA

    def test_country_mexico(self):
        assert determine_country("Mexico signs new accord") == Country.MX

    def test_country_first_rule_wins(self):
        assert determine_country("Canada and Mexico respond") == Country.CA

    def test_country_united_states(self):
        assert determine_country("The United States raises duties") == Country.US

    def test_country_default_us(self):
        assert determine_country("Global markets steady") == Country.US

    def test_category_tariff_before_trade(self):
        assert determine_category("New tariff hits trade partners") == NewsCategory.TARIFF

    def test_category_duty_is_tariff(self):
        assert determine_category("Customs duty increase") == NewsCategory.TARIFF

    def test_category_trade(self):
        assert determine_category("Export volumes rise") == NewsCategory.TRADE

    def test_category_commodity(self):
        assert determine_category("Copper climbs on supply worries") == NewsCategory.COMMODITY

    def test_category_default_policy(self):
        assert determine_category("Minister gives speech") == NewsCategory.POLICY

    def test_impact_high(self):
        assert determine_impact("A major shift in policy") == Impact.HIGH

    def test_impact_low(self):
        assert determine_impact("A slight adjustment") == Impact.LOW

    def test_impact_default_medium(self):
        assert determine_impact("Talks continue") == Impact.MEDIUM

    def test_case_insensitive(self):
        assert determine_country("CANADA") == Country.CA

    def test_classify_uses_title_and_summary(self):
        raw = make_raw_article("u1", "Talks continue", "Canadian officials warn of crisis")
        article = classify(raw)
        assert article.country == Country.CA
        assert article.impact == Impact.HIGH
        assert article.id == "u1"
        assert article.title == "Talks continue"

    def test_classify_is_deterministic(self):
        raw = make_raw_article("u1", "Steel tariff war", "Mexico responds")
        assert classify(raw) == classify(raw)


# --- NewsAPI provider ---


class TestNewsApiProvider:
    @pytest.fixture
    def provider(self):
        return NewsApiProvider("news-key", base_url="https://news.test")

    def test_unconfigured(self):
        assert NewsApiProvider(None).configured is False
        assert NewsApiProvider("demo").configured is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_parses_articles(self, provider):
        route = respx.get(NEWS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "ok",
                    "articles": [
                        {
                            "title": "Tariff talks resume",
                            "description": "Negotiators meet again.",
                            "url": "https://example.com/a",
                            "source": {"name": "Reuters"},
                            "publishedAt": "2025-06-16T10:00:00Z",
                        },
                        {
                            "title": "No description here",
                            "description": None,
                            "content": "x" * 300,
                            "url": "https://example.com/b",
                            "source": {},
                            "publishedAt": "2025-06-15T10:00:00Z",
                        },
                        {"title": None, "url": "https://example.com/c"},
                        {"title": "Missing url"},
                    ],
                },
            )
        )
        articles = await provider.search("tariff", page_size=5)
        assert [a.id for a in articles] == ["https://example.com/a", "https://example.com/b"]
        assert articles[0].source == "Reuters"
        assert articles[0].published_at == datetime(2025, 6, 16, 10, tzinfo=timezone.utc)
        assert articles[1].summary == "x" * 200 + "..."
        assert articles[1].source == "Unknown"

        params = route.calls.last.request.url.params
        assert params["q"] == "tariff"
        assert params["pageSize"] == "5"
        assert params["sortBy"] == "publishedAt"
        assert params["apiKey"] == "news-key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_published_at_always_aware(self, provider):
        respx.get(NEWS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "ok",
                    "articles": [
                        {
                            "title": "No offset",
                            "url": "https://example.com/naive",
                            "publishedAt": "2025-06-16T10:00:00",
                        },
                        {
                            "title": "Numeric stamp",
                            "url": "https://example.com/num",
                            "publishedAt": 1718539200,
                        },
                        {
                            "title": "Other offset",
                            "url": "https://example.com/cet",
                            "publishedAt": "2025-06-16T12:00:00+02:00",
                        },
                    ],
                },
            )
        )
        articles = await provider.search("tariff")
        assert all(a.published_at.tzinfo is not None for a in articles)
        assert articles[0].published_at == datetime(2025, 6, 16, 10, tzinfo=timezone.utc)
        assert articles[2].published_at == articles[0].published_at

    @pytest.mark.asyncio
    @respx.mock
    async def test_offset_less_dates_sort_with_curated_news(self, provider):
        from commodity_tracker.reports.builder import build_report

        respx.get(NEWS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "ok",
                    "articles": [
                        {
                            "title": "Steel tariff raised",
                            "url": "https://example.com/s",
                            "publishedAt": "2025-06-16T11:30:00",
                        },
                    ],
                },
            )
        )
        live = [classify(raw) for raw in await provider.search("tariff")]
        report = build_report([], live + fallback_articles(FIXED_NOW), [], FIXED_NOW)
        assert report.news[0].title == "Steel tariff raised"

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises(self, provider):
        respx.get(NEWS_URL).mock(
            return_value=httpx.Response(
                200, json={"status": "error", "code": "apiKeyInvalid", "message": "bad key"}
            )
        )
        with pytest.raises(ProviderError, match="bad key"):
            await provider.search("tariff")

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_raises(self, provider):
        respx.get(NEWS_URL).mock(return_value=httpx.Response(401, json={}))
        with pytest.raises(ProviderError):
            await provider.search("tariff")

    @pytest.mark.asyncio
    @respx.mock
    async def test_probe(self, provider):
        respx.get(NEWS_URL).mock(
            return_value=httpx.Response(200, json={"status": "ok", "articles": []})
        )
        assert await provider.probe() is True

    @pytest.mark.asyncio
    async def test_probe_unconfigured_makes_no_call(self):
        assert await NewsApiProvider(None).probe() is False


# --- Resolver ---


class TestNewsResolver:
    @pytest.mark.asyncio
    async def test_no_provider_uses_curated(self):
        resolver = NewsResolver(clock=lambda: FIXED_NOW)
        articles = await resolver.resolve_news()
        assert len(articles) == 8
        assert articles[0].id == "news_1"
        assert articles[0].published_at == FIXED_NOW - timedelta(hours=5)

    @pytest.mark.asyncio
    async def test_unconfigured_provider_not_called(self):
        provider = FakeNewsProvider(configured=False)
        resolver = NewsResolver(provider)
        articles = await resolver.resolve_news()
        assert provider.queries == []
        assert len(articles) == 8

    @pytest.mark.asyncio
    async def test_live_merges_and_dedupes(self):
        provider = FakeNewsProvider(
            results={
                "q1": [
                    make_raw_article("a", "Canada steel tariff"),
                    make_raw_article("b", "US trade update"),
                ],
                "q2": [
                    make_raw_article("b", "US trade update"),
                    make_raw_article("c", "Mexico export surge"),
                ],
            }
        )
        resolver = NewsResolver(provider, NewsConfig(queries=("q1", "q2")))
        articles = await resolver.resolve_news()
        assert [a.id for a in articles] == ["a", "b", "c"]
        assert [a.country for a in articles] == [Country.CA, Country.US, Country.MX]
        assert provider.queries == ["q1", "q2"]

    @pytest.mark.asyncio
    async def test_live_filters_unsupported_countries(self):
        provider = FakeNewsProvider(
            results={
                "q": [
                    make_raw_article("a", "Canada steel tariff"),
                    make_raw_article("b", "Mexico export surge"),
                ]
            }
        )
        resolver = NewsResolver(
            provider,
            NewsConfig(queries=("q",)),
            supported_countries={Country.US, Country.CA},
        )
        articles = await resolver.resolve_news()
        assert [a.id for a in articles] == ["a"]

    @pytest.mark.asyncio
    async def test_live_capped(self):
        raws = [make_raw_article(f"id{i}", f"Canada story {i}") for i in range(20)]
        provider = FakeNewsProvider(results={"q": raws})
        resolver = NewsResolver(provider, NewsConfig(queries=("q",), max_articles=3))
        articles = await resolver.resolve_news()
        assert [a.id for a in articles] == ["id0", "id1", "id2"]

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self):
        provider = FakeNewsProvider(error=ProviderError("down"))
        resolver = NewsResolver(provider)
        articles = await resolver.resolve_news()
        assert len(articles) == 8
        assert all(a.id.startswith("news_") for a in articles)

    @pytest.mark.asyncio
    async def test_unexpected_error_falls_back(self):
        provider = FakeNewsProvider(error=RuntimeError("surprise"))
        resolver = NewsResolver(provider)
        assert len(await resolver.resolve_news()) == 8

    @pytest.mark.asyncio
    async def test_empty_live_results_fall_back(self):
        provider = FakeNewsProvider(results={})
        resolver = NewsResolver(provider)
        assert len(await resolver.resolve_news()) == 8

    @pytest.mark.asyncio
    async def test_fetch_live_without_provider_raises(self):
        with pytest.raises(ProviderError):
            await NewsResolver().fetch_live()

    def test_fallback_filters_countries(self):
        resolver = NewsResolver(supported_countries={Country.CA})
        articles = resolver.fallback()
        assert len(articles) == 3
        assert {a.country for a in articles} == {Country.CA}


# --- Curated set and filters ---


class TestFallbackArticles:
    def test_curated_composition(self):
        articles = fallback_articles(FIXED_NOW)
        assert [a.id for a in articles] == [f"news_{i}" for i in range(1, 9)]
        assert sum(1 for a in articles if a.country == Country.US) == 5
        assert sum(1 for a in articles if a.country == Country.CA) == 3

    def test_relative_times(self):
        articles = {a.id: a for a in fallback_articles(FIXED_NOW)}
        assert articles["news_5"].published_at == FIXED_NOW - timedelta(minutes=48)
        assert articles["news_8"].published_at == FIXED_NOW - timedelta(days=5)


class TestFilters:
    def test_by_country(self):
        articles = fallback_articles(FIXED_NOW)
        assert len(news_by_country(articles, Country.CA)) == 3
        assert len(news_by_country(articles, "US")) == 5

    def test_by_category(self):
        articles = fallback_articles(FIXED_NOW)
        tariffs = news_by_category(articles, NewsCategory.TARIFF)
        assert {a.id for a in tariffs} == {"news_1", "news_4", "news_8"}

    @pytest.mark.parametrize(
        "age, expected",
        [
            (timedelta(minutes=48), "48m ago"),
            (timedelta(hours=5), "5h ago"),
            (timedelta(hours=23, minutes=59), "23h ago"),
            (timedelta(days=3), "3d ago"),
            (timedelta(seconds=-30), "0m ago"),
        ],
    )
    def test_format_time_ago(self, age, expected):
        assert format_time_ago(FIXED_NOW - age, now=FIXED_NOW) == expected

    def test_format_time_ago_naive_datetime(self):
        naive = datetime(2025, 6, 16, 11, 0, 0)
        assert format_time_ago(naive, now=FIXED_NOW) == "1h ago"
