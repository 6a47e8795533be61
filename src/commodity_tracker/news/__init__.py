"""Trade-news search, keyword classification, and curated fallback."""

from commodity_tracker.news.classifier import (
    classify,
    determine_category,
    determine_country,
    determine_impact,
)
from commodity_tracker.news.fallback import fallback_articles
from commodity_tracker.news.filters import format_time_ago, news_by_category, news_by_country
from commodity_tracker.news.newsapi import NewsApiProvider
from commodity_tracker.news.resolver import SUPPORTED_COUNTRIES, NewsResolver

__all__ = [
    "NewsApiProvider",
    "NewsResolver",
    "SUPPORTED_COUNTRIES",
    "classify",
    "determine_category",
    "determine_country",
    "determine_impact",
    "fallback_articles",
    "format_time_ago",
    "news_by_category",
    "news_by_country",
]
