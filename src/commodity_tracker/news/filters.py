"""Presentation helpers over resolved headlines."""

from __future__ import annotations

from datetime import datetime, timezone

from commodity_tracker.core.models import Country, NewsArticle, NewsCategory


def news_by_country(articles: list[NewsArticle], country: Country | str) -> list[NewsArticle]:
    return [a for a in articles if a.country == country]


def news_by_category(
    articles: list[NewsArticle], category: NewsCategory | str
) -> list[NewsArticle]:
    return [a for a in articles if a.category == category]


def format_time_ago(published_at: datetime, now: datetime | None = None) -> str:
    """Compact age string: ``"45m ago"``, ``"3h ago"``, ``"2d ago"``."""
    now = now or datetime.now(timezone.utc)
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    minutes = max(0, int((now - published_at).total_seconds() // 60))
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 1440:
        return f"{minutes // 60}h ago"
    return f"{minutes // 1440}d ago"
