"""Keyword classification of trade headlines.

Each field is decided by an ordered rule list: the first rule with any
keyword contained in the lower-cased text wins, otherwise the field's
default applies. Classification is a pure function of the text.
"""

from __future__ import annotations

from commodity_tracker.core.models import (
    Country,
    Impact,
    NewsArticle,
    NewsCategory,
    RawArticle,
)

COUNTRY_RULES: tuple[tuple[Country, tuple[str, ...]], ...] = (
    (Country.CA, ("canada", "canadian")),
    (Country.MX, ("mexico", "mexican")),
    (Country.US, ("united states", "us ", "america")),
)

CATEGORY_RULES: tuple[tuple[NewsCategory, tuple[str, ...]], ...] = (
    (NewsCategory.TARIFF, ("tariff", "duty")),
    (NewsCategory.TRADE, ("trade", "import", "export")),
    (
        NewsCategory.COMMODITY,
        ("commodity", "commodities", "steel", "copper", "aluminum", "oil", "metal"),
    ),
)

IMPACT_RULES: tuple[tuple[Impact, tuple[str, ...]], ...] = (
    (Impact.HIGH, ("crisis", "war", "major", "significant", "massive", "critical")),
    (Impact.LOW, ("minor", "small", "slight", "limited")),
)

DEFAULT_COUNTRY = Country.US
DEFAULT_CATEGORY = NewsCategory.POLICY
DEFAULT_IMPACT = Impact.MEDIUM


def _first_match(text: str, rules, default):
    lowered = text.lower()
    for value, keywords in rules:
        if any(k in lowered for k in keywords):
            return value
    return default


def determine_country(text: str) -> Country:
    return _first_match(text, COUNTRY_RULES, DEFAULT_COUNTRY)


def determine_category(text: str) -> NewsCategory:
    return _first_match(text, CATEGORY_RULES, DEFAULT_CATEGORY)


def determine_impact(text: str) -> Impact:
    return _first_match(text, IMPACT_RULES, DEFAULT_IMPACT)


def classify(raw: RawArticle) -> NewsArticle:
    """Attach country, category, and impact to a raw article."""
    text = f"{raw.title} {raw.summary}"
    return NewsArticle(
        id=raw.id,
        title=raw.title,
        summary=raw.summary,
        source=raw.source,
        published_at=raw.published_at,
        url=raw.url,
        country=determine_country(text),
        category=determine_category(text),
        impact=determine_impact(text),
    )
