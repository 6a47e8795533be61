"""Curated, pre-classified headlines served when no live feed is available."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from commodity_tracker.core.models import Country, Impact, NewsArticle, NewsCategory

# (id, title, summary, source, age, country, category, url, impact)
_CURATED: tuple[tuple, ...] = (
    (
        "news_1",
        'Trump Says Trade Deal With Canada "Achievable" at G-7',
        "US President discusses maintaining tariffs on Canada as negotiators work on "
        "trade agreement. Canada faces 25% duties on auto exports and 50% on steel and "
        "aluminum.",
        "Bloomberg",
        timedelta(hours=5),
        Country.US,
        NewsCategory.TARIFF,
        "https://www.bloomberg.com/news/articles/2025-06-16/"
        "trump-says-trade-deal-with-canada-achievable-as-g-7-opens",
        Impact.HIGH,
    ),
    (
        "news_2",
        "Canada Pushes Back on Trump Tariff Requirements",
        "Ottawa challenges Trump's stance that tariffs must be part of any Canada deal. "
        "Canada is the top supplier of steel and aluminum to the United States.",
        "Reuters",
        timedelta(hours=2),
        Country.CA,
        NewsCategory.TRADE,
        "https://www.reuters.com/business/autos-transportation/"
        "trump-says-tariffs-must-be-part-any-canada-deal-ottawa-pushes-back-2025-06-16/",
        Impact.HIGH,
    ),
    (
        "news_3",
        'Progress on Lifting Trump\'s Tariffs on Canada "Not Fast Enough"',
        "Canadian officials express frustration with pace of tariff negotiations. Canada "
        "has imposed retaliatory tariffs on $60 billion worth of U.S. goods.",
        "Global News",
        timedelta(days=1),
        Country.CA,
        NewsCategory.POLICY,
        "https://globalnews.ca/news/11241445/donald-trump-tariffs-canada-talks-leblanc-west-block/",
        Impact.MEDIUM,
    ),
    (
        "news_4",
        "EU Weighs 10% Tariff Deal as Trump's July Deadline Looms",
        "Brussels negotiators hope to avoid higher tariffs on cars and medicines by "
        "agreeing to 10% US tariff on all EU exports. July 9 deadline approaches.",
        "Yahoo Finance",
        timedelta(hours=7),
        Country.US,
        NewsCategory.TARIFF,
        "https://finance.yahoo.com/news/live/trump-tariffs-live-updates-eu-weighs-10-tariff-"
        "deal-as-trumps-july-deadline-looms-200619913.html",
        Impact.HIGH,
    ),
    (
        "news_5",
        "Trump Formalizes Tariff Cuts for U.K. as Trade Talks Continue",
        "President Trump signs agreement lowering some tariffs on UK imports as both "
        "countries work toward broader trade deal.",
        "NBC News",
        timedelta(minutes=48),
        Country.US,
        NewsCategory.TRADE,
        "https://www.nbcnews.com/business/business-news/"
        "trump-formalizes-tariff-cuts-uk-trade-talks-continue-rcna213370",
        Impact.MEDIUM,
    ),
    (
        "news_6",
        "Canada Emerges as Safest Port in Trade War Storm",
        "Average effective tariff on US imports from Canada reaches 2.3% - up from zero "
        "in January but lowest among major trading partners.",
        "CBC News",
        timedelta(days=3),
        Country.CA,
        NewsCategory.POLICY,
        "https://www.cbc.ca/news/business/armstrong-economy-trade-war-tariffs-1.7560606",
        Impact.MEDIUM,
    ),
    (
        "news_7",
        'Tariff "Stacking" Adds Headache for US Importers',
        "New complications arise for American importers as multiple tariff policies "
        "create overlapping duties on goods.",
        "Reuters",
        timedelta(hours=5),
        Country.US,
        NewsCategory.POLICY,
        "https://www.reuters.com/business/tariff-stacking-adds-another-headache-us-importers-2025-06-16/",
        Impact.MEDIUM,
    ),
    (
        "news_8",
        "US-China Trade Tariffs to Remain at 10%, Lutnick Says",
        "Commerce Secretary confirms China tariffs will stay at current 10% level "
        "following temporary agreement between both sides.",
        "CNBC",
        timedelta(days=5),
        Country.US,
        NewsCategory.TARIFF,
        "https://www.cnbc.com/2025/06/11/us-china-trade-tariffs-lutnick.html",
        Impact.LOW,
    ),
)


def fallback_articles(now: datetime | None = None) -> list[NewsArticle]:
    """The curated set, with publication times relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    return [
        NewsArticle(
            id=id_,
            title=title,
            summary=summary,
            source=source,
            published_at=now - age,
            country=country,
            category=category,
            url=url,
            impact=impact,
        )
        for id_, title, summary, source, age, country, category, url, impact in _CURATED
    ]
