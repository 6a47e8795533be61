"""Read-only reference data: the commodity catalog and the tariff schedule."""

from commodity_tracker.catalog.commodities import (
    COMMODITY_CATEGORIES,
    COMMODITY_DATABASE,
    commodities_by_category,
    get_commodity,
    search_commodities,
)
from commodity_tracker.catalog.tariffs import (
    COUNTRY_NAMES,
    TARIFF_DATABASE,
    country_name,
    format_tariff_rate,
    get_tariff,
    search_tariffs,
    tariff_categories,
    tariffs_by_category,
    tariffs_by_country_rate,
)

__all__ = [
    "COMMODITY_CATEGORIES",
    "COMMODITY_DATABASE",
    "commodities_by_category",
    "get_commodity",
    "search_commodities",
    "COUNTRY_NAMES",
    "TARIFF_DATABASE",
    "country_name",
    "format_tariff_rate",
    "get_tariff",
    "search_tariffs",
    "tariff_categories",
    "tariffs_by_category",
    "tariffs_by_country_rate",
]
