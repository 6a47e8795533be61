"""commodity_tracker.core: foundation types, config, and exceptions."""

from commodity_tracker.core.config import (
    APIConfig,
    DashboardConfig,
    NewsConfig,
    ProvidersConfig,
    TrackerConfig,
    describe_key,
    is_configured_key,
    load_config,
)
from commodity_tracker.core.exceptions import (
    CommodityTrackerError,
    ConfigError,
    ProviderError,
    RateLimitError,
    ReportError,
)
from commodity_tracker.core.models import (
    CommodityCategory,
    CommodityId,
    Country,
    HSCode,
    Impact,
    NewsArticle,
    NewsCategory,
    PriceHistory,
    PriceSample,
    Provenance,
    ProviderName,
    ProviderQuote,
    ProviderStatus,
    RawArticle,
    ResolvedQuote,
    TariffRate,
    TariffRecord,
    TariffStatus,
    TrackedItem,
    Trend,
)

__all__ = [
    # Type aliases
    "CommodityId",
    "HSCode",
    "ProviderName",
    # Enums
    "CommodityCategory",
    "Trend",
    "Provenance",
    "Country",
    "NewsCategory",
    "Impact",
    "TariffStatus",
    # Reference models
    "TrackedItem",
    "TariffRate",
    "TariffRecord",
    # Price models
    "PriceSample",
    "PriceHistory",
    "ProviderQuote",
    "ResolvedQuote",
    # News models
    "RawArticle",
    "NewsArticle",
    "ProviderStatus",
    # Config
    "TrackerConfig",
    "ProvidersConfig",
    "NewsConfig",
    "DashboardConfig",
    "APIConfig",
    "load_config",
    "is_configured_key",
    "describe_key",
    # Exceptions
    "CommodityTrackerError",
    "ConfigError",
    "ProviderError",
    "RateLimitError",
    "ReportError",
]
