"""Source-agnostic commodity price resolution.

Architecture
------------
    Upstream API → QuoteProvider → ProviderQuote → PriceResolver → ResolvedQuote
                                                        │
                                               PriceHistoryTracker

Key abstractions:

- ``QuoteProvider``: Protocol every upstream adapter implements.
- ``PriceHistoryTracker``: Last two samples per item; computes change percent.
- ``PriceResolver``: Provider chain with synthetic fallback and provenance.

Built-in providers:

- ``MetalsApiProvider``: metals-api.com spot rates (industrial + precious metals).
- ``AlphaVantageProvider``: Alpha Vantage GLOBAL_QUOTE (energy + agriculture).

Adding a new price source:
1. Write a class satisfying ``QuoteProvider`` with its own symbol table.
2. Add its name to ``PROVIDER_PRIORITY`` for the categories it covers.
"""

from commodity_tracker.prices.alphavantage import ALPHAVANTAGE_SYMBOLS, AlphaVantageProvider
from commodity_tracker.prices.history import PriceHistoryTracker
from commodity_tracker.prices.metals import (
    CONVERSION_FACTORS,
    METALS_API_SYMBOLS,
    MetalsApiProvider,
    convert_rate,
)
from commodity_tracker.prices.provider import QuoteProvider
from commodity_tracker.prices.resolver import (
    PROVIDER_PRIORITY,
    PriceResolver,
    resolve_first,
    simulate_price,
    trend_for,
)

__all__ = [
    # Protocols
    "QuoteProvider",
    # History
    "PriceHistoryTracker",
    # Resolution
    "PriceResolver",
    "PROVIDER_PRIORITY",
    "resolve_first",
    "simulate_price",
    "trend_for",
    # Metals-API
    "MetalsApiProvider",
    "METALS_API_SYMBOLS",
    "CONVERSION_FACTORS",
    "convert_rate",
    # Alpha Vantage
    "AlphaVantageProvider",
    "ALPHAVANTAGE_SYMBOLS",
]
