"""Quote provider protocol: the source-agnostic interface layer.

Architecture
------------
Each upstream price source is wrapped by one adapter implementing
``QuoteProvider``:

    Upstream REST API → QuoteProvider.fetch_quote → ProviderQuote | None

- Adapters own their symbol table (catalog id → provider symbol) and any
  unit-conversion table for that source.
- Adapters never raise to callers. Transport failures, HTTP errors,
  rate-limit notices, and malformed payloads are logged and returned as
  ``None``, which the resolver treats as "try the next provider".
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from commodity_tracker.core.models import CommodityId, ProviderQuote


@runtime_checkable
class QuoteProvider(Protocol):
    """Fetches a single quote for a provider-specific symbol."""

    @property
    def name(self) -> str: ...

    @property
    def configured(self) -> bool: ...

    @property
    def probe_symbol(self) -> str:
        """Cheap symbol used for connectivity checks."""
        ...

    def symbol_for(self, item_id: CommodityId) -> str | None:
        """Map a catalog id to this provider's symbol, or None if unsupported."""
        ...

    async def fetch_quote(self, symbol: str) -> ProviderQuote | None:
        """Fetch a quote. Returns None on any failure."""
        ...
