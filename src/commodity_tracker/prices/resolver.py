"""Price resolution: provider chain → synthetic fallback → history → quote.

For each requested catalog id the resolver walks an ordered list of
candidate sources and stops at the first one that produces a price:

    providers for the item's category (priority order, sequential)
        → synthetic variation around the catalog base price

The winning price is fed through the ``PriceHistoryTracker`` to compute
the change percent, and the result is stamped with its provenance.
Items are resolved concurrently on the event loop; a failure or hang in
one item's chain only degrades that item to simulated data.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Iterable, Sequence, TypeVar

from commodity_tracker.catalog.commodities import get_commodity
from commodity_tracker.core.models import (
    CommodityCategory,
    CommodityId,
    Provenance,
    ProviderQuote,
    ResolvedQuote,
    TrackedItem,
    Trend,
)
from commodity_tracker.prices.alphavantage import PROVIDER_NAME as ALPHA_VANTAGE
from commodity_tracker.prices.history import PriceHistoryTracker
from commodity_tracker.prices.metals import PROVIDER_NAME as METALS_API
from commodity_tracker.prices.provider import QuoteProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Category -> provider names in the order they are tried
PROVIDER_PRIORITY: dict[CommodityCategory, tuple[str, ...]] = {
    CommodityCategory.METALS: (METALS_API, ALPHA_VANTAGE),
    CommodityCategory.PRECIOUS_METALS: (METALS_API, ALPHA_VANTAGE),
    CommodityCategory.ENERGY: (ALPHA_VANTAGE,),
    CommodityCategory.AGRICULTURE: (ALPHA_VANTAGE,),
    CommodityCategory.PLASTICS: (),
}

# Synthetic prices wander up to this fraction either side of the base price
SIMULATED_VARIATION = 0.01

Candidate = Callable[[], Awaitable[T | None]]


async def resolve_first(candidates: Iterable[Candidate[T]]) -> T | None:
    """Await candidates in order and return the first non-None result.

    Later candidates are never started once one succeeds.
    """
    for candidate in candidates:
        result = await candidate()
        if result is not None:
            return result
    return None


def trend_for(change_percent: float) -> Trend:
    """UP only for a strictly positive change; zero counts as DOWN."""
    return Trend.UP if change_percent > 0 else Trend.DOWN


def simulate_price(item: TrackedItem, rng: random.Random) -> float:
    """Base price with a uniform ±1% variation, rounded for the item's unit."""
    variation = rng.uniform(-SIMULATED_VARIATION, SIMULATED_VARIATION)
    return round(item.base_price * (1 + variation), item.price_decimals)


class PriceResolver:
    """Resolves catalog ids to ``ResolvedQuote`` records.

    Parameters
    ----------
    providers : Sequence[QuoteProvider]
        Available adapters. Selection and ordering per item come from
        ``PROVIDER_PRIORITY``; unconfigured adapters are skipped.
    tracker : PriceHistoryTracker
        History store owned by the caller; mutated once per item per cycle.
    provider_timeout : float
        Seconds to wait on a single provider call before treating it as failed.
    rng : random.Random | None
        Random source for simulated prices. Seeded instances make tests
        deterministic.
    """

    def __init__(
        self,
        providers: Sequence[QuoteProvider],
        tracker: PriceHistoryTracker,
        provider_timeout: float = 10.0,
        rng: random.Random | None = None,
    ) -> None:
        self._providers = {p.name: p for p in providers}
        self._tracker = tracker
        self._timeout = provider_timeout
        self._rng = rng or random.Random()

    @property
    def tracker(self) -> PriceHistoryTracker:
        return self._tracker

    def providers_for(self, item: TrackedItem) -> list[tuple[QuoteProvider, str]]:
        """Configured (provider, symbol) pairs for an item, in priority order."""
        chain: list[tuple[QuoteProvider, str]] = []
        for name in PROVIDER_PRIORITY.get(item.category, ()):
            provider = self._providers.get(name)
            if provider is None or not provider.configured:
                continue
            symbol = provider.symbol_for(item.id)
            if symbol is not None:
                chain.append((provider, symbol))
        return chain

    async def resolve_prices(self, item_ids: Sequence[CommodityId]) -> list[ResolvedQuote]:
        """Resolve all ids concurrently. Unknown ids are omitted.

        Duplicate ids are resolved once so the history sees a single update
        per item per cycle.
        """
        unique_ids = list(dict.fromkeys(item_ids))
        results = await asyncio.gather(*(self.resolve(i) for i in unique_ids))
        quotes = [q for q in results if q is not None]

        api_count = sum(1 for q in quotes if q.provenance == Provenance.API)
        logger.info(
            "Resolved %d/%d prices (api: %d, simulated: %d)",
            len(quotes),
            len(unique_ids),
            api_count,
            len(quotes) - api_count,
        )
        return quotes

    async def resolve(self, item_id: CommodityId) -> ResolvedQuote | None:
        """Resolve one id. Returns None only when the id is not in the catalog."""
        item = get_commodity(item_id)
        if item is None:
            logger.debug("Skipping unknown commodity id %r", item_id)
            return None

        try:
            quote = await resolve_first(
                self._candidate(provider, symbol)
                for provider, symbol in self.providers_for(item)
            )
        except Exception:
            logger.exception("Provider chain for %s failed, using simulated price", item_id)
            quote = None

        if quote is not None:
            price = quote.price
            provenance = Provenance.API
            provider_name: str | None = quote.provider
        else:
            price = simulate_price(item, self._rng)
            provenance = Provenance.SIMULATED
            provider_name = None

        entry = self._tracker.record(item.id, price)
        change = entry.change_percent

        return ResolvedQuote(
            item_id=item.id,
            name=item.name,
            category=item.category,
            unit=item.unit,
            exchange=item.exchange,
            price=price,
            change_percent=change,
            trend=trend_for(change),
            provenance=provenance,
            observed_at=entry.current.observed_at,
            provider=provider_name,
        )

    def _candidate(self, provider: QuoteProvider, symbol: str) -> Candidate[ProviderQuote]:
        async def attempt() -> ProviderQuote | None:
            try:
                return await asyncio.wait_for(provider.fetch_quote(symbol), self._timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "%s timed out after %.1fs for %s", provider.name, self._timeout, symbol
                )
                return None
            except Exception as e:
                logger.error("%s raised for %s: %s", provider.name, symbol, e)
                return None

        return attempt
