"""In-memory price history: the last two samples per tracked item.

The tracker is an explicitly constructed service. Whatever composes the
price resolver owns one instance for the lifetime of the session; there is
no module-level singleton.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from commodity_tracker.core.models import CommodityId, PriceHistory, PriceSample

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PriceHistoryTracker:
    """Keyed store of previous/current price per item.

    Only the two most recent updates are retained. All operations take an
    internal lock so concurrent resolution cycles from worker threads do
    not lose updates; under a single event loop the lock is uncontended.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of observation timestamps. Defaults to UTC now.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow
        self._history: dict[CommodityId, PriceHistory] = {}
        self._lock = threading.Lock()

    def update(self, item_id: CommodityId, price: float) -> float:
        """Record a new price and return the percent change from the last one."""
        return self.record(item_id, price).change_percent

    def record(self, item_id: CommodityId, price: float) -> PriceHistory:
        """Record a new price and return the entry it produced.

        The first update for an id stores the price as both previous and
        current with a 0.0 change. A previous price of exactly 0 also yields
        0.0 rather than dividing by zero. The returned entry is the one this
        call stored, even if another update for the same id follows at once.
        """
        sample = PriceSample(item_id=item_id, price=price, observed_at=self._clock())
        with self._lock:
            existing = self._history.get(item_id)
            if existing is None:
                entry = PriceHistory(previous=sample, current=sample, change_percent=0.0)
                self._history[item_id] = entry
                return entry

            last = existing.current.price
            if last == 0:
                logger.warning(
                    "Previous price for %s is 0, reporting 0%% change", item_id
                )
                change = 0.0
            else:
                change = (price - last) / last * 100

            entry = PriceHistory(
                previous=existing.current, current=sample, change_percent=change
            )
            self._history[item_id] = entry
            return entry

    def peek(self, item_id: CommodityId) -> float:
        """Last computed change for an id, or 0.0 if it is not tracked."""
        with self._lock:
            entry = self._history.get(item_id)
        return entry.change_percent if entry is not None else 0.0

    def get(self, item_id: CommodityId) -> PriceHistory | None:
        with self._lock:
            return self._history.get(item_id)

    def remove(self, item_id: CommodityId) -> None:
        """Forget an item; its next update behaves as a first-ever update."""
        with self._lock:
            self._history.pop(item_id, None)

    def clear(self) -> None:
        with self._lock:
            self._history.clear()

    def tracked_ids(self) -> list[CommodityId]:
        with self._lock:
            return list(self._history.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def __contains__(self, item_id: object) -> bool:
        with self._lock:
            return item_id in self._history
