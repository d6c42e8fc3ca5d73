# src/storage/gold_price_cache.py

"""Time-bounded in-memory cache of the gold price per gram."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.config.settings import Settings
from src.errors import UpstreamUnavailable

logger = logging.getLogger("jewelry_catalog.cache")


@dataclass(frozen=True)
class PriceEntry:
    """A gold price per gram and the time it was stored."""

    price: float
    last_updated: float
    is_fallback: bool = False


class GoldPriceCache:
    """Process-wide gold price holder with TTL-based refresh.

    The stored ``(price, last_updated)`` pair is a single immutable
    :class:`PriceEntry` swapped in one assignment, so readers never
    observe a half-updated pair. Refreshes are single-flight: when the
    TTL expires, one caller fetches while the others wait on the
    refresh lock and then reuse its result.

    A failed fetch stores the fallback price with a fresh timestamp,
    so the upstream is not hammered for the rest of the TTL window.
    """

    def __init__(
        self,
        fetch_price_per_ounce: Callable[[], float],
        ttl: float | None = None,
        fallback_price: float | None = Settings.FALLBACK_GOLD_PRICE_PER_GRAM,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetch = fetch_price_per_ounce
        self._ttl: float = (
            ttl if ttl is not None else Settings.GOLD_PRICE_TTL
        )
        self._fallback_price = fallback_price
        self._clock = clock
        self._entry: PriceEntry | None = None
        self._refresh_lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def get_price(self) -> float:
        """Return the gold price per gram, refreshing if expired.

        Raises ``UpstreamUnavailable`` only when the fetch fails and
        no fallback price is configured.
        """
        return self.get_entry().price

    def get_entry(self) -> PriceEntry:
        """Return the current price entry, refreshing if expired."""
        entry = self._entry
        if entry is not None and self._is_fresh(entry, self._clock()):
            return entry

        with self._refresh_lock:
            # Another caller may have refreshed while we waited
            entry = self._entry
            now = self._clock()
            if entry is not None and self._is_fresh(entry, now):
                return entry
            entry = self._refresh(now)
            self._entry = entry

        return entry

    def snapshot(self) -> tuple[float | None, float | None]:
        """Return the cached ``(price, last_updated)`` pair without refreshing."""
        entry = self._entry
        if entry is None:
            return None, None
        return entry.price, entry.last_updated

    def invalidate(self) -> None:
        """Drop the cached price so the next read refreshes."""
        with self._refresh_lock:
            self._entry = None
        logger.info("Gold price cache invalidated")

    def _is_fresh(self, entry: PriceEntry, now: float) -> bool:
        return now - entry.last_updated < self._ttl

    def _refresh(self, now: float) -> PriceEntry:
        """Fetch a new price, falling back to the configured constant."""
        try:
            per_ounce = self._fetch()
        except UpstreamUnavailable as exc:
            if self._fallback_price is None:
                logger.error("Gold API failed, no fallback configured: %s", exc)
                raise
            logger.warning("Gold API failed: %s", exc)
            logger.info(
                "Using fallback price: $%.2f per gram",
                self._fallback_price,
            )
            return PriceEntry(
                price=self._fallback_price,
                last_updated=now,
                is_fallback=True,
            )

        per_gram = per_ounce / Settings.TROY_OUNCE_GRAMS
        logger.info(
            "Real-time gold price: $%.2f per ounce = $%.2f per gram",
            per_ounce,
            per_gram,
        )
        return PriceEntry(price=per_gram, last_updated=now)
