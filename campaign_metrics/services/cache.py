"""In-memory TTL cache for campaign snapshots."""

import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, Optional

from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_CACHE_KEY = "meta_campaigns"
DEFAULT_TTL_SECONDS = 3600.0
DEFAULT_MAX_ENTRIES = 256


class MetricsCache:
    """TTL cache with bounded size. Evicts oldest entries when full.

    The clock is injected so expiry can be tested without sleeping.

    Usage:
        cache = MetricsCache(ttl=3600)
        cache.set("meta_campaigns", campaigns)
        campaigns = cache.get("meta_campaigns")  # None once expired
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        self._store: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired.

        Expired entries are dropped on read.
        """
        entry = self._store.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None

        cached_at, value = entry
        if self._clock() - cached_at > self._ttl:
            del self._store[key]
            logger.debug("cache_expired", key=key)
            return None

        logger.debug("cache_hit", key=key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set cache entry, evicting oldest if at capacity."""
        if key in self._store:
            self._store.move_to_end(key)
        self._store[key] = (self._clock(), value)
        while len(self._store) > self._max_entries:
            evicted, _ = self._store.popitem(last=False)
            logger.debug("cache_evicted", key=evicted)

    def invalidate(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()
