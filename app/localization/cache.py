from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from app.localization.culture import Culture

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str, str]  # (namespace, culture name, resource key)
Loader = Callable[[], str | None]


@dataclass(frozen=True)
class CacheEntry:
    value: str
    expires_at: float | None = None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int


class LocalizationCache:
    """
    Cache-aside store for resolved texts, keyed by (culture, resource key).

    Only non-empty results are cached; a missing key is looked up again on every
    request. Entries never expire unless ``ttl_seconds`` is set, and the cache
    is unbounded unless ``max_entries`` is set (least recently used goes first).
    """

    def __init__(
        self,
        namespace: str = "locale",
        *,
        ttl_seconds: float | None = None,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.namespace = namespace
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[CacheKey, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def key_for(self, culture: Culture, key: str) -> CacheKey:
        return (self.namespace, culture.name, key)

    def get(self, culture: Culture, key: str) -> str | None:
        cache_key = self.key_for(culture, key)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is None:
                return None
            if entry.expired(now):
                del self._entries[cache_key]
                return None
            self._entries.move_to_end(cache_key)
            return entry.value

    def set(self, culture: Culture, key: str, value: str) -> None:
        cache_key = self.key_for(culture, key)
        expires_at = self._clock() + self.ttl_seconds if self.ttl_seconds else None
        with self._lock:
            self._entries[cache_key] = CacheEntry(value, expires_at)
            self._entries.move_to_end(cache_key)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Evicted %s", evicted)

    def get_or_load(self, culture: Culture, key: str, loader: Loader) -> str | None:
        """
        Return the cached text or call ``loader`` on a miss.

        The loader runs outside the lock; two concurrent misses may both load
        and write the same value.
        """
        cached = self.get(culture, key)
        if cached is not None:
            with self._lock:
                self._hits += 1
            logger.debug("Cache hit %s/%s", culture, key)
            return cached

        with self._lock:
            self._misses += 1
        logger.debug("Cache miss %s/%s", culture, key)
        value = loader()
        if value:
            self.set(culture, key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))
