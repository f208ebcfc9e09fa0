"""In-process result cache for provider lookups."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Protocol

from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.providers import NutritionProvider

_logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1024


class Cache(Protocol):
    """Key-value store whose entries expire after a TTL."""

    def get(self, key: str) -> object | None:
        """Return the live value for ``key`` or ``None``."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store ``value`` until ``ttl_seconds`` have passed."""


@dataclass(frozen=True)
class _CacheEntry:
    value: object
    expires_at: float


class InMemoryCache(Cache):
    """Bounded cache of live entries, oldest evicted first.

    Expired entries are swept on every write, so keys that are never read
    again do not accumulate. Past ``max_entries`` the least recently
    written entry is dropped.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= time.monotonic():
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        now = time.monotonic()
        self._sweep(now)
        self._entries.pop(key, None)
        self._entries[key] = _CacheEntry(value=value, expires_at=now + ttl_seconds)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            _logger.debug("Nutrition cache full, evicted %s", evicted)

    def _sweep(self, now: float) -> None:
        expired = [
            key for key, entry in self._entries.items() if entry.expires_at <= now
        ]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


def lookup_cache_key(provider: str, dish_name: str) -> str:
    """Key a lookup by provider and normalized dish name."""
    return f"nutrition:{provider}:{dish_name.strip().lower()}"


@dataclass
class CachedProvider:
    """Provider wrapper that remembers successful lookups."""

    provider: NutritionProvider
    cache: Cache
    ttl_seconds: int = 3600

    @property
    def name(self) -> str:
        """Name of the wrapped provider."""
        return self.provider.name

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Return a cached record or delegate to the wrapped provider."""
        key = lookup_cache_key(self.name, dish_name)
        cached = self.cache.get(key)
        if isinstance(cached, NutritionRecord):
            _logger.debug("Nutrition cache hit: %s", key)
            return cached
        record = await self.provider.lookup(dish_name)
        self.cache.set(key, record, ttl_seconds=self.ttl_seconds)
        return record
