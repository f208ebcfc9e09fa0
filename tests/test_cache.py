"""Tests for the lookup cache."""

import asyncio

import pytest

from nutrition_compare.domain.errors import ProviderError
from nutrition_compare.services.cache import (
    CachedProvider,
    InMemoryCache,
    lookup_cache_key,
)
from tests.fakes import CountingProvider


def test_cached_provider_reuses_record_for_normalized_name() -> None:
    provider = CountingProvider(name="edamam-nutrition")
    cached = CachedProvider(provider, InMemoryCache(), ttl_seconds=60)

    first = asyncio.run(cached.lookup("Chicken Curry"))
    second = asyncio.run(cached.lookup("  chicken curry "))

    assert first == second
    assert provider.calls == ["Chicken Curry"]
    assert cached.name == "edamam-nutrition"


def test_cached_provider_does_not_cache_failures() -> None:
    provider = CountingProvider(error=ProviderError("counting", "down"))
    cached = CachedProvider(provider, InMemoryCache(), ttl_seconds=60)

    for _ in range(2):
        with pytest.raises(ProviderError):
            asyncio.run(cached.lookup("rice"))

    assert len(provider.calls) == 2


def test_cache_keys_are_per_provider() -> None:
    assert lookup_cache_key("a", "Rice") != lookup_cache_key("b", "Rice")
    assert lookup_cache_key("a", "Rice ") == "nutrition:a:rice"


def test_expired_entries_are_dropped_on_read() -> None:
    cache = InMemoryCache()
    cache.set("key", "value", ttl_seconds=-1)

    assert cache.get("key") is None
    assert len(cache) == 0


def test_expired_entries_do_not_pile_up() -> None:
    provider = CountingProvider()
    cached = CachedProvider(provider, InMemoryCache(), ttl_seconds=-1)

    for index in range(500):
        asyncio.run(cached.lookup(f"dish {index}"))

    assert len(cached.cache) == 1
    assert len(provider.calls) == 500


def test_cache_evicts_oldest_entry_when_full() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("a", 1, ttl_seconds=60)
    cache.set("b", 2, ttl_seconds=60)
    cache.set("c", 3, ttl_seconds=60)

    assert len(cache) == 2
    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_cache_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        InMemoryCache(max_entries=0)
