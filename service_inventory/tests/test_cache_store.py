"""
Unit tests for the TTL cache store.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_inventory.app.caching.store import CacheStore, key_family


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class TestCacheStore:
    """Test cases for CacheStore."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def store(self, clock):
        return CacheStore(ttl_seconds=120, clock=clock)

    def test_get_after_set_within_ttl(self, store, clock):
        """Values round-trip unchanged while fresh."""
        stock = [{"component": "Widget", "stock": 3}]
        store.set("getLiveStock", stock)
        clock.advance(60)

        assert store.get("getLiveStock") is stock

    def test_entry_still_fresh_at_exact_ttl(self, store, clock):
        store.set("getCases", ["Case A"])
        clock.advance(120)

        assert store.get("getCases") == ["Case A"]

    def test_get_after_ttl_returns_absent_and_removes_entry(self, store, clock):
        """Expired entries are dropped on lookup."""
        store.set("getCases", ["Case A"])
        clock.advance(120.001)

        assert store.get("getCases") is None
        assert "getCases" not in store
        assert store.get("getCases") is None

    def test_get_missing_key_returns_default(self, store):
        sentinel = object()
        assert store.get("nope") is None
        assert store.get("nope", sentinel) is sentinel

    def test_falsy_values_are_served(self, store):
        """An empty list is a cached value, not a miss."""
        store.set("getComponents:Empty Case", [])

        assert store.get("getComponents:Empty Case", "missing") == []

    def test_set_replaces_value_and_timestamp(self, store, clock):
        store.set("getLiveStock", ["old"])
        clock.advance(100)
        store.set("getLiveStock", ["new"])
        clock.advance(100)

        assert store.get("getLiveStock") == ["new"]
        assert store.peek("getLiveStock").stored_at == 1100.0

    def test_invalidate_single_key_leaves_others_untouched(self, store, clock):
        store.set("getLiveStock", ["stock"])
        store.set("getCases", ["Case A"])
        before = store.peek("getCases")

        store.invalidate("getLiveStock")

        assert store.get("getLiveStock") is None
        assert store.peek("getCases") is before
        assert store.get("getCases") == ["Case A"]

    def test_invalidate_all(self, store):
        store.set("getLiveStock", ["stock"])
        store.set("getCases", ["Case A"])

        store.invalidate()

        assert len(store) == 0

    def test_invalidate_missing_key_is_noop(self, store):
        store.set("getCases", ["Case A"])

        store.invalidate("getComponents:Nope")
        store.invalidate("getComponents:Nope")

        assert len(store) == 1

    def test_unbounded_by_default(self, store):
        for index in range(500):
            store.set(f"getComponents:Case {index}", [])

        assert len(store) == 500

    def test_max_entries_drops_oldest(self, clock):
        store = CacheStore(ttl_seconds=120, max_entries=2, clock=clock)
        store.set("getCases", ["Case A"])
        store.set("getLiveStock", [])
        store.set("getComponents:Case A", ["Widget"])

        assert "getCases" not in store
        assert store.get("getLiveStock") == []
        assert store.get("getComponents:Case A") == ["Widget"]


def test_key_family():
    assert key_family("getComponents:Case A") == "getComponents"
    assert key_family("getComponents:Case:With:Colons") == "getComponents"
    assert key_family("getLiveStock") == "getLiveStock"
