"""
Cachify — Memory Store Tests

Tests TTL expiry, LRU eviction, key listing and purge for the local backing store.
"""

import pytest

from cachify.store import MemoryStore


class TestMemoryStore:
    """Test suite for MemoryStore."""

    @pytest.fixture
    def store(self, clock) -> MemoryStore:
        """Create a fresh store driven by the fake clock."""
        return MemoryStore(clock=clock)

    def test_put_and_get(self, store: MemoryStore) -> None:
        """Test basic put and get operations."""
        store.put("key1", "value1", 1000)
        assert store.get("key1") == "value1"

    def test_get_nonexistent_key(self, store: MemoryStore) -> None:
        """Test getting a key that doesn't exist."""
        assert store.get("nonexistent") is None

    def test_entry_expires_after_ttl(self, store: MemoryStore, clock) -> None:
        """Test that entries expire once their TTL elapses."""
        store.put("key1", "value1", 500)

        clock.advance_ms(499)
        assert store.get("key1") == "value1"

        clock.advance_ms(1)
        assert store.get("key1") is None
        assert store.size() == 0

    def test_put_overwrites_and_resets_ttl(self, store: MemoryStore, clock) -> None:
        """Test that putting an existing key replaces value and expiry."""
        store.put("key1", "value1", 100)
        clock.advance_ms(90)
        store.put("key1", "value2", 100)
        clock.advance_ms(90)

        assert store.get("key1") == "value2"

    def test_remove(self, store: MemoryStore) -> None:
        """Test removing keys."""
        store.put("key1", "value1", 1000)

        assert store.remove("key1") is True
        assert store.get("key1") is None
        assert store.remove("key1") is False

    def test_keys_skips_expired(self, store: MemoryStore, clock) -> None:
        """Test that keys() lists only live entries."""
        store.put("short", 1, 10)
        store.put("long", 2, 10_000)
        clock.advance_ms(20)

        assert store.keys() == ["long"]

    def test_purge_expired(self, store: MemoryStore, clock) -> None:
        """Test explicit purge of expired entries."""
        for i in range(3):
            store.put(f"key{i}", i, 10)
        store.put("keep", "x", 1000)
        clock.advance_ms(50)

        assert store.purge_expired() == 3
        assert store.stats()["size"] == 1

    def test_clear(self, store: MemoryStore) -> None:
        """Test clearing all entries."""
        for i in range(5):
            store.put(f"key{i}", i, 1000)

        store.clear()
        assert store.size() == 0

    def test_lru_eviction(self, clock) -> None:
        """Test LRU eviction when max_size is reached."""
        store = MemoryStore(max_size=3, clock=clock)
        for i in range(3):
            store.put(f"key{i}", i, 1000)

        # Access key0 to make it recently used
        store.get("key0")
        store.put("key3", 3, 1000)

        assert store.get("key1") is None
        assert store.get("key0") == 0
        assert store.get("key3") == 3
        assert store.stats()["evictions"] == 1

    def test_expired_entries_purged_before_eviction(self, clock) -> None:
        """Test that a full store drops expired entries before evicting live ones."""
        store = MemoryStore(max_size=2, clock=clock)
        store.put("live", "live", 10_000)
        store.put("stale", "stale", 100)
        clock.advance_ms(200)

        store.put("new", "new", 1000)

        assert store.get("live") == "live"
        assert store.get("new") == "new"
        assert store.get("stale") is None
        assert store.stats()["evictions"] == 0

    def test_overwrite_does_not_evict(self, clock) -> None:
        """Test that replacing a key at capacity evicts nothing."""
        store = MemoryStore(max_size=2, clock=clock)
        store.put("a", 1, 1000)
        store.put("b", 2, 1000)
        store.put("a", 3, 1000)

        assert sorted(store.keys()) == ["a", "b"]
        assert store.stats()["evictions"] == 0

    def test_invalid_max_size(self) -> None:
        """Test that a non-positive max_size is rejected."""
        with pytest.raises(ValueError):
            MemoryStore(max_size=0)
