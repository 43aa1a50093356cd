"""Tests for the response cache stores."""

import asyncio
import json
from datetime import datetime, timedelta, timezone

import pytest

from vimeo_client.client.cache import CacheStore, FileCacheStore, MemoryCacheStore


class TestMemoryCacheStore:
    """Tests for MemoryCacheStore."""

    @pytest.mark.asyncio
    async def test_put_get(self):
        """Stored payloads come back by fingerprint."""
        store = MemoryCacheStore()
        await store.put("abc", {"name": "video"})
        assert await store.get("abc") == {"name": "video"}
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_last_writer_wins(self):
        """Concurrent writes for one key leave exactly one of them."""
        store = MemoryCacheStore()
        await asyncio.gather(*(store.put("k", {"n": n}) for n in range(20)))
        assert (await store.get("k"))["n"] in range(20)
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_remove_and_clear(self):
        """Entries can be dropped one by one or all at once."""
        store = MemoryCacheStore()
        await store.put("a", {})
        await store.put("b", {})
        await store.remove("a")
        assert "a" not in store
        await store.clear()
        assert len(store) == 0

    def test_satisfies_protocol(self):
        """Both stores implement the CacheStore protocol."""
        assert isinstance(MemoryCacheStore(), CacheStore)


class TestFileCacheStore:
    """Tests for FileCacheStore."""

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path):
        """A payload written to disk is read back."""
        store = FileCacheStore(tmp_path)
        await store.put("abc", {"uri": "/videos/1", "tags": ["a"]})
        assert await store.get("abc") == {"uri": "/videos/1", "tags": ["a"]}
        assert store.get_cache_path("abc").exists()
        assert not list(tmp_path.glob("*.tmp"))

    @pytest.mark.asyncio
    async def test_missing(self, tmp_path):
        """Unknown fingerprints are misses."""
        assert await FileCacheStore(tmp_path).get("nope") is None

    @pytest.mark.asyncio
    async def test_corrupt_file_is_a_miss(self, tmp_path):
        """Unreadable cache files are treated as misses."""
        store = FileCacheStore(tmp_path)
        store.get_cache_path("bad").write_text("{not json")
        assert await store.get("bad") is None

    @pytest.mark.asyncio
    async def test_mismatched_key_is_a_miss(self, tmp_path):
        """A file whose envelope names another fingerprint is ignored."""
        store = FileCacheStore(tmp_path)
        await store.put("one", {"x": 1})
        store.get_cache_path("one").rename(store.get_cache_path("two"))
        assert await store.get("two") is None

    @pytest.mark.asyncio
    async def test_max_age(self, tmp_path):
        """Entries older than max_age are misses."""
        store = FileCacheStore(tmp_path, max_age=timedelta(minutes=5))
        old = {
            "fingerprint": "old",
            "created_at": (
                datetime.now(timezone.utc) - timedelta(hours=1)
            ).isoformat(),
            "payload": {"x": 1},
        }
        store.get_cache_path("old").write_text(json.dumps(old))
        assert await store.get("old") is None

        await store.put("fresh", {"x": 2})
        assert await store.get("fresh") == {"x": 2}

    @pytest.mark.asyncio
    async def test_overwrite_and_clear(self, tmp_path):
        """Later writes replace earlier ones; clear removes everything."""
        store = FileCacheStore(tmp_path)
        await store.put("k", {"v": 1})
        await store.put("k", {"v": 2})
        assert await store.get("k") == {"v": 2}
        await store.clear()
        assert await store.get("k") is None
