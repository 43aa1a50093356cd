"""Response cache stores keyed by request fingerprint."""

import asyncio
import json
import logging
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import aiofiles
import aiofiles.os

from vimeo_client.types.cache_entry import CacheEntry

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheStore(Protocol):
    """Key/value store the dispatcher reads and writes raw payloads through.

    Implementations must tolerate concurrent use; last writer wins.
    """

    async def get(self, fingerprint: str) -> dict[str, Any] | None: ...

    async def put(self, fingerprint: str, payload: dict[str, Any]) -> None: ...

    async def remove(self, fingerprint: str) -> None: ...

    async def clear(self) -> None: ...


class MemoryCacheStore:
    """Process-local cache store."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def get(self, fingerprint: str) -> dict[str, Any] | None:
        async with self._lock:
            return self._entries.get(fingerprint)

    async def put(self, fingerprint: str, payload: dict[str, Any]) -> None:
        async with self._lock:
            self._entries[fingerprint] = payload

    async def remove(self, fingerprint: str) -> None:
        async with self._lock:
            self._entries.pop(fingerprint, None)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries


class FileCacheStore:
    """Persists cached payloads as one JSON file per fingerprint.

    Writes go through a temp file and an atomic rename, so concurrent writers
    for the same fingerprint never leave a torn file behind.
    """

    def __init__(self, cache_dir: Path | str, max_age: timedelta | None = None):
        """Initialize file cache store.

        Args:
            cache_dir: Directory for storing cache files
            max_age: Entries older than this are treated as misses
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.max_age = max_age

    def get_cache_path(self, fingerprint: str) -> Path:
        """Cache file stored in cache_dir: {fingerprint}.json"""
        return self.cache_dir.joinpath(f"{fingerprint}.json")

    async def get(self, fingerprint: str) -> dict[str, Any] | None:
        cache_path = self.get_cache_path(fingerprint)

        if not cache_path.exists():
            logger.debug(f"No cache entry found for {fingerprint}")
            return None

        try:
            async with aiofiles.open(cache_path, "r", encoding="utf-8") as f:
                cache_data: dict[str, Any] = json.loads(await f.read())
            entry = CacheEntry.model_validate(cache_data)
        except FileNotFoundError:
            # Removed between the existence check and the read
            return None
        except (json.JSONDecodeError, ValueError, OSError) as e:
            logger.warning(f"Failed to load cache entry for {fingerprint}: {e}")
            return None

        if entry.fingerprint != fingerprint:
            logger.warning(f"Cache entry {cache_path.name} has a mismatched key")
            return None

        if self.max_age is not None:
            if (datetime.now(timezone.utc) - entry.created_at) > self.max_age:
                logger.info(f"Cache entry too old for {fingerprint}, treating as miss")
                return None

        return entry.payload

    async def put(self, fingerprint: str, payload: dict[str, Any]) -> None:
        entry = CacheEntry(
            fingerprint=fingerprint,
            created_at=datetime.now(timezone.utc),
            payload=payload,
        )

        cache_path = self.get_cache_path(fingerprint)
        temp_path = cache_path.with_suffix(f".{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(entry.model_dump_json())
            await aiofiles.os.replace(temp_path, cache_path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Cache entry saved for {fingerprint}")

    async def remove(self, fingerprint: str) -> None:
        self.get_cache_path(fingerprint).unlink(missing_ok=True)
        logger.debug(f"Cache entry cleared for {fingerprint}")

    async def clear(self) -> None:
        for cache_path in self.cache_dir.glob("*.json"):
            cache_path.unlink(missing_ok=True)
