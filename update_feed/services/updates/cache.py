"""
TTL caching for merged commit history.

Fetching every repository's full history costs one request per 100 commits
per source, so merged results are kept for a short time (5 minutes by
default). Two independent scopes exist:

- "all": full history of every source
- "recent": the newest N commits of every source

Each scope has exactly one slot, so the store never holds more than two
entries. A recent window of N is answered from a live window of M >= N by
keeping the newest N commits of each source, so callers asking for
different windows share one fetch. Entries expire by age only and are
replaced whole, never edited.

Concurrent callers for the same key share one fetch: a per-scope lock wraps
the check-miss-fetch-store sequence, and whoever waits on it finds the entry
the first caller stored.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import TypeAdapter

from update_feed.services.github.types import CommitRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 300_000  # 5 min

Scope = Literal["all", "recent"]


def now_millis() -> int:
    """Current wall-clock time in Unix milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class CacheKey:
    """Fetch mode plus optional per-source limit."""

    scope: Scope
    limit: int | None = None

    @classmethod
    def all_history(cls) -> "CacheKey":
        return cls(scope="all")

    @classmethod
    def recent(cls, limit: int) -> "CacheKey":
        if limit < 1:
            raise ValueError(f"recent window must be >= 1, got {limit}")
        return cls(scope="recent", limit=limit)

    def covers(self, other: "CacheKey") -> bool:
        """Whether an entry stored under this key can answer ``other``."""
        if self.scope != other.scope:
            return False
        if self.limit is None or other.limit is None:
            return self.limit == other.limit
        return self.limit >= other.limit

    def __str__(self) -> str:
        return self.scope if self.limit is None else f"{self.scope}:{self.limit}"


def newest_per_source(commits: tuple[CommitRecord, ...], limit: int) -> list[CommitRecord]:
    """Keep the first ``limit`` commits of each source tag from a newest-first stream."""
    taken: dict[str, int] = {}
    kept: list[CommitRecord] = []
    for commit in commits:
        count = taken.get(commit.source_tag, 0)
        if count < limit:
            kept.append(commit)
            taken[commit.source_tag] = count + 1
    return kept


@dataclass(frozen=True)
class CacheEntry:
    """One cached fetch result."""

    key: CacheKey
    payload: tuple[CommitRecord, ...]
    fetched_at_millis: int


_snapshot_adapter: TypeAdapter[list[CacheEntry]] = TypeAdapter(list[CacheEntry])


class CommitCacheStore:
    """In-memory commit cache with per-scope single-flight population."""

    def __init__(
        self,
        ttl_millis: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        if ttl_millis < 0:
            raise ValueError(f"ttl_millis must be >= 0, got {ttl_millis}")
        self.ttl_millis = ttl_millis
        self._clock = clock
        self._entries: dict[Scope, CacheEntry] = {}
        self._locks: dict[Scope, asyncio.Lock] = {}

    def _lock_for(self, scope: Scope) -> asyncio.Lock:
        lock = self._locks.get(scope)
        if lock is None:
            lock = self._locks[scope] = asyncio.Lock()
        return lock

    def peek(self, key: CacheKey, ttl_millis: int | None = None) -> CacheEntry | None:
        """Return the live entry able to answer ``key`` without fetching, or None."""
        ttl = self.ttl_millis if ttl_millis is None else ttl_millis
        entry = self._entries.get(key.scope)
        if entry is None or not entry.key.covers(key):
            return None
        if self._clock() - entry.fetched_at_millis >= ttl:
            return None
        return entry

    @staticmethod
    def _payload_for(entry: CacheEntry, key: CacheKey) -> list[CommitRecord]:
        if key.limit is None or entry.key.limit == key.limit:
            return list(entry.payload)
        return newest_per_source(entry.payload, key.limit)

    async def get_or_fetch(
        self,
        key: CacheKey,
        producer: Callable[[], Awaitable[list[CommitRecord]]],
        ttl_millis: int | None = None,
    ) -> list[CommitRecord]:
        """
        Return cached commits for ``key``, calling ``producer`` on a miss.

        A live recent window at least as large as ``key.limit`` counts as a
        hit and is cut down to the newest ``key.limit`` commits per source.

        Args:
            key: Scope and limit of the request
            producer: Async callable performing the actual fetch
            ttl_millis: Maximum entry age (default: the store's TTL)

        Returns:
            The cached or freshly fetched commits

        Raises:
            Whatever ``producer`` raises; nothing is stored in that case
        """
        entry = self.peek(key, ttl_millis)
        if entry is not None:
            logger.debug(f"Cache HIT: {key} (stored as {entry.key})")
            return self._payload_for(entry, key)

        async with self._lock_for(key.scope):
            # Another caller may have filled the slot while we waited
            entry = self.peek(key, ttl_millis)
            if entry is not None:
                logger.debug(f"Cache HIT after wait: {key} (stored as {entry.key})")
                return self._payload_for(entry, key)

            logger.debug(f"Cache MISS: {key}")
            payload = await producer()
            self._entries[key.scope] = CacheEntry(
                key=key,
                payload=tuple(payload),
                fetched_at_millis=self._clock(),
            )
            return list(payload)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        logger.debug("Cleared commit cache")

    def stats(self) -> dict[str, dict[str, int | str]]:
        """Get current cache contents for monitoring."""
        now = self._clock()
        return {
            scope: {
                "key": str(entry.key),
                "size": len(entry.payload),
                "age_ms": now - entry.fetched_at_millis,
            }
            for scope, entry in self._entries.items()
        }

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def dump_snapshot(self) -> bytes:
        """Serialize all entries (live or not) to JSON."""
        return _snapshot_adapter.dump_json(list(self._entries.values()))

    def load_snapshot(self, data: str | bytes) -> int:
        """
        Replace the store's contents with a snapshot.

        Returns:
            Number of entries restored
        """
        entries = _snapshot_adapter.validate_json(data)
        self._entries = {entry.key.scope: entry for entry in entries}
        return len(self._entries)

    def save(self, path: str | Path) -> None:
        """Write a snapshot file."""
        Path(path).write_bytes(self.dump_snapshot())
        logger.info(f"Saved commit cache snapshot to {path} ({len(self._entries)} entries)")

    def load(self, path: str | Path) -> int:
        """
        Restore from a snapshot file if it exists.

        Returns:
            Number of entries restored (0 when there is no file)
        """
        snapshot = Path(path)
        if not snapshot.exists():
            return 0
        restored = self.load_snapshot(snapshot.read_bytes())
        logger.info(f"Restored {restored} commit cache entries from {path}")
        return restored
