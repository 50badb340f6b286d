"""Time-bounded cache of rendered view content keyed by view id."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

CACHE_TTL_SECONDS = 30.0


@dataclass(frozen=True)
class CacheEntry:
    lines: list[str]
    fixed_right: list[str] | None
    created: float


class ViewCache:
    """Rendered-line cache whose entries expire after ``ttl`` seconds.

    Expired entries are treated as absent on lookup and dropped lazily.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.created >= self.ttl:
            del self._entries[key]
            return None
        return entry

    def put(self, key: str, lines: list[str], fixed_right: list[str] | None = None) -> CacheEntry:
        entry = CacheEntry(lines=lines, fixed_right=fixed_right, created=self._clock())
        self._entries[key] = entry
        return entry

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
