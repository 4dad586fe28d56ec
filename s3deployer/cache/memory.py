"""In-process cache with monotonic-clock expiry."""

from __future__ import annotations

import time
from collections.abc import Callable


class MemoryCache:
    """Dict-backed ``KeyValueCache``; entries live as long as the process."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        # key -> (value, expires_at)
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def save(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    def __len__(self) -> int:
        return len(self._entries)
