"""In-process key-value store used when Redis is disabled or unreachable."""

from __future__ import annotations

import copy
import time
from collections.abc import Callable
from typing import Any


class InMemoryKeyValueStore:
    """Dict-backed store with per-key expiry. Same contract as CacheService.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, tuple[Any, float]] = {}

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self._data[key] = (copy.deepcopy(value), self._clock() + ttl)
        return True

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._data)
