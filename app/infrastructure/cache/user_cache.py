"""Process-local user snapshot cache keyed by principal ID.

Short-lived (default 5s) store that lets a burst of requests from the same
principal skip repeated user lookups. One instance per process, created with
the app and passed explicitly to the session resolver.

Unbounded and unsynchronized: concurrent writers on a key race and the last
write wins. Entries are advisory; nothing relies on their freshness beyond
the TTL check in is_valid().
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.application.dtos.user import UserResult

logger = logging.getLogger(__name__)

DEFAULT_USER_CACHE_TTL_MS = 5000


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000


@dataclass(frozen=True)
class CachedUserEntry:
    """A cached snapshot and its age at read time."""

    value: UserResult
    age_ms: float


class UserCache:
    """Principal ID → (user snapshot, capture timestamp) map with TTL check.

    get() returns stale entries too; callers use is_valid() to decide
    whether a snapshot may be trusted.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_USER_CACHE_TTL_MS,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        """Initialize an empty cache.

        Args:
            ttl_ms: Maximum age in milliseconds at which an entry is still valid.
            clock: Callable returning current time in milliseconds (inject for tests).
        """
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._entries: dict[str, tuple[UserResult, float]] = {}

    def get(self, key: str) -> CachedUserEntry | None:
        """Return the cached snapshot and its age, or None when absent."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, captured_at = entry
        return CachedUserEntry(value=value, age_ms=self._clock() - captured_at)

    def set(self, key: str, value: UserResult) -> None:
        """Store snapshot with the current timestamp (overwrites)."""
        self._entries[key] = (value, self._clock())
        logger.debug("User cache SET: %s", key)

    def invalidate(self, key: str) -> None:
        """Remove entry; no-op when absent."""
        if self._entries.pop(key, None) is not None:
            logger.debug("User cache INVALIDATE: %s", key)

    def is_valid(self, key: str) -> bool:
        """True iff an entry exists and its age is strictly below the TTL."""
        entry = self.get(key)
        return entry is not None and entry.age_ms < self.ttl_ms

    def __len__(self) -> int:
        return len(self._entries)
