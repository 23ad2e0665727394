"""In-memory caches for fund data (process lifetime, no external store)."""

import time
from collections.abc import Callable
from typing import Any

# Marks a key whose fetch failed; distinct from a key never attempted.
FAILED = object()


class SnapshotCache:
    """Single-slot cache holding one snapshot and the time it was stored.

    The slot is only ever replaced as a whole.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.time):
        self._ttl = ttl
        self._clock = clock
        self._snapshot: list[Any] | None = None
        self._stored_at = 0.0

    @property
    def stored_at(self) -> float:
        return self._stored_at

    def get(self) -> list[Any] | None:
        """Return the snapshot if it is non-empty and younger than the TTL."""
        if not self._snapshot:
            return None
        if self._clock() - self._stored_at >= self._ttl:
            return None
        return self._snapshot

    def peek(self) -> list[Any] | None:
        """Return the stored snapshot regardless of age."""
        return self._snapshot

    def set(self, snapshot: list[Any]) -> None:
        self._snapshot = list(snapshot)
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._snapshot = None
        self._stored_at = 0.0


class KeyedCache:
    """Per-key cache without expiry.

    Values may be ``FAILED`` to record a fetch that should not be retried.
    """

    def __init__(self):
        self._store: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def mark_failed(self, key: str) -> None:
        self._store[key] = FAILED

    def is_failed(self, key: str) -> bool:
        return self._store.get(key) is FAILED

    def clear(self) -> None:
        self._store.clear()
