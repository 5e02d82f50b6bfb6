"""Thread-safe TTL cache with load-on-miss and per-key coalescing."""
from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Iterator, TypeVar

from fxrates.core.exceptions import InvalidArgument

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    expires_at: float


class _Slot:
    """Per-key lock plus the number of callers holding or waiting on it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class TtlCache(Generic[K, V]):
    """Maps keys to loaded values that stay valid for ``ttl_seconds``.

    ``get_or_load`` runs "check freshness, else load" atomically per key:
    concurrent callers for the same key wait for the one in-flight load and
    then read its result, while unrelated keys load independently. A loader
    that raises leaves the cache untouched, so the next caller retries.

    Expired entries are evicted lazily on access; ``size()`` counts them until
    then. An entry whose ``expires_at`` equals the current time is expired.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time):
        if ttl_seconds <= 0:
            raise InvalidArgument(f"ttl_seconds must be > 0, got {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._slots: dict[K, _Slot] = {}
        # guards _entries and _slots; never held while a loader runs
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def peek(self, key: K) -> V | None:
        """Return the fresh value for ``key`` without loading, or None."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() < entry.expires_at:
            return entry.value

        with self._lock:
            # only evict what was read; a put or reload may have replaced it
            if self._entries.get(key) is entry:
                del self._entries[key]
        return None

    def get_or_load(self, key: K, loader: Callable[[], V]) -> V:
        with self._slot(key):
            now = self._clock()
            with self._lock:
                entry = self._entries.get(key)
            if entry is not None and now < entry.expires_at:
                return entry.value

            logger.debug(f"Cache {'expired' if entry else 'miss'} for {key}, loading")
            value = loader()
            with self._lock:
                self._entries[key] = CacheEntry(value, now + self._ttl)
            return value

    def put(self, key: K, value: V) -> None:
        expires_at = self._clock() + self._ttl
        with self._lock:
            self._entries[key] = CacheEntry(value, expires_at)

    def invalidate(self, key: K) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"TtlCache(ttl={self._ttl}s, size={self.size()})"

    @contextmanager
    def _slot(self, key: K) -> Iterator[None]:
        with self._lock:
            slot = self._slots.get(key)
            if slot is None:
                slot = self._slots[key] = _Slot()
            slot.users += 1
        try:
            with slot.lock:
                yield
        finally:
            with self._lock:
                slot.users -= 1
                if slot.users == 0:
                    del self._slots[key]
