"""Process-local cache with a fixed expiry window."""
import threading
import time
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

V = TypeVar("V")

DEFAULT_MAX_ENTRIES = 1024


class TTLCache(Generic[V]):
    """Thread-safe, size-bounded mapping whose entries expire after a fixed window.

    Writers overwrite each other (last writer wins). Expired entries are
    dropped on read of their key and swept on every write; when the cache
    is still full the oldest write is evicted. Nothing survives a process
    restart.

    Attributes:
        ttl: Seconds an entry stays valid after it is written.
        max_entries: Upper bound on stored entries.
    """

    def __init__(
        self,
        ttl: float,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            ttl: Seconds an entry stays valid.
            max_entries: Upper bound on stored entries, at least 1.
            clock: Time source, injectable for tests.
        """
        self.ttl = ttl
        self.max_entries = max(1, max_entries)
        self._clock = clock
        self._entries: dict[Hashable, tuple[V, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> V | None:
        """Return the cached value, or None if absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if now >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: Hashable, value: V) -> None:
        """Store a value for the configured window."""
        now = self._clock()
        with self._lock:
            self._purge_expired(now)
            # re-inserting moves the key to the end of the eviction order
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                del self._entries[next(iter(self._entries))]
            self._entries[key] = (value, now + self.ttl)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def stored(self) -> int:
        """Number of entries held in memory, expired or not."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for _, expires_at in self._entries.values() if now < expires_at)
