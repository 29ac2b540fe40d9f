"""
In-memory TTL cache
Backs the "current users" counter and the server-side session store
"""
import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class TTLCache:
    """
    Thread-safe key-value cache whose entries expire a fixed time after
    their last write.

    Every put() resets the entry's deadline, so a key that keeps being
    written never expires. Reads do not extend the deadline.

    Expired entries are swept on put() at most once per TTL period, so a
    key that is never read again still leaves memory within two TTLs.

    For production with multiple instances, consider using Redis.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # {key: (expires_at, value)}
        self._store: Dict[Hashable, Tuple[float, Any]] = {}
        self._next_sweep = float("-inf")

    def _purge_expired(self, now: float):
        """Drop every expired entry. Caller must hold the lock."""
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at <= now]
        for key in expired:
            del self._store[key]

    def put(self, key: Hashable, value: Any) -> None:
        """Store a value and (re)start its TTL"""
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._purge_expired(now)
                self._next_sweep = now + self.ttl_seconds
            self._store[key] = (now + self.ttl_seconds, value)

    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        """Return the cached value, or default if missing or expired"""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._store[key]
                return default
            return value

    def __contains__(self, key: Hashable) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._store)
