"""Simple thread-safe in-memory cache with per-entry expiry and glob key lookup."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any

_DEFAULT_TTL = 3600.0


@dataclass
class _Entry:
    value: Any
    expiry: float

    def is_expired(self, now: float) -> bool:
        return now > self.expiry


class MemoryCache:
    """Key/value store whose entries expire after a TTL in seconds (one hour by default)."""

    def __init__(self) -> None:
        self._cache: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: Any, ttl: float = 0) -> None:
        """Store value under key; a ttl of 0 means one hour."""
        if ttl == 0:
            ttl = _DEFAULT_TTL
        with self._lock:
            self._cache[key] = _Entry(value, time.time() + ttl)

    def get(self, key: str) -> Any:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if entry.is_expired(time.time()):
                del self._cache[key]
                return None
            return entry.value

    def remove(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def exists(self, key: str) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False
            if entry.is_expired(time.time()):
                del self._cache[key]
                return False
            return True

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def keys(self, pattern: str = "*") -> list[str]:
        """Return live keys matching a shell-style glob pattern."""
        with self._lock:
            self._cleanup_expired()
            if pattern == "*":
                return list(self._cache)
            return [key for key in self._cache if fnmatchcase(key, pattern)]

    def _cleanup_expired(self) -> None:
        now = time.time()
        expired = [key for key, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired:
            del self._cache[key]