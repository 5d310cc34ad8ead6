"""Thread-safe JSON value cache with TTLs, eviction callbacks and import/export."""

from __future__ import annotations

import dataclasses
import json
import logging
import math
import re
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional

_log = logging.getLogger(__name__)

EvictionCallback = Callable[[str, Any], None]

# Rough fixed cost of one entry on top of its serialised value.
_ENTRY_OVERHEAD = 96


class CacheError(ValueError):
    """Raised for invalid cache operations, such as an empty key."""


class CacheEntry:
    """A cached value with creation and expiry times (seconds since the epoch)."""

    __slots__ = ("value", "created_at", "expires_at", "is_persistent")

    def __init__(self, value: Any, ttl: float = 0, persistent: bool = False) -> None:
        self.value = value
        self.created_at = time.time()
        self.is_persistent = persistent
        self.expires_at = self.created_at + ttl if ttl > 0 else math.inf

    def is_expired(self) -> bool:
        return not self.is_persistent and time.time() > self.expires_at

    def __repr__(self) -> str:
        return (
            f"CacheEntry(value={self.value!r}, expires_at={self.expires_at!r}, "
            f"is_persistent={self.is_persistent!r})"
        )


@dataclass
class CacheStats:
    total_entries: int = 0
    expired_entries: int = 0
    persistent_entries: int = 0
    memory_usage_bytes: int = 0
    last_cleanup: float = field(default_factory=time.time)


@dataclass
class CacheConfig:
    """Cache settings; durations are in seconds."""

    max_entries: int = 10000
    default_ttl: float = 3600
    cleanup_interval: float = 300
    enable_persistence: bool = False
    enable_compression: bool = False
    cleanup_threshold: float = 0.8


def _pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard pattern where * matches any run and ? any one character."""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _estimate_memory_usage(value: Any) -> int:
    dumped = json.dumps(value, separators=(",", ":"), default=str)
    return len(dumped) + _ENTRY_OVERHEAD


def _to_epoch_seconds(value: float) -> Optional[int]:
    return None if math.isinf(value) else int(value)


def _from_epoch_seconds(value: Any) -> float:
    return math.inf if value is None else float(value)


class CacheManager:
    """In-memory cache keyed by string with per-entry TTLs and persistent entries."""

    def __init__(self, config: Optional[CacheConfig] = None) -> None:
        self._config = config if config is not None else CacheConfig()
        self._lock = threading.RLock()
        self._cache: dict[str, CacheEntry] = {}
        self._stats = CacheStats()
        self._callbacks: list[EvictionCallback] = []
        self._last_cleanup = time.time()
        _log.info("CacheManager initialized with max_entries: %d", self._config.max_entries)

    # Core operations

    def set(self, key: str, value: Any, ttl: float = 0) -> None:
        """Store value under key; a ttl of 0 uses the configured default."""
        if not key:
            raise CacheError("Cache key cannot be empty")
        with self._lock:
            self._prepare_for_insert(1, exact=False)
            self._cache[key] = CacheEntry(value, ttl if ttl > 0 else self._config.default_ttl)
            self._update_stats()
            _log.debug("Cache entry set: %s", key)

    def get(self, key: str) -> Any:
        """Return the cached value, or None if missing or expired."""
        if not key:
            return None
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if entry.is_expired():
                del self._cache[key]
                self._update_stats()
                _log.debug("Cache entry expired and removed: %s", key)
                return None
            return entry.value

    def remove(self, key: str) -> None:
        if not key:
            return
        with self._lock:
            entry = self._cache.pop(key, None)
            if entry is not None:
                self._notify_eviction(key, entry.value)
                self._update_stats()
                _log.debug("Cache entry removed: %s", key)

    def clear(self) -> None:
        with self._lock:
            for key, entry in self._cache.items():
                self._notify_eviction(key, entry.value)
            self._cache.clear()
            self._update_stats()
            _log.info("Cache cleared")

    def exists(self, key: str) -> bool:
        if not key:
            return False
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False
            if entry.is_expired():
                del self._cache[key]
                self._update_stats()
                return False
            return True

    def keys(self, pattern: str = "*") -> list[str]:
        """Return live keys matching a wildcard pattern."""
        regex = _pattern_to_regex(pattern)
        with self._lock:
            return [
                key
                for key, entry in self._cache.items()
                if not entry.is_expired() and regex.fullmatch(key)
            ]

    # Configuration and statistics

    def set_config(self, config: CacheConfig) -> None:
        with self._lock:
            self._config = config
            excess = len(self._cache) - config.max_entries
            if excess > 0:
                self._evict_lru(excess)
            _log.info("Cache configuration updated")

    def get_config(self) -> CacheConfig:
        with self._lock:
            return self._config

    def get_stats(self) -> CacheStats:
        with self._lock:
            return dataclasses.replace(self._stats)

    def force_cleanup(self) -> None:
        with self._lock:
            self._cleanup_expired(force=True)

    def add_eviction_callback(self, callback: EvictionCallback) -> None:
        with self._lock:
            self._callbacks.append(callback)

    def remove_eviction_callback(self, callback: EvictionCallback) -> None:
        with self._lock:
            self._callbacks = [cb for cb in self._callbacks if cb != callback]

    # Bulk and special operations

    def set_persistent(self, key: str, value: Any) -> None:
        """Store value under key so that it never expires nor is evicted."""
        if not key:
            raise CacheError("Cache key cannot be empty")
        with self._lock:
            self._prepare_for_insert(1, exact=False)
            self._cache[key] = CacheEntry(value, 0, persistent=True)
            self._update_stats()
            _log.debug("Persistent cache entry set: %s", key)

    def get_multiple(self, keys: Iterable[str]) -> dict[str, Any]:
        with self._lock:
            result = {}
            for key in keys:
                entry = self._cache.get(key)
                if entry is not None and not entry.is_expired():
                    result[key] = entry.value
            return result

    def set_multiple(self, entries: Mapping[str, Any], ttl: float = 0) -> None:
        """Store every non-empty key of entries with one shared TTL."""
        with self._lock:
            self._prepare_for_insert(len(entries), exact=True)
            effective_ttl = ttl if ttl > 0 else self._config.default_ttl
            for key, value in entries.items():
                if key:
                    self._cache[key] = CacheEntry(value, effective_ttl)
            self._update_stats()
            _log.debug("Multiple cache entries set: %d", len(entries))

    def remove_multiple(self, keys: Iterable[str]) -> None:
        with self._lock:
            count = 0
            for key in keys:
                count += 1
                entry = self._cache.pop(key, None)
                if entry is not None:
                    self._notify_eviction(key, entry.value)
            self._update_stats()
            _log.debug("Multiple cache entries removed: %d", count)

    def get_matching(self, pattern: str) -> list[tuple[str, Any]]:
        regex = _pattern_to_regex(pattern)
        with self._lock:
            return [
                (key, entry.value)
                for key, entry in self._cache.items()
                if not entry.is_expired() and regex.fullmatch(key)
            ]

    def get_memory_usage(self) -> int:
        with self._lock:
            return self._stats.memory_usage_bytes

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_ttl(self, key: str) -> float:
        """Whole seconds left for key; 0 if missing or expired, inf if it never expires."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None or entry.is_expired():
                return 0
            if entry.is_persistent or math.isinf(entry.expires_at):
                return math.inf
            remaining = entry.expires_at - time.time()
            return int(remaining) if remaining > 0 else 0

    def update_ttl(self, key: str, ttl: float) -> None:
        """Reset the expiry of a non-persistent key; ttl <= 0 means never expire."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None and not entry.is_persistent:
                entry.expires_at = time.time() + ttl if ttl > 0 else math.inf
                _log.debug("TTL updated for key: %s", key)

    def export_cache(self) -> dict[str, Any]:
        """Return a JSON-compatible snapshot of live entries and the configuration."""
        with self._lock:
            entries = {
                key: {
                    "value": entry.value,
                    "created_at": int(entry.created_at),
                    "expires_at": _to_epoch_seconds(entry.expires_at),
                    "is_persistent": entry.is_persistent,
                }
                for key, entry in self._cache.items()
                if not entry.is_expired()
            }
            config = self._config
            return {
                "entries": entries,
                "config": {
                    "max_entries": config.max_entries,
                    "default_ttl": config.default_ttl,
                    "cleanup_interval": config.cleanup_interval,
                    "enable_persistence": config.enable_persistence,
                    "enable_compression": config.enable_compression,
                    "cleanup_threshold": config.cleanup_threshold,
                },
            }

    def import_cache(self, data: Mapping[str, Any], overwrite: bool = False) -> None:
        """Load entries from an export; malformed entries are logged and skipped."""
        if "entries" not in data:
            return
        with self._lock:
            for key, entry_data in data["entries"].items():
                if not key:
                    continue
                if not overwrite and key in self._cache:
                    continue
                try:
                    entry = CacheEntry(entry_data["value"])
                    entry.created_at = float(entry_data.get("created_at", 0))
                    entry.expires_at = _from_epoch_seconds(entry_data.get("expires_at", 0))
                    entry.is_persistent = bool(entry_data.get("is_persistent", False))
                except (KeyError, TypeError, ValueError, AttributeError) as exc:
                    _log.error("Failed to import cache entry %s: %s", key, exc)
                    continue
                self._cache[key] = entry
            self._update_stats()
            _log.info("Cache import completed")

    # Internals; callers hold the lock.

    def _prepare_for_insert(self, count: int, exact: bool) -> None:
        if self._should_cleanup():
            self._cleanup_expired()
        if exact:
            if len(self._cache) + count > self._config.max_entries:
                self._evict_lru(count)
        elif len(self._cache) >= self._config.max_entries:
            self._evict_lru()

    def _should_cleanup(self) -> bool:
        return time.time() - self._last_cleanup >= self._config.cleanup_interval

    def _cleanup_expired(self, force: bool = False) -> None:
        if not force and not self._should_cleanup():
            return
        expired = [key for key, entry in self._cache.items() if entry.is_expired()]
        for key in expired:
            entry = self._cache.pop(key)
            self._notify_eviction(key, entry.value)
        self._last_cleanup = time.time()
        self._update_stats()
        if expired:
            _log.debug("Cleaned up %d expired cache entries", len(expired))

    def _evict_lru(self, required_space: int = 0) -> None:
        if not self._cache:
            return
        to_remove = (
            required_space
            if required_space > 0
            else int(len(self._cache) * self._config.cleanup_threshold)
        )
        victims = [key for key, entry in self._cache.items() if not entry.is_persistent]
        victims = victims[:to_remove]
        for key in victims:
            entry = self._cache.pop(key)
            self._notify_eviction(key, entry.value)
        self._update_stats()
        _log.debug("Evicted %d cache entries", len(victims))

    def _update_stats(self) -> None:
        stats = self._stats
        stats.total_entries = len(self._cache)
        stats.expired_entries = 0
        stats.persistent_entries = 0
        stats.memory_usage_bytes = 0
        for key, entry in self._cache.items():
            if entry.is_expired():
                stats.expired_entries += 1
            if entry.is_persistent:
                stats.persistent_entries += 1
            stats.memory_usage_bytes += len(key) + _estimate_memory_usage(entry.value)
        stats.last_cleanup = self._last_cleanup

    def _notify_eviction(self, key: str, value: Any) -> None:
        for callback in list(self._callbacks):
            try:
                callback(key, value)
            except Exception as exc:
                _log.error("Eviction callback error: %s", exc)


class CacheFactory:
    """Creates cache instances."""

    @staticmethod
    def create_memory_cache(config: Optional[CacheConfig] = None) -> CacheManager:
        return CacheManager(config)

    @staticmethod
    def create_redis_cache(
        config: Optional[CacheConfig] = None, connection_string: str = ""
    ) -> CacheManager:
        """Redis storage is unavailable; falls back to an in-memory cache."""
        _log.warning("Redis cache not implemented yet, falling back to memory cache")
        return CacheFactory.create_memory_cache(config)