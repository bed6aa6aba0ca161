"""Thread-safe in-memory cache for search results.

Entries expire after a TTL measured on a monotonic clock, and the least
recently used entry is evicted once `max_size` is reached. Hit and miss
counts are kept for diagnostics.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T")

_NEVER = float("inf")


class _Entry(NamedTuple):
    value: Any
    expires_at: float


@dataclass
class InMemoryCache(Generic[T]):
    """In-memory LRU cache with optional TTL.

    Implements CachePort.

    Attributes:
        default_ttl_seconds: Lifetime of an entry when `set` gives none;
            None keeps entries until evicted
        max_size: Entry count that triggers LRU eviction; None is unbounded
        name: Suffix of the cache logger name
        clock: Time source, monotonic by default

    Example:
        cache = InMemoryCache[tuple](name="places", default_ttl_seconds=3600)
        cache.set("belém tower lisbon:5:en:US", candidates)
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    _entries: "OrderedDict[str, _Entry]" = field(default_factory=OrderedDict, repr=False)
    _counts: Dict[str, int] = field(
        default_factory=lambda: {"hits": 0, "misses": 0}, repr=False
    )
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _expiry(self, ttl: Optional[float]) -> float:
        lifetime = self.default_ttl_seconds if ttl is None else ttl
        return _NEVER if lifetime is None else self.clock() + lifetime

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self.clock() >= entry.expires_at:
                self._entries.pop(key)
                self._logger.debug("Expired entry dropped", extra={"key": key})
                entry = None

            if entry is None:
                self._counts["misses"] += 1
                return None

            self._entries.move_to_end(key)
            self._counts["hits"] += 1
            return entry.value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        with self._lock:
            self._entries.pop(key, None)
            while self.max_size is not None and len(self._entries) >= self.max_size:
                oldest, _ = self._entries.popitem(last=False)
                self._logger.debug("Evicted least recently used entry", extra={"key": oldest})
            self._entries[key] = _Entry(value, self._expiry(ttl))

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._counts = {"hits": 0, "misses": 0}
        self._logger.info("Cache cleared", extra={"dropped": dropped})
        return dropped

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        """Return size, hit and miss counts and the hit rate in percent."""
        with self._lock:
            hits, misses = self._counts["hits"], self._counts["misses"]
            lookups = hits + misses
            return {
                "size": len(self._entries),
                "hits": hits,
                "misses": misses,
                "hit_rate_percent": round(hits / lookups * 100, 1) if lookups else 0.0,
            }
