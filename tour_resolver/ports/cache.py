"""Cache port - Injectable caching abstraction.

Search adapters cache candidate lists per normalized query so that a
place proposed twice, or a request retried by the user, does not hit the
search service's rate limit again.
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching.

    Implementation: adapters/cache/memory_cache.py (InMemoryCache)
    """

    def get(self, key: str) -> Optional[T]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Set a value in the cache.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Optional TTL override for this entry.
        """
        ...

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry.

        Args:
            key: The cache key to invalidate.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...
