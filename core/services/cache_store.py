"""Time-bounded cache component over a Django cache alias."""

from typing import Any

from django.core.cache import caches


class CacheStore:
    """Injectable get/put cache with a key prefix and a fixed TTL.

    Each instance owns a key namespace so ``clear()`` only drops its own
    entries, not the whole cache backend.
    """

    def __init__(self, prefix: str, ttl_seconds: int, alias: str = "default") -> None:
        """Initialize the store.

        Args:
            prefix: Namespace prepended to every key
            ttl_seconds: Lifetime of stored values
            alias: Django cache alias to use
        """
        self.prefix = prefix
        self.ttl_seconds = ttl_seconds
        self.alias = alias
        self._generation_key = f"{prefix}:generation"

    @property
    def _cache(self):
        return caches[self.alias]

    def _key(self, key: str) -> str:
        generation = self._cache.get_or_set(self._generation_key, 1, timeout=None)
        return f"{self.prefix}:{generation}:{key}"

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""
        return self._cache.get(self._key(key))

    def put(self, key: str, value: Any) -> None:
        """Store a value for the configured TTL."""
        self._cache.set(self._key(key), value, timeout=self.ttl_seconds)

    def clear(self) -> None:
        """Invalidate every entry of this store."""
        try:
            self._cache.incr(self._generation_key)
        except ValueError:
            self._cache.set(self._generation_key, 2, timeout=None)
