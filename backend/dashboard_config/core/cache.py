"""
In-memory TTL cache for resolved white-label configurations.

Resolution is pure, so an entry can only go stale when its inputs change;
keys are built from every input (see make_cache_key) and writes to a venue's
overrides drop that venue's prefix.
"""
from typing import Any, Dict, Optional
import hashlib
import json
import logging
import time

logger = logging.getLogger(__name__)


class SimpleCache:
    """Process-local cache with per-entry TTL and a size cap."""

    MAX_ENTRIES = 10000

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._expires_at: Dict[str, float] = {}
        self.hits = 0
        self.misses = 0

    def _evict_expired(self):
        now = time.monotonic()
        for key in [k for k, exp in self._expires_at.items() if exp <= now]:
            self.delete(key)

    def get(self, key: str) -> Optional[Any]:
        """Value for ``key``, or None if absent or expired."""
        expires_at = self._expires_at.get(key)
        if expires_at is not None and time.monotonic() < expires_at:
            self.hits += 1
            return self._entries[key]
        if expires_at is not None:
            self.delete(key)
        self.misses += 1
        return None

    def set(self, key: str, value: Any, ttl_seconds: int = 60):
        """Store ``value``. A non-positive TTL means "don't cache"."""
        if ttl_seconds <= 0:
            return
        if len(self._entries) >= self.MAX_ENTRIES:
            self._evict_expired()
        if len(self._entries) >= self.MAX_ENTRIES:
            # Still full: drop the entries closest to expiry
            for k in sorted(self._expires_at, key=self._expires_at.get)[:100]:
                self.delete(k)
        self._entries[key] = value
        self._expires_at[key] = time.monotonic() + ttl_seconds

    def delete(self, key: str):
        self._entries.pop(key, None)
        self._expires_at.pop(key, None)

    def clear_prefix(self, prefix: str) -> int:
        """Drop every key starting with ``prefix``; returns how many."""
        keys = [k for k in self._entries if k.startswith(prefix)]
        for key in keys:
            self.delete(key)
        if keys:
            logger.debug("Invalidated %d cached entries under %r", len(keys), prefix)
        return len(keys)

    def clear(self):
        self._entries.clear()
        self._expires_at.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> dict:
        now = time.monotonic()
        valid = sum(1 for exp in self._expires_at.values() if exp > now)
        return {
            "total_keys": len(self._entries),
            "valid_keys": valid,
            "hits": self.hits,
            "misses": self.misses,
        }


cache = SimpleCache()


def make_cache_key(*args, **kwargs) -> str:
    """Stable digest of JSON-serializable arguments."""
    key_data = json.dumps({"args": args, "kwargs": kwargs}, sort_keys=True, default=str)
    return hashlib.md5(key_data.encode()).hexdigest()
