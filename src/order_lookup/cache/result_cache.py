"""
Result Cache

In-memory TTL cache for lookup results.

- Entries expire a fixed TTL after they are written (no sliding expiry).
- At most max_keys keys; writing a new key to a full cache evicts the
  oldest entry by insertion time.
- Values longer than max_value_length are not stored.
- Safe to share between worker threads.
- Values are deep-copied on the way in and out; callers never hold a
  reference into the cache.
"""

import copy
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60  # 1 hour
DEFAULT_MAX_KEYS = 1000
DEFAULT_MAX_VALUE_LENGTH = 1000


class ResultCache:
    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_keys: int = DEFAULT_MAX_KEYS,
        max_value_length: int = DEFAULT_MAX_VALUE_LENGTH,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_keys < 1:
            raise ValueError("max_keys must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_keys = max_keys
        self.max_value_length = max_value_length
        self._clock = clock
        self._lock = threading.Lock()
        # key -> {"value": ..., "expires_at": ...}, oldest write first
        self._entries: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry["expires_at"] <= self._clock():
                del self._entries[key]
                return None
            value = entry["value"]
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> bool:
        """
        Store a value.

        Returns:
            True if stored, False if the value was too large to cache
        """
        if isinstance(value, Sequence) and len(value) > self.max_value_length:
            logger.info(
                "Result too large to cache",
                extra={"cache_key": key, "result_count": len(value)}
            )
            return False

        value = copy.deepcopy(value)

        with self._lock:
            if key in self._entries:
                # Re-set counts as a fresh insertion
                del self._entries[key]
            elif len(self._entries) >= self.max_keys:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry", extra={"cache_key": evicted})
            self._entries[key] = {
                "value": value,
                "expires_at": self._clock() + self.ttl_seconds,
            }
        return True

    def evict(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
