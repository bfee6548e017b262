"""
Redis cache implementation.
"""
import json
import logging
from typing import Any, Callable, Optional

from django.core.cache import cache

logger = logging.getLogger(__name__)


class RedisCache:
    """Prefixed wrapper over the Django cache storing JSON payloads."""

    def __init__(self, prefix: str = "", default_timeout: int = 300):
        self.prefix = prefix
        self.default_timeout = default_timeout

    def _make_key(self, key: str) -> str:
        """Create a cache key with prefix."""
        if self.prefix:
            return f"{self.prefix}:{key}"
        return key

    def get(self, key: str) -> Optional[Any]:
        """Get a value from cache. Unreadable entries count as a miss."""
        try:
            value = cache.get(self._make_key(key))
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if value is not None and isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return value

    def set(self, key: str, value: Any, timeout: int = None) -> None:
        """Set a value in cache. Write failures are logged, not raised."""
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        try:
            cache.set(self._make_key(key), value, timeout or self.default_timeout)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    def delete(self, key: str) -> None:
        """Delete a value from cache."""
        cache.delete(self._make_key(key))

    def get_or_set(self, key: str, default_func: Callable[[], Any], timeout: int = None) -> Any:
        """Get from cache or compute with default_func and store the result."""
        value = self.get(key)
        if value is None:
            value = default_func()
            self.set(key, value, timeout)
        return value
