"""
Caching utilities for API endpoints.
"""

import hashlib
import json
import time
from typing import Any, Callable, Dict, Optional
from functools import wraps
import logging

from config import STATISTICS_CACHE_TTL

logger = logging.getLogger(__name__)

# In-memory cache with TTL
_cache: Dict[str, Dict[str, Any]] = {}
CACHE_TTL = STATISTICS_CACHE_TTL


def _generate_cache_key(func_name: str, *args, **kwargs) -> str:
    """Generate a cache key from function name and arguments."""
    # Sessions are not serializable and not part of the key
    cache_kwargs = {k: v for k, v in kwargs.items() if k != "db"}

    key_data = {
        "func": func_name,
        "args": args,
        "kwargs": cache_kwargs,
    }
    key_str = json.dumps(key_data, sort_keys=True, default=str)
    return hashlib.md5(key_str.encode()).hexdigest()


def cached(ttl: Optional[int] = None):
    """
    Decorator to cache API endpoint responses.

    Args:
        ttl: Time to live in seconds (default: STATISTICS_CACHE_TTL)
    """
    ttl = CACHE_TTL if ttl is None else ttl

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache_key = _generate_cache_key(func.__name__, *args, **kwargs)

            if cache_key in _cache:
                entry = _cache[cache_key]
                if time.time() - entry["timestamp"] < ttl:
                    logger.debug(f"Cache HIT for {func.__name__}")
                    return entry["data"]
                else:
                    del _cache[cache_key]
                    logger.debug(f"Cache EXPIRED for {func.__name__}")

            logger.debug(f"Cache MISS for {func.__name__}")
            result = await func(*args, **kwargs)

            _cache[cache_key] = {
                "data": result,
                "timestamp": time.time(),
            }

            return result

        return wrapper

    return decorator


def clear_cache():
    """Clear all cached entries (called after listing writes)."""
    _cache.clear()
    logger.info("Cache cleared")


def get_cache_stats() -> Dict[str, Any]:
    """Get cache statistics."""
    now = time.time()
    active_entries = sum(
        1 for entry in _cache.values() if now - entry["timestamp"] < CACHE_TTL
    )
    return {
        "total_entries": len(_cache),
        "active_entries": active_entries,
        "expired_entries": len(_cache) - active_entries,
        "ttl_seconds": CACHE_TTL,
    }
