"""
Caching utility module for Absorbey.

Video metadata and transcripts are looked up by video ID on every new project,
so results are cached in Redis when ``REDIS_URL`` is configured and in process
memory otherwise.
"""

import json
import time
import functools
from typing import Any, Optional, Tuple

import redis

from app.utils.logger import logging

# Redis client, set by setup_redis_cache
_redis_client: Optional[redis.Redis] = None

# key -> (expiry timestamp, serialized value)
_memory_cache = {}

KEY_TYPES = (str, int, float, bool)


def setup_redis_cache(redis_url: str) -> bool:
    """
    Connect the cache to Redis.

    Args:
        redis_url: Redis connection URL

    Returns:
        True if Redis answered a ping, False if the memory cache stays in use
    """
    global _redis_client

    try:
        client = redis.from_url(redis_url)
        client.ping()
    except redis.RedisError as e:
        logging.error(f"Redis unavailable, using in-memory cache: {e}")
        _redis_client = None
        return False

    _redis_client = client
    logging.info("Redis cache configured successfully")
    return True


def is_redis_available() -> bool:
    return _redis_client is not None


def cache_set(key: str, value: Any, expires: int = 3600) -> bool:
    """
    Store a JSON-serializable value for ``expires`` seconds.

    Returns:
        False if the value could not be serialized
    """
    try:
        payload = json.dumps(value)
    except (TypeError, ValueError):
        logging.error(f"Cannot cache non-JSON value for key {key}")
        return False

    if is_redis_available():
        try:
            _redis_client.setex(key, expires, payload)
            return True
        except redis.RedisError as e:
            logging.error(f"Redis error in cache_set: {e}")

    _memory_cache[key] = (time.time() + expires, payload)
    return True


def cache_get(key: str) -> Optional[Any]:
    """Return the cached value for a key, or None if missing or expired."""
    if is_redis_available():
        try:
            payload = _redis_client.get(key)
            if payload:
                return json.loads(payload)
        except redis.RedisError as e:
            logging.error(f"Redis error in cache_get: {e}")

    entry: Optional[Tuple[float, str]] = _memory_cache.get(key)
    if entry is None:
        return None

    expires_at, payload = entry
    if expires_at <= time.time():
        del _memory_cache[key]
        return None
    return json.loads(payload)


def cache_delete(key: str) -> bool:
    """Remove a key from both caches; True if either held it."""
    deleted = False
    if is_redis_available():
        try:
            deleted = bool(_redis_client.delete(key))
        except redis.RedisError as e:
            logging.error(f"Redis error in cache_delete: {e}")

    return _memory_cache.pop(key, None) is not None or deleted


def make_cache_key(prefix: str, name: str, args: tuple, kwargs: dict) -> str:
    """
    Build a cache key from the primitive call arguments.

    Non-primitive arguments such as ``self`` are left out, so decorated
    methods share one cache across instances.
    """
    parts = [prefix, name]
    parts.extend(str(arg) for arg in args if isinstance(arg, KEY_TYPES))
    parts.extend(f"{k}={v}" for k, v in sorted(kwargs.items()) if isinstance(v, KEY_TYPES))
    return ":".join(parts)


def cached(expires: int = 3600, prefix: str = "cache"):
    """
    Decorator for caching function results.

    ``None`` results are not cached so failed lookups are retried.

    Args:
        expires: Cache expiration time in seconds
        prefix: Prefix for cache keys
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = make_cache_key(prefix, func.__name__, args, kwargs)

            hit = cache_get(key)
            if hit is not None:
                logging.debug(f"Cache hit: {key}")
                return hit

            result = func(*args, **kwargs)
            if result is not None:
                cache_set(key, result, expires)
            return result
        return wrapper
    return decorator


def clear_memory_cache():
    """Clear the in-memory cache."""
    _memory_cache.clear()
