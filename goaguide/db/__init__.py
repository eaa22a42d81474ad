"""
db package — short-lived lookup cache shared across planning requests.

Usage:
    from goaguide.db import get_cache, make_cache_key

    cache = get_cache()
    key = make_cache_key("weather", {"city": "goa"})
    cache.set(key, {"temp": 29.5}, ttl=600)
"""
from goaguide.db.cache import (
    InMemoryTTLCache,
    RedisTTLCache,
    TTLCache,
    get_cache,
    make_cache_key,
)

__all__ = [
    "InMemoryTTLCache",
    "RedisTTLCache",
    "TTLCache",
    "get_cache",
    "make_cache_key",
]
