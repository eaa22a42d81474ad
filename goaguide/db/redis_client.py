"""
db/redis_client.py
-------------------
redis-py client singleton used by RedisTTLCache.

Environment variables (set in config.py):
    REDIS_HOST        default: localhost
    REDIS_PORT        default: 6379
    REDIS_DB          default: 0
    REDIS_PASSWORD    default: ""  (empty = no auth)
    REDIS_TIMEOUT_S   default: 2   (connect + read, seconds)
"""

from __future__ import annotations

from typing import Any

import redis

from goaguide import config

# Module-level singleton; initialised lazily on first call to get_redis()
_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return the singleton Redis client, creating it on first call."""
    global _client
    if _client is None:
        kwargs: dict[str, Any] = {
            "host":                   config.REDIS_HOST,
            "port":                   config.REDIS_PORT,
            "db":                     config.REDIS_DB,
            "decode_responses":       True,   # return str, not bytes
            "socket_timeout":         config.REDIS_TIMEOUT_S,
            "socket_connect_timeout": config.REDIS_TIMEOUT_S,
        }
        if config.REDIS_PASSWORD:
            kwargs["password"] = config.REDIS_PASSWORD
        _client = redis.Redis(**kwargs)
    return _client
