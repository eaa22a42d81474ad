"""
db/cache.py
-----------
Time-bounded lookup cache for weather, routing and day-tip responses.

The cache is injected into each tool rather than referenced as module
state, so tests can pass a fresh InMemoryTTLCache (or any object with the
same get/set shape).

Key schema:
    {namespace}:{sha1(canonical JSON of the query parameters)}
    e.g. weather:5d41402abc4b2a76b9719d911017c592...

Backends:
    in_memory: per-process dict guarded by a lock; TTL expiry plus LRU
               eviction once CACHE_MAX_ENTRIES is reached.
    redis:     SETEX with JSON-encoded values; safe across workers.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Protocol

import redis

from goaguide import config
from goaguide.db.redis_client import get_redis

logger = logging.getLogger(__name__)


def make_cache_key(namespace: str, params: dict[str, Any]) -> str:
    """Stable key: identical params (in any order) always hash the same."""
    canonical = json.dumps(params, sort_keys=True, default=str, separators=(",", ":"))
    digest = hashlib.sha1(canonical.encode("utf-8")).hexdigest()
    return f"{namespace}:{digest}"


class TTLCache(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None: ...


class InMemoryTTLCache:
    """Thread-safe TTL cache with least-recently-used eviction."""

    def __init__(
        self,
        default_ttl: int = 600,
        max_entries: int = config.CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._data: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._data[key]
                return None
            self._data.move_to_end(key)
            return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._data[key] = (self._clock() + ttl, value)
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                self._data.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class RedisTTLCache:
    """
    Redis-backed cache.  Values must be JSON-serialisable.

    Redis errors are logged and treated as a miss / no-op: the cache only
    saves external calls and is never required for correctness.
    """

    def __init__(self, client: Optional[redis.Redis] = None, default_ttl: int = 600) -> None:
        self._client = client
        self.default_ttl = default_ttl

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis()
        return self._client

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self.client.get(key)
        except redis.RedisError as exc:
            logger.warning("Redis GET %s failed: %s", key, exc)
            return None
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            self.client.setex(key, self.default_ttl if ttl is None else ttl, json.dumps(value))
        except redis.RedisError as exc:
            logger.warning("Redis SETEX %s failed: %s", key, exc)


_shared: Optional[TTLCache] = None
_shared_lock = threading.Lock()


def get_cache() -> TTLCache:
    """Process-wide cache selected by CACHE_BACKEND (built once)."""
    global _shared
    with _shared_lock:
        if _shared is None:
            if config.CACHE_BACKEND == "redis":
                _shared = RedisTTLCache()
            else:
                _shared = InMemoryTTLCache()
        return _shared
