"""
stores.py

Key/value stores behind the search cache.

Both stores speak the same verbs: get / set / expire, plus ttl for
reporting how long a hit has left. Keys and values are plain strings.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol

import redis

from ytimport.logger import get_logger

logger = get_logger(__name__)

FILE_CACHE_VERSION = 1


class CacheError(Exception):
    """The cache store could not be reached or returned garbage."""


class CacheStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def expire(self, key: str, seconds: int) -> bool: ...

    def ttl(self, key: str) -> Optional[float]: ...

    def close(self) -> None: ...


# ============================================================
# Redis
# ============================================================


class RedisCacheStore:
    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str, timeout: float) -> RedisCacheStore:
        try:
            client = redis.Redis.from_url(
                url,
                decode_responses=True,
                socket_timeout=timeout,
                socket_connect_timeout=timeout,
            )
        except ValueError as e:
            raise CacheError(f"Invalid REDIS_URL {url!r}: {e}") from e
        return cls(client)

    def ping(self) -> None:
        try:
            self.client.ping()
        except redis.RedisError as e:
            raise CacheError(f"Redis unavailable: {e}") from e

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except UnicodeDecodeError as e:
            logger.warning(f"Ignoring undecodable cache entry {key!r}: {e}")
            return None
        except redis.RedisError as e:
            raise CacheError(f"GET {key!r} failed: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            raise CacheError(f"SET {key!r} failed: {e}") from e

    def expire(self, key: str, seconds: int) -> bool:
        try:
            return bool(self.client.expire(key, seconds))
        except redis.RedisError as e:
            raise CacheError(f"EXPIRE {key!r} failed: {e}") from e

    def ttl(self, key: str) -> Optional[float]:
        try:
            left = self.client.ttl(key)
        except redis.RedisError as e:
            raise CacheError(f"TTL {key!r} failed: {e}") from e
        # -2: no such key, -1: no expiry
        return float(left) if left is not None and left >= 0 else None

    def close(self) -> None:
        self.client.close()


# ============================================================
# Local JSON file
# ============================================================


def _write_json(path: Path, obj: Any) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False, sort_keys=True)
    tmp.replace(path)


class JsonFileCacheStore:
    """
    Single-file store for operators without a Redis server.

    Layout:
      {"version": 1, "entries": {key: {"value": str, "expires_at": float | null}}}

    Like Redis SET, set() drops any previous expiry on the key.
    """

    def __init__(self, path: Path, clock: Callable[[], float] = time.time) -> None:
        self.path = path
        self.clock = clock
        self._entries: Dict[str, Dict[str, Any]] = self._load()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                obj = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Search cache file unreadable, starting fresh: {e}")
            return {}

        if not isinstance(obj, dict) or obj.get("version") != FILE_CACHE_VERSION:
            logger.warning("Search cache file invalid or unsupported; starting fresh.")
            return {}

        entries = obj.get("entries")
        if not isinstance(entries, dict):
            return {}
        return {k: v for k, v in entries.items() if isinstance(v, dict)}

    def _save(self) -> None:
        try:
            _write_json(
                self.path,
                {"version": FILE_CACHE_VERSION, "entries": self._entries},
            )
        except OSError as e:
            raise CacheError(f"Failed to write {self.path}: {e}") from e

    def _live(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at = entry.get("expires_at")
        if isinstance(expires_at, (int, float)) and expires_at <= self.clock():
            self._entries.pop(key, None)
            return None
        return entry

    def get(self, key: str) -> Optional[str]:
        entry = self._live(key)
        if entry is None:
            return None
        value = entry.get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._entries[key] = {"value": value, "expires_at": None}
        self._save()

    def expire(self, key: str, seconds: int) -> bool:
        entry = self._live(key)
        if entry is None:
            return False
        entry["expires_at"] = self.clock() + seconds
        self._save()
        return True

    def ttl(self, key: str) -> Optional[float]:
        """Seconds left on a key, or None when it is absent or has no expiry."""
        entry = self._live(key)
        if entry is None:
            return None
        expires_at = entry.get("expires_at")
        if not isinstance(expires_at, (int, float)):
            return None
        return expires_at - self.clock()

    def close(self) -> None:
        pass
