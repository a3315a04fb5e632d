"""
Pytest Configuration and Fixtures

Provides an in-memory async store that speaks the subset of the
redis.asyncio API used by the method cache, plus sample target classes.
"""

import fnmatch
from typing import Any, Dict, List, Optional, Tuple

import pytest

from methodcache import CacheConfig, MethodCache


class InMemoryStore:
    """Async key-value store double with TTL bookkeeping.

    Values are kept as given; TTLs are recorded but never expire, so tests
    can inspect the TTL chosen at write time.
    """

    def __init__(self):
        self.data: Dict[str, Any] = {}
        self.ttls: Dict[str, Optional[int]] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self._scan_keys: List[str] = []

    async def get(self, key: str) -> Optional[Any]:
        self.calls.append(("get", (key,)))
        return self.data.get(key)

    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> bool:
        self.calls.append(("set", (key, value, ex)))
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        self.calls.append(("delete", keys))
        deleted = 0
        for key in keys:
            if key in self.data:
                del self.data[key]
                self.ttls.pop(key, None)
                deleted += 1
        return deleted

    async def scan(self, cursor: int = 0, match: Optional[str] = None, count: int = 10):
        self.calls.append(("scan", (cursor, match, count)))
        # Iterate over a snapshot so deletes between pages do not skip keys.
        if cursor == 0:
            self._scan_keys = sorted(
                k for k in self.data if match is None or fnmatch.fnmatchcase(k, match)
            )
        keys = self._scan_keys
        page = [k for k in keys[cursor:cursor + count] if k in self.data]
        next_cursor = cursor + count if cursor + count < len(keys) else 0
        return next_cursor, page

    async def ttl(self, key: str) -> int:
        if key not in self.data:
            return -2
        ttl = self.ttls.get(key)
        return -1 if ttl is None else ttl


class Book:
    """Sample repository counting calls to its underlying methods."""

    def __init__(self):
        self.calls: List[Tuple[str, tuple]] = []

    def GetById(self, book_id):
        self.calls.append(("GetById", (book_id,)))
        return {"id": book_id, "title": f"Book {book_id}", "tags": ["a", "b"]}

    def search(self, query, limit=10):
        self.calls.append(("search", (query, limit)))
        return []

    async def count(self, shelf):
        self.calls.append(("count", (shelf,)))
        return 0 if shelf == "empty" else 42

    def echo(self, value):
        self.calls.append(("echo", (value,)))
        return value

    title = "not callable"


@pytest.fixture
def store() -> InMemoryStore:
    """Create a fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def config() -> CacheConfig:
    return CacheConfig(prefix="", expire=3600, empty_expire=10)


@pytest.fixture
def method_cache(store: InMemoryStore, config: CacheConfig) -> MethodCache:
    """Create a MethodCache bound to the in-memory store."""
    return MethodCache(store, config)


@pytest.fixture
def book() -> Book:
    return Book()
