"""Method caching decorator.

Usage:
    cache = MethodCache(redis, CacheConfig(prefix="app:"))

    class BookRepository:
        @cache.cacheable
        async def get_by_id(self, book_id: int) -> dict:
            ...

    book = await repo.get_by_id(100)
    await repo.get_by_id.clear(100)
    await repo.get_by_id.flush()

Decorated methods share keys with ``MethodCache.dispatch``, so
``dispatch(repo, "get_by_idClear", [100])`` drops the same entry.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable, Optional

from methodcache.config.settings import validate_ttl_override

if TYPE_CHECKING:
    from .method_cache import MethodCache


class CachedMethod:
    """Descriptor wrapping a method whose results live in a MethodCache.

    Notes:
        - Only positional arguments take part in the cache key.
        - The wrapped method may be sync or async; the cached call is
          always awaited.
    """

    def __init__(
        self,
        method_cache: "MethodCache",
        func: Callable[..., Any],
        expire: Optional[int] = None,
        empty_expire: Optional[int] = None,
    ):
        functools.update_wrapper(self, func)
        self.method_cache = method_cache
        self.func = func
        self.name = func.__name__
        self.expire = validate_ttl_override(expire)
        self.empty_expire = validate_ttl_override(empty_expire)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None):
        if instance is None:
            return self
        return BoundCachedMethod(self, instance)


class BoundCachedMethod:
    """A CachedMethod bound to one instance."""

    def __init__(self, cached: CachedMethod, instance: Any):
        self._cached = cached
        self._instance = instance
        self.uncached = functools.partial(cached.func, instance)
        functools.update_wrapper(self, cached.func)

    async def __call__(self, *args: Any) -> Any:
        cached = self._cached
        return await cached.method_cache.cache(
            self._instance,
            cached.name,
            args,
            call=self.uncached,
            expire=cached.expire,
            empty_expire=cached.empty_expire,
        )

    async def clear(self, *args: Any) -> int:
        """Drop the entry for these arguments."""
        return await self._cached.method_cache.clear(self._instance, self._cached.name, args)

    async def flush(self) -> int:
        """Drop every entry of this method."""
        return await self._cached.method_cache.flush(self._instance, self._cached.name)

    def key(self, *args: Any) -> str:
        """Cache key for these arguments."""
        return self._cached.method_cache.key(self._instance, self._cached.name, args)
