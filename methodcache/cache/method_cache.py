"""Method result caching in a key-value store.

A call is addressed by a method name carrying an action suffix:

    cache = MethodCache(redis, CacheConfig(prefix="app:"))
    book = await cache.dispatch(repo, "get_by_idCache", [100])   # read through
    await cache.dispatch(repo, "get_by_idClear", [100])          # drop one entry
    await cache.dispatch(repo, "get_by_idFlush", [])             # drop all entries

``MethodCache.bind`` exposes the same convention as attribute access, and
``MethodCache.cacheable`` is the explicit decorator form.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Optional, Sequence

from methodcache.config.settings import (
    CacheConfig,
    CacheSettings,
    get_settings,
    validate_ttl_override,
)
from methodcache.exceptions import NoSuchMethodError, NotConfiguredError
from methodcache.logging_config import get_logger

from .decorator import BoundCachedMethod, CachedMethod
from .invalidation import delete_matching
from .keys import build_cache_key, method_pattern, normalize_class_name, prefix_pattern
from .serialization import decode_value, encode_value, is_empty

logger = get_logger(name=__name__)

ACTION_CACHE = "Cache"
ACTION_CLEAR = "Clear"
ACTION_FLUSH = "Flush"
ACTIONS = (ACTION_CACHE, ACTION_CLEAR, ACTION_FLUSH)
ACTION_SUFFIX_LENGTH = 5


class MethodCache:
    """Memoizes method results in an async Redis-compatible store.

    The store needs ``get``, ``set(key, value, ex=)``, ``delete(*keys)`` and
    ``scan(cursor=, match=, count=)``; ``redis.asyncio.Redis`` fits. Store
    errors propagate unchanged.
    """

    def __init__(self, store: Any = None, config: Optional[CacheConfig] = None):
        self.store = store
        self.config = config or CacheConfig()

    @classmethod
    def from_settings(
        cls, store: Any = None, settings: Optional[CacheSettings] = None
    ) -> "MethodCache":
        settings = settings or get_settings()
        return cls(store, settings.to_cache_config())

    def expire(self, seconds: int) -> None:
        """Set the TTL used for non-empty results."""
        self.config = CacheConfig.model_validate(
            {**self.config.model_dump(), "expire": seconds}
        )

    # ------------------------------------------------------------------
    # Name convention
    # ------------------------------------------------------------------

    async def dispatch(self, target: Any, name: str, arguments: Sequence[Any] = ()) -> Any:
        """Run the action encoded in ``name`` against ``target``.

        Raises:
            NotConfiguredError: If no store is bound.
            NoSuchMethodError: If ``name`` has no recognized action suffix.
        """
        self._require_store()
        method, action = self.parse_action(target, name)
        arguments = tuple(arguments)

        if action == ACTION_CACHE:
            return await self.cache(target, method, arguments)
        if action == ACTION_CLEAR:
            return await self.clear(target, method, arguments)
        return await self.flush(target, method)

    def parse_action(self, target: Any, name: str) -> tuple[str, str]:
        """Split ``name`` into its base method and action suffix."""
        class_name = type(target).__name__
        if len(name) < ACTION_SUFFIX_LENGTH:
            raise NoSuchMethodError(class_name, name)

        method = name[:-ACTION_SUFFIX_LENGTH]
        action = name[-ACTION_SUFFIX_LENGTH:]
        if action not in ACTIONS or not method:
            raise NoSuchMethodError(class_name, method or name)
        return method, action

    def bind(self, target: Any) -> "BoundCache":
        """Return a proxy exposing ``<method><Action>`` coroutines for ``target``."""
        return BoundCache(self, target)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def key(self, target: Any, method: str, arguments: Sequence[Any] | str) -> str:
        """Cache key of ``method`` on ``target``'s class for ``arguments``."""
        class_name = normalize_class_name(type(target))
        return build_cache_key(self.config.prefix, class_name, method, arguments)

    async def cache(
        self,
        target: Any,
        method: str,
        arguments: Sequence[Any] = (),
        *,
        call: Optional[Callable[..., Any]] = None,
        expire: Optional[int] = None,
        empty_expire: Optional[int] = None,
    ) -> Any:
        """Return the cached result, calling the method on a miss.

        Args:
            target: Object owning the method
            method: Base method name
            arguments: Positional arguments, in call order
            call: Callable to run on a miss instead of looking up ``method``
            expire: TTL override for non-empty results
            empty_expire: TTL override for empty results
        """
        store = self._require_store()
        expire = validate_ttl_override(expire)
        empty_expire = validate_ttl_override(empty_expire)
        key = self.key(target, method, arguments)

        cached_raw = await store.get(key)
        if cached_raw is not None:
            logger.debug("Cache HIT: {}", key)
            return decode_value(cached_raw)

        logger.debug("Cache MISS: {}", key)
        if call is None:
            call = self._resolve(target, method)

        data = call(*arguments)
        if inspect.isawaitable(data):
            data = await data

        if is_empty(data):
            ttl = empty_expire if empty_expire is not None else self.config.empty_expire
        else:
            ttl = expire if expire is not None else self.config.expire
        await store.set(key, encode_value(data), ex=ttl)

        return data

    async def clear(self, target: Any, method: str, arguments: Sequence[Any] = ()) -> int:
        """Delete the entry for exactly these arguments. Returns the deleted count."""
        store = self._require_store()
        key = self.key(target, method, arguments)
        deleted = await store.delete(key)
        logger.debug("Cache CLEAR: {} ({})", key, deleted)
        return deleted

    async def flush(self, target: Any, method: str) -> int:
        """Delete every entry of ``method`` regardless of arguments."""
        store = self._require_store()
        class_name = normalize_class_name(type(target))
        return await delete_matching(
            store, method_pattern(self.config.prefix, class_name, method)
        )

    async def flush_all(self) -> int:
        """Delete every key under the configured prefix.

        Raises:
            ValueError: If no prefix is configured.
        """
        store = self._require_store()
        if not self.config.prefix:
            raise ValueError("flush_all requires a non-empty key prefix")
        return await delete_matching(store, prefix_pattern(self.config.prefix))

    # ------------------------------------------------------------------
    # Decorator
    # ------------------------------------------------------------------

    def cacheable(
        self,
        func: Optional[Callable[..., Any]] = None,
        *,
        expire: Optional[int] = None,
        empty_expire: Optional[int] = None,
    ):
        """Decorate a method so that calls go through this cache.

        Usage:
            @cache.cacheable
            async def get_by_id(self, book_id): ...

            @cache.cacheable(expire=60)
            def search(self, query): ...

        The bound method gains ``clear(*args)`` and ``flush()``.
        """
        def decorator(f: Callable[..., Any]) -> CachedMethod:
            return CachedMethod(self, f, expire=expire, empty_expire=empty_expire)

        if func is not None:
            return decorator(func)
        return decorator

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_store(self) -> Any:
        if self.store is None:
            raise NotConfiguredError()
        return self.store

    @staticmethod
    def _resolve(target: Any, method: str) -> Callable[..., Any]:
        attr = getattr(target, method, None)
        if isinstance(attr, BoundCachedMethod):
            return attr.uncached
        if attr is None or not callable(attr):
            raise NoSuchMethodError(type(target).__name__, method)
        return attr


class BoundCache:
    """Attribute-style access to a MethodCache for one target.

    ``await BoundCache(cache, repo).get_by_idCache(100)`` is
    ``await cache.dispatch(repo, "get_by_idCache", (100,))``.
    """

    def __init__(self, method_cache: MethodCache, target: Any):
        self._method_cache = method_cache
        self._target = target

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        self._method_cache.parse_action(self._target, name)

        async def call(*arguments: Any) -> Any:
            return await self._method_cache.dispatch(self._target, name, arguments)

        call.__name__ = name
        return call

    def __repr__(self) -> str:
        return f"<BoundCache {type(self._target).__name__}>"
