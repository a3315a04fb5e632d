"""Memoize method results in a Redis-compatible key-value store."""

from .cache import BoundCache, MethodCache
from .config import CacheConfig, CacheSettings, get_settings
from .exceptions import MethodCacheError, NoSuchMethodError, NotConfiguredError

__all__ = [
    "MethodCache",
    "BoundCache",
    "CacheConfig",
    "CacheSettings",
    "get_settings",
    "MethodCacheError",
    "NoSuchMethodError",
    "NotConfiguredError",
]
