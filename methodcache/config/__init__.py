"""Configuration for the method cache.

This module provides:
- Immutable cache configuration and environment-driven settings
- A shared async Redis client
"""

from .redis import close_redis, get_redis, init_redis
from .settings import CacheConfig, CacheSettings, get_settings

__all__ = [
    # Settings
    "CacheConfig",
    "CacheSettings",
    "get_settings",
    # Redis
    "init_redis",
    "get_redis",
    "close_redis",
]
