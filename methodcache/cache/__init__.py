"""Caching utilities: method cache, decorator, key and value helpers."""

from .decorator import BoundCachedMethod, CachedMethod
from .keys import build_cache_key, method_pattern, normalize_class_name
from .method_cache import ACTIONS, BoundCache, MethodCache
from .serialization import decode_value, encode_value, is_empty

__all__ = [
    "MethodCache",
    "BoundCache",
    "CachedMethod",
    "BoundCachedMethod",
    "ACTIONS",
    "build_cache_key",
    "method_pattern",
    "normalize_class_name",
    "encode_value",
    "decode_value",
    "is_empty",
]
