"""Cache key construction.

Convention: {prefix}{class_name}:{method_name}:{arg_digest}, all lowercase.

Examples:
    book:getbyid:<md5 of "[100]">
    app:reports_monthlyreport:summary:*
"""

import hashlib
from datetime import date, datetime
from typing import Any, Sequence

import orjson
from pydantic import BaseModel

WILDCARD = "*"


def normalize_class_name(cls: type) -> str:
    """Return the class qualname with namespace separators as underscores."""
    return cls.__qualname__.replace(".", "_")


def argument_digest(arguments: Sequence[Any]) -> str:
    """MD5 hex digest of the JSON-serialized positional argument list.

    Arguments keep their call order; only mapping keys and set elements are
    sorted. Objects relying on the default object repr raise TypeError, since
    their text embeds a memory address that differs between processes.
    """
    key_data = orjson.dumps(_normalize(list(arguments)))
    return hashlib.md5(key_data).hexdigest()


def build_cache_key(
    prefix: str,
    class_name: str,
    method: str,
    arguments: Sequence[Any] | str,
) -> str:
    """Build a deterministic key from class, method and arguments.

    Args:
        prefix: Configured key prefix (e.g., "app:")
        class_name: Normalized class name (see normalize_class_name)
        method: Base method name, without the action suffix
        arguments: Positional arguments, or WILDCARD for a flush pattern

    Returns:
        Key string like "app:book:getbyid:<md5 hex digest>"
    """
    if isinstance(arguments, str) and arguments == WILDCARD:
        digest = WILDCARD
    else:
        digest = argument_digest(arguments)
    return f"{prefix}{class_name}:{method}:{digest}".lower()


def method_pattern(prefix: str, class_name: str, method: str) -> str:
    """Return a SCAN pattern matching every key of one method.

    Returns pattern like "app:book:getbyid:*"
    """
    return build_cache_key(prefix, class_name, method, WILDCARD)


def prefix_pattern(prefix: str) -> str:
    """Return a SCAN pattern matching every key under a prefix."""
    return f"{prefix}{WILDCARD}".lower()


def _normalize(obj):
    """Normalize arguments for deterministic hashing."""
    if isinstance(obj, (str, int, float, bool, type(None))):
        return obj
    elif isinstance(obj, (date, datetime)):
        return obj.isoformat()
    elif isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    elif isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in sorted(obj.items(), key=lambda kv: str(kv[0]))}
    elif isinstance(obj, (list, tuple)):
        return [_normalize(item) for item in obj]
    elif isinstance(obj, (set, frozenset)):
        # Iteration order of a set varies with PYTHONHASHSEED.
        return sorted((_normalize(item) for item in obj), key=orjson.dumps)
    elif type(obj).__str__ is object.__str__ and type(obj).__repr__ is object.__repr__:
        raise TypeError(
            f"Cannot build a stable cache key from {type(obj).__name__}; "
            "define __str__ or pass a JSON-representable value"
        )
    else:
        return str(obj)
