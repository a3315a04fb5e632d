"""Cache value serialization using orjson.

Values are stored as plain JSON text so that entries written by other
clients stay readable. Mapping keys are stringified as JSON requires.
Pydantic models are dumped to JSON objects and come back as dicts; tuples
and sets come back as lists.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sized

import orjson
from pydantic import BaseModel

from methodcache.logging_config import get_logger

logger = get_logger(name=__name__)


def encode_value(value: Any) -> str:
    """Serialize a value to a JSON string for storage.

    Raises:
        TypeError: If the value has no JSON representation.
    """
    return orjson.dumps(
        value, default=_default, option=orjson.OPT_NON_STR_KEYS
    ).decode("utf-8")


def decode_value(raw: str | bytes) -> Any:
    """Deserialize a stored value.

    A value that is not valid JSON is returned as stored, so plain strings
    written by other clients still come back.
    """
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.debug("Cached value is not JSON, returning it raw")
        return raw


def is_empty(value: Any) -> bool:
    """Whether a result counts as empty for TTL selection.

    Empty means None, False, numeric zero, and zero-length strings, bytes
    and containers. The string "0" is not empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (int, float, complex, Decimal)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")
