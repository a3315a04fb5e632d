"""Pattern-based cache invalidation.

Uses Redis SCAN (cursor-based, non-blocking) to enumerate keys and deletes
them batch by batch.
"""

from typing import Any

from methodcache.logging_config import get_logger

logger = get_logger(name=__name__)

SCAN_BATCH_SIZE = 100


async def delete_matching(store: Any, pattern: str) -> int:
    """Delete all keys matching a glob-style pattern.

    Args:
        store: Async Redis-compatible client
        pattern: SCAN match pattern (e.g., "app:book:getbyid:*")

    Returns:
        Number of keys deleted.
    """
    deleted = 0

    cursor = 0
    while True:
        cursor, keys = await store.scan(cursor=cursor, match=pattern, count=SCAN_BATCH_SIZE)
        if keys:
            deleted += await store.delete(*keys)
        if cursor == 0:
            break

    if deleted > 0:
        logger.info("Invalidated {} cache keys matching '{}'", deleted, pattern)
    else:
        logger.debug("No cache keys matching '{}' to invalidate", pattern)

    return deleted
