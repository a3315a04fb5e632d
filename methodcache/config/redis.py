"""Process-wide async Redis client.

Optional helper for applications that want one shared client to hand to
``MethodCache``. The cache itself never opens or closes connections.
"""

from redis.asyncio import Redis

from methodcache.exceptions import NotConfiguredError
from methodcache.logging_config import get_logger

logger = get_logger(name=__name__)

_client: Redis | None = None


async def init_redis(url: str) -> Redis:
    """Initialize the global async Redis client and verify connectivity.

    Args:
        url: Redis connection URL (e.g., redis://localhost:6379/0)
    """
    global _client
    _client = Redis.from_url(url, decode_responses=True)
    await _client.ping()
    logger.info("Redis client initialized and connected: {}", url)
    return _client


def get_redis() -> Redis:
    """Get the global async Redis client. Raises if not initialized."""
    if _client is None:
        raise NotConfiguredError(
            "Redis client not initialized. Call init_redis() first."
        )
    return _client


async def close_redis() -> None:
    """Close the Redis client connection."""
    global _client
    if _client is not None:
        await _client.aclose()
        logger.info("Redis client closed")
    _client = None
