"""Environment-driven settings for the method cache.

Values are read from ``METHODCACHE_*`` environment variables or a ``.env``
file in the working directory:

    from methodcache.config.settings import get_settings
    settings = get_settings()
    cache = MethodCache(redis, settings.to_cache_config())
"""

from functools import lru_cache
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_EXPIRE_SECONDS = 3600
DEFAULT_EMPTY_EXPIRE_SECONDS = 10

_ttl_override = TypeAdapter(Optional[Annotated[int, Field(gt=0)]])


def validate_ttl_override(value: Optional[int]) -> Optional[int]:
    """Check a per-method TTL override: None or a positive number of seconds.

    Raises:
        pydantic.ValidationError: If the value is not a positive int.
    """
    return _ttl_override.validate_python(value)


class CacheConfig(BaseModel):
    """Immutable cache configuration.

    ``empty_expire`` is used for empty results so that expensive "no data"
    lookups are cached briefly; everything else lives for ``expire`` seconds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: str = Field(default="", description="Prepended to every cache key")
    expire: int = Field(
        default=DEFAULT_EXPIRE_SECONDS,
        gt=0,
        description="TTL in seconds for non-empty results",
    )
    empty_expire: int = Field(
        default=DEFAULT_EMPTY_EXPIRE_SECONDS,
        gt=0,
        description="TTL in seconds for empty results",
    )


class CacheSettings(BaseSettings):
    """Cache settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="METHODCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    prefix: str = Field(default="", description="Cache key prefix")
    expire: int = Field(default=DEFAULT_EXPIRE_SECONDS, gt=0)
    empty_expire: int = Field(default=DEFAULT_EMPTY_EXPIRE_SECONDS, gt=0)

    def to_cache_config(self) -> CacheConfig:
        return CacheConfig(
            prefix=self.prefix,
            expire=self.expire,
            empty_expire=self.empty_expire,
        )


@lru_cache()
def get_settings() -> CacheSettings:
    """Get cached settings singleton."""
    return CacheSettings()
