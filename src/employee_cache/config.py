import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from redis import asyncio as aioredis

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 0 disables expiry
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "employee:")

    # Timeouts (seconds)
    cache_timeout: float = float(os.getenv("CACHE_TIMEOUT", "0.25"))
    record_timeout: float = float(os.getenv("RECORD_TIMEOUT", "2.0"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "console")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl < 0:
            raise ValueError("CACHE_TTL must be >= 0 (0 disables expiry)")

        if self.cache_timeout <= 0:
            raise ValueError(f"CACHE_TIMEOUT must be positive, got {self.cache_timeout}")

        if self.record_timeout <= 0:
            raise ValueError(f"RECORD_TIMEOUT must be positive, got {self.record_timeout}")

        if self.log_format not in ("console", "json"):
            raise ValueError(f"LOG_FORMAT must be one of ['console', 'json'], got {self.log_format!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> aioredis.Redis:
    """Create an asyncio Redis client instance."""
    return aioredis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
