# config/cache.py
from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings
from util.enums import StoreBackend

_client: Optional[Redis] = None


async def get_redis(url: Optional[str] = None) -> Redis:
    """
    Shared client for the Redis node backend (and the rate limiter).
    - url overrides settings.REDIS_URL on first connect only.
    - Refuses to connect when the memory backend is configured and no url
      was given, so a misconfigured deployment fails instead of silently
      talking to a default Redis.
    """
    global _client
    if _client is None:
        if url is None and settings.STORE_BACKEND != StoreBackend.REDIS:
            raise RuntimeError(
                f"Redis requested but STORE_BACKEND={settings.STORE_BACKEND.value}"
            )
        _client = from_url(
            url or settings.REDIS_URL,
            decode_responses=False,  # node payloads are raw bytes
            socket_keepalive=True,
            health_check_interval=30,
        )
        # Fail fast on startup if Redis is unreachable.
        await _client.ping()
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
