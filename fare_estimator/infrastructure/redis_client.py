"""Redis async client for the catalog cache, created on first use."""

from __future__ import annotations

from typing import Optional

import redis.asyncio as aioredis

from fare_estimator.config import settings

_client: Optional[aioredis.Redis] = None


async def get_redis() -> aioredis.Redis:
    """Shared client; the connection pool opens lazily on the first command."""
    global _client
    if _client is None:
        _client = aioredis.from_url(settings.redis_url, decode_responses=True)
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
