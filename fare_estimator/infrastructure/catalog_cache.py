"""Redis cache of the filtered city rows, so restarts skip CSV parsing."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class CatalogCache:
    """Stores the catalog rows as one JSON document under *key*."""

    def __init__(
        self, client: aioredis.Redis, key: str = "catalog:cities", ttl_seconds: int = 0
    ):
        self.redis = client
        self.key = key
        self.ttl = ttl_seconds

    async def get_rows(self) -> Optional[list[dict[str, Any]]]:
        """Cached rows, or None on a miss, a Redis error or corrupt data."""
        try:
            payload = await self.redis.get(self.key)
        except RedisError as exc:
            logger.error("Catalog cache read failed: %s", exc)
            return None
        if not payload:
            return None
        try:
            rows = json.loads(payload)
        except ValueError:
            logger.warning("Discarding corrupt catalog cache entry %s", self.key)
            return None
        return rows if isinstance(rows, list) else None

    async def save_rows(self, rows: list[dict[str, Any]]) -> None:
        try:
            await self.redis.set(
                self.key, json.dumps(rows), ex=self.ttl if self.ttl > 0 else None
            )
        except RedisError as exc:
            logger.error("Catalog cache write failed: %s", exc)

    async def clear(self) -> None:
        try:
            await self.redis.delete(self.key)
        except RedisError as exc:
            logger.error("Catalog cache clear failed: %s", exc)
