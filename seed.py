"""
Seed script -- primes the Redis catalog cache from the CSV dataset.

Run once per deployment (or after replacing the dataset):
    python seed.py

Steps:
  - parse ``settings.dataset_path``
  - filter rows down to the European allow-list
  - store the filtered rows under ``settings.catalog_cache_key``
"""

import asyncio
import sys

from fare_estimator.config import settings
from fare_estimator.infrastructure.catalog_cache import CatalogCache
from fare_estimator.infrastructure.catalog_provider import CatalogProvider
from fare_estimator.infrastructure.dataset import DatasetError
from fare_estimator.infrastructure.redis_client import close_redis, get_redis


async def seed() -> int:
    redis = await get_redis()
    cache = CatalogCache(
        redis,
        key=settings.catalog_cache_key,
        ttl_seconds=settings.catalog_cache_ttl_seconds,
    )
    provider = CatalogProvider(settings.dataset_path, cache=cache)
    catalog = await provider.reload()
    print(f"  Cached {len(catalog)} cities under {settings.catalog_cache_key!r}")
    await close_redis()
    return len(catalog)


async def main():
    print(f"Seeding catalog cache from {settings.dataset_path}...")
    try:
        count = await seed()
    except DatasetError as exc:
        print(f"Seed failed: {exc}")
        sys.exit(1)
    if not count:
        print("Warning: no serviceable cities found in the dataset.")
    print("\nSeed complete!")


if __name__ == "__main__":
    asyncio.run(main())
