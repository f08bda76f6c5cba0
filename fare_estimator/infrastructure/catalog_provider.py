"""
Catalog provider
================

Builds the city catalog once per process and hands it to the estimator.

Load order
----------
1. In-process catalog (already built)       -- no I/O.
2. Redis cache of the filtered rows         -- skips CSV parsing.
3. CSV dataset                              -- parsed, filtered, cached.

Reload drops both cached copies and rebuilds from the CSV under a
distributed lock so that only one process rewrites the cache entry.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from redis.exceptions import RedisError

from fare_estimator.domain.catalog import CityCatalog
from fare_estimator.domain.entities import CatalogNotLoaded
from fare_estimator.domain.enums import EUROPEAN_COUNTRIES

from .catalog_cache import CatalogCache
from .dataset import load_cities_csv
from .locks import DistributedLock, LockNotAcquired

logger = logging.getLogger(__name__)


class CatalogProvider:
    def __init__(
        self,
        dataset_path: Union[str, Path],
        cache: Optional[CatalogCache] = None,
        allowed_countries: frozenset[str] = EUROPEAN_COUNTRIES,
    ):
        self.dataset_path = Path(dataset_path)
        self.cache = cache
        self.allowed_countries = allowed_countries
        self._catalog: Optional[CityCatalog] = None

    @property
    def catalog(self) -> CityCatalog:
        if self._catalog is None:
            raise CatalogNotLoaded("City catalog is still loading")
        return self._catalog

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    async def load(self) -> CityCatalog:
        """Return the catalog, building it on first use."""
        if self._catalog is not None:
            return self._catalog

        if self.cache is not None:
            rows = await self.cache.get_rows()
            if rows:
                self._catalog = CityCatalog.build(rows, self.allowed_countries)
                logger.info("City catalog loaded from cache: %d cities", len(self._catalog))
                return self._catalog

        self._catalog = await self._build_from_dataset()
        if self.cache is not None:
            await self.cache.save_rows(self._catalog.to_rows())
        return self._catalog

    async def reload(self) -> CityCatalog:
        """Rebuild from the CSV dataset, replacing any cached copy."""
        if self.cache is None:
            self._catalog = await self._build_from_dataset()
            return self._catalog

        lock = DistributedLock(self.cache.redis, "catalog_reload", ttl_seconds=60)
        try:
            async with lock:
                catalog = await self._build_from_dataset()
                await self.cache.clear()
                await self.cache.save_rows(catalog.to_rows())
        except (LockNotAcquired, RedisError) as exc:
            logger.info("Catalog reload not coordinated (%s); rebuilding locally only", exc)
            catalog = await self._build_from_dataset()
        self._catalog = catalog
        return catalog

    async def _build_from_dataset(self) -> CityCatalog:
        rows = await asyncio.to_thread(load_cities_csv, self.dataset_path)
        return CityCatalog.build(rows, self.allowed_countries)
