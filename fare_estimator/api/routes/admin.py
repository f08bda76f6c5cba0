"""
Admin / observability endpoints
===============================

GET  /api/v1/admin/health         -- health check with catalog size
POST /api/v1/admin/catalog/reload -- rebuild the catalog from the CSV
"""

from fastapi import APIRouter, Depends, Request

from fare_estimator.api.dependencies import get_catalog_provider
from fare_estimator.api.middleware import limiter
from fare_estimator.api.schemas import CatalogReloadResponse, HealthResponse
from fare_estimator.infrastructure.catalog_provider import CatalogProvider

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(provider: CatalogProvider = Depends(get_catalog_provider)):
    if not provider.is_loaded:
        return HealthResponse(status="loading")
    return HealthResponse(cities=len(provider.catalog))


@router.post(
    "/catalog/reload",
    response_model=CatalogReloadResponse,
    summary="Reload the city catalog",
)
@limiter.limit("10/minute")
async def reload_catalog(
    request: Request,
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    catalog = await provider.reload()
    return CatalogReloadResponse(cities=len(catalog))
