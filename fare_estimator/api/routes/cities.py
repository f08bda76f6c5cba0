"""
City endpoints
==============

GET /api/v1/cities/suggestions?q= -- autocomplete entries ("Lyon, France")
GET /api/v1/cities/resolve?name=  -- the city a free-text name resolves to
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from fare_estimator.api.dependencies import get_catalog_provider
from fare_estimator.api.middleware import limiter
from fare_estimator.api.schemas import CityResponse, CitySuggestion, ErrorResponse
from fare_estimator.config import settings
from fare_estimator.domain.resolver import NameResolver, suggest_cities
from fare_estimator.infrastructure.catalog_provider import CatalogProvider

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get(
    "/suggestions",
    response_model=list[CitySuggestion],
    summary="Autocomplete city names",
)
@limiter.limit(settings.rate_limit)
async def get_suggestions(
    request: Request,
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(10, ge=1, le=50),
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    return [
        CitySuggestion(value=c.ascii_name, label=c.label, country_code=c.country_code)
        for c in suggest_cities(provider.catalog, q, limit)
    ]


@router.get(
    "/resolve",
    response_model=CityResponse,
    summary="Resolve a city name",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def resolve_city(
    request: Request,
    name: str = Query(..., min_length=1, max_length=200),
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    resolver = NameResolver(provider.catalog, settings.home_country)
    return CityResponse.from_record(resolver.resolve(name))
