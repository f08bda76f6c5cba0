"""
FastAPI application factory.

* Registers routes for estimates, cities and admin.
* Builds the city catalog via lifespan events (Redis cache, else CSV).
* Maps domain errors to JSON error bodies with a stable ``code``.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fare_estimator.api.middleware import limiter
from fare_estimator.api.routes import admin, cities, estimates
from fare_estimator.config import settings
from fare_estimator.domain.entities import (
    CatalogNotLoaded,
    CityNotFound,
    InvalidVehicleClass,
    TripResolutionError,
)
from fare_estimator.domain.enums import ResolutionFailure
from fare_estimator.infrastructure.catalog_cache import CatalogCache
from fare_estimator.infrastructure.catalog_provider import CatalogProvider
from fare_estimator.infrastructure.dataset import DatasetError
from fare_estimator.infrastructure.redis_client import close_redis, get_redis

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

RESOLUTION_ERRORS = {
    ResolutionFailure.BOTH: (
        "both_cities_not_found",
        "Neither the departure nor the arrival city was found.",
    ),
    ResolutionFailure.DEPARTURE: (
        "departure_city_not_found",
        "The departure city was not found.",
    ),
    ResolutionFailure.ARRIVAL: (
        "arrival_city_not_found",
        "The arrival city was not found.",
    ),
}


async def default_catalog_provider() -> CatalogProvider:
    cache = None
    if settings.catalog_cache_enabled:
        cache = CatalogCache(
            await get_redis(),
            key=settings.catalog_cache_key,
            ttl_seconds=settings.catalog_cache_ttl_seconds,
        )
    return CatalogProvider(settings.dataset_path, cache=cache)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the city catalog on startup."""
    provider = getattr(app.state, "catalog_provider", None)
    if provider is None:
        provider = await default_catalog_provider()
        app.state.catalog_provider = provider
    try:
        await provider.load()
    except DatasetError:
        logger.exception("City catalog unavailable; estimates will return 503")
    yield
    if settings.catalog_cache_enabled:
        await close_redis()


# ── Error handlers ────────────────────────────────────────────────────


def _error(status_code: int, code: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "detail": detail})


async def _trip_resolution_handler(request: Request, exc: TripResolutionError):
    code, detail = RESOLUTION_ERRORS[exc.missing]
    return _error(404, code, detail)


async def _city_not_found_handler(request: Request, exc: CityNotFound):
    return _error(404, "city_not_found", str(exc))


async def _invalid_vehicle_handler(request: Request, exc: InvalidVehicleClass):
    return _error(422, "invalid_vehicle_class", str(exc))


async def _catalog_unavailable_handler(request: Request, exc: Exception):
    return _error(503, "catalog_unavailable", "City data is loading. Please retry.")


def create_app(catalog_provider: Optional[CatalogProvider] = None) -> FastAPI:
    app = FastAPI(
        title="Fare Estimator API",
        description=(
            "Estimates distance, duration and price of chauffeured trips "
            "between European cities."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    if catalog_provider is not None:
        app.state.catalog_provider = catalog_provider

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(TripResolutionError, _trip_resolution_handler)
    app.add_exception_handler(CityNotFound, _city_not_found_handler)
    app.add_exception_handler(InvalidVehicleClass, _invalid_vehicle_handler)
    app.add_exception_handler(CatalogNotLoaded, _catalog_unavailable_handler)
    app.add_exception_handler(DatasetError, _catalog_unavailable_handler)

    # Routers
    app.include_router(estimates.router, prefix="/api/v1")
    app.include_router(cities.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
