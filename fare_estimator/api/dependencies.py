"""FastAPI dependency injection helpers."""

from fastapi import Request

from fare_estimator.config import settings
from fare_estimator.domain.estimator import TripEstimator
from fare_estimator.domain.pricing import TariffEngine
from fare_estimator.infrastructure.catalog_provider import CatalogProvider


def get_catalog_provider(request: Request) -> CatalogProvider:
    """The provider built by the application lifespan."""
    return request.app.state.catalog_provider


def get_estimator(request: Request) -> TripEstimator:
    return TripEstimator(
        get_catalog_provider(request),
        tariff=TariffEngine(
            base_fare=settings.base_fare,
            detour_factor=settings.detour_factor,
            add_on_surcharge=settings.add_on_surcharge,
        ),
        average_speed_kmh=settings.average_speed_kmh,
        home_country=settings.home_country,
    )
