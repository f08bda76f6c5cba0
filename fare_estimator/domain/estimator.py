"""
Trip Estimator
==============

Resolve both cities -> great-circle distance -> duration -> tariff.

The catalog is obtained from a provider on every call instead of a hidden
global, so a reload swaps it for subsequent requests and tests can pass a
synthetic catalog.  Nothing here mutates the catalog.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Protocol

from .catalog import CityCatalog
from .distance import haversine_km
from .entities import (
    CityNotFound,
    CityRecord,
    InvalidVehicleClass,
    TripDuration,
    TripEstimate,
    TripRequest,
    TripResolutionError,
)
from .enums import AddOn, ResolutionFailure
from .pricing import TariffEngine, parse_vehicle_class
from .resolver import NameResolver

logger = logging.getLogger(__name__)

AVERAGE_SPEED_KMH = 80.0


class SupportsCatalog(Protocol):
    @property
    def catalog(self) -> CityCatalog: ...


class StaticCatalogProvider:
    """Provider over an already-built catalog."""

    def __init__(self, catalog: CityCatalog):
        self._catalog = catalog

    @property
    def catalog(self) -> CityCatalog:
        return self._catalog


def split_duration(duration_hours: float) -> TripDuration:
    """Split fractional hours into whole hours and rounded minutes.

    A remainder that rounds to 60 minutes rolls over into the next hour.
    """
    hours = math.floor(duration_hours)
    minutes = round((duration_hours - hours) * 60)
    if minutes >= 60:
        hours += 1
        minutes -= 60
    return TripDuration(hours=int(hours), minutes=int(minutes))


def _resolve_or_none(resolver: NameResolver, raw_name: str) -> Optional[CityRecord]:
    try:
        return resolver.resolve(raw_name)
    except CityNotFound:
        return None


class TripEstimator:
    def __init__(
        self,
        provider: SupportsCatalog,
        tariff: Optional[TariffEngine] = None,
        average_speed_kmh: float = AVERAGE_SPEED_KMH,
        home_country: str = "FR",
    ):
        if average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be positive")
        self.provider = provider
        self.tariff = tariff or TariffEngine()
        self.average_speed_kmh = average_speed_kmh
        self.home_country = home_country

    def resolver(self) -> NameResolver:
        return NameResolver(self.provider.catalog, self.home_country)

    def resolve_trip(self, departure: str, arrival: str) -> tuple[CityRecord, CityRecord]:
        """Resolve both ends, reporting which one (or both) failed."""
        resolver = self.resolver()
        origin = _resolve_or_none(resolver, departure)
        destination = _resolve_or_none(resolver, arrival)

        if origin is None and destination is None:
            raise TripResolutionError(ResolutionFailure.BOTH)
        if origin is None:
            raise TripResolutionError(ResolutionFailure.DEPARTURE)
        if destination is None:
            raise TripResolutionError(ResolutionFailure.ARRIVAL)
        return origin, destination

    def estimate(self, request: TripRequest) -> TripEstimate:
        """Compute distance, duration and price for *request*."""
        if not str(request.vehicle_class or "").strip():
            raise InvalidVehicleClass(request.vehicle_class)
        origin, destination = self.resolve_trip(request.departure, request.arrival)
        vehicle = parse_vehicle_class(request.vehicle_class)

        distance = haversine_km(
            origin.latitude, origin.longitude,
            destination.latitude, destination.longitude,
        )
        duration = split_duration(distance / self.average_speed_kmh)
        add_on = request.add_on or AddOn.NONE
        add_on = add_on.value if isinstance(add_on, AddOn) else str(add_on)
        price = self.tariff.estimate_fare(distance, vehicle, add_on)

        logger.info(
            "Estimate %s -> %s: %.1f km, %s, %.2f (%s, %s)",
            origin.ascii_name,
            destination.ascii_name,
            distance,
            duration,
            price,
            vehicle.value,
            add_on,
        )
        return TripEstimate(
            departure=origin,
            arrival=destination,
            distance_km=distance,
            duration=duration,
            price=price,
            vehicle_class=vehicle,
            add_on=add_on,
        )
