"""
Domain values and errors.

All values are immutable: a ``CityRecord`` lives as long as the catalog
that holds it, requests and estimates live for a single call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .enums import AddOn, ResolutionFailure, VehicleClass, country_name


# ── Errors ────────────────────────────────────────────────────────────


class FareEstimatorError(Exception):
    """Base class for every recoverable domain error."""


class RowValidationError(FareEstimatorError):
    """A raw dataset row was rejected while building the catalog."""

    def __init__(self, reason: str, row: Optional[dict] = None):
        super().__init__(reason)
        self.reason = reason
        self.row = row or {}


class CityNotFound(FareEstimatorError):
    """A city name has no candidate in the catalog."""

    def __init__(self, raw_name: str, normalized: str):
        super().__init__(f"City not found: {raw_name!r} (normalized: {normalized!r})")
        self.raw_name = raw_name
        self.normalized = normalized


class InvalidVehicleClass(FareEstimatorError):
    """The requested vehicle class is not in the tariff table."""

    def __init__(self, vehicle_class: object):
        super().__init__(f"Invalid vehicle class: {vehicle_class!r}")
        self.vehicle_class = vehicle_class


class TripResolutionError(FareEstimatorError):
    """Departure, arrival or both cities could not be resolved."""

    def __init__(self, missing: ResolutionFailure):
        super().__init__(f"Unresolved city: {missing.value}")
        self.missing = missing


class CatalogNotLoaded(FareEstimatorError):
    """The city catalog has not been built yet."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class CityRecord:
    name: str
    ascii_name: str
    country_code: str
    latitude: float
    longitude: float

    @property
    def country_name(self) -> str:
        return country_name(self.country_code)

    @property
    def label(self) -> str:
        return f"{self.ascii_name}, {self.country_name}"


@dataclass(frozen=True)
class TripRequest:
    departure: str
    arrival: str
    vehicle_class: Union[VehicleClass, str]
    add_on: Union[AddOn, str] = AddOn.NONE


@dataclass(frozen=True)
class TripDuration:
    hours: int
    minutes: int

    def __str__(self) -> str:
        return f"{self.hours}h {self.minutes}min"


@dataclass(frozen=True)
class TripEstimate:
    departure: CityRecord
    arrival: CityRecord
    distance_km: float
    duration: TripDuration
    price: float
    vehicle_class: VehicleClass
    add_on: str
