"""
Tariff Engine  (Strategy Pattern)
=================================

Formula
-------
Price = round_half_up(Base_Fare + Distance x Detour_Factor x Rate_Per_KM + Surcharge)

Rounding is to cents, ties away from zero.

* **Detour_Factor** (1.15) inflates straight-line distance to approximate
  the road distance.
* **Rate_Per_KM** depends on the vehicle class: Berline 1.8, Hybride 2.0,
  Van 2.3 EUR/km.
* **Surcharge** is a flat 5 EUR for child-seat add-ons, 0 otherwise.

Complexity: O(1) per price calculation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Union

from .entities import InvalidVehicleClass
from .enums import RATE_PER_KM, SURCHARGED_ADD_ONS, AddOn, VehicleClass

BASE_FARE = 10.0
DETOUR_FACTOR = 1.15
ADD_ON_SURCHARGE = 5.0

_CENT = Decimal("0.01")


# ── Strategy hierarchy ────────────────────────────────────────────────


class TariffStrategy(ABC):
    @abstractmethod
    def calculate(
        self, distance_km: float, base_fare: float, detour_factor: float
    ) -> float: ...


class PerKilometerTariff(TariffStrategy):
    """Base fare plus a per-km rate on the detour-adjusted distance."""

    def __init__(self, rate_per_km: float):
        self.rate_per_km = rate_per_km

    def calculate(
        self, distance_km: float, base_fare: float, detour_factor: float
    ) -> float:
        return base_fare + distance_km * detour_factor * self.rate_per_km


class SurchargedTariff(TariffStrategy):
    """Wraps another tariff and adds a flat amount."""

    def __init__(self, inner: TariffStrategy, surcharge: float):
        self.inner = inner
        self.surcharge = surcharge

    def calculate(
        self, distance_km: float, base_fare: float, detour_factor: float
    ) -> float:
        return self.inner.calculate(distance_km, base_fare, detour_factor) + self.surcharge


# ── Helpers ───────────────────────────────────────────────────────────


def round_half_up(amount: float) -> float:
    """Round to cents with ties away from zero (0.125 -> 0.13)."""
    return float(Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP))


def parse_vehicle_class(value: Union[VehicleClass, str, None]) -> VehicleClass:
    """Coerce *value* to a ``VehicleClass`` or raise ``InvalidVehicleClass``."""
    if isinstance(value, VehicleClass):
        return value
    try:
        return VehicleClass(value)
    except ValueError:
        raise InvalidVehicleClass(value) from None


def is_surcharged(add_on: Union[AddOn, str, None]) -> bool:
    try:
        return AddOn(add_on) in SURCHARGED_ADD_ONS
    except ValueError:
        return False


# ── Engine facade ─────────────────────────────────────────────────────


class TariffEngine:
    """High-level API used by the trip estimator and the API layer."""

    def __init__(
        self,
        base_fare: float = BASE_FARE,
        detour_factor: float = DETOUR_FACTOR,
        add_on_surcharge: float = ADD_ON_SURCHARGE,
        rates: Optional[Mapping[VehicleClass, float]] = None,
    ):
        self.base_fare = base_fare
        self.detour_factor = detour_factor
        self.add_on_surcharge = add_on_surcharge
        self.rates = dict(RATE_PER_KM if rates is None else rates)

    def strategy_for(
        self, vehicle_class: Union[VehicleClass, str], add_on: Union[AddOn, str, None]
    ) -> TariffStrategy:
        vehicle = parse_vehicle_class(vehicle_class)
        if vehicle not in self.rates:
            raise InvalidVehicleClass(vehicle_class)
        strategy: TariffStrategy = PerKilometerTariff(self.rates[vehicle])
        if is_surcharged(add_on):
            strategy = SurchargedTariff(strategy, self.add_on_surcharge)
        return strategy

    def estimate_fare(
        self,
        distance_km: float,
        vehicle_class: Union[VehicleClass, str],
        add_on: Union[AddOn, str, None] = AddOn.NONE,
    ) -> float:
        strategy = self.strategy_for(vehicle_class, add_on)
        raw = strategy.calculate(distance_km, self.base_fare, self.detour_factor)
        return round_half_up(raw)


_default_engine = TariffEngine()


def estimate_fare(
    distance_km: float,
    vehicle_class: Union[VehicleClass, str],
    add_on: Union[AddOn, str, None] = AddOn.NONE,
) -> float:
    """Price a trip with the standard tariff."""
    return _default_engine.estimate_fare(distance_km, vehicle_class, add_on)
