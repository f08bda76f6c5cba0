"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from fare_estimator.domain.entities import CityRecord, TripEstimate


# ── Requests ──────────────────────────────────────────────────────────


class EstimateRequest(BaseModel):
    departure: str = Field(..., max_length=200)
    arrival: str = Field(..., max_length=200)
    vehicle_class: str = Field(
        ..., description="One of Berline, Hybride, Van.", examples=["Berline"]
    )
    add_on: str = Field(
        "none", description="none, baby-seat or booster-seat.", max_length=40
    )


# ── Responses ─────────────────────────────────────────────────────────


class CityResponse(BaseModel):
    name: str
    ascii_name: str
    country_code: str
    country_name: str
    latitude: float
    longitude: float

    @classmethod
    def from_record(cls, city: CityRecord) -> CityResponse:
        return cls(
            name=city.name,
            ascii_name=city.ascii_name,
            country_code=city.country_code,
            country_name=city.country_name,
            latitude=city.latitude,
            longitude=city.longitude,
        )


class EstimateResponse(BaseModel):
    departure: CityResponse
    arrival: CityResponse
    vehicle_class: str
    add_on: str
    distance_km: float
    distance_label: str
    duration_hours: int
    duration_minutes: int
    duration_label: str
    price: float
    price_label: str

    @classmethod
    def from_estimate(
        cls, estimate: TripEstimate, currency_symbol: str = "€"
    ) -> EstimateResponse:
        return cls(
            departure=CityResponse.from_record(estimate.departure),
            arrival=CityResponse.from_record(estimate.arrival),
            vehicle_class=estimate.vehicle_class.value,
            add_on=estimate.add_on,
            distance_km=round(estimate.distance_km, 2),
            distance_label=f"{round(estimate.distance_km)} km",
            duration_hours=estimate.duration.hours,
            duration_minutes=estimate.duration.minutes,
            duration_label=str(estimate.duration),
            price=estimate.price,
            price_label=f"{estimate.price:.2f} {currency_symbol}",
        )


class CitySuggestion(BaseModel):
    value: str
    label: str
    country_code: str


class HealthResponse(BaseModel):
    status: str = "ok"
    cities: Optional[int] = None


class CatalogReloadResponse(BaseModel):
    cities: int


class ErrorResponse(BaseModel):
    code: str
    detail: str
