"""
Estimate endpoints
==================

POST /api/v1/estimates -- distance, duration and price for a trip
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from fare_estimator.api.dependencies import get_estimator
from fare_estimator.api.middleware import limiter
from fare_estimator.api.schemas import EstimateRequest, EstimateResponse, ErrorResponse
from fare_estimator.config import settings
from fare_estimator.domain.entities import TripRequest
from fare_estimator.domain.estimator import TripEstimator

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post(
    "",
    response_model=EstimateResponse,
    summary="Estimate a trip",
    responses={
        404: {"model": ErrorResponse, "description": "A city could not be resolved."},
        422: {"model": ErrorResponse, "description": "Unknown vehicle class."},
        503: {"model": ErrorResponse, "description": "City data still loading."},
    },
)
@limiter.limit(settings.rate_limit)
async def create_estimate(
    request: Request,
    body: EstimateRequest,
    estimator: TripEstimator = Depends(get_estimator),
):
    estimate = estimator.estimate(
        TripRequest(
            departure=body.departure,
            arrival=body.arrival,
            vehicle_class=body.vehicle_class,
            add_on=body.add_on,
        )
    )
    return EstimateResponse.from_estimate(estimate, settings.currency_symbol)
