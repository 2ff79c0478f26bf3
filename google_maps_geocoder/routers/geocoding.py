"""Geocoding API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from google_maps_geocoder.dependencies import get_geocoding_service
from google_maps_geocoder.schemas.geocoding import GeocodeResult, GeocodingErrorResponse
from google_maps_geocoder.services.geocoding_service import GeocodingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/geocode")


@router.get(
    "",
    response_model=GeocodeResult,
    summary="Geocode an address",
    description="""
    Convert a postal address to structured location data (forward geocoding).

    Uses the Google Maps Geocoding API. Only the first candidate returned by
    Google is used; `exact_match` is false when Google flagged it as a
    partial match.

    **Cache:** none, every request reaches Google Maps
    """,
    responses={
        200: {
            "description": "Successfully geocoded address"
        },
        400: {
            "model": GeocodingErrorResponse,
            "description": "Google Maps rejected the request as invalid"
        },
        404: {
            "model": GeocodingErrorResponse,
            "description": "Address not found",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "ZERO_RESULTS",
                        "error_code": "NOT_FOUND",
                        "status": "ZERO_RESULTS"
                    }
                }
            }
        },
        429: {
            "model": GeocodingErrorResponse,
            "description": "Google Maps query limit exceeded"
        },
        502: {
            "model": GeocodingErrorResponse,
            "description": "Google Maps returned an error status"
        },
        503: {
            "description": "Geocoding service unavailable"
        },
        504: {
            "description": "Geocoding service timeout"
        }
    }
)
def geocode_address(
    address: str = Query(
        ...,
        min_length=1,
        max_length=500,
        description="Address to geocode",
        examples=["1600 Pennsylvania Ave"]
    ),
    geocoding_service: GeocodingService = Depends(get_geocoding_service)
) -> GeocodeResult:
    """
    Convert an address to location data.

    Args:
        address: Free-form postal address
        geocoding_service: Geocoding service instance

    Returns:
        GeocodeResult for the best match
    """
    if not address.strip():
        raise HTTPException(
            status_code=400,
            detail="Address must not be blank"
        )

    logger.info(f"Geocoding address: {address}")
    return geocoding_service.geocode(address)
