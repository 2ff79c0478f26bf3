"""Geocode postal addresses with the Google Maps Geocoding API.

Usage:
    from google_maps_geocoder import geocode

    chez_barack = geocode("1600 Pennsylvania Ave")
    chez_barack.formatted_address
"""
from google_maps_geocoder.schemas.geocoding import GeocodeResult, is_exact_match
from google_maps_geocoder.services.geocoding_service import (
    GeocodingError,
    GeocodingService,
    geocode,
)

__version__ = "0.1.0"

__all__ = [
    "GeocodeResult",
    "GeocodingError",
    "GeocodingService",
    "geocode",
    "is_exact_match",
]
