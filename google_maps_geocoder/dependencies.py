"""FastAPI dependencies for the geocoding service."""

from google_maps_geocoder.config import Settings
from google_maps_geocoder.services.geocoding_service import GeocodingService


# Initialize settings
settings = Settings()


def get_geocoding_service() -> GeocodingService:
    """
    Dependency to get geocoding service instance.

    Returns:
        GeocodingService: Service configured from the process settings
    """
    return GeocodingService(settings)
