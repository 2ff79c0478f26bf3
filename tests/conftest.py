"""Shared test fixtures and configuration."""

import copy
import os
from typing import Any, AsyncGenerator, Dict, Generator, List, Optional

import httpx
import pytest

# Set TESTING flag to prevent loading .env file
os.environ['TESTING'] = '1'

from google_maps_geocoder.config import Settings
from google_maps_geocoder.services.geocoding_service import GeocodingService


WHITE_HOUSE_ADDRESS = "1600 Pennsylvania Ave"

WHITE_HOUSE_RESPONSE: Dict[str, Any] = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "1600 Pennsylvania Avenue NW, Washington, DC 20500, USA",
            "geometry": {
                "location": {"lat": 38.8976633, "lng": -77.0365739},
                "location_type": "ROOFTOP"
            },
            "address_components": [
                {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
                {
                    "long_name": "Pennsylvania Avenue Northwest",
                    "short_name": "Pennsylvania Avenue NW",
                    "types": ["route"]
                },
                {
                    "long_name": "Northwest Washington",
                    "short_name": "Northwest Washington",
                    "types": ["neighborhood", "political"]
                },
                {"long_name": "Washington", "short_name": "Washington", "types": ["locality", "political"]},
                {
                    "long_name": "District of Columbia",
                    "short_name": "DC",
                    "types": ["administrative_area_level_1", "political"]
                },
                {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
                {"long_name": "20500", "short_name": "20500", "types": ["postal_code"]}
            ],
            "place_id": "ChIJGVtI4by3t4kRr51d_Qm_x58",
            "types": ["street_address"]
        }
    ]
}

# Environment variables read by Settings
SETTINGS_ENV_VARS = [
    'GOOGLE_MAPS_API_KEY',
    'GOOGLE_MAPS_API_URL',
    'GEOCODING_TIMEOUT',
    'GEOCODING_VERIFY_SSL',
    'LOG_LEVEL',
    'APP_NAME',
    'DEBUG',
    'HOST',
    'PORT',
]


class GoogleMapsStub:
    """Stands in for the Google Maps endpoint through httpx.MockTransport."""

    def __init__(self, payload: Optional[Dict[str, Any]]):
        self.payload = payload
        self.status_code = 200
        self.content: Optional[bytes] = None
        self.error: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def setup_test_env() -> Generator[None, None, None]:
    """Strip settings variables from the environment for each test."""
    original_env = os.environ.copy()

    os.environ['TESTING'] = '1'
    for name in SETTINGS_ENV_VARS:
        os.environ.pop(name, None)

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def white_house_response() -> Dict[str, Any]:
    """Fresh copy of a successful Google Maps response."""
    return copy.deepcopy(WHITE_HOUSE_RESPONSE)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known API key."""
    return Settings(google_maps_api_key="test-api-key")


@pytest.fixture
def google_maps_stub(white_house_response: Dict[str, Any]) -> GoogleMapsStub:
    """Stubbed Google Maps endpoint answering with the White House response."""
    return GoogleMapsStub(white_house_response)


@pytest.fixture
def geocoding_service(test_settings: Settings, google_maps_stub: GoogleMapsStub) -> GeocodingService:
    """Geocoding service wired to the stubbed endpoint."""
    return GeocodingService(test_settings, client=google_maps_stub.client())


@pytest.fixture
async def async_client(
    test_settings: Settings,
    google_maps_stub: GoogleMapsStub
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create API test client with the geocoding service wired to the stub."""
    from httpx import AsyncClient, ASGITransport
    from google_maps_geocoder.main import app
    from google_maps_geocoder.dependencies import get_geocoding_service

    def override_get_geocoding_service() -> GeocodingService:
        return GeocodingService(test_settings, client=google_maps_stub.client())

    app.dependency_overrides[get_geocoding_service] = override_get_geocoding_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
