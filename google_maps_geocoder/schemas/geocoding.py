"""Pydantic schemas for the geocoding service."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class GeocodeResult(BaseModel):
    """Address segments extracted from the first Google Maps result.

    Instances are immutable. The decoded response is kept on
    ``raw_response`` for diagnostics but left out of serialization.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "city": "Washington",
                "county": None,
                "state_long_name": "District of Columbia",
                "state_short_name": "DC",
                "country_long_name": "United States",
                "country_short_name": "US",
                "postal_code": "20500",
                "lat": 38.8976633,
                "lng": -77.0365739,
                "formatted_address": "1600 Pennsylvania Avenue NW, Washington, DC 20500, USA",
                "formatted_street_address": "1600 Pennsylvania Avenue Northwest",
                "partial_match": False,
                "exact_match": True
            }
        }
    )

    city: Optional[str] = Field(None, description="Sublocality, or locality when absent")
    county: Optional[str] = Field(None, description="Second-level administrative area")
    state_long_name: Optional[str] = Field(None, description="State name")
    state_short_name: Optional[str] = Field(None, description="State abbreviation")
    country_long_name: Optional[str] = Field(None, description="Country name")
    country_short_name: Optional[str] = Field(None, description="ISO country code")
    postal_code: Optional[str] = Field(None, description="Postal/ZIP code")
    lat: Optional[float] = Field(None, description="Latitude in decimal degrees")
    lng: Optional[float] = Field(None, description="Longitude in decimal degrees")
    formatted_address: Optional[str] = Field(None, description="Complete formatted address")
    formatted_street_address: Optional[str] = Field(
        None,
        description="Street number and route, space-joined"
    )
    partial_match: bool = Field(
        False,
        description="Google could not match the whole address"
    )
    raw_response: Dict[str, Any] = Field(
        default_factory=dict,
        exclude=True,
        repr=False,
        description="Decoded Google Maps response"
    )

    @computed_field
    @property
    def exact_match(self) -> bool:
        """Whether Google returned an exact match for the address."""
        return not self.partial_match

    def is_exact_match(self) -> bool:
        """
        Check whether the result is an exact match.

        Returns:
            False only when Google flagged the result as a partial match
        """
        return self.exact_match

    @classmethod
    def from_response(cls, json: Optional[Dict[str, Any]]) -> "GeocodeResult":
        """
        Build a result from an already decoded Google Maps response.

        Args:
            json: Decoded response body

        Returns:
            GeocodeResult for the first entry of ``results``

        Raises:
            GeocodingError: If the response is empty or its status is not OK
        """
        from google_maps_geocoder.services.geocoding_service import parse_geocode_response

        return parse_geocode_response(json)


class GeocodingErrorResponse(BaseModel):
    """Error body returned when Google Maps rejects a request."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "ZERO_RESULTS",
                "error_code": "NOT_FOUND",
                "status": "ZERO_RESULTS"
            }
        }
    )

    detail: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    status: Optional[str] = Field(None, description="Status reported by Google Maps")


def is_exact_match(result: GeocodeResult) -> bool:
    """Return True unless Google flagged the result as a partial match."""
    return result.is_exact_match()
