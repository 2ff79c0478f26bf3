"""Geocoding service backed by the Google Maps Geocoding API."""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from google_maps_geocoder.config import Settings
from google_maps_geocoder.schemas.geocoding import GeocodeResult

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "OK"


class GeocodingError(Exception):
    """
    A geocoding error returned by Google Maps.

    The complete decoded response is available as ``json``, for example::

        {"results": [], "status": "ZERO_RESULTS"}

    It is an empty dict when Google returned an empty body.
    """

    def __init__(self, json: Optional[Dict[str, Any]] = None):
        self.json = json or {}
        self.status = self.json.get("status") if isinstance(self.json, dict) else None

        message = self.status or "Empty response"
        error_message = self.json.get("error_message") if isinstance(self.json, dict) else None
        if error_message:
            message = f"{message}: {error_message}"
        super().__init__(message)


def find_address_component(
    result: Dict[str, Any],
    component_type: str,
    name: str = "long_name"
) -> Optional[str]:
    """
    Look up a name of the first address component tagged with a type.

    Args:
        result: One entry of the response's ``results`` list
        component_type: Google address type, e.g. ``postal_code``
        name: ``long_name`` or ``short_name``

    Returns:
        The requested name, or None if no component carries the type
    """
    for component in result.get("address_components") or []:
        types = component.get("types")
        if types and component_type in types:
            return component.get(name)
    return None


def _coordinate(result: Dict[str, Any], axis: str) -> Optional[float]:
    location = (result.get("geometry") or {}).get("location") or {}
    value = location.get(axis)
    return float(value) if value is not None else None


def _city(result: Dict[str, Any]) -> Optional[str]:
    # An empty sublocality name still counts as present
    city = find_address_component(result, "sublocality")
    if city is None:
        city = find_address_component(result, "locality")
    return city


def _formatted_street_address(result: Dict[str, Any]) -> str:
    # Missing halves render as empty strings, keeping the separator.
    street_number = find_address_component(result, "street_number") or ""
    route = find_address_component(result, "route") or ""
    return f"{street_number} {route}"


# Field name -> extraction rule, each applied to results[0] on its own
ADDRESS_SEGMENT_RULES: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "city": _city,
    "county": lambda r: find_address_component(r, "administrative_area_level_2"),
    "state_long_name": lambda r: find_address_component(r, "administrative_area_level_1"),
    "state_short_name": lambda r: find_address_component(
        r, "administrative_area_level_1", "short_name"
    ),
    "country_long_name": lambda r: find_address_component(r, "country"),
    "country_short_name": lambda r: find_address_component(r, "country", "short_name"),
    "postal_code": lambda r: find_address_component(r, "postal_code"),
    "lat": lambda r: _coordinate(r, "lat"),
    "lng": lambda r: _coordinate(r, "lng"),
    "formatted_address": lambda r: r.get("formatted_address"),
    "formatted_street_address": _formatted_street_address,
}


def parse_geocode_response(json: Optional[Dict[str, Any]]) -> GeocodeResult:
    """
    Validate a decoded Google Maps response and extract its first result.

    Args:
        json: Decoded response body, possibly None or empty

    Returns:
        GeocodeResult built from ``results[0]``

    Raises:
        GeocodingError: If the response is empty, its status is not OK,
            or it carries no results
    """
    if not json or not isinstance(json, dict) or json.get("status") != SUCCESS_STATUS:
        raise GeocodingError(json)

    results = json.get("results")
    if not results or not isinstance(results, list):
        raise GeocodingError(json)

    first = results[0]
    segments = {
        segment: rule(first) for segment, rule in ADDRESS_SEGMENT_RULES.items()
    }
    return GeocodeResult(
        **segments,
        partial_match=first.get("partial_match") is True,
        raw_response=json
    )


class GeocodingService:
    """
    Service for forward geocoding using Google Maps.

    Every call performs exactly one synchronous HTTPS request. There is
    no caching, rate limiting or retrying.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None):
        """
        Initialize geocoding service.

        Args:
            settings: Application settings
            client: Optional HTTP client; a short-lived one is opened per
                request when omitted
        """
        self.settings = settings
        self.client = client

        if not settings.geocoding_verify_ssl:
            logger.warning(
                "TLS certificate verification is disabled for geocoding requests"
            )

    def build_request_url(self, address: str) -> str:
        """Build the Google Maps request URL for an address."""
        params = {"address": address, "sensor": "false"}
        # Read per request so configuration changes are picked up
        if self.settings.has_api_key:
            params["key"] = self.settings.google_maps_api_key.strip()
        return str(httpx.URL(self.settings.google_maps_api_url, params=params))

    def fetch_response(self, address: str) -> Optional[Dict[str, Any]]:
        """
        Send the geocoding request and decode the JSON body.

        A non-2xx reply whose body is a Google Maps status document is
        returned like any other, so its status reaches the caller.

        Returns:
            The decoded body, or None when the body is empty

        Raises:
            httpx.HTTPError: On transport failures, and on non-2xx replies
                without a status document
            json.JSONDecodeError: If a 2xx body is not valid JSON
        """
        url = self.build_request_url(address)
        logger.debug(f"Requesting geocode for address: {address}")

        if self.client is not None:
            response = self.client.get(url)
        else:
            with httpx.Client(
                timeout=self.settings.geocoding_timeout,
                verify=self.settings.geocoding_verify_ssl
            ) as client:
                response = client.get(url)

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and "status" in body:
                return body
            response.raise_for_status()

        if not response.content.strip():
            return None
        return response.json()

    def geocode(self, address: str) -> GeocodeResult:
        """
        Geocode an address.

        Args:
            address: A geocodable address, e.g. "1600 Pennsylvania Ave"

        Returns:
            GeocodeResult for the best match

        Raises:
            ValueError: If the address is empty
            GeocodingError: If Google Maps returns no usable result
        """
        if not address or not address.strip():
            raise ValueError("Address must be a non-empty string")

        result = parse_geocode_response(self.fetch_response(address))
        logger.info(f'Geocoded "{address}" => "{result.formatted_address}"')
        return result


def geocode(address: str, settings: Optional[Settings] = None) -> GeocodeResult:
    """Geocode an address with a one-off service built from settings."""
    if settings is None:
        settings = Settings()
    return GeocodingService(settings).geocode(address)
