"""
Command line entry point.

Geocodes one address and prints the result as JSON:

    python -m google_maps_geocoder "1600 Pennsylvania Ave"
"""
import argparse
import logging
import sys
from typing import List, Optional

import httpx
from pydantic import ValidationError

from google_maps_geocoder.config import Settings
from google_maps_geocoder.logging_config import configure_logging
from google_maps_geocoder.services.geocoding_service import GeocodingError, GeocodingService

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Geocode the address given on the command line.

    Args:
        argv: Arguments without the program name; sys.argv when omitted

    Returns:
        Exit code: 0 on success, 1 when Google Maps rejects the address,
        2 on invalid configuration, transport failures or a blank address
    """
    parser = argparse.ArgumentParser(description='Geocode an address with Google Maps')
    parser.add_argument('address', type=str, help='Address to geocode')
    parser.add_argument('--log-level', type=str, default=None, help='Log level (default: LOG_LEVEL or INFO)')
    args = parser.parse_args(argv)

    overrides = {"log_level": args.log_level} if args.log_level else {}
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    service = GeocodingService(settings)
    try:
        result = service.geocode(args.address)
    except GeocodingError as e:
        print(f"Geocoding failed: {e}", file=sys.stderr)
        print(f"Status: {e.status}", file=sys.stderr)
        return 1
    except (httpx.HTTPError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Geocoding request failed: {e}")
        print(f"Request failed: {e}", file=sys.stderr)
        return 2

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
