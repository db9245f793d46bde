"""Command line entry point for the Electricity Maps client."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import TypeAdapter

from electricitymap.client import ElectricityMap
from electricitymap.config import TOKEN_ENV_VAR, ClientConfig, LoggingConfig, load_config
from electricitymap.exceptions import ElectricityMapError
from electricitymap.models import APIParams


logger = logging.getLogger(__name__)

OPERATIONS: Dict[str, Callable[[ElectricityMap, APIParams], object]] = {
    "zones": lambda client, _: client.get_zones(),
    "carbon-intensity-latest": ElectricityMap.live_carbon_intensity,
    "power-breakdown-latest": ElectricityMap.live_power_breakdown,
    "carbon-intensity-history": ElectricityMap.recent_carbon_intensity,
    "power-breakdown-history": ElectricityMap.recent_power_breakdown,
    "carbon-intensity-past": ElectricityMap.past_carbon_intensity,
    "carbon-intensity-past-range": ElectricityMap.past_carbon_intensity_range,
    "power-breakdown-past": ElectricityMap.past_power_breakdown,
    "power-breakdown-past-range": ElectricityMap.past_power_breakdown_range,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the Electricity Maps API")
    parser.add_argument("operation", choices=sorted(OPERATIONS), help="Endpoint to call")
    parser.add_argument("--zone", help="Zone identifier (e.g. 'DE')")
    parser.add_argument("--lon", type=float, help="Longitude, when querying by geolocation")
    parser.add_argument("--lat", type=float, help="Latitude, when querying by geolocation")
    parser.add_argument("--datetime", help="Point in time in ISO 8601 format")
    parser.add_argument("--start", help="Range start in ISO 8601 format")
    parser.add_argument("--end", help="Range end in ISO 8601 format (excluded)")
    parser.add_argument("--estimation-fallback", action="store_true", help="Include estimated data")
    parser.add_argument("--api-token", help=f"API token (defaults to ${TOKEN_ENV_VAR} or the config file)")
    parser.add_argument("--config", type=Path, help="Path to a YAML configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _client_config(args: argparse.Namespace) -> tuple[ClientConfig, LoggingConfig]:
    """Resolve the token from the command line, the environment or the config file, in that order."""
    token = args.api_token or os.getenv(TOKEN_ENV_VAR)
    if token and args.config is None:
        return ClientConfig(api_token=token), LoggingConfig()

    config = load_config(args.config)
    client_config = config.electricitymap
    if token:
        client_config = client_config.model_copy(update={"api_token": token})
    return client_config, config.logging


def main(argv: Optional[List[str]] = None) -> int:
    """Run one API call and print the decoded result as JSON."""
    args = build_parser().parse_args(argv)

    try:
        client_config, logging_config = _client_config(args)
    except (FileNotFoundError, ValueError) as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("%s", exc)
        return 2

    log_level = "DEBUG" if args.debug else logging_config.level.upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))

    try:
        client = ElectricityMap.from_config(client_config)
        params = APIParams(
            zone=args.zone,
            lon=args.lon,
            lat=args.lat,
            datetime=args.datetime,
            start=args.start,
            end=args.end,
            estimation_fallback=args.estimation_fallback,
        )
        result = OPERATIONS[args.operation](client, params)
    except (ElectricityMapError, ValueError) as exc:
        logger.error("%s failed: %s", args.operation, exc)
        return 1

    payload = TypeAdapter(type(result)).dump_python(result, mode="json", by_alias=True)
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
