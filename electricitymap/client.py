"""Client for the Electricity Maps v3 API."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from electricitymap.config import BASE_URL, ClientConfig
from electricitymap.exceptions import RequestConstructionError
from electricitymap.models import (
    APIParams,
    CarbonIntensity,
    CarbonIntensityRange,
    PowerBreakdown,
    PowerBreakdownRange,
    RecentCarbonIntensity,
    RecentPowerBreakdown,
    Zone,
)
from electricitymap.transport import http_get


logger = logging.getLogger(__name__)

AUTH_HEADER = "auth-token"


def _format_time(value: Union[datetime, str]) -> str:
    return value.isoformat() if isinstance(value, datetime) else value


def build_headers(api_key: str) -> Dict[str, str]:
    """Return the authentication header sent with every request."""
    return {AUTH_HEADER: api_key}


def build_query(params: APIParams) -> Dict[str, str]:
    """Map the set fields of ``params`` to their query-string keys.

    Unset fields (``None``, empty strings, a false ``estimation_fallback``) are
    left out entirely.
    """
    query: Dict[str, str] = {}

    if params.zone:
        query["zone"] = params.zone

    if (params.lon is None) != (params.lat is None):
        raise RequestConstructionError("lon and lat must be given together")
    if params.lon is not None:
        query["lon"] = str(params.lon)
        query["lat"] = str(params.lat)

    if params.datetime:
        query["datetime"] = _format_time(params.datetime)
    if params.start:
        query["start"] = _format_time(params.start)
    if params.end:
        query["end"] = _format_time(params.end)

    if params.estimation_fallback:
        query["estimationFallback"] = "true"

    return query


class ElectricityMap:
    """Typed access to the Electricity Maps endpoints.

    Every call takes either an ``APIParams`` or the same fields as keyword
    arguments::

        client = ElectricityMap("my-token")
        client.live_carbon_intensity(zone="DE")
        client.past_carbon_intensity_range(zone="FR", start="2023-01-01T00:00:00Z", end="2023-01-10T00:00:00Z")
    """

    def __init__(self, api_key: str, base_url: str = BASE_URL):
        self._config = ClientConfig(api_token=api_key, base_url=base_url)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ElectricityMap":
        if not config.api_token:
            raise ValueError("Electricity Maps API token is not configured")
        return cls(config.api_token, config.base_url)

    @property
    def api_key(self) -> str:
        return self._config.api_token

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    def _get(self, path: str, destination: Any, params: Optional[APIParams] = None) -> Any:
        """Fetch ``path`` and decode the response as ``destination``."""
        query = build_query(params) if params is not None else {}
        return http_get(f"{self.base_url}{path}", build_headers(self.api_key), query, destination)

    @staticmethod
    def _params(params: Optional[APIParams], fields: Dict[str, Any]) -> APIParams:
        if params is not None and fields:
            raise RequestConstructionError("Pass either an APIParams or keyword arguments, not both")
        if params is not None:
            return params
        try:
            return APIParams(**fields)
        except ValidationError as exc:
            raise RequestConstructionError(str(exc)) from exc

    def get_zones(self) -> Dict[str, Zone]:
        """Return the zones available.

        Without a token the API lists all zones; with one it lists the zones
        and routes that token can access.
        """
        logger.info("Getting Electricity Map zones")
        return self._get("/zones", Dict[str, Zone])

    def live_carbon_intensity(self, params: Optional[APIParams] = None, **fields: Any) -> CarbonIntensity:
        """Last known carbon intensity (gCO2eq/kWh) of electricity consumed in a zone."""
        logger.info("Getting Electricity Map live carbon intensity")
        return self._get("/carbon-intensity/latest", CarbonIntensity, self._params(params, fields))

    def live_power_breakdown(self, params: Optional[APIParams] = None, **fields: Any) -> PowerBreakdown:
        """Last known origin of electricity in a zone.

        Production and consumption are in MW by production type, imports and
        exports are the physical flows at the zone border. The percentages
        describe the share of consumption from renewable and fossil-free
        (renewables plus nuclear) sources.
        """
        logger.info("Getting Electricity Map live power breakdown")
        return self._get("/power-breakdown/latest", PowerBreakdown, self._params(params, fields))

    def recent_carbon_intensity(self, params: Optional[APIParams] = None, **fields: Any) -> RecentCarbonIntensity:
        """Last 24 hours of carbon intensity at 60 minute resolution."""
        logger.info("Getting Electricity Map recent carbon intensity")
        return self._get("/carbon-intensity/history", RecentCarbonIntensity, self._params(params, fields))

    def recent_power_breakdown(self, params: Optional[APIParams] = None, **fields: Any) -> RecentPowerBreakdown:
        """Last 24 hours of power consumption and production breakdown at 60 minute resolution."""
        logger.info("Getting Electricity Map recent power breakdown")
        return self._get(
            "/power-consumption-breakdown/history", RecentPowerBreakdown, self._params(params, fields)
        )

    def past_carbon_intensity(self, params: Optional[APIParams] = None, **fields: Any) -> CarbonIntensity:
        """Carbon intensity at ``datetime``, optionally with estimated data."""
        logger.info("Getting Electricity Map past carbon intensity")
        return self._get("/carbon-intensity/past", CarbonIntensity, self._params(params, fields))

    def past_carbon_intensity_range(
        self, params: Optional[APIParams] = None, **fields: Any
    ) -> CarbonIntensityRange:
        """Carbon intensity from ``start`` up to but excluding ``end``.

        The API limits the range to 10 days.
        """
        logger.info("Getting Electricity Map past carbon intensity range")
        return self._get("/carbon-intensity/past-range", CarbonIntensityRange, self._params(params, fields))

    def past_power_breakdown(self, params: Optional[APIParams] = None, **fields: Any) -> PowerBreakdown:
        """Power breakdown at ``datetime``, optionally with estimated data."""
        logger.info("Getting Electricity Map past power breakdown")
        return self._get("/power-breakdown/past", PowerBreakdown, self._params(params, fields))

    def past_power_breakdown_range(self, params: Optional[APIParams] = None, **fields: Any) -> PowerBreakdownRange:
        """Power breakdown from ``start`` up to but excluding ``end``.

        The API limits the range to 10 days.
        """
        logger.info("Getting Electricity Map past power breakdown range")
        return self._get("/power-breakdown/past-range", PowerBreakdownRange, self._params(params, fields))
