"""Data models for the Electricity Maps API."""

from datetime import datetime as dt
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class APIParams(BaseModel):
    """Query parameters shared by the zone/geolocation endpoints.

    Unset fields are ``None`` and never reach the query string. Either ``zone``
    or the ``lon``/``lat`` pair should be given, but that is left to the caller.
    """

    zone: Optional[str] = None
    lon: Optional[float] = None
    lat: Optional[float] = None
    datetime: Optional[Union[dt, str]] = None
    start: Optional[Union[dt, str]] = None
    end: Optional[Union[dt, str]] = None
    estimation_fallback: bool = False

    model_config = ConfigDict(extra="forbid")


class CarbonIntensity(BaseModel):
    """Carbon intensity (gCO2eq/kWh) of the electricity consumed in a zone."""

    zone: Optional[str] = None
    carbonIntensity: Optional[float] = None
    datetime: Optional[dt] = None
    updatedAt: Optional[dt] = None
    createdAt: Optional[dt] = None
    emissionFactorType: Optional[str] = None
    isEstimated: Optional[bool] = None
    estimationMethod: Optional[str] = None


class PowerProductionBreakdown(BaseModel):
    """Power (MW) produced in a zone, by production type."""

    biomass: Optional[float] = None
    coal: Optional[float] = None
    gas: Optional[float] = None
    geothermal: Optional[float] = None
    hydro: Optional[float] = None
    nuclear: Optional[float] = None
    oil: Optional[float] = None
    solar: Optional[float] = None
    unknown: Optional[float] = None
    wind: Optional[float] = None
    hydroDischarge: Optional[float] = Field(default=None, alias="hydro discharge")
    batteryDischarge: Optional[float] = Field(default=None, alias="battery discharge")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class PowerConsumptionBreakdown(PowerProductionBreakdown):
    """Power (MW) consumed in a zone after imports and exports, by production type."""


class PowerBreakdown(BaseModel):
    """Origin of the electricity in a zone at one point in time."""

    zone: Optional[str] = None
    datetime: Optional[dt] = None
    powerProductionBreakdown: PowerProductionBreakdown = Field(default_factory=PowerProductionBreakdown)
    powerProductionTotal: Optional[float] = None
    powerConsumptionBreakdown: PowerConsumptionBreakdown = Field(default_factory=PowerConsumptionBreakdown)
    powerConsumptionTotal: Optional[float] = None
    powerImportBreakdown: Dict[str, Optional[float]] = Field(default_factory=dict)
    powerImportTotal: Optional[float] = None
    powerExportBreakdown: Dict[str, Optional[float]] = Field(default_factory=dict)
    powerExportTotal: Optional[float] = None
    fossilFreePercentage: Optional[float] = None
    renewablePercentage: Optional[float] = None
    updatedAt: Optional[dt] = None
    createdAt: Optional[dt] = None
    isEstimated: Optional[bool] = None
    estimationMethod: Optional[str] = None


class Zone(BaseModel):
    """A zone as listed by the ``/zones`` endpoint."""

    countryName: Optional[str] = None
    zoneName: Optional[str] = None
    access: List[str] = Field(default_factory=list)


class RecentCarbonIntensity(BaseModel):
    """Last 24 hours of carbon intensity, hourly."""

    zone: Optional[str] = None
    history: List[CarbonIntensity] = Field(default_factory=list)


class RecentPowerBreakdown(BaseModel):
    """Last 24 hours of power breakdown, hourly."""

    zone: Optional[str] = None
    history: List[PowerBreakdown] = Field(default_factory=list)


class CarbonIntensityRange(BaseModel):
    """Past carbon intensity between a start (inclusive) and an end (exclusive)."""

    zone: Optional[str] = None
    data: List[CarbonIntensity] = Field(default_factory=list)


class PowerBreakdownRange(BaseModel):
    """Past power breakdown between a start (inclusive) and an end (exclusive)."""

    zone: Optional[str] = None
    data: List[PowerBreakdown] = Field(default_factory=list)
