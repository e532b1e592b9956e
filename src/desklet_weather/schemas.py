"""
Domain models for desklet weather.

Pydantic models for the normalized weather record handed to the display
layer. These define the canonical schema - drivers normalize provider
responses to these.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Status
# =============================================================================


class ServiceStatus(StrEnum):
    """Per-section load state for one refresh."""

    INIT = "init"
    OK = "ok"
    ERROR = "error"


class SectionStatus(BaseModel):
    """Independent status flags for the three record sections."""

    meta: ServiceStatus = ServiceStatus.INIT
    cc: ServiceStatus = ServiceStatus.INIT
    forecast: ServiceStatus = ServiceStatus.INIT
    last_error: str | None = None

    def fail(self, section: str, message: str) -> None:
        """Mark ``section`` as failed and remember the message."""
        setattr(self, section, ServiceStatus.ERROR)
        self.last_error = message

    @property
    def ok(self) -> bool:
        return all(
            s == ServiceStatus.OK for s in (self.meta, self.cc, self.forecast)
        )


# =============================================================================
# Location
# =============================================================================


class Coordinates(BaseModel):
    """WGS84 coordinates as reported by the provider."""

    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = Field(default=None, ge=-180, le=180)


class LocationInfo(BaseModel):
    """Resolved location metadata."""

    city: str = ""
    country: str = ""
    region: str | None = None
    coordinates: Coordinates = Field(default_factory=Coordinates)


# =============================================================================
# Weather
# =============================================================================


class CurrentConditions(BaseModel):
    """Current conditions, metric units."""

    temperature: float | None = None
    feels_like: float | None = None
    humidity: float | None = None
    pressure: float | None = None
    pressure_trend: str | None = None
    wind_speed: float | None = None
    wind_direction: str | None = None
    visibility: float | None = None
    visibility_text: str | None = None
    condition_text: str = ""
    icon: str = ""
    has_temperature: bool = False


class DayForecast(BaseModel):
    """Single day weather forecast."""

    day: str = ""
    maximum_temperature: float | None = None
    minimum_temperature: float | None = None
    humidity: float | None = None
    pressure: float | None = None
    wind_speed: float | None = None
    wind_direction: str | None = None
    condition_text: str = ""
    icon: str = ""


def blank_days(horizon: int) -> list[DayForecast]:
    """Build ``horizon`` blank forecast days."""
    return [DayForecast() for _ in range(horizon)]


class WeatherRecord(BaseModel):
    """
    Normalized weather record for one driver.

    ``days`` always holds exactly ``horizon`` entries so the display layer can
    rely on a constant shape, even before the first successful load.
    """

    model_config = ConfigDict(validate_assignment=True)

    horizon: int = Field(..., ge=1)
    location: LocationInfo = Field(default_factory=LocationInfo)
    current: CurrentConditions = Field(default_factory=CurrentConditions)
    days: list[DayForecast] = Field(default_factory=list)
    status: SectionStatus = Field(default_factory=SectionStatus)

    @model_validator(mode="before")
    @classmethod
    def _fill_days(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("days") and "horizon" in data:
            data = {**data, "days": blank_days(int(data["horizon"]))}
        return data

    @model_validator(mode="after")
    def _check_days(self) -> Self:
        if len(self.days) != self.horizon:
            msg = f"days must hold exactly {self.horizon} entries, got {len(self.days)}"
            raise ValueError(msg)
        return self

    @classmethod
    def blank(cls, horizon: int) -> WeatherRecord:
        """Record with blank sections and ``horizon`` blank days."""
        return cls(horizon=horizon)


# =============================================================================
# Driver description
# =============================================================================


class Capabilities(BaseModel):
    """Which optional fields a provider fills in."""

    model_config = ConfigDict(frozen=True)

    meta_country: bool = True
    meta_region: bool = True
    cc_feels_like: bool = True
    cc_visibility: bool = True
    cc_pressure: bool = True
    cc_pressure_trend: bool = False
    forecast_humidity: bool = True
    forecast_pressure: bool = True


class DriverInfo(BaseModel):
    """Static description of a driver, fixed at construction."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    max_days: int = Field(..., ge=1)
    link_text: str
    link_url: str = ""
    min_ttl: int = Field(default=600, description="Minimum seconds between refreshes")
    needs_api_key: bool = False
    capabilities: Capabilities = Field(default_factory=Capabilities)
