"""BBC Weather driver (location id or coordinates, no API key)."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

from desklet_weather.conversions import to_float
from desklet_weather.drivers.base import PARSE_ERRORS, WeatherDriver, day_name, dig, section
from desklet_weather.drivers.bbc import client
from desklet_weather.drivers.bbc.codes import DESCRIPTIONS, ICONS
from desklet_weather.schemas import (
    Capabilities,
    Coordinates,
    CurrentConditions,
    DayForecast,
    DriverInfo,
    LocationInfo,
    WeatherRecord,
    blank_days,
)
from desklet_weather.station import StationSpec

logger = logging.getLogger(__name__)


class BBCDriver(WeatherDriver):
    """
    Observation plus the 7-day aggregated forecast from the BBC weather broker.

    The locator runs first: coordinates are resolved to the nearest BBC
    location, a location id is checked for existence. Observation and
    forecast are then fetched concurrently for the resolved id.
    """

    info = DriverInfo(
        name="bbc",
        display_name="BBC Weather",
        max_days=client.FORECAST_DAYS,
        link_text="BBC Weather",
        link_url=client.LOCATION_PAGE,
        capabilities=Capabilities(meta_region=False, cc_pressure_trend=True),
    )
    icons = ICONS
    descriptions = DESCRIPTIONS

    _location_id: str = ""

    async def _refresh(self, record: WeatherRecord, spec: StationSpec, today: date) -> bool:
        if spec.latlon is not None:
            url, params = client.locator_by_coordinates(*spec.latlon)
            marker, invalid = client.has_results, "Invalid location metadata response for lat/lon"
        else:
            url, params = client.locator_by_id(spec.location_id or "")
            marker, invalid = client.has_name, "Invalid location metadata response for ID"

        meta = await self._load(
            record,
            url,
            sections=("meta", "cc", "forecast"),
            marker=marker,
            invalid_message=invalid,
            step="Location lookup",
            params=params,
        )
        if meta is None:
            return False

        location = _locator_entry(meta, spec)
        location_id = str(location.get("id") or spec.location_id or "")
        if not location_id:
            for name in ("meta", "cc", "forecast"):
                record.status.fail(name, "Location lookup failed: missing location id")
            return False

        current, forecast = await asyncio.gather(
            self._load(
                record,
                client.observation_url(location_id),
                sections=("cc",),
                marker=client.has_observations,
                invalid_message="Invalid current conditions response",
                step="Observation download",
            ),
            self._load(
                record,
                client.forecast_url(location_id),
                sections=("forecast",),
                marker=client.has_forecasts,
                invalid_message="Invalid forecast response",
                step="Forecast download",
            ),
        )

        with section(record, "meta", "Incomplete location metadata"):
            record.location = self._parse_meta(location)
        if current is not None:
            with section(record, "cc", "Incomplete current conditions data"):
                record.current = self._parse_current(current, forecast)
        if forecast is not None:
            with section(record, "forecast", "Incomplete forecast data"):
                record.days = self._parse_forecast(forecast, today)

        self._location_id = location_id
        return True

    def _build_link(self, spec: StationSpec, record: WeatherRecord) -> str:
        return f"{client.LOCATION_PAGE}{self._location_id}"

    # -- parsing ------------------------------------------------------------

    def _parse_meta(self, location: dict[str, Any]) -> LocationInfo:
        city = location.get("name") or ""
        country = location.get("country") or ""
        if not city or not country:
            raise ValueError(f"missing city or country in {location!r}")
        return LocationInfo(
            city=city,
            country=country,
            coordinates=Coordinates(
                lat=to_float(location.get("lat", location.get("latitude"))),
                lon=to_float(location.get("lon", location.get("longitude"))),
            ),
        )

    def _parse_current(
        self, current: dict[str, Any], forecast: dict[str, Any] | None
    ) -> CurrentConditions:
        obs = current["observations"][0]
        # the first detailed forecast report fills what observations lack
        report = dig(forecast, "forecasts", 0, "detailed", "reports", 0) or {}
        is_daytime = not (forecast or {}).get("isNight", False)

        temperature = to_float(dig(obs, "temperature", "C"))
        # null readings fall back too, zero is a reading
        humidity = obs.get("humidityPercent")
        if humidity is None:
            humidity = report.get("humidity")
        pressure = obs.get("pressureMb")
        if pressure is None:
            pressure = report.get("pressure")
        trend = obs.get("pressureDirection") or report.get("pressureDirection")
        visibility = obs.get("visibility") or report.get("visibility")
        return CurrentConditions(
            temperature=temperature,
            has_temperature=temperature is not None,
            feels_like=to_float(report.get("feelsLikeTemperatureC")),
            humidity=to_float(humidity),
            pressure=to_float(pressure),
            pressure_trend=self._text(trend) or None,
            wind_speed=to_float(dig(obs, "wind", "windSpeedKph")),
            wind_direction=dig(obs, "wind", "windDirectionAbbreviation"),
            visibility_text=self._text(visibility) or None,
            condition_text=self._text(report.get("weatherTypeText")),
            icon=self._icon(report.get("weatherType"), is_daytime),
        )

    def _parse_forecast(self, forecast: dict[str, Any], today: date) -> list[DayForecast]:
        entries = forecast["forecasts"]
        is_daytime = not forecast.get("isNight", False)
        first_date = dig(entries, 0, "summary", "report", "localDate")
        reference = date.fromisoformat(first_date) if first_date else today

        days = blank_days(self.horizon)
        for i, entry in enumerate(entries[: self.horizon]):
            summary = dig(entry, "summary", "report") or {}
            detail = dig(entry, "detailed", "reports", 0) or {}
            # night variants only make sense for today
            daytime = is_daytime if i == 0 else True
            try:
                days[i] = self._day(summary, detail, day_name(reference, i), daytime)
            except PARSE_ERRORS:
                logger.exception("Could not build forecast day %d", i)
        return days

    def _day(
        self, summary: dict[str, Any], detail: dict[str, Any], name: str, daytime: bool
    ) -> DayForecast:
        return DayForecast(
            day=name,
            maximum_temperature=to_float(summary.get("maxTempC")),
            minimum_temperature=to_float(summary.get("minTempC")),
            wind_speed=to_float(summary.get("windSpeedKph")),
            wind_direction=summary.get("windDirection"),
            humidity=to_float(detail.get("humidity")),
            pressure=to_float(detail.get("pressure")),
            condition_text=self._text(summary.get("weatherTypeText")),
            icon=self._icon(summary.get("weatherType"), daytime),
        )


def _locator_entry(meta: dict[str, Any], spec: StationSpec) -> dict[str, Any]:
    """The location record of a locator response (search or direct lookup)."""
    if spec.latlon is not None:
        return meta["response"]["results"]["results"][0]
    return meta["response"]
