"""Open-Meteo driver (free, no API key, coordinates only)."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from desklet_weather.conversions import compass_direction, to_float
from desklet_weather.drivers.base import PARSE_ERRORS, WeatherDriver, day_name, section
from desklet_weather.drivers.openmeteo import client
from desklet_weather.drivers.openmeteo.codes import DESCRIPTIONS, ICONS
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


class OpenMeteoDriver(WeatherDriver):
    """
    Current conditions and a 7-day forecast from one Open-Meteo request.

    The forecast is fetched first; its grid-snapped coordinates then feed the
    geocode.xyz reverse lookup for the city name.
    """

    info = DriverInfo(
        name="openmeteo",
        display_name="Open-Meteo",
        max_days=client.FORECAST_DAYS,
        link_text="Open-Meteo",
        link_url="https://open-meteo.com/",
        capabilities=Capabilities(cc_visibility=False),
    )
    icons = ICONS
    descriptions = DESCRIPTIONS
    require_coordinates = True

    async def _refresh(self, record: WeatherRecord, spec: StationSpec, today: date) -> bool:
        lat, lon = spec.latlon  # type: ignore[misc]
        forecast = await self._load(
            record,
            client.OPEN_METEO_API,
            sections=("meta", "cc", "forecast"),
            marker=client.has_latitude,
            invalid_message="Invalid forecast response",
            step="Forecast download",
            params=client.forecast_params(lat, lon),
        )
        if forecast is None:
            return False

        meta = await self._load(
            record,
            client.geocode_url(forecast["latitude"], forecast["longitude"]),
            sections=("meta",),
            marker=client.has_city,
            invalid_message="Invalid location response",
            step="Location lookup",
            params=client.GEOCODE_PARAMS,
        )

        if meta is not None:
            with section(record, "meta", "Incomplete location metadata"):
                record.location = self._parse_meta(meta, forecast)
        with section(record, "cc", "Incomplete current conditions data"):
            record.current = self._parse_current(forecast["current"])
        with section(record, "forecast", "Incomplete forecast data"):
            is_daytime = _is_day(forecast.get("current", {}))
            record.days = self._parse_forecast(forecast["daily"], is_daytime, today)
        return True

    def _build_link(self, spec: StationSpec, record: WeatherRecord) -> str:
        return self.info.link_url

    # -- parsing ------------------------------------------------------------

    def _parse_meta(self, meta: dict[str, Any], forecast: dict[str, Any]) -> LocationInfo:
        return LocationInfo(
            city=meta["city"],
            region=meta.get("state") or None,
            country=meta.get("country") or "",
            coordinates=Coordinates(lat=forecast["latitude"], lon=forecast["longitude"]),
        )

    def _parse_current(self, current: dict[str, Any]) -> CurrentConditions:
        is_daytime = _is_day(current)
        temperature = to_float(current.get("temperature_2m"))
        return CurrentConditions(
            temperature=temperature,
            has_temperature=temperature is not None,
            feels_like=to_float(current.get("apparent_temperature")),
            humidity=to_float(current.get("relative_humidity_2m")),
            pressure=to_float(current.get("surface_pressure")),
            wind_speed=to_float(current.get("wind_speed_10m")),
            wind_direction=compass_direction(current.get("wind_direction_10m")),
            condition_text=self._text(current["weather_code"], is_daytime),
            icon=self._icon(current["weather_code"], is_daytime),
        )

    def _parse_forecast(
        self, daily: dict[str, Any], is_daytime: bool, today: date
    ) -> list[DayForecast]:
        times = daily["time"]
        reference = date.fromisoformat(times[0]) if times else today

        days = blank_days(self.horizon)
        for i in range(min(len(times), self.horizon)):
            # night variants only make sense for today
            daytime = is_daytime if i == 0 else True
            try:
                days[i] = self._day(daily, i, day_name(reference, i), daytime)
            except PARSE_ERRORS:
                logger.exception("Could not build forecast day %d", i)
        return days

    def _day(self, daily: dict[str, Any], i: int, name: str, daytime: bool) -> DayForecast:
        code = daily["weather_code"][i]
        return DayForecast(
            day=name,
            maximum_temperature=to_float(daily["temperature_2m_max"][i]),
            minimum_temperature=to_float(daily["temperature_2m_min"][i]),
            wind_speed=to_float(daily["wind_speed_10m_max"][i]),
            wind_direction=compass_direction(daily["wind_direction_10m_dominant"][i]),
            humidity=to_float(daily["relative_humidity_2m_mean"][i]),
            pressure=to_float(daily["surface_pressure_mean"][i]),
            condition_text=self._text(code, daytime),
            icon=self._icon(code, daytime),
        )


def _is_day(current: dict[str, Any]) -> bool:
    return str(current.get("is_day", 1)) == "1"
