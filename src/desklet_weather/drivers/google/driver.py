"""Google Weather driver (API key, coordinates only)."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

from desklet_weather.conversions import compass_direction, to_float
from desklet_weather.drivers.base import (
    PARSE_ERRORS,
    WeatherDriver,
    day_name,
    dig,
    resolve_language,
    section,
)
from desklet_weather.drivers.google import client
from desklet_weather.drivers.google.codes import ICONS
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


class GoogleWeatherDriver(WeatherDriver):
    """
    Google Weather current conditions and daily forecast.

    Google returns no place names, so the city comes from a Nominatim
    reverse lookup. All three requests are independent and run concurrently.
    Condition text arrives already localized through ``languageCode``.
    """

    info = DriverInfo(
        name="google",
        display_name="Google Weather",
        max_days=client.FORECAST_DAYS,
        link_text="Google Weather",
        link_url=client.SEARCH_PAGE,
        needs_api_key=True,
        capabilities=Capabilities(forecast_pressure=False),
    )
    icons = ICONS
    require_coordinates = True

    async def _refresh(self, record: WeatherRecord, spec: StationSpec, today: date) -> bool:
        lat, lon = spec.latlon  # type: ignore[misc]
        lang = resolve_language(self.language, client.LANG_MAP)

        meta, current, forecast = await asyncio.gather(
            self._load(
                record,
                client.NOMINATIM_REVERSE,
                sections=("meta",),
                marker=client.has_type,
                invalid_message="Invalid location response",
                step="Location lookup",
                params=client.geocode_params(lat, lon),
            ),
            self._load(
                record,
                client.CURRENT_URL,
                sections=("cc",),
                marker=client.has_timezone,
                invalid_message="Invalid current conditions response",
                step="Current conditions download",
                params=client.weather_params(lat, lon, self.api_key, lang),
            ),
            self._load(
                record,
                client.FORECAST_URL,
                sections=("forecast",),
                marker=client.has_timezone,
                invalid_message="Invalid forecast response",
                step="Forecast download",
                params=client.forecast_params(lat, lon, self.api_key, lang),
            ),
        )

        if meta is not None:
            with section(record, "meta", "Error processing location data"):
                record.location = self._parse_meta(meta, lat, lon)
        if current is not None:
            with section(record, "cc", "Error processing current data"):
                record.current = self._parse_current(current)
        if forecast is not None:
            with section(record, "forecast", "Error processing forecast data"):
                is_daytime = (current or {}).get("isDaytime") is not False
                record.days = self._parse_forecast(forecast, is_daytime, today)
        return True

    def _build_link(self, spec: StationSpec, record: WeatherRecord) -> str:
        return client.search_link(record.location.city)

    # -- parsing ------------------------------------------------------------

    def _parse_meta(self, meta: dict[str, Any], lat: float, lon: float) -> LocationInfo:
        address = meta["address"]
        city = address.get("city") or address.get("town") or address.get("village")
        if not city:
            raise KeyError("address.city")
        return LocationInfo(
            city=city,
            country=address.get("country", ""),
            region=address.get("state"),
            coordinates=Coordinates(lat=lat, lon=lon),
        )

    def _parse_current(self, current: dict[str, Any]) -> CurrentConditions:
        is_daytime = current.get("isDaytime") is not False
        condition = current["weatherCondition"]
        temperature = to_float(dig(current, "temperature", "degrees"))
        pressure = to_float(dig(current, "airPressure", "meanSeaLevelMillibars"))
        return CurrentConditions(
            temperature=temperature,
            has_temperature=temperature is not None,
            feels_like=to_float(dig(current, "feelsLikeTemperature", "degrees")),
            humidity=to_float(current.get("relativeHumidity")),
            pressure=int(pressure) if pressure is not None else None,
            wind_speed=to_float(dig(current, "wind", "speed", "value")),
            wind_direction=compass_direction(dig(current, "wind", "direction", "degrees")),
            visibility=to_float(dig(current, "visibility", "distance")),
            condition_text=self._text(dig(condition, "description", "text")),
            icon=self._icon(condition.get("type"), is_daytime),
        )

    def _parse_forecast(
        self, forecast: dict[str, Any], is_daytime: bool, today: date
    ) -> list[DayForecast]:
        entries = forecast["forecastDays"]
        reference = _display_date(entries[0]) if entries else None
        reference = reference or today

        days = blank_days(self.horizon)
        for i, entry in enumerate(entries[: self.horizon]):
            # tonight's half for today after dark, the daytime half otherwise
            daytime = is_daytime if i == 0 else True
            try:
                days[i] = self._day(entry, day_name(reference, i), daytime)
            except PARSE_ERRORS:
                logger.exception("Could not build forecast day %d", i)
        return days

    def _day(self, entry: dict[str, Any], name: str, daytime: bool) -> DayForecast:
        half = entry["daytimeForecast"] if daytime else entry["nighttimeForecast"]
        condition = half["weatherCondition"]
        return DayForecast(
            day=name,
            maximum_temperature=to_float(dig(entry, "maxTemperature", "degrees")),
            minimum_temperature=to_float(dig(entry, "minTemperature", "degrees")),
            wind_speed=to_float(dig(half, "wind", "speed", "value")),
            wind_direction=compass_direction(dig(half, "wind", "direction", "degrees")),
            humidity=to_float(half.get("relativeHumidity")),
            condition_text=self._text(dig(condition, "description", "text")),
            icon=self._icon(condition.get("type"), daytime),
        )


def _display_date(entry: dict[str, Any]) -> date | None:
    shown = entry.get("displayDate")
    if not shown:
        return None
    return date(shown["year"], shown["month"], shown["day"])
