"""OpenWeatherMap free-tier driver (API key, 5 days of 3-hour blocks)."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any

from desklet_weather.aggregation import ForecastSample, aggregate_days
from desklet_weather.conversions import compass_direction, m_to_km, mps_to_kph, title_case, to_float
from desklet_weather.drivers.base import (
    PARSE_ERRORS,
    WeatherDriver,
    day_name,
    dig,
    resolve_language,
    section,
)
from desklet_weather.drivers.owmfree import client
from desklet_weather.drivers.owmfree.codes import ICONS, PRIORITY
from desklet_weather.schemas import (
    Capabilities,
    Coordinates,
    CurrentConditions,
    DayForecast,
    DriverInfo,
    LocationInfo,
    WeatherRecord,
)
from desklet_weather.station import StationSpec

logger = logging.getLogger(__name__)


class OWMFreeDriver(WeatherDriver):
    """
    Current weather plus the 5 day / 3 hour forecast.

    Day 0 is the first forecast block as reported. Later days fold their
    blocks together: temperature extremes, highest humidity and ground-level
    pressure, the windiest block's wind, and the most severe daytime icon.
    """

    info = DriverInfo(
        name="owmfree",
        display_name="OpenWeatherMap Free",
        max_days=client.FORECAST_DAYS,
        link_text="openweathermap.org",
        link_url=client.CITY_PAGE,
        min_ttl=client.MIN_TTL,
        needs_api_key=True,
        capabilities=Capabilities(meta_region=False),
    )
    icons = ICONS

    _city_id: str = ""

    async def _refresh(self, record: WeatherRecord, spec: StationSpec, today: date) -> bool:
        params = client.request_params(
            spec, self.api_key, resolve_language(self.language, client.LANG_MAP)
        )
        current, forecast = await asyncio.gather(
            self._load(
                record,
                client.CURRENT_URL,
                sections=("cc",),
                marker=client.is_ok,
                invalid_message="Invalid current conditions response",
                step="Current conditions download",
                params=params,
            ),
            self._load(
                record,
                client.FORECAST_URL,
                sections=("forecast",),
                marker=client.is_ok,
                invalid_message="Invalid forecast response",
                step="Forecast download",
                params=params,
            ),
        )
        if current is None and forecast is None:
            return False

        with section(record, "meta", "Incomplete location metadata"):
            record.location = self._parse_meta(current, forecast)
        if current is not None:
            with section(record, "cc", "Incomplete current conditions data"):
                record.current = self._parse_current(current)
        if forecast is not None:
            with section(record, "forecast", "Incomplete forecast data"):
                record.days = self._parse_forecast(forecast, today)

        self._city_id = str(
            spec.location_id or dig(current, "id") or dig(forecast, "city", "id") or ""
        )
        return True

    def _build_link(self, spec: StationSpec, record: WeatherRecord) -> str:
        return f"{client.CITY_PAGE}{self._city_id}"

    # -- parsing ------------------------------------------------------------

    def _parse_meta(
        self, current: dict[str, Any] | None, forecast: dict[str, Any] | None
    ) -> LocationInfo:
        city = dig(forecast, "city")
        if city:
            name, country, coord = city["name"], city.get("country"), city.get("coord", {})
        elif current is not None:
            name, country, coord = current["name"], dig(current, "sys", "country"), current.get("coord", {})
        else:
            raise KeyError("city")
        return LocationInfo(
            city=name,
            country=country or "",
            coordinates=Coordinates(lat=coord.get("lat"), lon=coord.get("lon")),
        )

    def _parse_current(self, current: dict[str, Any]) -> CurrentConditions:
        main = current["main"]
        wind = current.get("wind", {})
        weather = current["weather"][0]
        temperature = to_float(main.get("temp"))
        return CurrentConditions(
            temperature=temperature,
            has_temperature=temperature is not None,
            feels_like=to_float(main.get("feels_like")),
            humidity=to_float(main.get("humidity")),
            pressure=to_float(main.get("pressure")),
            wind_speed=mps_to_kph(wind.get("speed")),
            wind_direction=compass_direction(wind.get("deg")),
            visibility=m_to_km(current.get("visibility")),
            condition_text=self._text(title_case(weather.get("description"))),
            icon=self._icon(weather.get("icon")),
        )

    def _parse_forecast(self, forecast: dict[str, Any], today: date) -> list[DayForecast]:
        utc_offset = timedelta(seconds=dig(forecast, "city", "timezone") or 0)
        samples = [
            sample
            for sample in (self._sample(block, utc_offset) for block in forecast["list"])
            if sample is not None
        ]
        reference = samples[0].time.date() if samples else today

        aggregates = aggregate_days(samples, self.horizon, priority=PRIORITY)
        return [
            self._day_from_aggregate(day_name(reference, i), agg)
            for i, agg in enumerate(aggregates)
        ]

    @staticmethod
    def _sample(block: dict[str, Any], utc_offset: timedelta) -> ForecastSample | None:
        """One 3-hour block on the city's local wall clock; ``None`` if malformed."""
        try:
            local = datetime.fromtimestamp(block["dt"], UTC) + utc_offset
            main = block["main"]
            wind = block.get("wind", {})
            weather = block["weather"][0]
            ground = to_float(main.get("grnd_level"))
            icon = weather.get("icon") or ""
            return ForecastSample(
                time=local.replace(tzinfo=None),
                temp_max=to_float(main.get("temp_max")),
                temp_min=to_float(main.get("temp_min")),
                humidity=to_float(main.get("humidity")),
                pressure_pa=ground * 100 if ground is not None else None,
                wind_speed=mps_to_kph(wind.get("speed")),
                wind_direction=compass_direction(wind.get("deg")),
                code=icon,
                text=title_case(weather.get("description")),
                is_daytime=not icon.endswith("n"),
            )
        except PARSE_ERRORS:
            logger.warning("Skipping malformed forecast block: %r", block.get("dt"), exc_info=True)
            return None
