"""US National Weather Service driver (coordinates or GeoNames id, no API key)."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Any

from desklet_weather.aggregation import ForecastSample, aggregate_bucket, bucket_by_day, select_at_hour
from desklet_weather.conversions import compass_direction, first_number, m_to_km, pa_to_hpa, to_float
from desklet_weather.drivers.base import PARSE_ERRORS, WeatherDriver, day_name, dig, section
from desklet_weather.drivers.bbc import client as bbc_client
from desklet_weather.drivers.nws import client
from desklet_weather.drivers.nws.codes import DESCRIPTIONS, ICONS
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
from desklet_weather.station import StationKind, StationSpec

logger = logging.getLogger(__name__)

ALL_SECTIONS = ("meta", "cc", "forecast")

#: Local start hour of the daytime 12-hour period
DAY_PERIOD_HOUR = 6


class NWSDriver(WeatherDriver):
    """
    National Weather Service observations and forecasts (US locations only).

    Resolution is sequential: point lookup, then the observation-station
    list, and only then the latest observation together with the hourly,
    12-hour and grid forecasts. A failed sequential step aborts the refresh.

    Daily values come from two sources: condition and wind from the 06:00
    daytime 12-hour period of each date, temperatures, humidity and
    pressure from the raw grid series bucketed by day.
    """

    info = DriverInfo(
        name="nws",
        display_name="National Weather Service",
        max_days=client.FORECAST_DAYS,
        link_text="https://www.weather.gov/",
        link_url=client.MAP_CLICK_PAGE,
        capabilities=Capabilities(
            meta_country=False,
            cc_feels_like=False,
            forecast_pressure=False,
        ),
    )
    icons = ICONS
    descriptions = DESCRIPTIONS
    allow_geoname_id = True
    require_coordinates = True

    async def _refresh(self, record: WeatherRecord, spec: StationSpec, today: date) -> bool:
        latlon = spec.latlon
        if spec.kind == StationKind.GEONAME_ID:
            latlon = await self._resolve_geoname(record, spec.location_id or "")
            if latlon is None:
                return False

        point = await self._load(
            record,
            client.points_url(*latlon),  # type: ignore[misc]
            sections=ALL_SECTIONS,
            marker=client.has_id,
            invalid_message="Invalid point metadata response",
            step="Point lookup",
        )
        if point is None:
            return False

        links = point.get("properties") or {}
        urls = [links.get(k) for k in ("observationStations", "forecastHourly", "forecast", "forecastGridData")]
        if not all(urls):
            self._fail_all(record, "Point lookup failed: forecast links missing")
            return False
        stations_url, hourly_url, periods_url, grid_url = urls

        stations = await self._load(
            record,
            stations_url,
            sections=ALL_SECTIONS,
            marker=client.has_type,
            invalid_message="Invalid observation stations response",
            step="Observation station lookup",
        )
        if stations is None:
            return False
        station_id = dig(stations, "features", 0, "properties", "stationIdentifier")
        if not station_id:
            self._fail_all(record, "Observation station lookup failed: no station found")
            return False

        latest, hourly, periods, grid = await asyncio.gather(
            self._load(
                record,
                client.latest_observation_url(station_id),
                sections=("cc",),
                marker=client.has_type,
                invalid_message="Invalid latest observation response",
                step="Latest observation download",
            ),
            # hourly data only fills gaps, so its failure fails no section
            self._load(
                record,
                hourly_url,
                sections=(),
                marker=client.has_type,
                invalid_message="Invalid hourly forecast response",
                step="Hourly forecast download",
                params=client.FORECAST_PARAMS,
            ),
            self._load(
                record,
                periods_url,
                sections=("forecast",),
                marker=client.has_type,
                invalid_message="Invalid 12-hour forecast response",
                step="12-hour forecast download",
                params=client.FORECAST_PARAMS,
            ),
            self._load(
                record,
                grid_url,
                sections=("forecast",),
                marker=client.has_type,
                invalid_message="Invalid grid forecast response",
                step="Grid forecast download",
                params=client.FORECAST_PARAMS,
            ),
        )

        first_hour = dig(hourly, "properties", "periods", 0) or {}
        is_daytime = first_hour.get("isDaytime") is not False

        with section(record, "meta", "Incomplete location metadata"):
            record.location = self._parse_meta(point)
        if latest is not None:
            with section(record, "cc", "Incomplete current data"):
                record.current = self._parse_current(latest, first_hour, is_daytime)
        if periods is not None and grid is not None:
            with section(record, "forecast", "Incomplete forecast data"):
                record.days = self._parse_forecast(periods, grid, is_daytime)
        return True

    def _build_link(self, spec: StationSpec, record: WeatherRecord) -> str:
        coords = record.location.coordinates
        lat = coords.lat if coords.lat is not None else spec.lat
        lon = coords.lon if coords.lon is not None else spec.lon
        return client.map_click_link(lat, lon)

    # -- resolution ---------------------------------------------------------

    async def _resolve_geoname(
        self, record: WeatherRecord, geoname_id: str
    ) -> tuple[float, float] | None:
        """Turn a GeoNames id into coordinates through the BBC locator."""
        url, params = bbc_client.locator_by_id(geoname_id)
        found = await self._load(
            record,
            url,
            sections=ALL_SECTIONS,
            marker=bbc_client.has_name,
            invalid_message="Unknown location id",
            step="Location id lookup",
            params=params,
        )
        if found is None:
            return None
        place = found["response"]
        lat = to_float(place.get("latitude", place.get("lat")))
        lon = to_float(place.get("longitude", place.get("lon")))
        if lat is None or lon is None:
            self._fail_all(record, "Location id lookup failed: no coordinates")
            return None
        return lat, lon

    @staticmethod
    def _fail_all(record: WeatherRecord, message: str) -> None:
        logger.warning("%s", message)
        for name in ALL_SECTIONS:
            record.status.fail(name, message)

    # -- parsing ------------------------------------------------------------

    def _parse_meta(self, point: dict[str, Any]) -> LocationInfo:
        location = point["properties"]["relativeLocation"]
        lon, lat = location["geometry"]["coordinates"][:2]
        return LocationInfo(
            city=location["properties"]["city"],
            region=location["properties"].get("state"),
            coordinates=Coordinates(lat=lat, lon=lon),
        )

    def _parse_current(
        self, latest: dict[str, Any], first_hour: dict[str, Any], is_daytime: bool
    ) -> CurrentConditions:
        obs = latest["properties"]

        temperature = to_float(dig(obs, "temperature", "value"))
        if temperature is None:
            temperature = to_float(first_hour.get("temperature"))
        humidity = to_float(dig(obs, "relativeHumidity", "value"))
        if humidity is None:
            humidity = to_float(dig(first_hour, "relativeHumidity", "value"))
        wind_speed = to_float(dig(obs, "windSpeed", "value"))
        if wind_speed is None:
            wind_speed = first_number(first_hour.get("windSpeed"))

        icon = client.icon_code(obs.get("icon") or first_hour.get("icon"))
        text = obs.get("textDescription") or first_hour.get("shortForecast")
        return CurrentConditions(
            temperature=temperature,
            has_temperature=temperature is not None,
            humidity=humidity,
            pressure=pa_to_hpa(dig(obs, "barometricPressure", "value")),
            wind_speed=wind_speed,
            wind_direction=(
                compass_direction(dig(obs, "windDirection", "value"))
                or first_hour.get("windDirection")
            ),
            visibility=m_to_km(dig(obs, "visibility", "value")),
            condition_text=self._text(text, is_daytime),
            icon=self._icon(icon, is_daytime),
        )

    def _parse_forecast(
        self, periods: dict[str, Any], grid: dict[str, Any], is_daytime: bool
    ) -> list[DayForecast]:
        period_samples = [_period_sample(p) for p in periods["properties"]["periods"]]
        period_samples = [s for s in period_samples if s is not None]
        if not period_samples:
            raise ValueError("12-hour forecast has no periods")
        day0 = period_samples[0]
        grid_props = grid["properties"]

        buckets = bucket_by_day(_grid_samples(grid_props), self.horizon, day0=day0.time)
        days = blank_days(self.horizon)
        reference = day0.time.date()

        days[0] = DayForecast(
            day=day_name(reference, 0),
            maximum_temperature=to_float(dig(grid_props, "maxTemperature", "values", 0, "value")),
            minimum_temperature=to_float(dig(grid_props, "minTemperature", "values", 0, "value")),
            humidity=to_float(dig(grid_props, "relativeHumidity", "values", 0, "value")),
            wind_speed=day0.wind_speed,
            wind_direction=day0.wind_direction,
            condition_text=self._text(day0.text, is_daytime),
            icon=self._icon(day0.code, is_daytime),
        )

        for i in range(1, self.horizon):
            try:
                days[i] = self._later_day(i, reference, period_samples, buckets[i])
            except PARSE_ERRORS:
                logger.exception("Could not build forecast day %d", i)
        return days

    def _later_day(
        self,
        offset: int,
        reference: date,
        period_samples: list[ForecastSample],
        grid_bucket: list[ForecastSample],
    ) -> DayForecast:
        day = DayForecast(day=day_name(reference, offset))

        period = select_at_hour(
            period_samples, reference + timedelta(days=offset), DAY_PERIOD_HOUR, daytime=True
        )
        if period is not None:
            day.condition_text = self._text(period.text, True)
            day.icon = self._icon(period.code, True)
            day.wind_speed = period.wind_speed
            day.wind_direction = period.wind_direction

        agg = aggregate_bucket(grid_bucket)
        if agg is not None:
            day.maximum_temperature = agg.temp_max
            day.minimum_temperature = agg.temp_min
            day.humidity = agg.humidity
            day.pressure = agg.pressure_hpa
        return day


def _period_sample(period: dict[str, Any]) -> ForecastSample | None:
    """A 12-hour period on its local clock; ``None`` if unusable."""
    try:
        return ForecastSample(
            time=datetime.fromisoformat(period["startTime"]),
            wind_speed=first_number(period.get("windSpeed")),
            wind_direction=period.get("windDirection"),
            code=client.icon_code(period.get("icon")),
            text=period.get("shortForecast"),
            is_daytime=period.get("isDaytime") is not False,
        )
    except PARSE_ERRORS:
        logger.warning("Skipping malformed forecast period %r", period.get("name"), exc_info=True)
        return None


_SERIES_FIELD = {
    "maxTemperature": "temp_max",
    "minTemperature": "temp_min",
    "relativeHumidity": "humidity",
    "pressure": "pressure_pa",
}


def _grid_samples(grid_props: dict[str, Any]) -> list[ForecastSample]:
    """Flatten the grid series into one sample per (series, validTime) value."""
    samples: list[ForecastSample] = []
    for name in client.GRID_SERIES:
        for entry in dig(grid_props, name, "values") or []:
            try:
                start = datetime.fromisoformat(entry["validTime"].split("/")[0])
            except PARSE_ERRORS:
                logger.warning("Skipping grid value with bad validTime: %r", entry)
                continue
            samples.append(ForecastSample(time=start, **{_SERIES_FIELD[name]: to_float(entry.get("value"))}))
    return samples
