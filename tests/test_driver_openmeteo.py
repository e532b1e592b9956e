"""Tests for the Open-Meteo driver."""

from __future__ import annotations

from datetime import date
from typing import Any

from conftest import FakeFetcher, RecordingDisplay

from desklet_weather.drivers.openmeteo import OpenMeteoDriver
from desklet_weather.drivers.openmeteo import client
from desklet_weather.exceptions import TransportError
from desklet_weather.schemas import DayForecast, ServiceStatus


def forecast_payload(is_day: int = 1, code: int = 61) -> dict[str, Any]:
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "current": {
            "temperature_2m": 21.3,
            "relative_humidity_2m": 55,
            "apparent_temperature": 20.1,
            "is_day": is_day,
            "weather_code": code,
            "surface_pressure": 1012.4,
            "wind_speed_10m": 14.2,
            "wind_direction_10m": 225,
        },
        "daily": {
            "time": [f"2026-02-{d:02d}" for d in range(2, 9)],  # Monday first
            "weather_code": [code, 0, 1, 2, 3, 45, 95],
            "temperature_2m_max": [22.0, 23, 24, 25, 26, 27, 28],
            "temperature_2m_min": [12.0, 13, 14, 15, 16, 17, 18],
            "wind_speed_10m_max": [20.0] * 7,
            "wind_direction_10m_dominant": [0, 90, 180, 270, 45, 135, 315],
            "relative_humidity_2m_mean": [70] * 7,
            "surface_pressure_mean": [1010.0] * 7,
        },
    }


GEOCODE = {"city": "London", "state": "England", "country": "United Kingdom"}


def make_driver(routes: dict[str, Any], station: str = "51.5,-0.12") -> tuple[OpenMeteoDriver, FakeFetcher]:
    fetcher = FakeFetcher(routes)
    return OpenMeteoDriver(station, fetcher=fetcher), fetcher


class TestOpenMeteoRefresh:
    """End-to-end refresh against canned responses."""

    async def test_full_refresh(self, display: RecordingDisplay) -> None:
        driver, fetcher = make_driver(
            {client.OPEN_METEO_API: forecast_payload(), client.GEOCODE_API: GEOCODE}
        )

        assert await driver.refresh(display) is True

        data = driver.data
        assert data.status.meta == ServiceStatus.OK
        assert data.status.cc == ServiceStatus.OK
        assert data.status.forecast == ServiceStatus.OK
        assert data.current.temperature == 21.3
        assert data.current.has_temperature is True
        assert data.current.icon == "11"
        assert data.current.condition_text == "Rain: Slight Intensity"
        assert data.current.wind_direction == "SW"
        assert data.location.city == "London"
        assert data.location.region == "England"
        assert data.location.coordinates.lat == 51.5
        assert len(data.days) == 7
        assert [d.day for d in data.days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert data.days[1].icon == "32"
        assert data.days[1].condition_text == "Sunny"
        assert data.days[1].wind_direction == "E"
        assert display.events == ["meta", "current", "forecast"]
        assert display.errors == []
        assert driver.link_url == "https://open-meteo.com/"

    async def test_geocode_uses_forecast_coordinates(self) -> None:
        driver, fetcher = make_driver(
            {client.OPEN_METEO_API: forecast_payload(), client.GEOCODE_API: GEOCODE},
            station="51.49,-0.1",
        )

        await driver.refresh()

        assert fetcher.urls()[0] == client.OPEN_METEO_API
        assert fetcher.calls[0][1]["latitude"] == 51.49
        assert fetcher.urls()[1] == client.geocode_url(51.5, -0.12)

    async def test_night_uses_night_icon_for_today_only(self) -> None:
        payload = forecast_payload(is_day=0, code=0)
        payload["daily"]["weather_code"][1] = 0
        driver, _ = make_driver({client.OPEN_METEO_API: payload, client.GEOCODE_API: GEOCODE})

        await driver.refresh()

        assert driver.data.current.icon == "31"
        assert driver.data.current.condition_text == "Clear Sky"
        assert driver.data.days[0].icon == "31"
        assert driver.data.days[1].icon == "32"

    async def test_code_zero_is_not_missing(self) -> None:
        driver, _ = make_driver(
            {client.OPEN_METEO_API: forecast_payload(code=0), client.GEOCODE_API: GEOCODE}
        )

        await driver.refresh()

        assert driver.data.current.icon == "32"
        assert driver.data.current.condition_text == "Sunny"

    async def test_geocode_failure_publishes_partial_record(self, display: RecordingDisplay) -> None:
        driver, _ = make_driver(
            {
                client.OPEN_METEO_API: forecast_payload(),
                client.GEOCODE_API: TransportError(client.GEOCODE_API, "HTTP 503"),
            }
        )

        assert await driver.refresh(display) is True

        assert driver.data.status.meta == ServiceStatus.ERROR
        assert driver.data.status.cc == ServiceStatus.OK
        assert driver.data.status.forecast == ServiceStatus.OK
        assert "Location lookup failed" in (driver.data.status.last_error or "")
        assert driver.data.location.city == ""

    async def test_forecast_failure_keeps_previous_snapshot(self, display: RecordingDisplay) -> None:
        routes: dict[str, Any] = {
            client.OPEN_METEO_API: forecast_payload(),
            client.GEOCODE_API: GEOCODE,
        }
        driver, fetcher = make_driver(routes)
        await driver.refresh()
        assert driver.data.current.temperature == 21.3

        fetcher.routes[client.OPEN_METEO_API] = "<html>maintenance</html>"
        assert await driver.refresh(display) is False

        assert driver.data.current.temperature == 21.3
        assert driver.data.location.city == "London"
        assert driver.data.status.cc == ServiceStatus.ERROR
        assert display.errors
        assert "Forecast download failed" in display.errors[-1]

    async def test_missing_marker_is_invalid(self) -> None:
        driver, _ = make_driver({client.OPEN_METEO_API: {"error": True, "reason": "bad"}})

        assert await driver.refresh() is False
        assert "Invalid forecast response" in (driver.data.status.last_error or "")

    async def test_refresh_is_idempotent(self) -> None:
        routes = {client.OPEN_METEO_API: forecast_payload(), client.GEOCODE_API: GEOCODE}
        driver, _ = make_driver(routes)

        await driver.refresh(today=date(2026, 2, 2))
        first = driver.data.model_dump()
        await driver.refresh(today=date(2026, 2, 2))

        assert driver.data.model_dump() == first

    async def test_days_limit_caps_horizon(self) -> None:
        fetcher = FakeFetcher({client.OPEN_METEO_API: forecast_payload(), client.GEOCODE_API: GEOCODE})
        driver = OpenMeteoDriver("51.5,-0.12", fetcher=fetcher, days=3)

        await driver.refresh()

        assert len(driver.data.days) == 3
        assert driver.data.days[2].day == "Wed"

    async def test_short_daily_array_blanks_only_missing_days(self) -> None:
        payload = forecast_payload()
        payload["daily"]["temperature_2m_max"] = payload["daily"]["temperature_2m_max"][:5]
        driver, _ = make_driver({client.OPEN_METEO_API: payload, client.GEOCODE_API: GEOCODE})

        assert await driver.refresh() is True

        days = driver.data.days
        assert driver.data.status.forecast == ServiceStatus.OK
        assert days[4].maximum_temperature == 26
        assert days[4].day == "Fri"
        assert days[5] == DayForecast()
        assert days[6] == DayForecast()


class TestOpenMeteoValidation:
    """Station checks happen before any request."""

    async def test_location_id_rejected(self, display: RecordingDisplay) -> None:
        driver, fetcher = make_driver({}, station="london")

        assert await driver.refresh(display) is False

        assert fetcher.calls == []
        assert "Invalid location format" in display.errors[0]
        assert driver.data.status.meta == ServiceStatus.ERROR

    async def test_blank_station(self, display: RecordingDisplay) -> None:
        driver, fetcher = make_driver({}, station="  ")

        assert await driver.refresh(display) is False

        assert fetcher.calls == []
        assert display.errors == ["Station ID not defined"]

    async def test_out_of_range_coordinates(self, display: RecordingDisplay) -> None:
        driver, fetcher = make_driver({}, station="95,10")

        assert await driver.refresh(display) is False

        assert fetcher.calls == []
        assert "Invalid values of latitude or longitude" in display.errors[0]
