"""Tests for the OpenWeatherMap free-tier driver."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from conftest import FakeFetcher, RecordingDisplay

from desklet_weather.drivers.owmfree import OWMFreeDriver
from desklet_weather.drivers.owmfree import client
from desklet_weather.schemas import ServiceStatus

START = datetime(2026, 2, 2, 9, tzinfo=UTC)  # Monday

CURRENT = {
    "cod": 200,
    "id": 2643743,
    "name": "London",
    "coord": {"lat": 51.51, "lon": -0.13},
    "sys": {"country": "GB"},
    "main": {"temp": 8.5, "feels_like": 6.0, "humidity": 80, "pressure": 1015},
    "wind": {"speed": 5, "deg": 270},
    "visibility": 10000,
    "weather": [{"id": 500, "description": "light rain", "icon": "10d"}],
}


def block(moment: datetime, icon: str = "01d", description: str = "clear sky") -> dict[str, Any]:
    """A 3-hour block whose values grow through the day and across days."""
    step = moment.hour // 3
    base = (moment.date() - START.date()).days * 10
    return {
        "dt": int(moment.timestamp()),
        "main": {
            "temp_max": base + step,
            "temp_min": base + step - 5,
            "humidity": 50 + step,
            "grnd_level": 1000 + step,
        },
        "wind": {"speed": step + 1, "deg": moment.hour * 10},
        "weather": [{"description": description, "icon": icon}],
    }


def forecast_payload(timezone: int = 0) -> dict[str, Any]:
    blocks = []
    moment = START
    while moment < START + timedelta(days=5):
        if moment.date() == START.date() + timedelta(days=1) and moment.hour in (9, 15):
            blocks.append(block(moment, "10d", "light rain"))
        else:
            blocks.append(block(moment))
        moment += timedelta(hours=3)
    return {
        "cod": "200",
        "list": blocks,
        "city": {
            "id": 2643743,
            "name": "London",
            "country": "GB",
            "coord": {"lat": 51.5085, "lon": -0.1257},
            "timezone": timezone,
        },
    }


def make_driver(
    routes: dict[str, Any], station: str = "51.5,-0.12", **kwargs: Any
) -> tuple[OWMFreeDriver, FakeFetcher]:
    fetcher = FakeFetcher(routes)
    kwargs.setdefault("api_key", "secret")
    return OWMFreeDriver(station, fetcher=fetcher, **kwargs), fetcher


def routes(current: Any = None, forecast: Any = None) -> dict[str, Any]:
    return {
        client.CURRENT_URL: CURRENT if current is None else current,
        client.FORECAST_URL: forecast_payload() if forecast is None else forecast,
    }


class TestOWMCurrent:
    """Current conditions normalization."""

    async def test_current_conditions(self) -> None:
        driver, _ = make_driver(routes())

        assert await driver.refresh() is True

        cc = driver.data.current
        assert cc.temperature == 8.5
        assert cc.feels_like == 6.0
        assert cc.wind_speed == 18.0  # 5 m/s
        assert cc.wind_direction == "W"
        assert cc.visibility == 10
        assert cc.condition_text == "Light Rain"
        assert cc.icon == "12"

    async def test_meta_from_forecast_city(self) -> None:
        driver, _ = make_driver(routes())

        await driver.refresh()

        loc = driver.data.location
        assert loc.city == "London"
        assert loc.country == "GB"
        assert loc.region is None
        assert loc.coordinates.lat == 51.5085
        assert driver.link_url == f"{client.CITY_PAGE}2643743"


class TestOWMForecast:
    """3-hour blocks folded into days."""

    async def test_day_zero_is_first_block(self) -> None:
        driver, _ = make_driver(routes())

        await driver.refresh()

        day0 = driver.data.days[0]
        assert day0.day == "Mon"
        assert day0.maximum_temperature == 3
        assert day0.minimum_temperature == -2
        assert day0.pressure == 1003

    async def test_later_day_aggregates(self) -> None:
        driver, _ = make_driver(routes())

        await driver.refresh()

        day1 = driver.data.days[1]
        assert day1.day == "Tue"
        assert day1.maximum_temperature == 17
        assert day1.minimum_temperature == 5
        assert day1.humidity == 57
        assert day1.pressure == 1007
        # windiest block (21:00, 8 m/s) supplies speed and direction together
        assert day1.wind_speed == 28.8
        assert day1.wind_direction == "SSW"
        # rain outranks clear sky inside the daytime window
        assert day1.icon == "12"
        assert day1.condition_text == "Light Rain"

    async def test_five_days_named(self) -> None:
        driver, _ = make_driver(routes())

        await driver.refresh()

        assert [d.day for d in driver.data.days] == ["Mon", "Tue", "Wed", "Thu", "Fri"]

    async def test_blocks_bucketed_on_local_date(self) -> None:
        evening = datetime(2026, 2, 2, 21, tzinfo=UTC)
        forecast = forecast_payload(timezone=-5 * 3600)
        forecast["list"] = [
            block(evening),  # 16:00 local, Monday
            {**block(evening + timedelta(hours=6)), "main": {"temp_max": 40, "temp_min": 1}},
            block(evening + timedelta(hours=18), "04d", "overcast clouds"),  # 10:00 local Tuesday
        ]
        driver, _ = make_driver(routes(forecast=forecast))

        await driver.refresh()

        days = driver.data.days
        assert days[0].day == "Mon"
        # the 22:00 local block still belongs to Monday, so Tuesday never sees 40
        assert days[1].maximum_temperature == 15
        assert days[1].icon == "26"
        assert days[2].maximum_temperature is None
        assert days[2].day == "Wed"

    async def test_malformed_block_skipped(self) -> None:
        forecast = forecast_payload()
        forecast["list"].insert(1, {"dt": 0})
        driver, _ = make_driver(routes(forecast=forecast))

        await driver.refresh()

        assert driver.data.status.forecast == ServiceStatus.OK
        assert driver.data.days[1].maximum_temperature == 17


class TestOWMFailures:
    """Independent sections and request parameters."""

    async def test_current_failure_keeps_forecast(self, display: RecordingDisplay) -> None:
        driver, _ = make_driver(routes(current={"cod": 401, "message": "Invalid API key"}))

        assert await driver.refresh(display) is True

        assert driver.data.status.cc == ServiceStatus.ERROR
        assert driver.data.status.forecast == ServiceStatus.OK
        assert driver.data.status.meta == ServiceStatus.OK
        assert "Current conditions download failed" in (driver.data.status.last_error or "")
        assert display.events == ["meta", "current", "forecast"]

    async def test_both_failures_abort(self, display: RecordingDisplay) -> None:
        driver, _ = make_driver({})

        assert await driver.refresh(display) is False

        assert driver.data.status.meta == ServiceStatus.ERROR
        assert display.events == []
        assert len(display.errors) == 1

    async def test_missing_api_key(self, display: RecordingDisplay) -> None:
        driver, fetcher = make_driver(routes(), api_key="  ")

        assert await driver.refresh(display) is False

        assert fetcher.calls == []
        assert display.errors == ["OpenWeatherMap Free requires an API key"]

    async def test_location_id_and_language_params(self) -> None:
        driver, fetcher = make_driver(routes(), station="2643743", language="pt_BR.UTF-8")

        await driver.refresh()

        params = fetcher.calls[0][1]
        assert params["id"] == "2643743"
        assert "lat" not in params
        assert params["lang"] == "pt_br"
        assert params["units"] == "metric"
        assert params["appid"] == "secret"

    async def test_unmapped_language_omitted(self) -> None:
        driver, fetcher = make_driver(routes(), language="xx_YY")

        await driver.refresh()

        assert "lang" not in fetcher.calls[0][1]
