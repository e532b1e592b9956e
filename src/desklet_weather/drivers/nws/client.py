"""US National Weather Service API client constants.

API docs:
  - https://www.weather.gov/documentation/services-web-api

The API is discovered from a point lookup: ``points/{lat},{lon}`` returns the
URLs of the observation-station list and of the hourly, 12-hour and raw
grid forecasts for that point.
"""

from __future__ import annotations

from typing import Any

NWS_API = "https://api.weather.gov/"
MAP_CLICK_PAGE = "https://forecast.weather.gov/MapClick.php"

FORECAST_DAYS = 7

#: Metric units for the forecast endpoints
FORECAST_PARAMS = {"units": "si"}

#: Grid series folded into the daily forecast
GRID_SERIES = ("maxTemperature", "minTemperature", "relativeHumidity", "pressure")


def points_url(lat: float, lon: float) -> str:
    return f"{NWS_API}points/{lat},{lon}"


def latest_observation_url(station_id: str) -> str:
    return f"{NWS_API}stations/{station_id}/observations/latest"


def map_click_link(lat: Any, lon: Any) -> str:
    return f"{MAP_CLICK_PAGE}?textField1={lat}&textField2={lon}"


def icon_code(url: str | None) -> str:
    """``.../icons/land/day/rain_showers,40?size=medium`` -> ``rain_showers``."""
    if not url:
        return ""
    return url.split("?")[0].split("/")[-1].split(",")[0]


def has_id(payload: Any) -> bool:
    return bool(payload.get("id"))


def has_type(payload: Any) -> bool:
    return bool(payload.get("type"))
