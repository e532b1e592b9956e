"""Open-Meteo API client constants and response markers.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Reverse geocoding: https://geocode.xyz/api
"""

from __future__ import annotations

from typing import Any

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"
GEOCODE_API = "https://geocode.xyz/"

FORECAST_DAYS = 7

# Current-conditions variables we request from Open-Meteo
CURRENT_VARS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "weather_code",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
]

# Daily variables we request from Open-Meteo
DAILY_VARS = [
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "wind_speed_10m_max",
    "wind_direction_10m_dominant",
    "relative_humidity_2m_mean",
    "surface_pressure_mean",
]


def forecast_params(lat: float, lon: float) -> dict[str, Any]:
    return {
        "latitude": lat,
        "longitude": lon,
        "current": ",".join(CURRENT_VARS),
        "daily": ",".join(DAILY_VARS),
        "timezone": "auto",
        "forecast_days": FORECAST_DAYS,
    }


def geocode_url(lat: float, lon: float) -> str:
    return f"{GEOCODE_API}{lat},{lon}"


GEOCODE_PARAMS = {"geoit": "json"}


def has_latitude(payload: Any) -> bool:
    return payload.get("latitude") is not None


def has_city(payload: Any) -> bool:
    return bool(payload.get("city"))
