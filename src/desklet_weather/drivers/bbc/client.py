"""BBC Weather API client constants.

Two services are involved:
  - Locator: resolves coordinates or a location id to a BBC location
    (BBC location ids are GeoNames ids).
  - Weather broker: observations and the aggregated daily forecast.
"""

from __future__ import annotations

from typing import Any

LOCATOR_API = "https://open.live.bbc.co.uk/locator/locations"
BROKER_API = "https://weather-broker-cdn.api.bbci.co.uk/en/"
LOCATION_PAGE = "https://www.bbc.com/weather/"

FORECAST_DAYS = 7


def locator_by_coordinates(lat: float, lon: float) -> tuple[str, dict[str, Any]]:
    return LOCATOR_API, {"la": lat, "lo": lon, "format": "json"}


def locator_by_id(location_id: str) -> tuple[str, dict[str, Any]]:
    return f"{LOCATOR_API}/{location_id}", {"format": "json"}


def observation_url(location_id: str) -> str:
    return f"{BROKER_API}observation/{location_id}"


def forecast_url(location_id: str) -> str:
    return f"{BROKER_API}forecast/aggregated/{location_id}"


def has_results(payload: Any) -> bool:
    return bool(payload["response"]["results"]["results"])


def has_name(payload: Any) -> bool:
    return bool(payload["response"]["name"])


def has_observations(payload: Any) -> bool:
    return bool(payload.get("observations"))


def has_forecasts(payload: Any) -> bool:
    return bool(payload.get("forecasts"))
