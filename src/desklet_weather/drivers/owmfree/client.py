"""OpenWeatherMap free-tier (2.5) API client constants.

API docs:
  - Current weather: https://openweathermap.org/current
  - 5 day / 3 hour forecast: https://openweathermap.org/forecast5
"""

from __future__ import annotations

from typing import Any

from desklet_weather.station import StationSpec

OWM_API = "https://api.openweathermap.org/data/2.5/"
CURRENT_URL = f"{OWM_API}weather"
FORECAST_URL = f"{OWM_API}forecast"
CITY_PAGE = "https://openweathermap.org/city/"

FORECAST_DAYS = 5
MIN_TTL = 3600  # free tier allows 60 calls/min, data updates hourly

# Locale -> OWM ``lang`` parameter
LANG_MAP = {
    code: code
    for code in (
        "ar af az be bg ca cz da de eu el en es fa fi fr gl he hi hr hu id is it ja "
        "kr ku la lt mk nl no pl pt pt_br ro ru se sk sl sp sr sv th tr ua uk vi "
        "zh_cn zh_tw zu"
    ).split()
}


def request_params(spec: StationSpec, api_key: str, lang: str = "") -> dict[str, Any]:
    params: dict[str, Any] = {"appid": api_key, "units": "metric"}
    if spec.latlon is not None:
        params["lat"], params["lon"] = spec.latlon
    else:
        params["id"] = spec.location_id
    if lang:
        params["lang"] = lang
    return params


def is_ok(payload: Any) -> bool:
    """OWM reports success as ``cod`` 200 (an int or a string, by endpoint)."""
    return str(payload.get("cod")) == "200"
