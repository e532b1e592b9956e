"""Google Weather API client constants.

API docs:
  - https://developers.google.com/maps/documentation/weather
Reverse geocoding (city name) uses OpenStreetMap Nominatim:
  - https://nominatim.org/release-docs/latest/api/Reverse/
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

GOOGLE_WEATHER_API = "https://weather.googleapis.com/v1"
CURRENT_URL = f"{GOOGLE_WEATHER_API}/currentConditions:lookup"
FORECAST_URL = f"{GOOGLE_WEATHER_API}/forecast/days:lookup"
NOMINATIM_REVERSE = "https://nominatim.openstreetmap.org/reverse"
SEARCH_PAGE = "https://www.google.com/search?q="

FORECAST_DAYS = 7

# Locale -> BCP-47 ``languageCode``
LANG_MAP = {
    **{
        code: code
        for code in (
            "ar bg bn ca cs da de el en es fa fi fr hi hr hu id it ja ko lt lv ml mr ms "
            "nl pl pt ro ru sk sl sr sv sw ta te th tr uk ur vi"
        ).split()
    },
    "en_gb": "en-GB",
    "en_us": "en-US",
    "es_es": "es-ES",
    "es_419": "es-419",
    "fr_ca": "fr-CA",
    "he": "iw",  # Google still uses the old Hebrew code
    "nb": "no",
    "pt_pt": "pt-PT",
    "pt_br": "pt-BR",
    "zh_cn": "zh-CN",
    "zh_hans": "zh-Hans",
    "zh_hant": "zh-Hant",
    "zh_hk": "zh-HK",
    "zh_tw": "zh-TW",
}


def weather_params(lat: float, lon: float, api_key: str, lang: str = "") -> dict[str, Any]:
    params: dict[str, Any] = {
        "key": api_key,
        "location.latitude": lat,
        "location.longitude": lon,
        "unitsSystem": "METRIC",
    }
    if lang:
        params["languageCode"] = lang
    return params


def forecast_params(lat: float, lon: float, api_key: str, lang: str = "") -> dict[str, Any]:
    return {
        **weather_params(lat, lon, api_key, lang),
        "days": FORECAST_DAYS,
        "pageSize": FORECAST_DAYS,
    }


def geocode_params(lat: float, lon: float) -> dict[str, Any]:
    return {"lat": lat, "lon": lon, "format": "json"}


def search_link(city: str) -> str:
    return f"{SEARCH_PAGE}{quote(f'Weather in {city}')}"


def has_type(payload: Any) -> bool:
    return bool(payload.get("type"))


def has_timezone(payload: Any) -> bool:
    return bool(payload.get("timeZone"))
