"""Google Weather ``weatherCondition.type`` values."""

from __future__ import annotations

from desklet_weather.codes import IconMap

ICONS = IconMap(
    day={
        "CHANCE_OF_SHOWERS": "09",
        "CLEAR": "32",
        "CLOUDY": "26",
        "HEAVY_RAIN": "12",
        "HEAVY_THUNDERSTORM": "37",
        "LIGHT_RAIN": "09",
        "LIGHT_SNOW": "13",
        "MOSTLY_CLEAR": "34",
        "MOSTLY_CLOUDY": "28",
        "PARTLY_CLOUDY": "30",
        "RAIN": "11",
        "RAIN_AND_SNOW": "05",
        "RAIN_SHOWERS": "39",
        "SCATTERED_SHOWERS": "11",
        "SCATTERED_THUNDERSTORMS": "38",
        "SNOW": "14",
        "SNOW_SHOWERS": "41",
        "THUNDERSTORM": "04",
        "WINDY": "24",
        # seen in the API docs, not yet in responses
        "BLOWING_SNOW": "15",
        "CHANCE_OF_SNOW_SHOWERS": "13",
        "HAIL": "18",
        "HAIL_SHOWERS": "18",
        "HEAVY_RAIN_SHOWERS": "12",
        "HEAVY_SNOW": "16",
        "HEAVY_SNOW_SHOWERS": "41",
        "HEAVY_SNOW_STORM": "16",
        "LIGHT_RAIN_SHOWERS": "09",
        "LIGHT_SNOW_SHOWERS": "13",
        "LIGHT_THUNDERSTORM_RAIN": "37",
        "LIGHT_TO_MODERATE_RAIN": "12",
        "LIGHT_TO_MODERATE_SNOW": "13",
        "MODERATE_TO_HEAVY_RAIN": "12",
        "MODERATE_TO_HEAVY_SNOW": "16",
        "RAIN_PERIODICALLY_HEAVY": "12",
        "SCATTERED_SNOW_SHOWERS": "14",
        "SNOWSTORM": "14",
        "SNOW_PERIODICALLY_HEAVY": "16",
        "THUNDERSHOWER": "37",
        "WIND_AND_RAIN": "12",
        "TYPE_UNSPECIFIED": "na",
    },
    night={
        "CLEAR": "31",
        "HEAVY_SNOW_SHOWERS": "46",
        "HEAVY_THUNDERSTORM": "47",
        "LIGHT_THUNDERSTORM_RAIN": "47",
        "MOSTLY_CLEAR": "33",
        "MOSTLY_CLOUDY": "27",
        "PARTLY_CLOUDY": "29",
        "RAIN_SHOWERS": "45",
        "SNOW_SHOWERS": "46",
        "THUNDERSHOWER": "47",
    },
)
