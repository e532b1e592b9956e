"""WMO weather interpretation codes as reported by Open-Meteo."""

from __future__ import annotations

from desklet_weather.codes import DescriptionMap, IconMap

ICONS = IconMap(
    day={
        "0": "32",  # clear sky
        "1": "34",
        "2": "30",
        "3": "26d",
        "45": "20",
        "48": "20",
        "51": "09",
        "53": "09",
        "55": "09",
        "56": "08",
        "57": "08",
        "61": "11",
        "63": "12",
        "65": "12",
        "66": "10",
        "67": "10",
        "71": "13",
        "73": "14",
        "75": "16",
        "77": "18",
        "80": "39",
        "81": "37",
        "82": "04",
        "85": "41",
        "86": "41",
        "95": "04",
        "96": "04",
        "99": "04",
    },
    night={
        "0": "31",
        "1": "34",
        "2": "29",
        "80": "39",
        "81": "47",
        "85": "46",
        "86": "46",
    },
)

DESCRIPTIONS = DescriptionMap(
    phrases={
        "0": "Sunny",
        "1": "Mainly Clear",
        "2": "Partly Cloudy",
        "3": "Overcast",
        "45": "Fog",
        "48": "Depositing Rime Fog",
        "51": "Drizzle: Light Intensity",
        "53": "Drizzle: Moderate Intensity",
        "55": "Drizzle: Dense Intensity",
        "56": "Freezing Drizzle: Light Intensity",
        "57": "Freezing Drizzle: Dense Intensity",
        "61": "Rain: Slight Intensity",
        "63": "Rain: Moderate Intensity",
        "65": "Rain: Heavy Intensity",
        "66": "Freezing Rain: Light Intensity",
        "67": "Freezing Rain: Heavy Intensity",
        "71": "Snowfall: Slight Intensity",
        "73": "Snowfall: Moderate Intensity",
        "75": "Snowfall: Heavy Intensity",
        "77": "Snow Grains",
        "80": "Rain Showers: Slight",
        "81": "Rain Showers: Moderate",
        "82": "Rain Showers: Violent",
        "85": "Snow Showers: Slight",
        "86": "Snow Showers: Heavy",
        "95": "Thunderstorm: Slight or Moderate",
        "96": "Thunderstorm with slight hail",
        "99": "Thunderstorm with heavy hail",
    },
    night_phrases={"0": "Clear Sky"},
)
