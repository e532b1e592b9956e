"""NWS icon slugs (the last path segment of the ``icon`` URL)."""

from __future__ import annotations

from desklet_weather.codes import DescriptionMap, IconMap

ICONS = IconMap(
    day={
        "skc": "32",
        "few": "34",
        "sct": "30",
        "bkn": "28",
        "ovc": "26d",
        "wind_skc": "32",
        "wind_few": "34",
        "wind_sct": "30",
        "wind_bkn": "28",
        "wind_ovc": "26d",
        "snow": "14",
        "rain_snow": "15",
        "rain_sleet": "06",
        "snow_sleet": "07",
        "fzra": "10",
        "rain_fzra": "10",
        "snow_fzra": "10",
        "sleet": "18",
        "rain": "11",
        "rain_showers": "12",
        "rain_showers_hi": "04",
        "tsra": "04",
        "tsra_sct": "04",
        "tsra_hi": "04",
        "tornado": "00",
        "hurricane": "01",
        "tropical_storm": "01",
        "dust": "19",
        "smoke": "19",
        "haze": "22",
        "hot": "36",
        "cold": "25",
        "blizzard": "15",
        "fog": "20",
    },
    night={
        "skc": "31",
        "few": "33",
        "sct": "29",
        "bkn": "27",
        "wind_skc": "31",
        "wind_few": "33",
        "wind_sct": "29",
        "wind_bkn": "27",
        "haze": "21",
    },
)

# NWS sends English text; only the numeric clear-sky codes need a phrase.
DESCRIPTIONS = DescriptionMap(
    phrases={"0": "Sunny", "1": "Mainly Clear"},
    night_phrases={"0": "Clear Sky"},
)
