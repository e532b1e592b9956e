"""BBC ``weatherType`` codes and condition phrases."""

from __future__ import annotations

from desklet_weather.codes import DescriptionMap, IconMap

ICONS = IconMap(
    day={
        "1": "32",
        "2": "30",
        "3": "30",
        "4": "23",
        "5": "20",
        "6": "20",
        "7": "26",
        "8": "26d",
        "10": "11",
        "11": "09",
        "12": "11",
        "14": "12",
        "15": "12",
        "17": "18",
        "18": "18",
        "20": "18",
        "21": "18",
        "23": "13",
        "24": "13",
        "26": "16",
        "27": "16",
        "29": "04",
        "30": "04",
        "31": "01",
        "32": "20",
        "33": "15",
        "34": "08",
        "35": "23",
        "36": "26",
        "39": "11",
    },
    # BBC uses separate codes for some night conditions (0 = clear night)
    night={
        "0": "31",
        "1": "31",
        "2": "29",
        "3": "29",
        "9": "11",
        "13": "12",
        "16": "18",
        "19": "18",
        "22": "46",
        "25": "16",
        "28": "04",
    },
)

# BBC already sends English text; only a few phrases are normalized.
DESCRIPTIONS = DescriptionMap(
    phrases={
        "Sandstorm": "Sand Storm",
        "Light Rain Showers": "Light Rain Shower",
        "Heavy Rain Showers": "Heavy Rain Shower",
        "Sleet Showers": "Sleet Shower",
        "Hail Showers": "Hail Shower",
        "Thundery Showers": "Thundery Shower",
    }
)
