"""OpenWeatherMap icon codes (``01d`` .. ``50n``)."""

from __future__ import annotations

from desklet_weather.codes import IconMap

# The icon code already carries day/night, so no night overrides are needed.
ICONS = IconMap(
    day={
        "01d": "32",
        "01n": "31",
        "02d": "34",
        "02n": "33",
        "03d": "28",
        "03n": "27",
        "04d": "26",
        "04n": "26",
        "09d": "39",
        "09n": "45",
        "10d": "12",
        "10n": "12",
        "11d": "04",
        "11n": "04",
        "13d": "16",
        "13n": "16",
        "50d": "20",
        "50n": "20",
    }
)

#: Severity ranking used to pick the icon that best represents a day
PRIORITY = {
    "50d": 0,  # mist
    "02d": 1,
    "01d": 2,
    "03d": 3,
    "04d": 4,
    "09d": 5,
    "10d": 6,
    "11d": 7,
    "13d": 8,  # snow
}
