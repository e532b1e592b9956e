"""Unit and direction conversion helpers.

Pure conversion functions with no external dependencies. Every helper
accepts ``None`` (or junk) and returns ``None`` so that parsers can chain
them over optional provider fields.
"""

from __future__ import annotations

import re
from typing import Any

# 16-point compass rose, clockwise from north
COMPASS_POINTS = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)

_FIRST_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def to_float(value: Any) -> float | None:
    """Coerce a provider value to float; ``None`` for missing or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def compass_direction(degrees: Any) -> str | None:
    """Convert a bearing in degrees to a 16-point compass abbreviation."""
    deg = to_float(degrees)
    if deg is None:
        return None
    index = round((deg % 360) / 22.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def pa_to_hpa(value: Any) -> int | None:
    """Convert pascals to hectopascals, rounded to the nearest integer."""
    pa = to_float(value)
    if pa is None:
        return None
    return round(pa / 100)


def m_to_km(value: Any) -> int | None:
    """Convert metres to whole kilometres."""
    metres = to_float(value)
    if metres is None:
        return None
    return round(metres / 1000)


def mps_to_kph(value: Any) -> float | None:
    """Convert metres per second to kilometres per hour."""
    mps = to_float(value)
    if mps is None:
        return None
    return round(mps * 3.6, 1)


def first_number(text: Any) -> float | None:
    """Extract the first number from text such as ``"10 to 15 km/h"``."""
    if text is None:
        return None
    match = _FIRST_NUMBER.search(str(text))
    if match is None:
        return None
    return float(match.group())


def title_case(text: str | None) -> str:
    """Upper-case the first letter of every word (``"light rain"`` -> ``"Light Rain"``)."""
    if not text:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))
