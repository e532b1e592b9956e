"""Station/location string parsing.

A station spec is whatever the user typed into the widget's location field:

- ``"51.5,-0.12"``   latitude,longitude pair
- ``"2643743"``      7-8 digit GeoNames id (accepted where the driver allows it)
- ``"london-id"``    any other opaque provider location id

Parsing happens before any network call so that malformed input never
reaches a provider.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from desklet_weather.exceptions import StationSpecError

_GEONAME_ID = re.compile(r"^\d{7,8}$")
_LAT_LON = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


class StationKind(StrEnum):
    """How a station spec addresses a location."""

    COORDINATES = "coordinates"
    GEONAME_ID = "geoname_id"
    LOCATION_ID = "location_id"


@dataclass(frozen=True)
class StationSpec:
    """A validated station spec."""

    kind: StationKind
    raw: str
    lat: float | None = None
    lon: float | None = None
    location_id: str | None = None

    @property
    def latlon(self) -> tuple[float, float] | None:
        if self.lat is None or self.lon is None:
            return None
        return self.lat, self.lon


def parse_station(
    raw: object,
    *,
    allow_geoname_id: bool = False,
    require_coordinates: bool = False,
) -> StationSpec:
    """
    Parse and validate a station spec.

    The numeric-id pattern is checked before the lat/lon pattern and the first
    match wins.

    Args:
        raw: User-supplied station string.
        allow_geoname_id: Accept a 7-8 digit GeoNames id.
        require_coordinates: Reject anything that is not a lat/lon pair
            (or a GeoNames id when ``allow_geoname_id`` is set).

    Returns:
        The parsed ``StationSpec``.

    Raises:
        StationSpecError: Blank input, out-of-range coordinates or a format
            the caller does not accept.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise StationSpecError("Station ID not defined")
    text = raw.strip()

    if allow_geoname_id and _GEONAME_ID.match(text):
        return StationSpec(kind=StationKind.GEONAME_ID, raw=text, location_id=text)

    match = _LAT_LON.match(text)
    if match:
        lat = float(match.group(1))
        lon = float(match.group(2))
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise StationSpecError(f"Invalid values of latitude or longitude: {text}")
        return StationSpec(kind=StationKind.COORDINATES, raw=text, lat=lat, lon=lon)

    if require_coordinates:
        raise StationSpecError(
            f"Invalid location format: {text!r}. Expected: latitude,longitude"
        )
    return StationSpec(kind=StationKind.LOCATION_ID, raw=text, location_id=text)
