"""
Exceptions raised by the weather drivers.

Drivers never let these escape ``refresh()``; they are turned into section
status flags and a ``last_error`` message on the record.
"""

from __future__ import annotations


class WeatherDriverError(Exception):
    """Base exception for weather driver errors."""


class StationSpecError(WeatherDriverError):
    """The configured station/location string is missing or malformed."""


class MissingAPIKeyError(WeatherDriverError):
    """The provider requires an API key and none was configured."""


class TransportError(WeatherDriverError):
    """HTTP failure, connection failure or empty response body."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url


class ResponseShapeError(WeatherDriverError):
    """Response body is not JSON or lacks the provider's success marker."""


class UnknownProviderError(WeatherDriverError, KeyError):
    """No driver is registered under the requested provider key."""

    def __str__(self) -> str:
        # KeyError would wrap the message in quotes
        return str(self.args[0]) if self.args else ""
