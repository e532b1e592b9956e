"""Weather provider drivers.

Each subdirectory is one provider with a consistent structure:

    drivers/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, request parameters, response markers
    ├── codes.py          # Provider code -> icon/phrase tables
    └── driver.py         # WeatherDriver subclass (fetch + parse)

Adding a new provider
---------------------
1. Create ``drivers/{name}/`` with the files above. ``openmeteo/`` is the
   smallest example; ``nws/`` shows sequential resolution steps.

2. Subclass ``WeatherDriver``: declare ``info``/``icons``, implement
   ``_refresh`` with ``self._load(...)`` for every request and
   ``section(...)`` around every parse step, and ``_build_link``.

3. Register the class in ``DRIVERS`` below.

4. Add tests in ``tests/test_driver_{name}.py`` using ``FakeFetcher``.
"""

from __future__ import annotations

from typing import Any

from desklet_weather.drivers.base import (
    DisplaySink,
    NullDisplay,
    WeatherDriver,
    resolve_language,
    section,
)
from desklet_weather.drivers.bbc import BBCDriver
from desklet_weather.drivers.google import GoogleWeatherDriver
from desklet_weather.drivers.nws import NWSDriver
from desklet_weather.drivers.openmeteo import OpenMeteoDriver
from desklet_weather.drivers.owmfree import OWMFreeDriver
from desklet_weather.exceptions import UnknownProviderError

DRIVERS: dict[str, type[WeatherDriver]] = {
    "bbc": BBCDriver,
    "google": GoogleWeatherDriver,
    "nws": NWSDriver,
    "owmfree": OWMFreeDriver,
    "openmeteo": OpenMeteoDriver,
}


def create_driver(provider: str, station: str, **kwargs: Any) -> WeatherDriver:
    """
    Instantiate the driver registered under ``provider``.

    Raises:
        UnknownProviderError: No driver has that key.
    """
    try:
        driver_cls = DRIVERS[provider.lower()]
    except KeyError:
        msg = f"Unknown provider {provider!r}; choose from {', '.join(sorted(DRIVERS))}"
        raise UnknownProviderError(msg) from None
    return driver_cls(station, **kwargs)


__all__ = [
    "DRIVERS",
    "BBCDriver",
    "DisplaySink",
    "GoogleWeatherDriver",
    "NWSDriver",
    "NullDisplay",
    "OWMFreeDriver",
    "OpenMeteoDriver",
    "WeatherDriver",
    "create_driver",
    "resolve_language",
    "section",
]
