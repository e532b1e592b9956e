"""Desklet Weather - normalized weather records for a desktop widget.

Architecture::

    drivers/       One package per provider (BBC, Google, NWS, OWM, Open-Meteo)
    aggregation.py Sub-daily forecast samples -> one value set per local day
    codes.py       Provider condition codes -> icon ids and condition phrases
    store.py       Last published record per provider, with TTL
    flows/         Prefect orchestration (refresh checks freshness, then fetches)
    services/      Shared utilities (HTTP client with retry, async fetcher)

Data flow: station spec -> driver (fetch + parse) -> WeatherRecord -> display/store

Extension point: adding a provider is described in drivers/__init__.py.
"""

__version__ = "0.1.0"

from desklet_weather.config import Settings
from desklet_weather.schemas import WeatherRecord

__all__ = ["Settings", "WeatherRecord", "__version__"]
