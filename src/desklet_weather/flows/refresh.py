"""
Prefect flow that refreshes one weather provider.

The stored snapshot is reused while it is younger than the provider's
minimum refresh interval; ``force=True`` always fetches.

Run locally:
    python -m desklet_weather.flows.refresh

Run with Prefect dashboard:
    prefect server start &
    python -m desklet_weather.flows.refresh
"""

from __future__ import annotations

import asyncio
from functools import lru_cache, partial
from typing import TYPE_CHECKING, Any

from prefect import flow, task

from desklet_weather.config import get_settings
from desklet_weather.drivers import create_driver
from desklet_weather.schemas import WeatherRecord
from desklet_weather.services.http import HttpFetcher, create_session
from desklet_weather.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path

# Snapshot store under the configured data directory
store = DataStore(get_settings().data_dir)


@lru_cache
def _fetcher() -> HttpFetcher:
    """HTTP fetcher honouring the configured timeout and User-Agent."""
    settings = get_settings()
    return HttpFetcher(
        factory=partial(create_session, timeout=settings.http_timeout, user_agent=settings.user_agent)
    )


@task(name="refresh-record")
def refresh_record(
    provider: str,
    station: str,
    api_key: str = "",
    language: str = "",
) -> dict[str, Any]:
    """Run one driver refresh and return its outcome and record."""
    driver = create_driver(
        provider, station, api_key=api_key, language=language, fetcher=_fetcher()
    )
    published = asyncio.run(driver.refresh())
    return {
        "published": published,
        "record": driver.data.model_dump(mode="json"),
        "link_url": driver.link_url,
        "min_ttl": driver.info.min_ttl,
        "source": driver.info.display_name,
    }


@task(name="save-record")
def save_record(provider: str, station: str, result: dict[str, Any]) -> Path:
    """Save a published record via store, fresh for the provider's interval."""
    return store.save_record(
        provider,
        WeatherRecord.model_validate(result["record"]),
        ttl_seconds=result["min_ttl"],
        station=station,
        display_name=result["source"],
        link_url=result["link_url"],
    )


@flow(name="refresh-weather", log_prints=True)
def refresh_weather(
    provider: str | None = None,
    station: str | None = None,
    api_key: str | None = None,
    language: str | None = None,
    force: bool = False,
) -> dict[str, Any]:
    """
    Refresh one provider and store the result.

    Arguments left as None fall back to the settings. Returns a summary with
    the record that is now current (fresh from the provider or from the store).
    """
    settings = get_settings()
    provider = (provider or settings.provider).lower()
    station = station if station is not None else settings.station
    path = store.record_path(provider)

    if not force and store.is_fresh(path):
        print(f"{provider} snapshot is fresh, skipping fetch.")
        return {"provider": provider, "refreshed": False, "ok": True, "record": store.read(path)}

    print(f"Refreshing {provider} weather for {station!r}...")
    result = refresh_record(
        provider,
        station,
        api_key if api_key is not None else settings.api_key,
        language if language is not None else settings.language,
    )

    if result["published"]:
        output_path = save_record(provider, station, result)
        print(f"Saved {provider} snapshot to {output_path}")
    else:
        print(f"Refresh failed: {result['record']['status']['last_error']}")

    return {
        "provider": provider,
        "refreshed": True,
        "ok": result["published"],
        "record": result["record"],
    }


if __name__ == "__main__":
    summary = refresh_weather()
    print(f"Flow complete: ok={summary['ok']} refreshed={summary['refreshed']}")
