"""
Driver base class and shared refresh machinery.

A refresh runs in four phases::

    validate station/API key ──▶ fetch (ordered awaits + asyncio.gather)
        ──▶ parse sections into a fresh WeatherRecord ──▶ publish + signal

Subclasses implement ``_refresh`` (fetch and parse) and ``_build_link``.
Everything that can fail on the way is turned into section status flags:

- ``_load`` converts transport, JSON and success-marker failures into
  ``None`` plus ERROR on the sections that depended on the response.
- ``section`` converts parse errors into ERROR for one section only.
- ``refresh`` catches whatever is left, so it never raises.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Iterator, Mapping
from contextlib import contextmanager
from datetime import date, timedelta
from typing import Any, ClassVar, Protocol

from desklet_weather.aggregation import DayAggregate
from desklet_weather.codes import DescriptionMap, IconMap, IdentityTranslator, Translator, safe_translate
from desklet_weather.exceptions import (
    MissingAPIKeyError,
    ResponseShapeError,
    StationSpecError,
    TransportError,
)
from desklet_weather.schemas import DayForecast, DriverInfo, ServiceStatus, WeatherRecord
from desklet_weather.services.http import Fetcher, HttpFetcher
from desklet_weather.station import StationSpec, parse_station

logger = logging.getLogger(__name__)

SECTIONS = ("meta", "cc", "forecast")

#: Errors a section parser may raise on malformed provider JSON.
PARSE_ERRORS = (KeyError, IndexError, TypeError, ValueError, AttributeError)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


# =============================================================================
# Display collaborator
# =============================================================================


class DisplaySink(Protocol):
    """Host widget callbacks, one per record section plus error reporting."""

    def display_meta(self, record: WeatherRecord) -> None: ...

    def display_current(self, record: WeatherRecord) -> None: ...

    def display_forecast(self, record: WeatherRecord) -> None: ...

    def show_error(self, message: str) -> None: ...


class NullDisplay:
    """Display sink that only logs; used when no host is attached."""

    def display_meta(self, record: WeatherRecord) -> None:
        logger.debug("meta ready: %s", record.location.city)

    def display_current(self, record: WeatherRecord) -> None:
        logger.debug("current conditions ready: %s", record.current.condition_text)

    def display_forecast(self, record: WeatherRecord) -> None:
        logger.debug("forecast ready: %d days", len(record.days))

    def show_error(self, message: str) -> None:
        logger.warning("%s", message)


# =============================================================================
# Helpers
# =============================================================================


@contextmanager
def section(record: WeatherRecord, name: str, message: str) -> Iterator[None]:
    """
    Parse one record section; a parse error fails only this section.

    On success the section goes INIT -> OK. A section that already failed
    (e.g. its fetch returned nothing) is left as ERROR.
    """
    try:
        yield
    except PARSE_ERRORS as e:
        logger.exception("%s", message)
        record.status.fail(name, f"{message}: {e}")
    else:
        if getattr(record.status, name) == ServiceStatus.INIT:
            setattr(record.status, name, ServiceStatus.OK)


def day_name(reference: date, offset: int) -> str:
    """Weekday abbreviation of ``reference + offset`` days."""
    return WEEKDAYS[(reference + timedelta(days=offset)).weekday()]


def resolve_language(locale: str | None, lang_map: Mapping[str, str]) -> str:
    """
    Map a locale such as ``"pt_BR.UTF-8"`` onto a provider language code.

    The full ``language_territory`` form is tried first, then the bare
    language. Returns ``""`` when the provider has no matching code.
    """
    if not locale:
        return ""
    code = locale.split(".")[0].split("@")[0].replace("-", "_").lower()
    if code in lang_map:
        return lang_map[code]
    return lang_map.get(code.split("_")[0], "")


def dig(payload: Any, *path: str | int) -> Any:
    """Follow ``path`` through nested dicts/lists; ``None`` if any hop is missing."""
    node = payload
    for key in path:
        try:
            node = node[key]
        except (KeyError, IndexError, TypeError):
            return None
    return node


# =============================================================================
# Driver base
# =============================================================================


class WeatherDriver(ABC):
    """
    Base class for provider drivers.

    Args:
        station: Location string as typed by the user.
        api_key: Provider API key (only checked when the driver needs one).
        language: User locale, mapped to the provider's language code.
        fetcher: Async HTTP collaborator (defaults to ``HttpFetcher``).
        translator: Renders canonical condition phrases in the user's language.
        days: Number of forecast days to keep, capped at the provider maximum.
    """

    info: ClassVar[DriverInfo]
    icons: ClassVar[IconMap]
    descriptions: ClassVar[DescriptionMap] = DescriptionMap()

    #: Station formats accepted by ``parse_station``
    allow_geoname_id: ClassVar[bool] = False
    require_coordinates: ClassVar[bool] = False

    def __init__(
        self,
        station: str,
        *,
        api_key: str = "",
        language: str = "",
        fetcher: Fetcher | None = None,
        translator: Translator | None = None,
        days: int | None = None,
    ) -> None:
        self.station = station
        self.api_key = api_key
        self.language = language
        self.fetcher: Fetcher = fetcher if fetcher is not None else HttpFetcher()
        self.translator: Translator = translator if translator is not None else IdentityTranslator()
        self.horizon = max(1, min(days or self.info.max_days, self.info.max_days))
        self.data = WeatherRecord.blank(self.horizon)
        self.link_url = ""
        self._refreshing = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(station={self.station!r})"

    # -- public API ---------------------------------------------------------

    def validate(self) -> StationSpec:
        """Check API key and station before any network call.

        Raises:
            MissingAPIKeyError: Driver needs a key and none is set.
            StationSpecError: Station is blank, malformed or out of range.
        """
        if self.info.needs_api_key and not self.api_key.strip():
            raise MissingAPIKeyError(f"{self.info.display_name} requires an API key")
        return parse_station(
            self.station,
            allow_geoname_id=self.allow_geoname_id,
            require_coordinates=self.require_coordinates,
        )

    async def refresh(
        self,
        display: DisplaySink | None = None,
        today: date | None = None,
    ) -> bool:
        """
        Fetch, normalize and publish a new record. Never raises.

        Args:
            display: Host callbacks (defaults to ``NullDisplay``).
            today: Reference date for day names when the provider reports none.

        Returns:
            True if a new record was published (sections may still be
            partially failed), False if the last snapshot was kept.
        """
        display = display if display is not None else NullDisplay()
        today = today if today is not None else date.today()

        if self._refreshing:
            logger.warning("%r: refresh already in progress, skipping", self)
            return False

        record = WeatherRecord.blank(self.horizon)
        self._refreshing = True
        try:
            try:
                spec = self.validate()
            except (StationSpecError, MissingAPIKeyError) as e:
                return self._abort(record, display, str(e))

            completed = await self._refresh(record, spec, today)
            if not completed or not any(
                getattr(record.status, name) == ServiceStatus.OK for name in SECTIONS
            ):
                return self._abort(record, display, record.status.last_error or "No weather data")

            self._finish_status(record, "No data")
            self.data = record
            self.link_url = self._build_link(spec, record)

            display.display_meta(record)
            display.display_current(record)
            display.display_forecast(record)
        except Exception as e:
            logger.exception("%r: unexpected error during refresh", self)
            return self._abort(record, display, f"An unexpected error occurred: {e}")
        finally:
            self._refreshing = False
        return True

    # -- subclass hooks -----------------------------------------------------

    @abstractmethod
    async def _refresh(self, record: WeatherRecord, spec: StationSpec, today: date) -> bool:
        """Fetch and parse into ``record``; return False to abort the refresh."""

    @abstractmethod
    def _build_link(self, spec: StationSpec, record: WeatherRecord) -> str:
        """Provider web page for the published location."""

    # -- shared machinery ---------------------------------------------------

    async def _load(
        self,
        record: WeatherRecord,
        url: str,
        *,
        sections: Collection[str],
        marker: Callable[[Any], Any],
        invalid_message: str,
        step: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any | None:
        """
        Fetch ``url`` and return its decoded JSON, or ``None`` on failure.

        A failure marks every name in ``sections`` as ERROR with a message
        naming ``step``; it is never raised.
        """
        try:
            text = await self.fetcher.get_text(url, params=params, headers=headers)
            try:
                payload = json.loads(text)
            except ValueError as e:
                raise ResponseShapeError(f"Response is not valid JSON: {e}") from e
            if not _marker_ok(marker, payload):
                raise ResponseShapeError(invalid_message)
        except (TransportError, ResponseShapeError) as e:
            message = f"{step} failed: {e}"
            logger.warning("%r: %s", self, message)
            for name in sections:
                record.status.fail(name, message)
            return None
        return payload

    def _icon(self, code: Any, is_daytime: bool = True) -> str:
        return self.icons.lookup(code, is_daytime)

    def _text(self, code_or_text: Any, is_daytime: bool = True) -> str:
        """Canonical phrase for ``code_or_text``, run through the translator."""
        return safe_translate(self.translator, self.descriptions.describe(code_or_text, is_daytime))

    def _day_from_aggregate(self, name: str, agg: DayAggregate | None) -> DayForecast:
        """Render an aggregated day; a missing day keeps only its name."""
        if agg is None:
            return DayForecast(day=name)
        return DayForecast(
            day=name,
            maximum_temperature=agg.temp_max,
            minimum_temperature=agg.temp_min,
            humidity=agg.humidity,
            pressure=agg.pressure_hpa,
            wind_speed=agg.wind_speed,
            wind_direction=agg.wind_direction,
            condition_text=self._text(agg.text or agg.code, agg.is_daytime),
            icon=self._icon(agg.code, agg.is_daytime),
        )

    def _abort(self, record: WeatherRecord, display: DisplaySink, message: str) -> bool:
        """Keep the last snapshot, attach this refresh's status and report."""
        record.status.last_error = message
        self._finish_status(record, message)
        self.data = self.data.model_copy(update={"status": record.status})
        display.show_error(message)
        return False

    @staticmethod
    def _finish_status(record: WeatherRecord, message: str) -> None:
        for name in SECTIONS:
            if getattr(record.status, name) == ServiceStatus.INIT:
                setattr(record.status, name, ServiceStatus.ERROR)
                record.status.last_error = record.status.last_error or message


def _marker_ok(marker: Callable[[Any], Any], payload: Any) -> bool:
    try:
        return bool(marker(payload))
    except (KeyError, IndexError, TypeError, AttributeError):
        return False
