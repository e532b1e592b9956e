"""
Shared HTTP client with automatic retry and backoff.

Provides pre-configured ``requests.Session`` objects that retry on transient
network errors (timeouts, connection resets, 429/502/503/504) with
exponential backoff, and ``HttpFetcher``, the async adapter the drivers await.

Drivers never touch ``requests`` directly; they talk to a ``Fetcher``::

    fetcher = HttpFetcher()
    body = await fetcher.get_text("https://api.weather.gov/points/40.7,-74.0")

Tests swap in a fake with the same ``get_text`` coroutine.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from desklet_weather import __version__
from desklet_weather.exceptions import TransportError

logger = logging.getLogger(__name__)

#: Default retry strategy for the weather APIs.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,  # 0s, 1s, 2s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 20  # seconds

#: NWS and Nominatim reject anonymous clients.
DEFAULT_USER_AGENT = f"desklet-weather/{__version__} (https://github.com/desklet-weather/desklet-weather)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
        user_agent: ``User-Agent`` header sent with every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = user_agent
    s.headers["Accept"] = "application/json, application/geo+json;q=0.9, */*;q=0.5"

    # Wrap send so callers don't have to pass ``timeout=`` every time.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


# =============================================================================
# Async fetch adapter
# =============================================================================


class Fetcher(Protocol):
    """Async text fetch used by the drivers."""

    async def get_text(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str: ...


class HttpFetcher:
    """
    ``Fetcher`` backed by a retrying ``requests.Session``.

    The blocking request runs in a worker thread so several provider calls
    can be awaited concurrently on one event loop. ``requests.Session`` is not
    thread-safe, so each worker thread gets its own session from ``factory``
    unless a session is injected, in which case the caller owns its sharing.
    """

    def __init__(
        self,
        http: requests.Session | None = None,
        factory: Callable[[], requests.Session] = create_session,
    ) -> None:
        self._http = http
        self._factory = factory
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._http is not None:
            return self._http
        s = getattr(self._local, "session", None)
        if s is None:
            s = self._local.session = self._factory()
        return s

    def _get(
        self,
        url: str,
        params: Mapping[str, Any] | None,
        headers: Mapping[str, str] | None,
    ) -> str:
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, headers=headers)
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(url, f"HTTP {e.response.status_code}") from e
        except requests.RequestException as e:
            raise TransportError(url, f"Request failed: {e}") from e

        if not resp.text:
            raise TransportError(url, "Empty response body")
        return resp.text

    async def get_text(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """Fetch ``url`` and return the body; raises ``TransportError``."""
        return await asyncio.to_thread(self._get, url, params, headers)
