"""Shared fixtures: a canned-response fetcher and a recording display."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import pytest

from desklet_weather.exceptions import TransportError
from desklet_weather.schemas import WeatherRecord


class FakeFetcher:
    """
    ``Fetcher`` that answers from canned responses keyed by URL prefix.

    A route value may be a dict/list (served as JSON), a str (served as-is)
    or an exception instance (raised). The longest matching prefix wins;
    unrouted URLs raise ``TransportError``.
    """

    def __init__(self, routes: Mapping[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def get_text(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        self.calls.append((url, dict(params or {})))
        matches = [prefix for prefix in self.routes if url.startswith(prefix)]
        if not matches:
            raise TransportError(url, "HTTP 404")
        body = self.routes[max(matches, key=len)]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return body
        return json.dumps(body)

    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


class RecordingDisplay:
    """Display sink that remembers every callback."""

    def __init__(self) -> None:
        self.events: list[str] = []
        self.errors: list[str] = []

    def display_meta(self, record: WeatherRecord) -> None:
        self.events.append("meta")

    def display_current(self, record: WeatherRecord) -> None:
        self.events.append("current")

    def display_forecast(self, record: WeatherRecord) -> None:
        self.events.append("forecast")

    def show_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()
