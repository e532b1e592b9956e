"""Snapshot store with freshness-aware caching.

Published weather records are kept under ``live/<provider>.json`` so the CLI
can show the last snapshot and the refresh flow can skip providers whose
snapshot is still within the provider's minimum refresh interval.

Every JSON file is wrapped in a metadata envelope::

    {"meta": {"source": ..., "fetched_at": ..., "valid_until": ..., ...},
     "data": {...}}
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from desklet_weather.schemas import WeatherRecord

logger = logging.getLogger(__name__)


class DataStore:
    """Manages read/write of cached snapshot files with TTL."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.live = base_dir / "live"

    @staticmethod
    def record_path(provider: str) -> Path:
        """Relative path of the snapshot for ``provider``."""
        return Path("live") / f"{provider}.json"

    def read(self, path: Path) -> dict[str, Any] | None:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``live/nws.json``).
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"api.weather.gov"``).
            valid_until: Expiry timestamp. None means never fresh.
            **params: Extra metadata fields (station, provider, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": datetime.now(UTC).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        logger.debug("Wrote %s (source=%s)", full, source)
        return full

    def is_fresh(self, path: Path) -> bool:
        """Check if a file exists and hasn't expired.

        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return False

        valid_until = envelope.get("meta", {}).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return datetime.now(UTC) < expiry

    # -- weather records ----------------------------------------------------

    def save_record(
        self,
        provider: str,
        record: WeatherRecord,
        *,
        ttl_seconds: int,
        **params: Any,
    ) -> Path:
        """Store a published record, fresh for ``ttl_seconds``."""
        return self.write(
            self.record_path(provider),
            record.model_dump(mode="json"),
            source=provider,
            valid_until=datetime.now(UTC) + timedelta(seconds=ttl_seconds),
            **params,
        )

    def load_record(self, provider: str) -> WeatherRecord | None:
        """Last stored record for ``provider``; None if missing or unreadable."""
        data = self.read(self.record_path(provider))
        if data is None:
            return None
        try:
            return WeatherRecord.model_validate(data)
        except ValidationError:
            logger.warning("Stored %s snapshot does not match the record schema", provider)
            return None

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full
