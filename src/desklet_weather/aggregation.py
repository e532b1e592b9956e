"""Day bucketing and aggregation of sub-daily forecast data.

Providers report forecasts at different resolutions: 3-hour blocks (OWM),
hourly and 12-hour periods plus irregular grid series (NWS), or ready-made
daily aggregates (BBC, Google, Open-Meteo). The widget shows one record per
calendar day, so the sub-daily streams are folded here:

    samples ──bucket_by_day──▶ [day0, day1, ..., dayN-1] ──aggregate_bucket──▶ DayAggregate

Rules:

- Day offsets compare UTC-midnight dates, never raw timestamps, so DST and
  timezone skew cannot push an entry into the neighbouring day.
- Day 0 is today's first snapshot, taken verbatim.
- Days 1..N-1 aggregate every sample in the bucket:
    max temp = max, min temp = min, humidity = max,
    pressure = max (Pa -> hPa, rounded), wind = speed *and* direction of the
    windiest sample, condition = representative sample (see
    ``select_representative``).
- A day with no samples stays ``None``; that is a normal outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime

from desklet_weather.conversions import pa_to_hpa, to_float

logger = logging.getLogger(__name__)

#: Daytime window (local hours, inclusive) searched for the representative condition
DEFAULT_WINDOW = (9, 15)
#: Hour used when no priority table picks a sample
DEFAULT_REFERENCE_HOUR = 12


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class ForecastSample:
    """One time-stamped forecast data point (any field may be missing).

    ``time`` is the provider's local wall time; aware datetimes keep their
    offset so ``time.hour`` is the local hour.
    """

    time: datetime
    temp_max: float | None = None
    temp_min: float | None = None
    humidity: float | None = None
    pressure_pa: float | None = None
    wind_speed: float | None = None
    wind_direction: str | None = None
    code: str | None = None
    text: str | None = None
    is_daytime: bool = True


@dataclass
class DayAggregate:
    """Aggregated values for one forecast day."""

    temp_max: float | None = None
    temp_min: float | None = None
    humidity: float | None = None
    pressure_hpa: int | None = None
    wind_speed: float | None = None
    wind_direction: str | None = None
    code: str | None = None
    text: str | None = None
    is_daytime: bool = True

    @classmethod
    def from_sample(cls, sample: ForecastSample) -> DayAggregate:
        """Take a single sample as the whole day (used for day 0)."""
        return cls(
            temp_max=sample.temp_max,
            temp_min=sample.temp_min,
            humidity=sample.humidity,
            pressure_hpa=pa_to_hpa(sample.pressure_pa),
            wind_speed=sample.wind_speed,
            wind_direction=sample.wind_direction,
            code=sample.code,
            text=sample.text,
            is_daytime=sample.is_daytime,
        )


# =============================================================================
# Bucketing
# =============================================================================


def utc_date(moment: datetime) -> date:
    """Calendar date of ``moment`` in UTC (naive datetimes are taken as UTC)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.date()


def day_offset(entry_time: datetime, day0_time: datetime) -> int:
    """Whole days between the UTC-midnight dates of two timestamps."""
    return (utc_date(entry_time) - utc_date(day0_time)).days


def bucket_by_day(
    samples: Sequence[ForecastSample],
    horizon: int,
    day0: datetime | None = None,
) -> list[list[ForecastSample]]:
    """
    Group samples into ``horizon`` day buckets.

    Args:
        samples: Samples in provider order.
        horizon: Number of days to keep.
        day0: Reference time for day 0 (defaults to the first sample).

    Returns:
        Exactly ``horizon`` lists; samples outside ``[0, horizon)`` are dropped.
    """
    buckets: list[list[ForecastSample]] = [[] for _ in range(horizon)]
    if not samples:
        return buckets
    reference = day0 if day0 is not None else samples[0].time
    for sample in samples:
        offset = day_offset(sample.time, reference)
        if 0 <= offset < horizon:
            buckets[offset].append(sample)
    return buckets


# =============================================================================
# Representative condition
# =============================================================================


def _hour_of_day(moment: datetime) -> float:
    return moment.hour + moment.minute / 60


def select_representative(
    samples: Sequence[ForecastSample],
    *,
    priority: Mapping[str, int] | None = None,
    window: tuple[int, int] = DEFAULT_WINDOW,
    reference_hour: int = DEFAULT_REFERENCE_HOUR,
) -> ForecastSample | None:
    """
    Pick the sample whose condition best represents the day.

    With a priority table, the highest-ranked code among samples inside the
    daytime ``window`` wins; ties go to the sample nearest the middle of the
    window. Without a table, or when nothing in the window is ranked, the
    sample nearest ``reference_hour`` wins.
    """
    if not samples:
        return None

    if priority:
        start, end = window
        ranked = [
            (priority[s.code], s)
            for s in samples
            if start <= s.time.hour <= end and s.code is not None and s.code in priority
        ]
        if ranked:
            best = max(rank for rank, _ in ranked)
            middle = (start + end) / 2
            tied = [s for rank, s in ranked if rank == best]
            return min(tied, key=lambda s: abs(_hour_of_day(s.time) - middle))

    return min(samples, key=lambda s: abs(_hour_of_day(s.time) - reference_hour))


def select_at_hour(
    samples: Sequence[ForecastSample],
    target: date,
    hour: int,
    *,
    daytime: bool = True,
) -> ForecastSample | None:
    """First sample starting at local ``hour`` on local date ``target``."""
    for sample in samples:
        if sample.time.date() != target or sample.time.hour != hour:
            continue
        if daytime and not sample.is_daytime:
            continue
        return sample
    return None


# =============================================================================
# Aggregation
# =============================================================================


def aggregate_bucket(
    samples: Sequence[ForecastSample],
    *,
    priority: Mapping[str, int] | None = None,
    window: tuple[int, int] = DEFAULT_WINDOW,
    reference_hour: int = DEFAULT_REFERENCE_HOUR,
) -> DayAggregate | None:
    """Fold every sample of one day into a ``DayAggregate``; ``None`` if empty."""
    if not samples:
        return None

    maxima = [s.temp_max for s in samples if s.temp_max is not None]
    minima = [s.temp_min for s in samples if s.temp_min is not None]
    humidities = [s.humidity for s in samples if s.humidity is not None]
    pressures = [p for p in (to_float(s.pressure_pa) for s in samples) if p is not None]
    windy = [s for s in samples if s.wind_speed is not None]

    day = DayAggregate(
        temp_max=max(maxima) if maxima else None,
        temp_min=min(minima) if minima else None,
        humidity=max(humidities) if humidities else None,
        pressure_hpa=pa_to_hpa(max(pressures)) if pressures else None,
    )

    if windy:
        # speed and direction must come from the same sample
        windiest = max(windy, key=lambda s: s.wind_speed or 0.0)
        day.wind_speed = windiest.wind_speed
        day.wind_direction = windiest.wind_direction

    representative = select_representative(
        samples, priority=priority, window=window, reference_hour=reference_hour
    )
    if representative is not None:
        day.code = representative.code
        day.text = representative.text
        day.is_daytime = representative.is_daytime

    return day


def aggregate_days(
    samples: Sequence[ForecastSample],
    horizon: int,
    *,
    day0: datetime | None = None,
    priority: Mapping[str, int] | None = None,
    window: tuple[int, int] = DEFAULT_WINDOW,
    reference_hour: int = DEFAULT_REFERENCE_HOUR,
) -> list[DayAggregate | None]:
    """
    Turn a sub-daily sample stream into ``horizon`` per-day aggregates.

    Day 0 is the first sample of today's bucket taken verbatim; days
    1..horizon-1 are aggregated. Days without samples, or whose aggregation
    fails, are ``None``; one bad day never stops the others.
    """
    days: list[DayAggregate | None] = [None] * horizon
    buckets = bucket_by_day(samples, horizon, day0)

    if buckets[0]:
        days[0] = DayAggregate.from_sample(buckets[0][0])

    for offset in range(1, horizon):
        try:
            days[offset] = aggregate_bucket(
                buckets[offset],
                priority=priority,
                window=window,
                reference_hour=reference_hour,
            )
        except (TypeError, ValueError):
            logger.exception("Could not aggregate forecast day %d", offset)
    return days
