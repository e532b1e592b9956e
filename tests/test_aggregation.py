"""Tests for day bucketing and aggregation."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

from desklet_weather.aggregation import (
    ForecastSample,
    aggregate_bucket,
    aggregate_days,
    bucket_by_day,
    day_offset,
    select_at_hour,
    select_representative,
)

PRIORITY = {"clear": 1, "rain": 5, "snow": 8}


def at(day: int, hour: int, **fields: object) -> ForecastSample:
    return ForecastSample(time=datetime(2026, 2, day, hour), **fields)  # type: ignore[arg-type]


class TestBucketing:
    """UTC-date day offsets."""

    def test_offset_ignores_time_of_day(self) -> None:
        assert day_offset(datetime(2026, 2, 3, 0, 30), datetime(2026, 2, 2, 23, 0)) == 1

    def test_aware_times_compared_in_utc(self) -> None:
        eastern = timezone(timedelta(hours=-5))
        late = datetime(2026, 2, 2, 21, tzinfo=eastern)  # 02:00 UTC next day
        assert day_offset(late, datetime(2026, 2, 2, 12, tzinfo=UTC)) == 1

    def test_bucket_shape_and_drops(self) -> None:
        samples = [at(2, 9), at(2, 12), at(3, 9), at(9, 9)]
        buckets = bucket_by_day(samples, 3)
        assert [len(b) for b in buckets] == [2, 1, 0]

    def test_empty_input(self) -> None:
        assert bucket_by_day([], 4) == [[], [], [], []]

    def test_explicit_day0(self) -> None:
        buckets = bucket_by_day([at(3, 9)], 2, day0=datetime(2026, 2, 2, 6))
        assert len(buckets[1]) == 1


class TestSelectRepresentative:
    """Representative condition of a day."""

    def test_highest_priority_in_window(self) -> None:
        samples = [at(3, 6, code="snow"), at(3, 9, code="clear"), at(3, 12, code="rain")]
        chosen = select_representative(samples, priority=PRIORITY)
        assert chosen is not None
        assert chosen.code == "rain"

    def test_tie_goes_to_middle_of_window(self) -> None:
        samples = [at(3, 9, code="rain", text="a"), at(3, 12, code="rain", text="b")]
        chosen = select_representative(samples, priority=PRIORITY)
        assert chosen is not None
        assert chosen.text == "b"

    def test_nothing_ranked_uses_reference_hour(self) -> None:
        samples = [at(3, 3, code="x"), at(3, 15, code="y"), at(3, 21, code="z")]
        chosen = select_representative(samples, priority=PRIORITY)
        assert chosen is not None
        assert chosen.code == "y"

    def test_empty(self) -> None:
        assert select_representative([]) is None


class TestSelectAtHour:
    def test_skips_night_sample(self) -> None:
        samples = [
            at(4, 6, code="night", is_daytime=False),
            at(4, 6, code="day"),
        ]
        chosen = select_at_hour(samples, date(2026, 2, 4), 6)
        assert chosen is not None
        assert chosen.code == "day"

    def test_no_match(self) -> None:
        assert select_at_hour([at(4, 18)], date(2026, 2, 4), 6) is None


class TestAggregateBucket:
    """Folding one day of samples."""

    def test_extremes_and_maxima(self) -> None:
        samples = [
            at(3, 9, temp_max=10, temp_min=4, humidity=60, pressure_pa=101000),
            at(3, 12, temp_max=14, temp_min=6, humidity=80, pressure_pa=101360),
            at(3, 15, temp_max=12, temp_min=2, humidity=None, pressure_pa=None),
        ]
        day = aggregate_bucket(samples)
        assert day is not None
        assert day.temp_max == 14
        assert day.temp_min == 2
        assert day.humidity == 80
        assert day.pressure_hpa == 1014

    def test_wind_from_single_sample(self) -> None:
        samples = [
            at(3, 9, wind_speed=10, wind_direction="N"),
            at(3, 12, wind_speed=25, wind_direction="SW"),
            at(3, 15, wind_speed=None, wind_direction="E"),
        ]
        day = aggregate_bucket(samples)
        assert day is not None
        assert (day.wind_speed, day.wind_direction) == (25, "SW")

    def test_empty_bucket(self) -> None:
        assert aggregate_bucket([]) is None


class TestAggregateDays:
    """Sample stream to per-day aggregates."""

    def test_day0_is_first_sample_verbatim(self) -> None:
        samples = [at(2, 18, temp_max=5, code="rain"), at(2, 21, temp_max=9, code="clear")]
        days = aggregate_days(samples, 2, priority=PRIORITY)
        assert days[0] is not None
        assert days[0].temp_max == 5
        assert days[0].code == "rain"
        assert days[1] is None

    def test_later_days_aggregated(self) -> None:
        samples = [at(2, 18, temp_max=5)] + [at(3, h, temp_max=h) for h in (0, 12, 21)]
        days = aggregate_days(samples, 3)
        assert days[1] is not None
        assert days[1].temp_max == 21
        assert days[2] is None
