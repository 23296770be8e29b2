"""Tests for the timestamp helpers."""

from datetime import date, datetime, timezone

from asset_monitor.utils.time_utils import (
    as_utc,
    format_timestamp,
    parse_calendar_date,
    parse_timestamp,
    utc_now,
)


def test_utc_now_is_aware():
    assert utc_now().tzinfo is timezone.utc


def test_parse_timestamp_accepts_z_suffix():
    parsed = parse_timestamp("2024-01-05T15:00:00Z")

    assert parsed == datetime(2024, 1, 5, 15, tzinfo=timezone.utc)
    assert parsed.utcoffset().total_seconds() == 0


def test_parse_timestamp_converts_offsets_to_utc():
    parsed = parse_timestamp("2024-01-05T10:00:00-05:00")

    assert parsed == datetime(2024, 1, 5, 15, tzinfo=timezone.utc)


def test_format_then_parse_keeps_the_instant():
    value = datetime(2024, 3, 1, 8, 30, 15, 250000, tzinfo=timezone.utc)

    text = format_timestamp(value)

    assert text == "2024-03-01T08:30:15.250000Z"
    assert parse_timestamp(text) == value


def test_naive_values_are_local_time():
    naive = datetime(2024, 1, 1, 9)

    assert as_utc(naive) == naive.astimezone(timezone.utc)


def test_plain_dates_are_taken_as_is():
    assert parse_calendar_date("2024-02-29") == date(2024, 2, 29)
