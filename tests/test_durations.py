"""Tests for durations module."""

from datetime import datetime, timedelta, timezone

import pytest

from ytmetadata.durations import (
    format_duration,
    format_utc,
    from_now,
    get_duration,
    parse_iso_duration,
    parse_timestamp,
)

NOW = datetime(2020, 1, 1, tzinfo=timezone.utc)


def test_get_duration_is_order_independent():
    later = NOW + timedelta(minutes=5)
    assert get_duration(NOW, later) == timedelta(minutes=5)
    assert get_duration(later, NOW) == timedelta(minutes=5)


def test_format_duration_components():
    assert format_duration(timedelta(hours=1, minutes=2, seconds=3)) == "1h 2m 3s"
    assert format_duration(timedelta(minutes=4, seconds=13)) == "4m 13s"
    assert format_duration(timedelta(days=400, seconds=5)) == "1y 35d 5s"


def test_format_duration_zero():
    assert format_duration(timedelta(0)) == "0s"
    assert format_duration(timedelta(milliseconds=500)) == "0s"


def test_format_duration_millis():
    assert format_duration(timedelta(seconds=1, milliseconds=250), include_ms=True) == "1s 250ms"
    assert format_duration(timedelta(seconds=1, milliseconds=250)) == "1s"


def test_format_duration_negative_is_absolute():
    assert format_duration(timedelta(minutes=-3)) == "3m"


def test_parse_iso_duration():
    assert parse_iso_duration("PT1H2M3S") == timedelta(hours=1, minutes=2, seconds=3)
    assert parse_iso_duration("P1DT2H") == timedelta(days=1, hours=2)
    assert parse_iso_duration("P0D") == timedelta(0)
    assert parse_iso_duration("P1Y") == timedelta(days=365)


def test_parse_iso_duration_invalid():
    with pytest.raises(ValueError):
        parse_iso_duration("bogus")


def test_parse_timestamp():
    parsed = parse_timestamp("2014-10-25T16:00:01Z")
    assert parsed == datetime(2014, 10, 25, 16, 0, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2014-10-25T16:00:01.000Z") == parsed


def test_parse_timestamp_naive_is_utc():
    parsed = parse_timestamp("2014-10-25T16:00:01")
    assert parsed.utcoffset() == timedelta(0)


def test_format_utc():
    value = datetime(2014, 10, 25, 16, 0, 1, tzinfo=timezone.utc)
    assert format_utc(value) == "Sat, 25 Oct 2014 16:00:01 GMT"


def test_format_utc_converts_offset():
    value = datetime(2014, 10, 25, 18, 0, 1, tzinfo=timezone(timedelta(hours=2)))
    assert format_utc(value) == "Sat, 25 Oct 2014 16:00:01 GMT"


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(seconds=-10), "a few seconds ago"),
        (timedelta(seconds=-60), "a minute ago"),
        (timedelta(minutes=-20), "20 minutes ago"),
        (timedelta(hours=2), "in 2 hours"),
        (timedelta(hours=-30), "a day ago"),
        (timedelta(days=-5), "5 days ago"),
        (timedelta(days=-30), "a month ago"),
        (timedelta(days=-100), "3 months ago"),
        (timedelta(days=-365), "a year ago"),
        (timedelta(days=-3 * 365), "3 years ago"),
    ],
)
def test_from_now(offset, expected):
    assert from_now(NOW + offset, NOW) == expected
