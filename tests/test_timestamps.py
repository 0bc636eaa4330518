import logging
from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest
from dateutil import tz

from grokline.timestamps import (
    custom_layout,
    is_timestamp_modifier,
    parse_timestamp,
    resolve_timezone,
)


def test_httpd_layout_keeps_offset():
    ts = parse_timestamp("04/Jun/2016:12:41:45 +0100", "ts-httpd")
    assert (ts.year, ts.month, ts.day, ts.hour, ts.minute, ts.second) == (2016, 6, 4, 12, 41, 45)
    assert ts.utcoffset() == timedelta(hours=1)
    assert ts == pd.Timestamp("2016-06-04T11:41:45Z")


@pytest.mark.parametrize(
    "layout,value",
    [
        ("ts-ansic", "Sat Jun  4 12:41:45 2016"),
        ("ts-unixdate", "Sat Jun  4 12:41:45 UTC 2016"),
        ("ts-ruby", "Sat Jun 04 12:41:45 +0000 2016"),
        ("ts-rfc822", "04 Jun 16 12:41 GMT"),
        ("ts-rfc822z", "04 Jun 16 12:41 +0000"),
        ("ts-rfc850", "Saturday, 04-Jun-16 12:41:45 UTC"),
        ("ts-rfc1123", "Sat, 04 Jun 2016 12:41:45 GMT"),
        ("ts-rfc1123z", "Sat, 04 Jun 2016 12:41:45 +0000"),
        ("ts-rfc3339", "2016-06-04T12:41:45Z"),
        ("ts-rfc3339nano", "2016-06-04T12:41:45.000000000+00:00"),
    ],
)
def test_named_layouts(layout, value):
    ts = parse_timestamp(value, layout)
    expected = pd.Timestamp("2016-06-04T12:41:45Z")
    if layout in ("ts-rfc822", "ts-rfc822z"):
        expected = pd.Timestamp("2016-06-04T12:41:00Z")
    assert ts == expected


def test_zone_abbreviation_is_resolved():
    ts = parse_timestamp("Sat Jun  4 12:41:45 EST 2016", "ts-unixdate")
    assert ts.utcoffset() == timedelta(hours=-5)


def test_rfc3339nano_keeps_nanoseconds():
    ts = parse_timestamp("2016-06-04T12:41:45.123456789+02:00", "ts-rfc3339nano")
    assert ts.nanosecond == 789
    assert ts.microsecond == 123456
    assert ts.utcoffset() == timedelta(hours=2)


@pytest.mark.parametrize(
    "layout,value,expected_ns",
    [
        ("ts-unix", "1465040505", 1465040505 * 10**9),
        ("ts-epoch", "1465040505.5", 1465040505 * 10**9 + 500_000_000),
        ("ts-unix-ms", "1465040505123", 1465040505123 * 10**6),
        ("ts-epochmilli", "1465040505123", 1465040505123 * 10**6),
        ("ts-unix-us", "1465040505123456", 1465040505123456 * 10**3),
        ("ts-unix-ns", "1465040505123456789", 1465040505123456789),
        ("ts-epochnano", "1465040505123456789", 1465040505123456789),
    ],
)
def test_epoch_layouts(layout, value, expected_ns):
    ts = parse_timestamp(value, layout)
    assert ts.value == expected_ns
    assert ts.utcoffset() == timedelta(0)


def test_syslog_layout_uses_current_year():
    ts = parse_timestamp("Jun  4 12:41:45", "ts-syslog")
    assert ts.year == datetime.now(timezone.utc).year
    assert (ts.month, ts.day, ts.hour) == (6, 4, 12)


def test_custom_layout_is_zone_naive():
    zone = tz.gettz("America/New_York")
    ts = parse_timestamp("04/06/2016--12:41:45", "%d/%m/%Y--%H:%M:%S", zone)
    assert ts.utcoffset() == timedelta(hours=-4)
    assert ts == pd.Timestamp("2016-06-04T16:41:45Z")


def test_generic_layout():
    assert parse_timestamp("04/Jun/2016:12:41:45 +0100", "ts") == pd.Timestamp(
        "2016-06-04T11:41:45Z"
    )
    assert parse_timestamp("2016-06-04 12:41:45", "ts") == pd.Timestamp("2016-06-04T12:41:45Z")


@pytest.mark.parametrize(
    "layout,value",
    [
        ("ts-unix", "04/Jun/2016:12:41:45 +0100"),
        ("ts-httpd", "1465040505"),
        ("ts-rfc3339", "2016-06-04 12:41:45"),
        ("ts-unixdate", "Sat Jun 4 12:41:45 2016"),
        ("ts", "notatime"),
    ],
)
def test_mismatched_layout_raises(layout, value):
    with pytest.raises(ValueError):
        parse_timestamp(value, layout)


def test_modifier_helpers():
    assert is_timestamp_modifier("ts-httpd")
    assert is_timestamp_modifier("ts")
    assert is_timestamp_modifier('ts-"%Y"')
    assert not is_timestamp_modifier("int")
    assert not is_timestamp_modifier("ts-nope")
    assert custom_layout('ts-"%d/%m/%Y"') == "%d/%m/%Y"
    assert custom_layout("ts-httpd") is None


def test_resolve_timezone():
    assert resolve_timezone("") is tz.UTC
    assert resolve_timezone("UTC") is tz.UTC
    assert resolve_timezone("Europe/Berlin") is not None
    assert isinstance(resolve_timezone("Local"), tz.tzlocal)


def test_resolve_unknown_timezone_falls_back_to_utc(caplog):
    with caplog.at_level(logging.WARNING, logger="grokline.timestamps"):
        assert resolve_timezone("Mars/Olympus_Mons") is tz.UTC
    assert "Mars/Olympus_Mons" in caplog.text
