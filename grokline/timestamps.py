# grokline/timestamps.py
"""
Timestamp layouts for the ts-* modifiers.

    ts-ansic         ("Mon Jan _2 15:04:05 2006")
    ts-unixdate      ("Mon Jan _2 15:04:05 MST 2006")
    ts-ruby          ("Mon Jan 02 15:04:05 -0700 2006")
    ts-rfc822        ("02 Jan 06 15:04 MST")
    ts-rfc822z       ("02 Jan 06 15:04 -0700")
    ts-rfc850        ("Monday, 02-Jan-06 15:04:05 MST")
    ts-rfc1123       ("Mon, 02 Jan 2006 15:04:05 MST")
    ts-rfc1123z      ("Mon, 02 Jan 2006 15:04:05 -0700")
    ts-rfc3339       ("2006-01-02T15:04:05Z07:00")
    ts-rfc3339nano   ("2006-01-02T15:04:05.999999999Z07:00")
    ts-httpd         ("02/Jan/2006:15:04:05 -0700")
    ts-syslog        ("Jan _2 15:04:05", current year)
    ts-unix          (seconds since unix epoch, alias ts-epoch)
    ts-unix-ms       (milliseconds since unix epoch, alias ts-epochmilli)
    ts-unix-us       (microseconds since unix epoch, alias ts-epochmicro)
    ts-unix-ns       (nanoseconds since unix epoch, alias ts-epochnano)
    ts               (try every layout above, then dateutil's parser)
    ts-"CUSTOM"      (a strptime format, e.g. ts-"%d/%m/%Y--%H:%M:%S")

Layouts without a zone are interpreted in the configured reference timezone.
"""

import logging
import re
from datetime import datetime, tzinfo

import pandas as pd
from dateutil import parser as dtp
from dateutil import tz

logger = logging.getLogger(__name__)

GENERIC_LAYOUT = "ts"
SYSLOG_LAYOUT = "ts-syslog"

STRPTIME_LAYOUTS = {
    "ts-ansic": "%a %b %d %H:%M:%S %Y",
    "ts-unixdate": "%a %b %d %H:%M:%S %Z %Y",
    "ts-ruby": "%a %b %d %H:%M:%S %z %Y",
    "ts-rfc822": "%d %b %y %H:%M %Z",
    "ts-rfc822z": "%d %b %y %H:%M %z",
    "ts-rfc850": "%A, %d-%b-%y %H:%M:%S %Z",
    "ts-rfc1123": "%a, %d %b %Y %H:%M:%S %Z",
    "ts-rfc1123z": "%a, %d %b %Y %H:%M:%S %z",
    "ts-httpd": "%d/%b/%Y:%H:%M:%S %z",
}

RFC3339_LAYOUTS = ("ts-rfc3339", "ts-rfc3339nano")

# nanoseconds per unit
EPOCH_LAYOUTS = {
    "ts-unix": 1_000_000_000,
    "ts-epoch": 1_000_000_000,
    "ts-unix-ms": 1_000_000,
    "ts-epochmilli": 1_000_000,
    "ts-unix-us": 1_000,
    "ts-epochmicro": 1_000,
    "ts-unix-ns": 1,
    "ts-epochnano": 1,
}

TIMESTAMP_MODIFIERS = frozenset(
    [GENERIC_LAYOUT, SYSLOG_LAYOUT, *STRPTIME_LAYOUTS, *RFC3339_LAYOUTS, *EPOCH_LAYOUTS]
)

RFC3339_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,9})?(?:Z|[+-]\d{2}:\d{2})$")
EPOCH_RE = re.compile(r"^([+-]?)(\d+)(?:\.(\d+))?$")


def custom_layout(modifier: str) -> str | None:
    """Return the strptime format of a ts-"..." modifier, or None."""
    if modifier.startswith('ts-"') and modifier.endswith('"') and len(modifier) > 5:
        return modifier[4:-1]
    return None


def is_timestamp_modifier(modifier: str) -> bool:
    return modifier in TIMESTAMP_MODIFIERS or custom_layout(modifier) is not None


def resolve_timezone(name: str | None) -> tzinfo:
    """
    Map the configured timezone name to a tzinfo.

    "" and "UTC" are UTC, "Local" is the system zone, anything else is looked
    up in the tz database. Unknown names fall back to UTC with a warning.
    """
    if not name or name.upper() == "UTC":
        return tz.UTC
    if name == "Local":
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        logger.warning("Improper timezone supplied (%s), using UTC", name)
        return tz.UTC
    return zone


def _zone_for_abbrev(abbrev: str, zone: tzinfo) -> tzinfo:
    if not abbrev.isalpha():
        raise ValueError(f"invalid zone abbreviation {abbrev!r}")
    if abbrev.upper() in ("UTC", "GMT", "Z"):
        return tz.UTC
    return tz.gettz(abbrev) or zone


def _strptime(value: str, fmt: str, zone: tzinfo) -> pd.Timestamp:
    fmt_parts = fmt.split()
    if "%Z" in fmt_parts:
        # strptime only knows a handful of zone names, resolve the
        # abbreviation ourselves.
        parts = value.split()
        if len(parts) != len(fmt_parts):
            raise ValueError(f"time data {value!r} does not match format {fmt!r}")
        idx = fmt_parts.index("%Z")
        abbrev = parts.pop(idx)
        fmt_parts.pop(idx)
        dt = datetime.strptime(" ".join(parts), " ".join(fmt_parts))
        dt = dt.replace(tzinfo=_zone_for_abbrev(abbrev, zone))
    else:
        dt = datetime.strptime(value, fmt)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return pd.Timestamp(dt)


def _from_epoch(value: str, unit_ns: int) -> pd.Timestamp:
    m = EPOCH_RE.match(value)
    if not m:
        raise ValueError(f"{value!r} is not a unix timestamp")
    sign, whole, frac = m.groups()
    ns = int(whole) * unit_ns
    if frac:
        ns += int(frac) * unit_ns // 10 ** len(frac)
    if sign == "-":
        ns = -ns
    return pd.Timestamp(ns, unit="ns", tz="UTC")


def _from_rfc3339(value: str) -> pd.Timestamp:
    if not RFC3339_RE.match(value):
        raise ValueError(f"{value!r} is not an RFC3339 timestamp")
    return pd.Timestamp(value)


def _from_syslog(value: str, zone: tzinfo) -> pd.Timestamp:
    year = datetime.now(zone).year
    dt = datetime.strptime(f"{year} {value}", "%Y %b %d %H:%M:%S")
    return pd.Timestamp(dt.replace(tzinfo=zone))


def _from_any(value: str, zone: tzinfo) -> pd.Timestamp:
    for layout in (*STRPTIME_LAYOUTS, *RFC3339_LAYOUTS, SYSLOG_LAYOUT):
        try:
            return parse_timestamp(value, layout, zone)
        except ValueError:
            continue
    dt = dtp.parse(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return pd.Timestamp(dt)


def parse_timestamp(value: str, layout: str, zone: tzinfo = tz.UTC) -> pd.Timestamp:
    """
    Parse `value` under `layout` (a ts-* keyword or a strptime format).

    Raises ValueError (or a subclass) when the value does not fit the layout.
    """
    if layout in STRPTIME_LAYOUTS:
        return _strptime(value, STRPTIME_LAYOUTS[layout], zone)
    if layout in EPOCH_LAYOUTS:
        return _from_epoch(value, EPOCH_LAYOUTS[layout])
    if layout in RFC3339_LAYOUTS:
        return _from_rfc3339(value)
    if layout == SYSLOG_LAYOUT:
        return _from_syslog(value, zone)
    if layout == GENERIC_LAYOUT:
        return _from_any(value, zone)
    return _strptime(value, layout, zone)
