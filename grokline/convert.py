# grokline/convert.py
import re
from datetime import tzinfo
from typing import Any

from dateutil import tz

from .base import FieldSpec, Modifier, ParseError
from .timestamps import parse_timestamp

INT_RE = re.compile(r"^[+-]?\d+$")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# nanoseconds per duration unit; both micro sign (U+00B5) and greek mu (U+03BC)
DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
DURATION_PART_RE = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)")


def parse_int(value: str) -> int:
    """Base-10 signed 64-bit integer."""
    if not INT_RE.match(value):
        raise ValueError(f"invalid integer {value!r}")
    iv = int(value)
    if not INT64_MIN <= iv <= INT64_MAX:
        raise ValueError(f"integer {value!r} out of int64 range")
    return iv


def parse_float(value: str) -> float:
    if "_" in value or value != value.strip():
        raise ValueError(f"invalid float {value!r}")
    return float(value)


def parse_duration(value: str) -> int:
    """
    Parse a duration literal such as "300ms", "-1.5h" or "2h45m" into
    integer nanoseconds.
    """
    s = value
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise ValueError(f"invalid duration {value!r}")

    total = 0
    pos = 0
    while pos < len(s):
        m = DURATION_PART_RE.match(s, pos)
        if not m or not (m.group(1) or m.group(2)):
            raise ValueError(f"invalid duration {value!r}")
        whole, frac, unit = m.groups()
        scale = DURATION_UNITS[unit]
        total += int(whole or 0) * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        pos = m.end()
    return sign * total


def convert_value(spec: FieldSpec, value: str, zone: tzinfo = tz.UTC) -> Any:
    """
    Convert one captured string according to its field spec.

    TAG, STRING and DROP return the text unchanged; the caller decides where
    it goes. Conversion failures raise ParseError naming the field.
    """
    try:
        if spec.modifier is Modifier.INT:
            return parse_int(value)
        if spec.modifier is Modifier.FLOAT:
            return parse_float(value)
        if spec.modifier is Modifier.DURATION:
            return parse_duration(value)
        if spec.modifier is Modifier.TIMESTAMP:
            return parse_timestamp(value, spec.layout, zone)
    except (ValueError, OverflowError) as exc:
        if spec.modifier is Modifier.TIMESTAMP:
            reason = f"cannot parse {value!r} with time layout {spec.layout!r}: {exc}"
        else:
            reason = f"cannot convert {value!r} to {spec.modifier.value}: {exc}"
        raise ParseError(reason, field=spec.name) from exc
    return value
