import pytest

from grokline.base import FieldSpec, Modifier, ParseError
from grokline.convert import convert_value, parse_duration, parse_float, parse_int


def test_parse_int():
    assert parse_int("200") == 200
    assert parse_int("-17") == -17
    assert parse_int("+5") == 5


@pytest.mark.parametrize("value", ["notnumber", "1.5", " 12", "1_000", "", "9223372036854775808"])
def test_parse_int_rejects(value):
    with pytest.raises(ValueError):
        parse_int(value)


def test_parse_float():
    assert parse_float("1.25") == 1.25
    assert parse_float("-3") == -3.0
    assert parse_float("1e3") == 1000.0


@pytest.mark.parametrize("value", ["notnumber", "1_0.5", " 1.5"])
def test_parse_float_rejects(value):
    with pytest.raises(ValueError):
        parse_float(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("5.432µs", 5432),  # micro sign
        ("5.432μs", 5432),  # greek mu
        ("5.432us", 5432),
        ("0.245ms", 245_000),
        ("300ns", 300),
        ("1.5s", 1_500_000_000),
        ("2h45m", (2 * 3600 + 45 * 60) * 1_000_000_000),
        ("-1.5h", -5_400_000_000_000),
        ("0", 0),
        (".5s", 500_000_000),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["notnumber", "", "5", "5.4.3s", "s", "-", "5 s"])
def test_parse_duration_rejects(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_convert_value_dispatch():
    assert convert_value(FieldSpec("_g0", "code", Modifier.INT), "200") == 200
    assert convert_value(FieldSpec("_g0", "code", Modifier.TAG), "200") == "200"
    assert convert_value(FieldSpec("_g0", "code"), "200") == "200"
    assert convert_value(FieldSpec("_g0", "rt", Modifier.DURATION), "5.432µs") == 5432


def test_convert_value_error_names_field():
    spec = FieldSpec("_g0", "myword", Modifier.INT)
    with pytest.raises(ParseError) as excinfo:
        convert_value(spec, "notnumber")
    assert excinfo.value.field == "myword"
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_convert_timestamp_error_names_layout():
    spec = FieldSpec("_g0", "ts", Modifier.TIMESTAMP, "ts-unix")
    with pytest.raises(ParseError, match="ts-unix") as excinfo:
        convert_value(spec, "04/Jun/2016:12:41:45 +0100")
    assert excinfo.value.field == "ts"
