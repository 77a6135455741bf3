import math

import pytest

from concavehull.model.numeric import format_decimal, is_valid_numeric_input, parse_decimal


@pytest.mark.parametrize(
    "text, sep, expected",
    [
        ("1.5", ".", 1.5),
        ("1,5", ",", 1.5),
        ("-2", ".", -2.0),
        ("  3.25 ", ".", 3.25),
        ("1e3", ".", 1000.0),
        (".5", ".", 0.5),
        ("7.", ".", 7.0),
    ],
)
def test_parse_decimal(text, sep, expected):
    assert parse_decimal(text, sep) == expected


@pytest.mark.parametrize("text", ["", "abc", "1.2.3", "inf", "nan", "1,5", "1 000", "$3", "1e999"])
def test_parse_decimal_rejects(text):
    with pytest.raises(ValueError):
        parse_decimal(text, ".")


def test_parse_decimal_rejects_period_when_comma_configured():
    with pytest.raises(ValueError):
        parse_decimal("1.5", ",")


@pytest.mark.parametrize("text", ["", "-", ".", "-.", "12", "-3.5", "0.", "4e2"])
def test_valid_input(text):
    assert is_valid_numeric_input(text)


@pytest.mark.parametrize("text", ["a", "1.2.", "--1", "1-", "1..", "1 2"])
def test_invalid_input(text):
    assert not is_valid_numeric_input(text)


def test_negative_rejected_when_not_allowed():
    assert not is_valid_numeric_input("-1", allow_negative=False)
    assert not is_valid_numeric_input("-", allow_negative=False)
    assert is_valid_numeric_input("1", allow_negative=False)


def test_comma_separator_input():
    assert is_valid_numeric_input("0,3", decimal_separator=",")
    assert is_valid_numeric_input(",", decimal_separator=",")
    assert not is_valid_numeric_input("0.3", decimal_separator=",")


@pytest.mark.parametrize(
    "value, sep, expected",
    [
        (1.5, ".", "1.5"),
        (1.5, ",", "1,5"),
        (0.1, ".", "0.1"),
        (2.0, ",", "2,0"),
        (-3.25, ".", "-3.25"),
    ],
)
def test_format_decimal(value, sep, expected):
    assert format_decimal(value, sep) == expected


def test_format_decimal_round_trips():
    value = 1 / 3
    assert parse_decimal(format_decimal(value, ","), ",") == value
    assert not math.isnan(parse_decimal(format_decimal(1e-7, ","), ","))


@pytest.mark.parametrize("value", [1234567.0, 0.123456789, 250.125, 1e-7])
def test_format_decimal_keeps_precision_for_input_fields(value):
    text = format_decimal(value, ",")
    assert is_valid_numeric_input(text, allow_negative=False, decimal_separator=",")
    assert parse_decimal(text, ",") == value
