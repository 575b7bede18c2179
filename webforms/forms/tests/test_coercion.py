"""
Where: webforms/forms/tests/test_coercion.py
What: Unit tests for the int/float/bool lexical parsers.
Why: Typed getters and type checks rely on exactly these literals.
"""

import math

import pytest

from webforms.forms.core.coercion import parse_bool, parse_float, parse_int


@pytest.mark.parametrize(
    "value,expected", [("25", 25), ("-3", -3), ("+7", 7), ("007", 7)]
)
def test_parse_int_accepts_decimal_literals(value, expected):
    assert parse_int(value) == expected


@pytest.mark.parametrize("value", ["", " 1", "1 ", "1_000", "1.0", "0x10", "٣", "abc"])
def test_parse_int_rejects_other_literals(value):
    with pytest.raises(ValueError):
        parse_int(value)


@pytest.mark.parametrize(
    "value,expected", [("25.7", 25.7), ("42", 42.0), ("-1e3", -1000.0), (".5", 0.5)]
)
def test_parse_float_accepts_float_literals(value, expected):
    assert parse_float(value) == expected


def test_parse_float_accepts_special_values():
    assert math.isinf(parse_float("inf"))
    assert math.isnan(parse_float("NaN"))


@pytest.mark.parametrize("value", ["", " 1.5", "1.5\n", "1_000.0", "not a number"])
def test_parse_float_rejects_other_literals(value):
    with pytest.raises(ValueError):
        parse_float(value)


@pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true_literals(value):
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false_literals(value):
    assert parse_bool(value) is False


@pytest.mark.parametrize("value", ["", "yes", "no", "tRUE", "not a boolean"])
def test_parse_bool_rejects_other_literals(value):
    with pytest.raises(ValueError):
        parse_bool(value)
