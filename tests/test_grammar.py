import re

from ssi_core.tags.grammar import (
    coerce_number,
    escape_pattern,
    format_number,
    format_value,
    split_params,
    to_number,
)


def test_format_number_trims_zeros_and_point():
    assert format_number(2.5000) == "2.5"
    assert format_number(3.0) == "3"
    assert format_number(1.2345) == "1.234"
    assert format_number(40) == "40"

def test_format_number_never_writes_negative_zero():
    assert format_number(-0.0001) == "0"

def test_to_number_keeps_integral_literals_int():
    assert to_number("12") == 12 and isinstance(to_number("12"), int)
    assert to_number("-1.5") == -1.5
    assert to_number(" 7 ") == 7

def test_to_number_rejects_non_numbers():
    assert to_number("&H00&") is None
    assert to_number("(1,2)") is None
    assert to_number("Arial") is None
    assert to_number(True) is None

def test_coerce_number_defaults_to_zero():
    assert coerce_number("abc") == 0
    assert coerce_number("2.5") == 2.5

def test_split_params_keeps_raw_parts():
    assert split_params("(0, 0,640,480)") == ["0", " 0", "640", "480"]
    assert split_params("20") is None
    assert split_params(20) is None
    assert split_params("(1,2") is None

def test_escape_pattern_matches_literally():
    literal = "\\clip(1.5,2)"
    assert re.search(escape_pattern(literal), "{\\bord2\\clip(1.5,2)}")
    assert not re.search(escape_pattern(literal), "{\\clip(105,2)}")

def test_format_value():
    assert format_value(2.0) == "2"
    assert format_value("&HFF&") == "&HFF&"
    assert format_value(None) == ""
