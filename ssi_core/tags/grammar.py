# ssi_core/tags/grammar.py
"""
Small helpers shared by every layer of the override-tag engine.

Numbers written back into tags always go through format_number() so a
value that did not change keeps its shortest textual form.
"""

from __future__ import annotations

import re
from typing import Any

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")


def format_number(value: float) -> str:
    """
    Format a number with at most 3 decimals, no trailing zeros or point.

    Examples:
        2.5000 -> "2.5", 3.0 -> "3", 1.2345 -> "1.234"
    """
    text = f"{float(value):.3f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def escape_pattern(text: str) -> str:
    """Escape pattern metacharacters so text can be matched literally."""
    return re.escape(text)


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float))


def to_number(text: Any) -> int | float | None:
    """
    Parse a numeric literal.

    Returns an int for integral literals, a float otherwise, and None when
    the text is not a plain number (colors like &H00&, names, tuples).
    """
    if is_number(text):
        return text
    if not isinstance(text, str):
        return None
    stripped = text.strip()
    if not _NUMBER_RE.match(stripped):
        return None
    if _INT_RE.match(stripped):
        return int(stripped)
    return float(stripped)


def coerce_number(value: Any) -> int | float:
    """Number value of anything; non-numeric input counts as 0."""
    number = to_number(value)
    return 0 if number is None else number


def format_value(value: Any) -> str:
    """Textual form of a state value as it would appear inside a tag."""
    if is_number(value):
        return format_number(value)
    if value is None:
        return ""
    return str(value)


def split_params(value: Any) -> list[str] | None:
    """
    Split a parenthesized parameter list into its raw parts.

    "(0, 0,640,480)" -> ["0", " 0", "640", "480"]. Parts keep their
    original spacing so the literal can be rebuilt exactly. Returns None
    for values that are not tuple-shaped.
    """
    if not isinstance(value, str):
        return None
    start = value.find("(")
    if start < 0:
        return None
    depth = 0
    for index in range(start, len(value)):
        if value[index] == "(":
            depth += 1
        elif value[index] == ")":
            depth -= 1
            if depth == 0:
                break
    else:
        return None
    return [part for part in re.split(r"[(),]", value) if part]


def join_params(parts: list[str]) -> str:
    return "(" + ",".join(parts) + ")"
