# ssi_core/tags/position.py
"""
On-screen position and rotation origin of a line.

Position is taken from, in order: \\pos(x,y), the start point of
\\move(x,y,...), numpad alignment \\an<1-9>, legacy alignment \\a<1-11>, and
finally the line's own anchor. The alignment tables below are the
historical ones and must not be "simplified":

    \\an:  n > 6 top, n > 3 middle, else bottom;  n % 3: 1 left, 2 centre, else right
    \\a:   n > 8 middle, n > 4 top, else bottom;  n % 4: 1 left, 2 centre, else right
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .grammar import format_number, to_number

_NUM = r"\s*([\d.\-]+)\s*"
_POS_RE = re.compile(r"\\pos\(" + _NUM + "," + _NUM + r"\)")
_MOVE_RE = re.compile(r"\\move\(" + _NUM + "," + _NUM + ",")
_ORG_RE = re.compile(r"\\org\(" + _NUM + "," + _NUM + r"\)")
_NUMPAD_RE = re.compile(r"\\an(\d+)")
_LEGACY_RE = re.compile(r"\\a(\d+)")


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __iter__(self):
        yield self.x
        yield self.y

    def as_param(self) -> str:
        return f"({format_number(self.x)},{format_number(self.y)})"


@dataclass(frozen=True)
class Margins:
    """Effective margins of a line (line value, or style value when 0)."""

    left: float = 0
    right: float = 0
    top: float = 0
    bottom: float = 0


def _horizontal(slot: int, margins: Margins, width: float) -> float:
    if slot == 1:
        return margins.left
    if slot == 2:
        return margins.left + (width - margins.left - margins.right) / 2
    return width - margins.right


def numpad_anchor(alignment: int, margins: Margins, frame: tuple[float, float]) -> Point:
    """Anchor point for a numpad-style alignment (\\an, style Alignment)."""
    width, height = frame
    if alignment > 6:
        y = margins.top
    elif alignment > 3:
        y = height / 2
    else:
        y = height - margins.bottom
    return Point(_horizontal(alignment % 3, margins, width), y)


def legacy_anchor(alignment: int, margins: Margins, frame: tuple[float, float]) -> Point:
    """Anchor point for an SSA-style \\a alignment (1-3 sub, 5-7 top, 9-11 mid)."""
    width, height = frame
    if alignment > 8:
        y = height / 2
    elif alignment > 4:
        y = margins.top
    else:
        y = height - margins.bottom
    return Point(_horizontal(alignment % 4, margins, width), y)


def _point(match: re.Match) -> Point | None:
    x = to_number(match.group(1))
    y = to_number(match.group(2))
    if x is None or y is None:
        return None
    return Point(x, y)


def resolve_pos(
    text: str,
    margins: Margins,
    frame: tuple[float, float],
    fallback: Point,
) -> Point:
    """Effective position of a line from its full text."""
    for pattern in (_POS_RE, _MOVE_RE):
        match = pattern.search(text)
        if match:
            point = _point(match)
            if point is not None:
                return point

    match = _NUMPAD_RE.search(text)
    if match:
        return numpad_anchor(int(match.group(1)), margins, frame)

    match = _LEGACY_RE.search(text)
    if match:
        return legacy_anchor(int(match.group(1)), margins, frame)

    return fallback


def resolve_org(
    text: str,
    margins: Margins,
    frame: tuple[float, float],
    fallback: Point,
) -> Point:
    """Rotation origin: \\org(x,y) when present, otherwise the position."""
    match = _ORG_RE.search(text)
    if match:
        point = _point(match)
        if point is not None:
            return point
    return resolve_pos(text, margins, frame, fallback)
