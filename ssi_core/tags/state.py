# ssi_core/tags/state.py
"""
Resolved override state per section.

The state seen by section j is a left fold: the line's defaults (style
values plus position/origin), then the assignments of section 1, 2, ... j
applied in order. Within one block the last tag for a key wins, and a reset
(\\r or \\rStyle) replaces the running state with that style's defaults
before the tags that follow it.

State is computed from the markup as it was before the script ran, so a
modification in one section never leaks into the state of the next.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from .grammar import to_number
from .position import Point
from .segmenter import Section

_TAG_RE = re.compile(r"\\[^\\}]*")
_FONT_SIZE_RE = re.compile(r"^\\fs(\d[\d.]*)")
_GENERIC_RE = re.compile(r"^\\([1-4]?[A-Za-z]+)([^A-Za-z].*)$", re.DOTALL)


def color_from_style(color: Any) -> str:
    """pysubs2 Color -> override color literal (&HBBGGRR&)."""
    return f"&H{color.b:02X}{color.g:02X}{color.r:02X}&"


def alpha_from_style(color: Any) -> str:
    """pysubs2 Color -> override alpha literal (&HAA&)."""
    return f"&H{color.a:02X}&"


def default_state(style: Any, pos: Point | None = None, org: Point | None = None) -> dict[str, Any]:
    """
    Starting state of a line.

    Args:
        style: Resolved style of the line (pysubs2.SSAStyle or compatible)
        pos: Effective position, exposed as "pos"
        org: Effective rotation origin, exposed as "org"

    Returns:
        Mapping of tag name -> default value
    """
    state: dict[str, Any] = {
        "alpha": "&H00&",
        "1a": alpha_from_style(style.primarycolor),
        "2a": alpha_from_style(style.secondarycolor),
        "3a": alpha_from_style(style.outlinecolor),
        "4a": alpha_from_style(style.backcolor),
        "c": color_from_style(style.primarycolor),
        "1c": color_from_style(style.primarycolor),
        "2c": color_from_style(style.secondarycolor),
        "3c": color_from_style(style.outlinecolor),
        "4c": color_from_style(style.backcolor),
        "fscx": style.scalex,
        "fscy": style.scaley,
        "frz": style.angle,
        "frx": 0,
        "fry": 0,
        "shad": style.shadow,
        "bord": style.outline,
        "fsp": style.spacing,
        "fs": style.fontsize,
        "fax": 0,
        "fay": 0,
        "xbord": style.outline,
        "ybord": style.outline,
        "xshad": style.shadow,
        "yshad": style.shadow,
        "blur": 0,
        "be": 0,
        "fn": style.fontname,
        "b": int(bool(style.bold)),
        "i": int(bool(style.italic)),
        "u": int(bool(style.underline)),
        "s": int(bool(style.strikeout)),
        "an": int(style.alignment),
    }
    if pos is not None:
        state["pos"] = pos.as_param()
    if org is not None:
        state["org"] = org.as_param()
    return state


def _generic_value(param: str) -> Any:
    # "\fscx120)" inside "\t(...)": the closer belongs to the transition.
    while param.endswith(")") and param.count(")") > param.count("("):
        param = param[:-1]
    number = to_number(param)
    return param if number is None else number


def parse_overrides(markup: str) -> list[tuple[str, Any]]:
    """
    Parse one block into ordered (tag name, value) assignments.

    Font size, font name and reset are handled on their own since their
    parameters are not separated from the name. Every other tag is an
    optional 1-4 selector, a name and a parameter. Tags without a parameter
    and the \\t( opener carry no state and are skipped.
    """
    assignments: list[tuple[str, Any]] = []
    for token in _TAG_RE.findall(markup):
        font_size = _FONT_SIZE_RE.match(token)
        if font_size:
            raw = font_size.group(1)
            number = to_number(raw)
            assignments.append(("fs", raw if number is None else number))
        elif token.startswith("\\fn"):
            assignments.append(("fn", token[3:]))
        elif token.startswith("\\r"):
            assignments.append(("r", token[2:]))
        else:
            match = _GENERIC_RE.match(token)
            if match is None or match.group(1) == "t":
                continue
            assignments.append((match.group(1), _generic_value(match.group(2))))
    return assignments


def overrides_for(markup: str) -> dict[str, Any]:
    """Assignments of one block collapsed to last-wins per key."""
    return dict(parse_overrides(markup))


def resolve_states(
    defaults: dict[str, Any],
    sections: list[Section],
    reset_defaults: Callable[[str], dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """
    Cumulative state snapshot for every section.

    Args:
        defaults: Starting state of the line
        sections: The line's sections, in order
        reset_defaults: Defaults for a reset target style name ("" means the
            line's own style). Without it, resets return to `defaults`.

    Returns:
        One independent dict per section
    """
    running = dict(defaults)
    snapshots = []
    for section in sections:
        for name, value in parse_overrides(section.markup):
            if name == "r":
                base = reset_defaults(value) if reset_defaults else defaults
                running = dict(base)
                running["r"] = value
                continue
            running[name] = value
            if name == "c":
                running["1c"] = value
        snapshots.append(dict(running))
    return snapshots
