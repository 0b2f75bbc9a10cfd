# ssi_core/tags/exclusion.py
"""
Removal of named override tags from a markup block.

Tags are walked one at a time (a tag is a backslash followed by everything
up to the next backslash or brace). Two passes:

1. Every requested tag is dropped, except \\t which stays in place as a
   marker. A dropped tag whose text carries more closing parentheses than
   it opens (e.g. "\\fs40)" inside "\\t(\\fs40)") leaves those closers
   behind so the enclosing transition keeps its bracket.
2. When \\t was requested, every balanced \\t(...) block is deleted.
   Otherwise, after any removal, transitions whose body no longer contains
   a tag are deleted.

\\r and \\fn take free-text parameters ("\\rSigns", "\\fnArial"), so they
are only matched by their exact names and never as part of another name.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\\([^\\{}]*)")
_NAME_RE = re.compile(r"^([1-4]?[A-Za-z]+)")

# Tags whose parameter is free text directly following the name.
_FREE_TEXT_TAGS = ("fn", "r")


def canonical_tag_name(name: str) -> str:
    """\\1c is the long form of \\c; everything else is taken as is."""
    name = name.lstrip("\\")
    return "c" if name == "1c" else name


def _unmatched_closers(body: str) -> int:
    depth = 0
    extra = 0
    for char in body:
        if char == "(":
            depth += 1
        elif char == ")":
            if depth:
                depth -= 1
            else:
                extra += 1
    return extra


def _exclude_token(body: str, wanted: set[str]) -> tuple[str | None, str | None]:
    """
    Decide what happens to a single tag.

    Returns (replacement, matched_name). A replacement of None keeps the
    tag unchanged.
    """
    for free in _FREE_TEXT_TAGS:
        if body.startswith(free):
            if free in wanted:
                return "", free
            return None, None

    match = _NAME_RE.match(body)
    if match is None:
        return None, None

    name = canonical_tag_name(match.group(1))
    if name not in wanted:
        return None, None
    if name == "t":
        return None, name
    return ")" * _unmatched_closers(body), name


def _matching_paren(text: str, open_index: int) -> int | None:
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return None


def strip_transitions(text: str, only_empty: bool = False) -> str:
    """
    Delete balanced \\t(...) blocks.

    With only_empty, transitions that still animate at least one tag are
    kept. Unbalanced transitions are never touched.
    """
    out: list[str] = []
    pos = 0
    while True:
        start = text.find("\\t(", pos)
        if start < 0:
            out.append(text[pos:])
            break
        end = _matching_paren(text, start + 2)
        if end is None:
            out.append(text[pos:])
            break
        out.append(text[pos:start])
        if only_empty and "\\" in text[start + 3:end]:
            out.append(text[start:end + 1])
        pos = end + 1
    return "".join(out)


def exclude_tags(markup: str, names: Iterable[str]) -> str:
    """
    Remove every occurrence of the named tags from a markup block.

    Args:
        markup: Override block, with or without its braces
        names: Tag names without backslash ("bord", "1c", "t", "fn", ...)

    Returns:
        The markup with those tags removed
    """
    wanted = {canonical_tag_name(str(name)) for name in names}
    if not wanted:
        return markup

    pieces: list[str] = []
    last = 0
    removed = False
    drop_transitions = False

    for match in _TOKEN_RE.finditer(markup):
        pieces.append(markup[last:match.start()])
        last = match.end()

        replacement, matched = _exclude_token(match.group(1), wanted)
        if matched == "t":
            drop_transitions = True
        if replacement is None:
            pieces.append(match.group(0))
        else:
            pieces.append(replacement)
            removed = True

    pieces.append(markup[last:])
    result = "".join(pieces)

    if drop_transitions:
        result = strip_transitions(result)
    elif removed:
        result = strip_transitions(result, only_empty=True)

    if result != markup:
        logger.debug("exclude %s: %r -> %r", sorted(wanted), markup, result)
    return result
