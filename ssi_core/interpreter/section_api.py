# ssi_core/interpreter/section_api.py
"""
Per-section mutation API: get(), modify(), remove(), insert().

All four work on the section's markup as the script currently sees it (the
`tag` binding), so they compose with direct edits the script makes to
`tag`. Nothing reaches the document until the line is reassembled.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from ..errors import TagArityMismatch
from ..tags.exclusion import canonical_tag_name, exclude_tags
from ..tags.grammar import escape_pattern, format_number, format_value, is_number, join_params, split_params, to_number
from ..tags.segmenter import Section
from ..tags.state import overrides_for

# A tag parameter ends at the next tag, at the end of the block, or at the
# parenthesis closing an enclosing \t(...).
_PARAM_END = r"(?=[\\})]|$)"


def _part_value(part: str) -> Any:
    number = to_number(part)
    return part if number is None else number


def _format_result(value: Any) -> str:
    if is_number(value):
        return format_number(value)
    number = to_number(value)
    if number is not None:
        return format_number(number)
    return format_value(value)


class SectionContext:
    """
    Mutation API bound to one section of one line.

    Args:
        section: The section being processed
        state: This section's state snapshot (owned by the context)
        index: 1-based section number
    """

    def __init__(self, section: Section, state: dict[str, Any], index: int):
        self.section = section
        self.state = state
        self.index = index
        self.bindings: dict[str, Any] = {
            "tag": section.markup,
            "text": section.text,
            "state": state,
        }

    @property
    def markup(self) -> str:
        return self.bindings["tag"]

    @markup.setter
    def markup(self, value: str) -> None:
        self.bindings["tag"] = value

    def functions(self) -> dict[str, Callable]:
        return {
            "get": self.get,
            "modify": self.modify,
            "remove": self.remove,
            "insert": self.insert,
        }

    def commit(self) -> Section:
        """Copy the script's final tag/text back into the section."""
        self.section.markup = str(self.bindings.get("tag", ""))
        self.section.text = str(self.bindings.get("text", ""))
        return self.section

    # -------------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """
        Current value of a tag.

        Multi-parameter values ("(0,0,640,480)") come back as a tuple, with
        numeric parameters converted to numbers.
        """
        value = self.state.get(canonical_tag_name(name))
        parts = split_params(value)
        if parts is None:
            return value
        values = tuple(_part_value(part) for part in parts)
        return values[0] if len(values) == 1 else values

    def modify(self, name: str, combinator: Callable[..., Any]) -> None:
        """
        Rewrite a tag's parameter(s) with a combinator.

        The literal occurrence of the tag with its current value is
        replaced in place. When the markup has no such literal (the value is
        inherited from the style or an earlier section), the new tag is
        appended to the block instead.
        """
        key = canonical_tag_name(name)
        current = self.state.get(key)
        parts = split_params(current)

        try:
            if parts is not None:
                inputs = tuple(_part_value(part) for part in parts)
                result = combinator(*inputs)
                results = result if isinstance(result, tuple) else (result,)
                if len(results) != len(inputs):
                    raise TagArityMismatch(len(inputs), len(results), key)
                old = join_params(parts)
                new = join_params([_format_result(value) for value in results])
                new_value: Any = new
            else:
                result = combinator(current)
                if isinstance(result, tuple):
                    if len(result) != 1:
                        raise TagArityMismatch(1, len(result), key)
                    result = result[0]
                old = format_value(current)
                new = _format_result(result)
                new_value = to_number(new) if to_number(new) is not None else result
        except TagArityMismatch as e:
            if e.tag is not None:
                raise
            raise TagArityMismatch(e.expected, e.got, key) from None

        replacement = f"\\{key}{new}"
        count = 0
        if current is not None:
            pattern = re.compile(escape_pattern(f"\\{key}{old}") + _PARAM_END)
            self.markup, count = pattern.subn(lambda _match: replacement, self.markup)
        if count == 0:
            self.insert(replacement)

        self.state[key] = new_value
        if key == "c":
            self.state["1c"] = new_value

    def remove(self, *names: str) -> None:
        """Remove every listed tag from this section's markup."""
        self.markup = exclude_tags(self.markup, names)

    def insert(self, literal: str) -> None:
        """Insert a tag literal (e.g. "\\blur2") just before the closing brace."""
        markup = self.markup
        if markup.endswith("}"):
            self.markup = markup[:-1] + literal + "}"
        else:
            self.markup = markup + "{" + literal + "}"
        for key, value in overrides_for(literal).items():
            if key == "r":
                continue
            self.state[key] = value
            if key == "c":
                self.state["1c"] = value
