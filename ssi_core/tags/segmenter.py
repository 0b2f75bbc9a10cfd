# ssi_core/tags/segmenter.py
"""
Splitting a line into sections and putting it back together.

A section is one override block plus the plain text that follows it, up to
the next block. Every line gets a leading block, an empty "{}" one when the
text starts without markup, so section 1 always exists.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

EMPTY_BLOCK = "{}"
_BLOCK_RE = re.compile(r"\{[^{}]*\}")

# \1c and \c are the same tag; sections only ever carry the short form.
_LONG_PRIMARY_COLOR_RE = re.compile(r"\\1c(?![A-Za-z])")


@dataclass
class Section:
    """One (markup, text) pair. markup keeps its braces."""

    markup: str
    text: str
    # Block as read from the line; None for the synthesized leading block.
    source: str | None = field(default=None, compare=False, repr=False)

    def render(self) -> str:
        return self.markup + self.text


def normalize_markup(markup: str) -> str:
    return _LONG_PRIMARY_COLOR_RE.sub(r"\\c", markup)


def segment(text: str) -> list[Section]:
    """
    Break a line's text into ordered sections.

    Only well-formed blocks ("{" + no braces + "}") start a section. Any
    other brace stays in the text it appears in.
    """
    blocks = list(_BLOCK_RE.finditer(text))

    sections: list[Section] = []
    if not blocks or blocks[0].start() != 0:
        first = blocks[0].start() if blocks else len(text)
        sections.append(Section(markup=EMPTY_BLOCK, text=text[:first]))

    for index, block in enumerate(blocks):
        end = blocks[index + 1].start() if index + 1 < len(blocks) else len(text)
        markup = normalize_markup(block.group(0))
        sections.append(Section(markup=markup, text=text[block.end():end], source=markup))
    return sections


def reassemble(sections: list[Section]) -> str:
    """
    Inverse of segment().

    Empty blocks are dropped when they were synthesized or emptied by
    mutation. A literal "{}" already present in the line is kept.
    """
    return "".join(
        section.text if section.markup == EMPTY_BLOCK and section.source != EMPTY_BLOCK
        else section.render()
        for section in sections
    )
