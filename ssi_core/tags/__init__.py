# ssi_core/tags/__init__.py
"""Override-tag grammar: formatting, combinators, segmentation, state."""

from .combinators import Add, Append, Combinator, Multiply, Replace, add, append, multiply, replace
from .exclusion import exclude_tags
from .grammar import escape_pattern, format_number, format_value, split_params, to_number
from .position import Margins, Point, resolve_org, resolve_pos
from .segmenter import Section, reassemble, segment
from .state import default_state, parse_overrides, resolve_states

__all__ = [
    'Combinator',
    'Add',
    'Multiply',
    'Replace',
    'Append',
    'add',
    'multiply',
    'replace',
    'append',
    'exclude_tags',
    'escape_pattern',
    'format_number',
    'format_value',
    'split_params',
    'to_number',
    'Margins',
    'Point',
    'resolve_pos',
    'resolve_org',
    'Section',
    'segment',
    'reassemble',
    'default_state',
    'parse_overrides',
    'resolve_states',
]
