# ssi_core/tags/combinators.py
"""
Parameter combinators used by modify() and modify_line().

A combinator is a small tagged value (Add, Multiply, Replace, Append) with
an apply() method taking the tag's current parameter(s) and returning the
new one(s). One parameter in gives one value back, several give a tuple.

Precondition: the number of values a combinator works on must equal the
number of parameters get(tag) returns. A mismatch raises TagArityMismatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..errors import TagArityMismatch
from .grammar import coerce_number, format_value


def _unwrap(values: tuple) -> Any:
    if len(values) == 1:
        return values[0]
    return values


class Combinator(ABC):
    """Base for all combinators."""

    kind: ClassVar[str] = ""

    @abstractmethod
    def apply(self, *values: Any) -> Any:
        """Return the new parameter value(s) for the given current value(s)."""

    def __call__(self, *values: Any) -> Any:
        return self.apply(*values)


@dataclass(frozen=True)
class Add(Combinator):
    operands: tuple

    kind: ClassVar[str] = "add"

    def apply(self, *values: Any) -> Any:
        if len(values) != len(self.operands):
            raise TagArityMismatch(len(self.operands), len(values))
        return _unwrap(tuple(
            coerce_number(value) + coerce_number(operand)
            for value, operand in zip(values, self.operands)
        ))


@dataclass(frozen=True)
class Multiply(Combinator):
    operands: tuple

    kind: ClassVar[str] = "multiply"

    def apply(self, *values: Any) -> Any:
        if len(values) != len(self.operands):
            raise TagArityMismatch(len(self.operands), len(values))
        return _unwrap(tuple(
            coerce_number(value) * coerce_number(operand)
            for value, operand in zip(values, self.operands)
        ))


@dataclass(frozen=True)
class Replace(Combinator):
    values: tuple

    kind: ClassVar[str] = "replace"

    def apply(self, *values: Any) -> Any:
        return _unwrap(self.values)


@dataclass(frozen=True)
class Append(Combinator):
    suffix: str

    kind: ClassVar[str] = "append"

    def apply(self, *values: Any) -> Any:
        if len(values) != 1:
            raise TagArityMismatch(1, len(values))
        return format_value(values[0]) + self.suffix


def add(*values: Any) -> Add:
    """add(-10, -10, 10, 10) grows a rectangular clip by 10 on every side."""
    return Add(tuple(values))


def multiply(*values: Any) -> Multiply:
    """multiply(0.5) halves a value. There is no divide()."""
    return Multiply(tuple(values))


def replace(*values: Any) -> Replace:
    """replace("Comic Sans MS") always yields its own value(s)."""
    if not values:
        raise TypeError("replace() needs at least one value")
    return Replace(tuple(values))


def append(suffix: Any) -> Append:
    """append(" the great") concatenates to a single string parameter."""
    return Append(str(suffix))
