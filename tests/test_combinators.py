import pytest

from ssi_core.errors import TagArityMismatch
from ssi_core.tags.combinators import Add, Append, Multiply, Replace, add, append, multiply, replace


def test_add_is_positional():
    assert add(1, 2)(3, 4) == (4, 6)
    assert add(-10, -10, 10, 10)(0, 0, 640, 480) == (-10, -10, 650, 490)

def test_single_value_comes_back_bare():
    assert multiply(2)(5) == 10
    assert multiply(0.5)(20) == 10.0

def test_non_numeric_input_counts_as_zero():
    assert add(5)("abc") == 5
    assert multiply(3)("&H00&") == 0

def test_replace_ignores_input():
    assert replace("X")("anything") == "X"
    assert replace(1, 2)(7, 8) == (1, 2)

def test_append_concatenates():
    assert append("!")("hi") == "hi!"
    assert append(" the great")("Bob") == "Bob the great"

def test_arity_mismatch_raises():
    with pytest.raises(TagArityMismatch) as exc:
        add(1)(1, 2)
    assert exc.value.expected == 1 and exc.value.got == 2
    with pytest.raises(TagArityMismatch):
        multiply(1, 2)(3)
    with pytest.raises(TagArityMismatch):
        append("x")("a", "b")

def test_replace_needs_a_value():
    with pytest.raises(TypeError):
        replace()

def test_combinators_are_tagged_values():
    assert isinstance(add(1), Add) and add(1).operands == (1,)
    assert isinstance(multiply(2), Multiply) and multiply(2).kind == "multiply"
    assert isinstance(replace("a"), Replace)
    assert isinstance(append(1), Append) and append(1).suffix == "1"
    assert add(1, 2) == add(1, 2)
    assert add(1, 2).apply(1, 1) == (2, 3)
