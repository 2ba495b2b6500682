"""Tests for variadic arithmetic folds."""

from __future__ import annotations

import math

import pytest

from fpkit import UNDEFINED, arith, compose, curry, lists as L


def test_add_multiply() -> None:
    assert arith.add(1, 2, 3) == 6
    assert arith.add(1.5) == 1.5
    assert arith.add() == 0
    assert arith.add("a", "b") == "ab"
    assert arith.multiply(2, 3, 4) == 24
    assert arith.multiply() == 1


def test_divide_left_to_right() -> None:
    assert arith.divide(100, 5, 2) == 10.0
    assert arith.divide(7) == 7
    with pytest.raises(ZeroDivisionError):
        arith.divide(1, 0)


def test_min_max() -> None:
    assert arith.min([3, 1, 2]) == 1
    assert arith.max([3, 9, 2]) == 9
    assert arith.min((x for x in [5, 4])) == 4


def test_min_max_empty() -> None:
    assert arith.min([]) == math.inf
    assert arith.max([]) == -math.inf


def test_min_max_skip_undefined() -> None:
    assert arith.min([UNDEFINED, 4, 2]) == 2
    assert arith.max([3, UNDEFINED]) == 3


def test_folds_compose_with_curry_and_lists() -> None:
    double = curry(lambda a, b: arith.multiply(a, b))(2)
    total = compose(lambda xs: arith.add(*xs), L.map(double))
    assert total([1, 2, 3]) == 12
    assert L.reduce(arith.add, 0, [1, 2, 3]) == 6
