"""Variadic arithmetic folds, handy as ``reduce`` steps or curried stages.

    >>> from fpkit import arith
    >>> arith.add(1, 2, 3), arith.multiply(2, 3, 4), arith.divide(100, 5, 2)
    (6, 24, 10.0)
    >>> arith.max([3, 9, 2]), arith.min([])
    (9, inf)

Like ``fpkit.lists``, names shadow builtins; import the module.
"""

from __future__ import annotations

import functools
import math
import operator
from collections.abc import Iterable
from typing import Any

from .core import defined


def add(*xs: Any) -> Any:
    """Sum left to right. ``add()`` is 0."""
    return functools.reduce(operator.add, xs) if xs else 0


def multiply(*xs: Any) -> Any:
    """Product left to right. ``multiply()`` is 1."""
    return functools.reduce(operator.mul, xs) if xs else 1


def divide(x: Any, *xs: Any) -> Any:
    """``x`` divided by each of ``xs`` in turn.

    Raises:
        ZeroDivisionError: a divisor is zero.
    """
    return functools.reduce(operator.truediv, xs, x)


def min(xs: Iterable[Any]) -> Any:  # noqa: A001
    """Smallest element, ``inf`` for an empty input. ``UNDEFINED`` entries are skipped."""
    return functools.reduce(lambda m, x: x if x < m else m, (x for x in xs if defined(x)), math.inf)


def max(xs: Iterable[Any]) -> Any:  # noqa: A001
    """Largest element, ``-inf`` for an empty input. ``UNDEFINED`` entries are skipped."""
    return functools.reduce(lambda m, x: x if x > m else m, (x for x in xs if defined(x)), -math.inf)
