"""Point-free sequence helpers.

Every helper taking a trailing sequence is dual-mode: leave the sequence out
and you get a function awaiting it, ready for ``compose``.

    >>> from fpkit import lists as L
    >>> from fpkit import compose
    >>> evens_desc = compose(L.reverse, L.filter(lambda x: x % 2 == 0))
    >>> evens_desc([1, 2, 3, 4, 5, 6])
    [6, 4, 2]

Inputs are never mutated, results are new lists. Callbacks given to
``filter``, ``reject``, ``map`` and ``partition`` receive ``(x, i)`` when they
take two required positional parameters, else just ``x``.

Names mirror the operations they perform, so importing ``*`` from this
module shadows builtins; import the module instead.
"""

from __future__ import annotations

import functools
import inspect
import operator
from collections.abc import Sequence
from typing import Any, Callable, TypeVar

from .core import _MISSING, empty

T = TypeVar("T")
U = TypeVar("U")


def _indexed(fn: Callable[..., U]) -> Callable[[Any, int], U]:
    """Adapt ``fn`` to ``(x, i)``, dropping the index when ``fn`` takes one argument."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return lambda x, _: fn(x)
    required = [
        p for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    if len(required) >= 2:
        return fn
    return lambda x, _: fn(x)


def _dual(ap: Callable[[Sequence[Any]], U], xs: Any) -> U | Callable[[Sequence[Any]], U]:
    return ap if xs is _MISSING else ap(xs)


# ═════════════════════════════════════════════════════════════════════════════
# Access
# ═════════════════════════════════════════════════════════════════════════════


def head(xs: Sequence[T]) -> T | None:
    """First element, ``None`` for an empty sequence."""
    return xs[0] if len(xs) else None


def tail(xs: Sequence[T]) -> list[T]:
    return list(xs[1:])


def size(xs: Sequence[Any]) -> int:
    return len(xs)


def slice(start: int | None, stop: int | None = None, xs: Sequence[T] = _MISSING) -> Any:  # noqa: A001
    """``xs[start:stop]`` as a list."""
    return _dual(lambda xs: list(xs[start:stop]), xs)


def parts(mask: Sequence[Any], xs: Sequence[T] = _MISSING) -> Any:
    """Keep ``xs[i]`` where ``mask[i]`` is truthy. A longer mask is truncated."""
    return _dual(lambda xs: [x for keep, x in zip(mask, xs) if keep], xs)


def to_pairs(xs: Sequence[T]) -> list[tuple[T, T | None]]:
    """``[1, 2, 3]`` -> ``[(1, 2), (3, None)]``."""
    return [(xs[i], xs[i + 1] if i + 1 < len(xs) else None) for i in range(0, len(xs), 2)]


# ═════════════════════════════════════════════════════════════════════════════
# Transformation
# ═════════════════════════════════════════════════════════════════════════════


def reverse(xs: Sequence[T]) -> list[T]:
    return list(reversed(xs))


def map(fn: Callable[..., U], xs: Sequence[T] = _MISSING) -> Any:  # noqa: A001
    call = _indexed(fn)
    return _dual(lambda xs: [call(x, i) for i, x in enumerate(xs)], xs)


def filter(fn: Callable[..., Any], xs: Sequence[T] = _MISSING) -> Any:  # noqa: A001
    call = _indexed(fn)
    return _dual(lambda xs: [x for i, x in enumerate(xs) if call(x, i)], xs)


def reject(fn: Callable[..., Any], xs: Sequence[T] = _MISSING) -> Any:
    """Opposite of ``filter``: keep what fails ``fn``."""
    call = _indexed(fn)
    return _dual(lambda xs: [x for i, x in enumerate(xs) if not call(x, i)], xs)


def partition(fn: Callable[..., bool | int], xs: Sequence[T] = _MISSING) -> Any:
    """Split ``xs`` into buckets chosen by ``fn``.

    ``True`` goes to bucket 0, ``False`` to bucket 1 and an int to that
    bucket index. Buckets nobody landed in are empty lists.

    Example:
        >>> partition(lambda x: x % 2, [1, 2, 3, 4])
        [[2, 4], [1, 3]]
    """
    call = _indexed(fn)

    def ap(xs: Sequence[T]) -> list[list[T]]:
        buckets: list[list[T]] = []
        for i, x in enumerate(xs):
            r = call(x, i)
            j = 0 if r is True else 1 if r is False else operator.index(r)
            while len(buckets) <= j:
                buckets.append([])
            buckets[j].append(x)
        return buckets

    return _dual(ap, xs)


def compact(xs: Sequence[T]) -> list[T]:
    """Drop empty values (``None``, ``""``, empty collections). Keeps ``0`` and ``False``."""
    return [x for x in xs if not empty(x)]


def reduce(fn: Callable[[U, T], U], initial: U, xs: Sequence[T] = _MISSING) -> Any:
    return _dual(lambda xs: functools.reduce(fn, xs, initial), xs)


def sort(cmp: Callable[[T, T], int], xs: Sequence[T] = _MISSING) -> Any:
    """Sorted copy using a three-way comparator (negative, zero, positive)."""
    return _dual(lambda xs: sorted(xs, key=functools.cmp_to_key(cmp)), xs)


def swap(i: int, j: int, xs: Sequence[T] = _MISSING) -> Any:
    """Copy of ``xs`` with positions ``i`` and ``j`` exchanged."""
    def ap(xs: Sequence[T]) -> list[T]:
        ys = list(xs)
        ys[i], ys[j] = xs[j], xs[i]
        return ys
    return _dual(ap, xs)


def flatten(xs: Sequence[Any]) -> list[Any]:
    """Flatten one level of list/tuple nesting."""
    return [y for x in xs for y in (x if isinstance(x, (list, tuple)) else (x,))]


# ═════════════════════════════════════════════════════════════════════════════
# Set operations (order-preserving, work with unhashable items)
# ═════════════════════════════════════════════════════════════════════════════


def unique(xs: Sequence[T]) -> list[T]:
    out: list[T] = []
    for x in xs:
        if x not in out:
            out.append(x)
    return out


def union(xs: Sequence[T], ys: Sequence[T] = _MISSING) -> Any:
    return _dual(lambda ys: unique([*xs, *ys]), ys)


def intersection(xs: Sequence[T], ys: Sequence[T] = _MISSING) -> Any:
    return _dual(lambda ys: unique([x for x in xs if x in ys]), ys)


def subtraction(xs: Sequence[T], ys: Sequence[T] = _MISSING) -> Any:
    """Items of ``xs`` not in ``ys``."""
    return _dual(lambda ys: [x for x in xs if x not in ys], ys)
