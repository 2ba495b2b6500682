"""Tests for point-free sequence helpers."""

from __future__ import annotations

import pytest

from fpkit import compose, lists as L


NUMS = [1, 2, 3, 4, 5, 6]


# ═════════════════════════════════════════════════════════════════════════════
# Access
# ═════════════════════════════════════════════════════════════════════════════


def test_head_tail_size() -> None:
    assert L.head(NUMS) == 1
    assert L.head([]) is None
    assert L.tail(NUMS) == [2, 3, 4, 5, 6]
    assert L.tail([]) == []
    assert L.size(NUMS) == 6


def test_slice() -> None:
    assert L.slice(1, 3, NUMS) == [2, 3]
    assert L.slice(2)(NUMS) == [3, 4, 5, 6]
    assert L.slice(-2, None, NUMS) == [5, 6]


def test_parts() -> None:
    assert L.parts([1, 0, 1], NUMS) == [1, 3]
    assert L.parts([True] * 10)(["a", "b"]) == ["a", "b"]


def test_to_pairs() -> None:
    assert L.to_pairs([1, 2, 3, 4]) == [(1, 2), (3, 4)]
    assert L.to_pairs([1, 2, 3]) == [(1, 2), (3, None)]
    assert L.to_pairs([]) == []


# ═════════════════════════════════════════════════════════════════════════════
# Transformation
# ═════════════════════════════════════════════════════════════════════════════


def test_map_filter_reject() -> None:
    assert L.map(lambda x: x * 2, [1, 2]) == [2, 4]
    assert L.filter(lambda x: x % 2 == 0)(NUMS) == [2, 4, 6]
    assert L.reject(lambda x: x % 2 == 0, NUMS) == [1, 3, 5]


def test_callbacks_receive_index_when_they_take_two_args() -> None:
    assert L.map(lambda x, i: (i, x), ["a", "b"]) == [(0, "a"), (1, "b")]
    assert L.filter(lambda _, i: i > 3, NUMS) == [5, 6]


def test_builtin_callbacks_get_one_argument() -> None:
    assert L.map(str, [1, 2]) == ["1", "2"]
    assert L.filter(bool, [0, 1, "", "a"]) == [1, "a"]


def test_inputs_are_not_mutated() -> None:
    xs = [3, 1, 2]
    L.reverse(xs)
    L.sort(lambda a, b: a - b, xs)
    L.swap(0, 2, xs)
    assert xs == [3, 1, 2]


def test_reverse_sort_swap() -> None:
    assert L.reverse((1, 2, 3)) == [3, 2, 1]
    assert L.sort(lambda a, b: b - a)([1, 3, 2]) == [3, 2, 1]
    assert L.swap(0, 2, ["a", "b", "c"]) == ["c", "b", "a"]


def test_reduce() -> None:
    assert L.reduce(lambda acc, x: acc + x, 0, NUMS) == 21
    assert L.reduce(lambda acc, x: acc + [x * 2], [])([1, 2]) == [2, 4]
    assert L.reduce(lambda acc, x: acc + x, 10, []) == 10


def test_compact_keeps_zero_and_false() -> None:
    assert L.compact([0, None, False, "", "a", [], [1], {}]) == [0, False, "a", [1]]


def test_flatten_one_level() -> None:
    assert L.flatten([1, [2, 3], (4, [5])]) == [1, 2, 3, 4, [5]]


@pytest.mark.parametrize(
    ("fn", "expected"),
    [
        (lambda x: x % 2 == 0, [[2, 4, 6], [1, 3, 5]]),
        (lambda x: x % 2, [[2, 4, 6], [1, 3, 5]]),
        (lambda x: x % 3, [[3, 6], [1, 4], [2, 5]]),
        (lambda x: 2, [[], [], NUMS]),
    ],
)
def test_partition(fn, expected) -> None:  # type: ignore[no-untyped-def]
    assert L.partition(fn, NUMS) == expected


def test_partition_empty() -> None:
    assert L.partition(lambda x: True)([]) == []


# ═════════════════════════════════════════════════════════════════════════════
# Set Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_unique_preserves_order() -> None:
    assert L.unique([3, 1, 3, 2, 1]) == [3, 1, 2]
    assert L.unique([{"a": 1}, {"a": 1}]) == [{"a": 1}]


def test_union_intersection_subtraction() -> None:
    assert L.union([1, 2], [2, 3]) == [1, 2, 3]
    assert L.intersection([1, 2, 3, 2], [2, 3, 4]) == [2, 3]
    assert L.subtraction([1, 2, 3], [2]) == [1, 3]
    assert L.subtraction([1, 2, 3])([1, 3]) == [2]


# ═════════════════════════════════════════════════════════════════════════════
# Composition
# ═════════════════════════════════════════════════════════════════════════════


def test_helpers_compose() -> None:
    evens_desc = compose(L.reverse, L.filter(lambda x: x % 2 == 0))
    assert evens_desc(NUMS) == [6, 4, 2]


def test_pipeline_of_partials() -> None:
    pipeline = compose(L.head, L.sort(lambda a, b: a - b), L.map(lambda x: x * x), L.reject(lambda x: x < 3))
    assert pipeline([5, 1, 4, 3]) == 9
