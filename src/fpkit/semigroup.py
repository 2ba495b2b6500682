"""Type-directed combination rule behind ``Optional.concat`` and ``Result.concat``.

``combine(held, x)`` inspects both runtime types and picks the first rule
whose types agree:

    bool, bool          -> held and x
    number, number      -> held + x
    str, str            -> held + x
    list/tuple pairs    -> held's items then x's items (tuple if held is one)
    mapping, mapping    -> shallow merge, x wins
    pydantic model      -> model_copy(update=...) with x's fields
    dataclass, mapping  -> dataclasses.replace(held, **x)
    anything else       -> x

Booleans come first since ``bool`` subclasses ``int``. Never raises for
mismatched types, they fall through to replacement.
"""

from __future__ import annotations

import dataclasses
import numbers
from collections.abc import Mapping
from typing import Any, Callable

from pydantic import BaseModel


def _both(kind: type | tuple[type, ...], a: object, b: object) -> bool:
    return isinstance(a, kind) and isinstance(b, kind)


def _numbers(a: object, b: object) -> bool:
    return _both(numbers.Number, a, b) and not isinstance(a, bool) and not isinstance(b, bool)


def _add(a: Any, b: Any) -> Any:
    try:
        return a + b
    except TypeError:
        return b  # Decimal and float do not mix


def _sequences(a: object, b: object) -> bool:
    return _both((list, tuple), a, b)


def _concat_sequences(a: list[Any] | tuple[Any, ...], b: list[Any] | tuple[Any, ...]) -> list[Any] | tuple[Any, ...]:
    return (*a, *b) if isinstance(a, tuple) else [*a, *b]


def _merge_model(a: BaseModel, b: BaseModel | Mapping[str, Any]) -> BaseModel:
    update = b.model_dump(exclude_unset=True) if isinstance(b, BaseModel) else dict(b)
    return a.model_copy(update=update)


def _merge_dataclass(a: Any, b: Mapping[str, Any]) -> Any:
    names = {f.name for f in dataclasses.fields(a) if f.init}
    return dataclasses.replace(a, **{k: v for k, v in b.items() if k in names})


def _is_dataclass_instance(a: object) -> bool:
    return dataclasses.is_dataclass(a) and not isinstance(a, type)


# (applies, combine) pairs, tried in order
_RULES: tuple[tuple[Callable[[Any, Any], bool], Callable[[Any, Any], Any]], ...] = (
    (lambda a, b: _both(bool, a, b), lambda a, b: a and b),
    (_numbers, _add),
    (lambda a, b: _both(str, a, b), lambda a, b: a + b),
    (_sequences, _concat_sequences),
    (lambda a, b: _both(Mapping, a, b), lambda a, b: {**a, **b}),
    (lambda a, b: isinstance(a, BaseModel) and isinstance(b, (BaseModel, Mapping)), _merge_model),
    (lambda a, b: _is_dataclass_instance(a) and isinstance(b, Mapping), _merge_dataclass),
)


def combine(held: Any, x: Any) -> Any:
    """Combine ``held`` with ``x`` using the first rule both types satisfy."""
    for applies, op in _RULES:
        if applies(held, x):
            return op(held, x)
    return x
