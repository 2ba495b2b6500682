"""Dotted-path lookup into nested records.

    >>> person = {"name": "Alice", "address": {"city": "Lisbon"}, "tags": ["a", "b"]}
    >>> pluck("address.city", person)
    'Lisbon'
    >>> [pluck("tags.1")(p) for p in [person]]
    ['b']
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .core import _MISSING


def _step(obj: Any, key: Any) -> Any:
    if isinstance(obj, Mapping):
        return obj[key] if key in obj else _MISSING
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        try:
            return obj[int(key)]
        except (ValueError, TypeError, IndexError):
            return _MISSING
    return getattr(obj, key, _MISSING) if isinstance(key, str) else _MISSING


def get_path(obj: Any, path: str | Sequence[Any], default: Any = None) -> Any:
    """Follow ``path`` through mapping keys, sequence indices and attributes.

    ``path`` is either a dotted string (``"a.b.0"``) or a sequence of keys.
    Returns ``default`` as soon as a step is missing.
    """
    keys = path.split(".") if isinstance(path, str) else path
    current = obj
    for key in keys:
        current = _step(current, key)
        if current is _MISSING:
            return default
    return current


def pluck(path: str | Sequence[Any], obj: Any = _MISSING) -> Any:
    """``get_path(obj, path)``, or a function awaiting ``obj`` when it is omitted."""
    if obj is _MISSING:
        return lambda o: get_path(o, path)
    return get_path(obj, path)
