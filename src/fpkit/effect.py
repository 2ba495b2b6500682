"""Effect container: a deferred computation transformed before it runs.

``map`` only builds the pipeline; nothing executes until ``call``. When the
wrapped callable returns an awaitable, later stages are chained onto its
completion and ``call`` returns a coroutine.

Example:
    >>> fetch = Effect.of(lambda user_id: {"id": user_id, "name": "alice"})
    >>> greeting = fetch.map(lambda u: u["name"]).map(str.title)
    >>> greeting.call(7)
    'Alice'
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Generic, TypeVar

from .core import then
from .logging import get_logger

T = TypeVar("T")
U = TypeVar("U")

log = get_logger("fpkit.effect")


class Effect(Generic[T]):
    """Wraps a sync or async callable. Implements Functor (map) and Future (call).

    ``name`` is the source callable's qualified name and ``stages`` the number
    of mappers applied, both carried through ``map`` for log events.
    """

    __slots__ = ("_fn", "name", "stages")

    def __init__(self, fn: Callable[..., Any], name: str | None = None, stages: int = 0) -> None:
        """Private constructor. Use Effect.of() instead."""
        object.__setattr__(self, "_fn", fn)
        object.__setattr__(self, "name", name or getattr(fn, "__qualname__", repr(fn)))
        object.__setattr__(self, "stages", stages)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def of(cls, fn: Callable[..., Any]) -> Effect[Any]:
        return cls(fn)

    def map(self, fn: Callable[[T], U]) -> Effect[U]:
        """New Effect applying ``fn`` to this one's eventual output. Invokes nothing."""
        source = self._fn

        def mapped(*args: Any, **kwargs: Any) -> Any:
            y = source(*args, **kwargs)
            return then(y, fn) if inspect.isawaitable(y) else fn(y)

        return Effect(mapped, self.name, self.stages + 1)

    def call(self, *args: Any, **kwargs: Any) -> Any:
        """Run the pipeline with ``args``; the result may be awaitable."""
        log.debug("effect called", function=self.name, stages=self.stages, args=len(args))
        return self._fn(*args, **kwargs)

    def __repr__(self) -> str:
        return f"Effect({self.name!r}, stages={self.stages})"
