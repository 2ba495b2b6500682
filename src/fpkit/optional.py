"""Optional container: a value that may be absent.

Absence (``None`` or ``UNDEFINED``) is absorbing: once a chain goes absent,
``map``, ``apply`` and ``bind`` return an absent Optional without calling the
supplied function.

Example:
    >>> user = Optional.of({"name": "Alice", "age": 30})
    >>> user.map(lambda u: u["age"] + 1).match(some=str, none=lambda: "unknown")
    '31'
    >>> user.map(lambda u: u.get("email")).map(str.lower).match(some=str, none=lambda: "unknown")
    'unknown'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from .core import absent
from .errors import NoMatchError
from .semigroup import combine

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Optional(Generic[T]):
    """Present value or absence.

    Implements Functor (map), Applicative (apply), Monad (bind) and
    Semigroup (concat). Instances are immutable, every operation returns a
    new Optional.
    """

    __slots__ = ("_x",)
    __match_args__ = ("x",)

    def __init__(self, x: T | None) -> None:
        """Private constructor. Use Optional.of() instead."""
        object.__setattr__(self, "_x", None if absent(x) else x)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def of(cls, x: T | None = None) -> Optional[T]:
        """Wrap ``x``; ``None`` and ``UNDEFINED`` give an absent Optional."""
        return cls(x)

    @property
    def x(self) -> T | None:
        """Held value, ``None`` when absent."""
        return self._x

    def is_some(self) -> bool:
        return self._x is not None

    def is_none(self) -> bool:
        return self._x is None

    # ─────────────────────────────────────────────────────────────────
    # Functor / Applicative / Monad
    # ─────────────────────────────────────────────────────────────────

    def map(self, fn: Callable[[T], U | None]) -> Optional[U]:
        """Apply ``fn`` to a present value; a ``None`` result makes it absent."""
        if self._x is None:
            return cast(Optional[U], self)
        return Optional(fn(self._x))

    def apply(self, fn: Optional[Callable[[T], U | None]]) -> Optional[U]:
        """Map with the function held by ``fn``, absent if ``fn`` is."""
        if fn.x is None:
            return Optional(None)
        return self.map(fn.x)

    def bind(self, fn: Callable[[T], Optional[U]]) -> Optional[U]:
        """Chain an Optional-returning function, flattening the result.

        A plain (non-Optional) return value is wrapped as if by ``of``.
        """
        if self._x is None:
            return cast(Optional[U], self)
        y = fn(self._x)
        return Optional(y.x if isinstance(y, Optional) else y)

    # ─────────────────────────────────────────────────────────────────
    # Semigroup
    # ─────────────────────────────────────────────────────────────────

    def concat(self, x: Any) -> Optional[Any]:
        """Combine the held value with ``x`` (see ``fpkit.semigroup``).

        An absent Optional is replaced by ``Optional.of(x)``.
        """
        if self._x is None:
            return Optional(x)
        return Optional(combine(self._x, x))

    # ─────────────────────────────────────────────────────────────────
    # Extraction
    # ─────────────────────────────────────────────────────────────────

    def match(
        self,
        matchers: Mapping[str, Any] | None = None,
        *,
        some: Callable[[T], R] | R | None = None,
        none: Callable[[], R] | R | None = None,
    ) -> R:
        """Run ``some(value)`` when present, ``none()`` when absent.

        Branches can also be given as ``{"Some": ..., "None": ...}``. A
        non-callable branch is returned as is.

        Raises:
            NoMatchError: the branch that applies was not provided.
        """
        if matchers is not None:
            some, none = matchers.get("Some", some), matchers.get("None", none)
        if self._x is None:
            if none is None:
                raise NoMatchError(self)
            return none() if callable(none) else none
        if some is None:
            raise NoMatchError(self)
        return some(self._x) if callable(some) else some

    def unwrap_or(self, default: T) -> T:
        return default if self._x is None else self._x

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._x is not None

    def __repr__(self) -> str:
        return f"Optional({self._x!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Optional):
            return NotImplemented
        return self._x == other._x

    def __hash__(self) -> int:
        return hash((Optional, self._x))

    def __iter__(self) -> Iterator[T]:
        """Yields the value when present (0 or 1 element)."""
        if self._x is not None:
            yield self._x
