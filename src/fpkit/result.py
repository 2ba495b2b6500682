"""Result container: a success value or a captured exception.

An exception instance is the absorbing state. ``Result.of`` decides the
variant from the value itself, so a mapper that returns an exception moves
the chain onto the error track.

Example:
    >>> def parse(s: str) -> Result[int]:
    ...     return Result.of(int(s)) if s.isdigit() else Result.of(ValueError(s))
    >>> Result.of("42").bind(parse).map(lambda n: n * 2).match(success=str, error=lambda e: "bad")
    '84'
    >>> Result.of("x").bind(parse).map(lambda n: n * 2).match(success=str, error=lambda e: "bad")
    'bad'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from .errors import NoMatchError
from .semigroup import combine

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Result(Generic[T]):
    """Success value or error.

    Implements Functor (map), Applicative (apply), Monad (bind) and
    Semigroup (concat). Instances are immutable.
    """

    __slots__ = ("_x",)
    __match_args__ = ("x",)

    def __init__(self, x: T | BaseException) -> None:
        """Private constructor. Use Result.of() instead."""
        object.__setattr__(self, "_x", x)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def of(cls, x: T | BaseException) -> Result[T]:
        """Wrap ``x``; an exception instance gives an error Result."""
        return cls(x)

    @property
    def x(self) -> T | BaseException:
        """Held value or exception."""
        return self._x

    def is_success(self) -> bool:
        return not isinstance(self._x, BaseException)

    def is_error(self) -> bool:
        return isinstance(self._x, BaseException)

    # ─────────────────────────────────────────────────────────────────
    # Functor / Applicative / Monad
    # ─────────────────────────────────────────────────────────────────

    def map(self, fn: Callable[[T], U | BaseException]) -> Result[U]:
        """Apply ``fn`` to a success value, re-wrapping through ``of``."""
        if self.is_error():
            return cast(Result[U], self)
        return Result.of(fn(cast(T, self._x)))

    def apply(self, fn: Result[Callable[[T], U]]) -> Result[U]:
        """Map with the function held by ``fn``; an error on either side wins."""
        if fn.is_error():
            return cast(Result[U], fn)
        return self.map(cast(Callable[[T], U], fn.x))

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Chain a Result-returning function. A plain return is wrapped with ``of``."""
        if self.is_error():
            return cast(Result[U], self)
        y = fn(cast(T, self._x))
        return y if isinstance(y, Result) else Result.of(y)

    # ─────────────────────────────────────────────────────────────────
    # Semigroup
    # ─────────────────────────────────────────────────────────────────

    def concat(self, x: Any) -> Result[Any]:
        """Combine the success value with ``x`` (see ``fpkit.semigroup``).

        An error Result is replaced by ``Result.of(x)``.
        """
        if self.is_error():
            return Result.of(x)
        return Result.of(combine(self._x, x))

    # ─────────────────────────────────────────────────────────────────
    # Extraction
    # ─────────────────────────────────────────────────────────────────

    def match(
        self,
        matchers: Mapping[str, Any] | None = None,
        *,
        success: Callable[[T], R] | R | None = None,
        error: Callable[[BaseException], R] | R | None = None,
    ) -> R:
        """Run ``success(value)`` or ``error(exc)``.

        Branches can also be given as ``{"Success": ..., "Error": ...}``.

        Raises:
            NoMatchError: the branch that applies was not provided.
        """
        if matchers is not None:
            success, error = matchers.get("Success", success), matchers.get("Error", error)
        branch = error if self.is_error() else success
        if branch is None:
            raise NoMatchError(self)
        return branch(self._x) if callable(branch) else branch

    def unwrap_or(self, default: T) -> T:
        return default if self.is_error() else cast(T, self._x)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self.is_success()

    def __repr__(self) -> str:
        return f"Result({self._x!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._x == other._x

    def __hash__(self) -> int:
        return hash((Result, self._x))

    def __iter__(self) -> Iterator[T]:
        """Yields the success value (0 or 1 element)."""
        if self.is_success():
            yield cast(T, self._x)
