"""Capability contracts shared by the containers.

These are structural protocols: a class satisfies ``Functor`` by exposing a
``map`` method, no registration needed. ``Functor`` doubles as a type tag for
``is_`` and ``match``.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeAlias, TypeVar, runtime_checkable

T = TypeVar("T")
U = TypeVar("U")
T_co = TypeVar("T_co", covariant=True)

Pair: TypeAlias = tuple[T, U]


@runtime_checkable
class Semigroup(Protocol[T_co]):
    """Associative combination: ``a.concat(b).concat(c) == a.concat(b.concat(c))``."""

    @property
    def x(self) -> T_co: ...

    def concat(self, x: Any) -> Semigroup[Any]: ...


@runtime_checkable
class Monoid(Semigroup[T_co], Protocol[T_co]):
    """Semigroup with an identity element."""

    @property
    def empty(self) -> T_co: ...


@runtime_checkable
class Functor(Protocol[T_co]):
    """Container whose held value can be transformed with ``map``."""

    def map(self, fn: Callable[[Any], U]) -> Functor[U]: ...


@runtime_checkable
class Applicative(Functor[T_co], Protocol[T_co]):
    """Functor that can apply a function held by another container of its kind."""

    def apply(self, fn: Any) -> Applicative[Any]: ...


@runtime_checkable
class Monad(Applicative[T_co], Protocol[T_co]):
    """Applicative whose ``bind`` flattens a container-returning function."""

    def bind(self, fn: Callable[[Any], Any]) -> Monad[Any]: ...


@runtime_checkable
class Future(Functor[T_co], Protocol[T_co]):
    """Functor over a deferred computation, run explicitly with ``call``."""

    def call(self, *args: Any, **kwargs: Any) -> Any: ...
