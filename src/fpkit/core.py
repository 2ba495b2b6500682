"""Core combinators: type predicates, curry, compose and structural match.

Dual-mode helpers (``is_``, ``fmap``, ``match``) return a function awaiting
the value when it is omitted:

    >>> is_(Tag.STRING)("hello")
    True
    >>> match({int: "number", "_": "other"})("42")
    'other'
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import numbers
from collections.abc import Mapping, Sized
from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from .algebraic import Functor
from .errors import NoMatchError

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class _Undefined:
    """Singleton marking a value that was never provided (distinct from ``None``)."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()

# Marks an omitted trailing argument in dual-mode functions
_MISSING: Any = object()


class Tag(StrEnum):
    """Closed set of runtime type tags understood by ``is_`` and ``match``."""
    BIGINT = "BigInt"
    BOOLEAN = "Boolean"
    FUNCTION = "Function"
    NUMBER = "Number"
    OBJECT = "Object"
    SYMBOL = "Symbol"
    STRING = "String"
    FUNCTOR = "Functor"
    ARRAY = "Array"
    UNDEFINED = "undefined"
    NULL = "null"
    PROMISE = "Promise"
    ERROR = "Error"


# ═════════════════════════════════════════════════════════════════════════════
# Predicates
# ═════════════════════════════════════════════════════════════════════════════


def absent(x: object) -> bool:
    """True for ``None`` and ``UNDEFINED``."""
    return x is None or x is UNDEFINED


def defined(x: object) -> bool:
    """True unless ``x`` is ``UNDEFINED``. ``None`` counts as defined."""
    return x is not UNDEFINED


def is_record(x: object) -> bool:
    """Mapping, pydantic model instance or dataclass instance."""
    if isinstance(x, (Mapping, BaseModel)):
        return True
    return dataclasses.is_dataclass(x) and not isinstance(x, type)


def is_functor(x: object) -> bool:
    """Structural check: a non-class object exposing a callable ``map``."""
    if isinstance(x, type):
        return False
    return callable(inspect.getattr_static(x, "map", None))


def _is_int(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _is_number(x: object) -> bool:
    return isinstance(x, numbers.Number) and not isinstance(x, bool)


_TAG_CHECKS: dict[Tag, Callable[[object], bool]] = {
    Tag.BIGINT: _is_int,
    Tag.BOOLEAN: lambda x: isinstance(x, bool),
    Tag.FUNCTION: callable,
    Tag.NUMBER: _is_number,
    Tag.OBJECT: is_record,
    Tag.SYMBOL: lambda x: isinstance(x, Enum),
    Tag.STRING: lambda x: isinstance(x, str),
    Tag.FUNCTOR: is_functor,
    Tag.ARRAY: lambda x: isinstance(x, (list, tuple)),
    Tag.UNDEFINED: lambda x: x is UNDEFINED,
    Tag.NULL: lambda x: x is None,
    Tag.PROMISE: inspect.isawaitable,
    Tag.ERROR: lambda x: isinstance(x, BaseException),
}


def is_(t: object, x: object = _MISSING) -> bool | Callable[[object], bool]:
    """Test ``x`` against a type tag.

    ``t`` may be a ``Tag``, ``None`` (same as ``Tag.NULL``), the ``Functor``
    protocol (same as ``Tag.FUNCTOR``) or any class, tested with isinstance.
    Anything else compares the runtime types of ``t`` and ``x``, so
    ``is_("foo", "bar")`` is True. Never raises.

    Example:
        >>> is_(Tag.NUMBER, 3.5)
        True
        >>> is_(Tag.NUMBER, True)
        False
        >>> [v for v in (1, "a", None) if is_(None)(v)]
        [None]
    """
    def test(x: object) -> bool:
        if isinstance(t, Tag):
            return _TAG_CHECKS[t](x)
        if t is None:
            return x is None
        if t is Functor:
            return is_functor(x)
        if isinstance(t, type):
            try:
                return isinstance(x, t)
            except TypeError:
                pass  # non-runtime protocols and parametrized generics
        return type(x) is type(t)

    return test if x is _MISSING else test(x)


def empty(x: object) -> bool:
    """True for absent values, ``""`` and empty collections or records.

    Numbers, booleans, callables and exceptions are never empty.
    """
    if absent(x):
        return True
    if isinstance(x, (bool, numbers.Number, BaseException, type)) or callable(x):
        return False
    if isinstance(x, Sized):
        return len(x) == 0
    if isinstance(x, BaseModel):
        return not type(x).model_fields
    if dataclasses.is_dataclass(x):
        return not dataclasses.fields(x)
    return not getattr(x, "__dict__", True)


def identity(x: T) -> T:
    return x


def not_(x: object) -> bool:
    return not x


# ═════════════════════════════════════════════════════════════════════════════
# Curry
# ═════════════════════════════════════════════════════════════════════════════


_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _signature(fn: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        return None


def _required_params(sig: inspect.Signature | None) -> tuple[str, ...]:
    """Names of positional parameters without defaults. Empty when there is no signature."""
    if sig is None:
        return ()
    return tuple(p.name for p in sig.parameters.values() if p.kind in _POSITIONAL and p.default is p.empty)


def _remaining(sig: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]) -> inspect.Signature:
    """``sig`` without the parameters already supplied by ``args`` and ``kwargs``."""
    params = list(sig.parameters.values())
    positional = [p.name for p in params if p.kind in _POSITIONAL]
    filled = {*positional[: len(args)], *kwargs}
    return sig.replace(parameters=[p for p in params if p.name not in filled])


class Curried(Generic[R]):
    """A function collecting arguments until its required parameters are filled.

    Required parameters are fixed when ``curry`` is called. Positional
    arguments fill them in order; a keyword argument counts only when it names
    a required parameter not already filled, so defaulted keywords can ride
    along without triggering the call. Currying a partial application keeps
    what it already collected. Used as a class attribute it binds like a
    method: the instance becomes the first collected argument.
    """

    def __init__(
        self,
        fn: Callable[..., R],
        required: tuple[str, ...] | None = None,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> None:
        if isinstance(fn, Curried):
            required = fn.required if required is None else required
            args, kwargs = (*fn.args, *args), {**fn.kwargs, **(kwargs or {})}
            fn = fn.func
        functools.update_wrapper(self, fn)
        sig = _signature(fn)
        self.func = fn
        self.required = _required_params(sig) if required is None else required
        self.args = args
        self.kwargs = kwargs or {}
        if sig is not None:
            # parameters still missing
            self.__signature__ = _remaining(sig, self.args, self.kwargs)

    @property
    def arity(self) -> int:
        return len(self.required)

    def _filled(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> int:
        pending = self.required[len(args):]
        return len(args) + sum(1 for name in kwargs if name in pending)

    def __call__(self, *args: Any, **kwargs: Any) -> R | Curried[R]:
        args, kwargs = (*self.args, *args), {**self.kwargs, **kwargs}
        if self._filled(args, kwargs) >= self.arity:
            return self.func(*args, **kwargs)
        return Curried(self.func, self.required, args, kwargs)

    def __get__(self, instance: object, owner: type | None = None) -> Curried[R]:
        if instance is None:
            return self
        return Curried(self.func, self.required, (instance, *self.args), self.kwargs)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"<curried {name} {self._filled(self.args, self.kwargs)}/{self.arity}>"


def curry(fn: Callable[..., R]) -> Curried[R]:
    """Convert ``fn`` into a function accepting its arguments in any grouping.

    Example:
        >>> add3 = curry(lambda a, b, c: a + b + c)
        >>> add3(1)(2)(3) == add3(1, 2)(3) == add3(1)(2, 3) == add3(1, 2, 3) == 6
        True
    """
    return Curried(fn)


and_ = curry(lambda a, b: bool(a and b))
or_ = curry(lambda a, b: bool(a or b))
xor = curry(lambda a, b: bool((a and not b) or (not a and b)))


# ═════════════════════════════════════════════════════════════════════════════
# Composition
# ═════════════════════════════════════════════════════════════════════════════


def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Right-to-left composition: ``compose(f, g, h)(x) == f(g(h(x)))``.

    With no functions the result is ``identity``.
    """
    def composed(x: Any) -> Any:
        return functools.reduce(lambda acc, fn: fn(acc), reversed(fns), x)
    return composed


def flow(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Left-to-right composition: ``flow(h, g, f)(x) == f(g(h(x)))``."""
    return compose(*reversed(fns))


async def then(awaitable: Awaitable[T], fn: Callable[[T], Any]) -> Any:
    """Await ``awaitable`` and apply ``fn``, awaiting its result as well if needed."""
    y = fn(await awaitable)
    if inspect.isawaitable(y):
        y = await y
    return y


def fmap(fn: Callable[[Any], Any], x: object = _MISSING) -> Any:
    """Map ``fn`` over whatever ``x`` is.

    Lists and tuples map element-wise, awaitables chain ``fn`` on completion,
    functors delegate to their own ``map`` and plain values are lifted into an
    ``Optional`` first.
    """
    def ap(x: object) -> Any:
        from .optional import Optional

        if isinstance(x, list):
            return [fn(v) for v in x]
        if isinstance(x, tuple):
            return tuple(fn(v) for v in x)
        if inspect.isawaitable(x):
            return then(x, fn)
        if is_functor(x):
            return x.map(fn)  # type: ignore[attr-defined]
        return Optional.of(x).map(fn)

    return ap if x is _MISSING else ap(x)


# ═════════════════════════════════════════════════════════════════════════════
# Structural match
# ═════════════════════════════════════════════════════════════════════════════


def _key_matches(key: object, value: object) -> bool:
    if type(key) is str and key == "_":
        return True
    if type(key) is type(value) and key == value:
        return True
    if absent(value):
        return False
    if isinstance(key, Tag):
        return bool(is_(key, value))
    if isinstance(key, type):
        try:
            return isinstance(value, key)
        except TypeError:
            return False
    if isinstance(key, str):
        return key == type(value).__name__ or (key == Tag.FUNCTOR and is_functor(value))
    return False


def match(matchers: Mapping[Any, Any], value: object = _MISSING) -> Any:
    """Dispatch ``value`` to the first matching entry of ``matchers``.

    Keys are tried in insertion order. A key matches when it equals the value
    (same type and ``==``), when it is a ``Tag``, class or type name the value
    satisfies, or when it is the fallback ``"_"``. Callable handlers receive
    the value, other handlers are returned as is.

    Raises:
        NoMatchError: no key matched and there is no ``"_"`` entry.

    Example:
        >>> describe = match({"foo": "a foo", int: lambda n: n * 2, "str": str.upper, "_": "?"})
        >>> describe("foo"), describe(21), describe("bar"), describe(1.5)
        ('a foo', 42, 'BAR', '?')
    """
    def dispatch(value: object) -> Any:
        for key, handler in matchers.items():
            if _key_matches(key, value):
                return handler(value) if callable(handler) else handler
        raise NoMatchError(value)

    return dispatch if value is _MISSING else dispatch(value)


def try_catch(
    fn: Callable[..., R],
    handler: Callable[..., U],
) -> Callable[..., R | U]:
    """Wrap ``fn`` so an exception is passed to ``handler(error, *args, **kwargs)``.

    Example:
        >>> safe_div = try_catch(lambda a, b: a / b, lambda e, a, b: 0)
        >>> safe_div(10, 2), safe_div(10, 0)
        (5.0, 0)
    """
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> R | U:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            return handler(e, *args, **kwargs)
    return wrapper
