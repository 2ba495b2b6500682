"""Functional programming toolkit: algebraic containers and point-free helpers.

Containers:
- Optional: value or absence, absence short-circuits
- Result: value or exception, the exception short-circuits
- Effect: deferred (sync or async) computation, transformed before it runs

Combinators: curry, compose, flow, match, is_, fmap, try_catch, memoize.

Example:
    >>> from fpkit import Optional, compose, curry
    >>> add = curry(lambda a, b: a + b)
    >>> Optional.of(41).map(add(1)).match(some=lambda x: x, none=lambda: 0)
    42
    >>> compose(str.upper, lambda x: f"Value: {x}", add(1))(5)
    'VALUE: 6'
"""

from . import arith, lists
from .algebraic import Applicative, Functor, Future, Monad, Monoid, Pair, Semigroup
from .core import (
    UNDEFINED,
    Curried,
    Tag,
    absent,
    and_,
    compose,
    curry,
    defined,
    empty,
    flow,
    fmap,
    identity,
    is_,
    match,
    not_,
    or_,
    try_catch,
    xor,
)
from .effect import Effect
from .errors import ErrorCode, FpkitError, NoMatchError
from .logging import configure_logging, get_logger
from .memoize import MemoCache, memoize
from .optional import Optional
from .result import Result
from .settings import FpkitSettings, get_settings
from .struct import get_path, pluck

__all__ = [
    # Contracts
    "Functor", "Applicative", "Monad", "Semigroup", "Monoid", "Future", "Pair",
    # Containers
    "Optional", "Result", "Effect",
    # Core combinators
    "Tag", "UNDEFINED", "Curried", "is_", "absent", "defined", "empty", "identity",
    "not_", "and_", "or_", "xor", "curry", "compose", "flow", "fmap", "match", "try_catch",
    # Collaborators
    "lists", "arith", "get_path", "pluck", "memoize", "MemoCache",
    # Errors
    "ErrorCode", "FpkitError", "NoMatchError",
    # Ambient
    "configure_logging", "get_logger", "FpkitSettings", "get_settings",
]
