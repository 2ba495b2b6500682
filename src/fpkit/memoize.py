"""Memoization keyed by a deterministic serialization of the call arguments.

Structurally equal arguments hit the same entry, so a repeat call returns the
very object produced the first time:

    >>> @memoize
    ... def make(key: int) -> dict[str, int]:
    ...     return {"key": key}
    >>> make(1) is make(1)
    True

Defaults for capacity and TTL come from ``fpkit.settings``.
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import threading
import time
from collections.abc import Set
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, overload

import orjson
from pydantic import BaseModel

from .core import _MISSING
from .logging import get_logger
from .settings import get_settings

F = TypeVar("F", bound=Callable[..., Any])

log = get_logger("fpkit.memoize")

_KEY_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS | orjson.OPT_PASSTHROUGH_DATACLASS


@dataclass(slots=True)
class CacheEntry:
    """A cached call result with expiration tracking."""
    value: Any
    created_at: float
    expires_at: float | None

    @property
    def expired(self) -> bool:
        return self.expires_at is not None and time.time() > self.expires_at


def _type_name(obj: Any) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


def _encode_fallback(obj: Any) -> Any:
    """Type-tagged stand-in for values orjson does not encode as themselves.

    The tag keeps a stand-in from colliding with a plain value of the same
    shape, such as a string equal to some object's repr.
    """
    if isinstance(obj, BaseModel):
        value: Any = obj.model_dump(mode="json")
    elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        value = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    elif isinstance(obj, Set):
        value = sorted(repr(v) for v in obj)
    else:
        value = repr(obj)
    return {"__type__": _type_name(obj), "value": value}


def make_key(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """Deterministic key for a call: sorted-key JSON of the arguments, hashed."""
    try:
        payload = orjson.dumps([args, kwargs], option=_KEY_OPTIONS, default=_encode_fallback)
    except orjson.JSONEncodeError:
        # integers beyond 64 bits and other values orjson rejects outright
        payload = repr((args, sorted(kwargs.items()))).encode()
    return hashlib.md5(payload, usedforsecurity=False).hexdigest()


class MemoCache:
    """Thread-safe in-memory store of call results with optional TTL.

    Uses RLock for synchronization. When capacity is reached, expired entries
    are dropped first, then the oldest quarter.

    Args:
        max_entries: Maximum number of entries before eviction
        ttl: Entry lifetime in seconds, None keeps entries until evicted
    """

    __slots__ = ("_cache", "_max_entries", "_ttl", "_lock", "_hits", "_misses")

    def __init__(self, max_entries: int = 1024, ttl: float | None = None) -> None:
        self._cache: dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._ttl = ttl
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any:
        """Cached value, or the module's missing sentinel."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None or entry.expired:
                if entry is not None:
                    del self._cache[key]
                self._misses += 1
                return _MISSING
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            if key not in self._cache and len(self._cache) >= self._max_entries:
                self._evict_unlocked()
            now = time.time()
            self._cache[key] = CacheEntry(value, now, now + self._ttl if self._ttl else None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = self._misses = 0

    def _evict_unlocked(self) -> None:
        """Remove expired entries, then oldest if still over capacity. Caller must hold lock."""
        for key in [k for k, v in self._cache.items() if v.expired]:
            del self._cache[key]
        if len(self._cache) >= self._max_entries:
            oldest = sorted(self._cache, key=lambda k: self._cache[k].created_at)
            for key in oldest[: max(1, self._max_entries // 4)]:
                del self._cache[key]

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    def stats(self) -> dict[str, object]:
        """Cache statistics for monitoring."""
        with self._lock:
            return {
                "entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "max_entries": self._max_entries,
                "ttl": self._ttl,
            }


@overload
def memoize(fn: F, /) -> F: ...
@overload
def memoize(*, maxsize: int | None = None, ttl: float | None = None) -> Callable[[F], F]: ...


def memoize(
    fn: Callable[..., Any] | None = None,
    /,
    *,
    maxsize: int | None = None,
    ttl: float | None = None,
) -> Any:
    """Cache ``fn``'s results by argument structure.

    Usable bare (``@memoize``) or configured (``@memoize(maxsize=64, ttl=30)``).
    The wrapper exposes ``cache`` (a ``MemoCache``) and ``cache_clear()``.
    Exceptions are not cached.
    """
    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        defaults = get_settings().memoize
        cache = MemoCache(maxsize or defaults.max_size, ttl if ttl is not None else defaults.ttl)
        flog = log.bind(function=getattr(fn, "__qualname__", repr(fn)))

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            key = make_key(args, kwargs)
            cached = cache.get(key)
            if cached is not _MISSING:
                flog.debug("memoize hit")
                return cached
            flog.debug("memoize miss")
            result = fn(*args, **kwargs)
            cache.set(key, result)
            return result

        wrapper.cache = cache  # type: ignore[attr-defined]
        wrapper.cache_clear = cache.clear  # type: ignore[attr-defined]
        return wrapper

    return decorator if fn is None else decorator(fn)
