"""Standardized errors for fpkit.

Absorbing states (absent Optional, failed Result) are values, not errors.
The only condition the library raises on its own is a failed ``match``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Standard error codes for library failures."""
    NO_MATCH = "NO_MATCH"
    UNKNOWN = "UNKNOWN"


class FpkitError(Exception):
    """Base class for errors raised by fpkit itself."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message)


class NoMatchError(FpkitError, LookupError):
    """No matcher key accepted the value and no ``_`` fallback was given."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"No match for {value!r}", ErrorCode.NO_MATCH)
