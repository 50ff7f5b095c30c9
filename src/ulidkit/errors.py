"""Failure kinds raised by the ULID codec and constructors."""

from __future__ import annotations

__all__ = ["InvalidFormatError", "InvalidLengthError", "UlidError"]


class UlidError(ValueError):
    """Base class for malformed ULID input."""


class InvalidFormatError(UlidError):
    """Text is not exactly 26 symbols of the ULID Base32 alphabet."""


class InvalidLengthError(UlidError):
    """A binary buffer is shorter than the layout being read or written."""

    def __init__(self, required: int, actual: int, *, what: str = "buffer") -> None:
        self.required = required
        self.actual = actual
        super().__init__(f"{what} needs at least {required} bytes, got {actual}")
