"""Exceptions raised while building option groups and assigning option values."""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """Structural problems that make a :class:`dcflags.Group` unusable."""

    NOT_POINTER_TO_STRUCT = enum.auto()
    """The container is not a (mutable) dataclass instance."""
    SHORT_NAME_TOO_LONG = enum.auto()
    """A short name is longer than a single character."""
    DUPLICATE_SHORT_NAME = enum.auto()
    DUPLICATE_LONG_NAME = enum.auto()
    UNSUPPORTED_TYPE = enum.auto()
    """A field type that options can't be bound to."""


class GroupError(Exception):
    """Construction-time failure. Stored in `Group.error` rather than raised."""

    def __init__(
        self, kind: ErrorKind, message: str, field_name: Optional[str] = None
    ) -> None:
        self.kind = kind
        self.message = message
        self.field_name = field_name
        if field_name is None:
            super().__init__(message)
        else:
            super().__init__(f"{field_name}: {message}")


class ConversionError(ValueError):
    """Exception raised when a textual value can't be assigned to an option."""

    def __init__(self, option: str, text: str, reason: str) -> None:
        self.option = option
        self.text = text
        self.reason = reason
        super().__init__(f"invalid value {text!r} for option {option}: {reason}")
