from typing import TypeVar

from typing_extensions import Annotated


class Marker:
    """Flag attached to a field type via `Annotated`. Compared by identity."""

    def __init__(self, description: str) -> None:
        self.description = description

    def __repr__(self) -> str:
        return self.description


def _make_marker(description: str) -> Marker:
    return Marker(description)


T = TypeVar("T")

NO_FLAG = _make_marker("NoFlag")
NoFlag = Annotated[T, NO_FLAG]
"""A type `T` can be annotated as `NoFlag[T]` to exclude the field from option
discovery, even if option metadata or a nested dataclass is attached to it."""

EMBED = _make_marker("Embed")
Embed = Annotated[T, EMBED]
"""Scan the value of a field annotated as `Embed[T]` for options, and merge them into
the parent group. Fields holding dataclass instances are embedded automatically; this
marker is useful when the annotation alone doesn't say so, for example `Embed[Any]`."""
