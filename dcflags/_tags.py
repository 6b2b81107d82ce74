"""Reading option metadata off of a single dataclass field."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, Optional

from . import _resolver
from ._errors import ErrorKind, GroupError
from .conf import _confstruct, _markers


class TagKind(enum.Enum):
    SKIP = enum.auto()
    RECURSE = enum.auto()
    OPTION = enum.auto()


@dataclasses.dataclass(frozen=True)
class FieldTag:
    kind: TagKind
    typ: Any
    """Field type, with runtime annotations stripped."""

    short_name: Optional[str] = None
    long_name: Optional[str] = None
    description: Optional[str] = None
    default: Optional[str] = None
    optional_argument: bool = False
    base: int = 10
    warning: Optional[str] = None
    """Set when a skipped field looks like it was meant to be an option."""


def parse_field_tag(field: dataclasses.Field, value: Any, field_name: str) -> FieldTag:
    """Classify a field as an option, a nested group to scan, or neither.

    `value` is the field's current value, which decides whether an unmarked field
    holds a nested group. `field_name` is only used for error messages."""
    typ, markers = _resolver.unwrap_annotated(field.type, search_type=_markers.Marker)
    _, configs = _resolver.unwrap_annotated(
        field.type, search_type=_confstruct._OptConfig
    )

    if _markers.NO_FLAG in markers:
        return FieldTag(kind=TagKind.SKIP, typ=typ)

    # Private fields are never options.
    if field.name.startswith("_"):
        warning = None
        if len(configs) > 0:
            warning = (
                f"Field {field_name} has option metadata but is private, and will be"
                " ignored."
            )
        return FieldTag(kind=TagKind.SKIP, typ=typ, warning=warning)

    if len(configs) == 0:
        if _markers.EMBED in markers or _resolver.is_dataclass_instance(value):
            return FieldTag(kind=TagKind.RECURSE, typ=typ)
        return FieldTag(kind=TagKind.SKIP, typ=typ)

    # If several `opt()` objects are attached, the outermost one wins.
    config = configs[-1]
    if config.short is not None and len(config.short) > 1:
        raise GroupError(
            ErrorKind.SHORT_NAME_TOO_LONG,
            f"short names can only be 1 character, but got {config.short!r}",
            field_name,
        )
    if not (config.base == 0 or 2 <= config.base <= 36):
        raise GroupError(
            ErrorKind.UNSUPPORTED_TYPE,
            f"integer base must be 0 or between 2 and 36, but got {config.base}",
            field_name,
        )

    return FieldTag(
        kind=TagKind.OPTION,
        typ=typ,
        short_name=config.short,
        long_name=config.long,
        description=config.description,
        default=config.default,
        optional_argument=config.optional,
        base=config.base,
    )
