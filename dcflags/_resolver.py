"""Utilities for resolving types and forward references."""

import copy
import dataclasses
import types
from typing import Any, ClassVar, List, Optional, Tuple, Type, TypeVar, Union

from typing_extensions import get_args, get_origin, get_type_hints

NoneType = type(None)

# `int | None` has a different origin than `Optional[int]` on Python >= 3.10.
_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))


def is_dataclass_instance(obj: Any) -> bool:
    """`dataclasses.is_dataclass()` returns `True` for both dataclass types and
    instances; we only want the latter."""
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def is_frozen(obj: Any) -> bool:
    params = getattr(type(obj), "__dataclass_params__", None)
    return params is not None and params.frozen


def resolved_fields(cls: Type) -> List[dataclasses.Field]:
    """Similar to dataclasses.fields(), but resolves forward references and keeps
    runtime annotations (`typing.Annotated`) in the field types."""

    assert dataclasses.is_dataclass(cls)
    fields = []
    annotations = get_type_hints(cls, include_extras=True)
    for field in dataclasses.fields(cls):
        # Avoid mutating original field.
        field = copy.copy(field)

        # Resolve forward references.
        field.type = annotations[field.name]

        # Skip ClassVars. These are filtered by dataclasses.fields() already, but
        # forward references can hide them from the dataclass decorator.
        if get_origin(field.type) is ClassVar:
            continue

        fields.append(field)

    return fields


MetadataType = TypeVar("MetadataType")


def unwrap_annotated(
    typ: Any, search_type: Optional[Type[MetadataType]] = None
) -> Tuple[Any, Tuple[MetadataType, ...]]:
    """Helper for parsing typing.Annotated types.

    Examples:
    - int, int => (int, ())
    - Annotated[int, 1], int => (int, (1,))
    - Annotated[int, "1"], int => (int, ())
    """
    if not hasattr(typ, "__metadata__"):
        return typ, ()

    args = get_args(typ)
    assert len(args) >= 2

    # Don't search for a specific metadata type if `None` is passed in.
    if search_type is None:
        return args[0], ()

    # Look through metadata for desired metadata type.
    targets = tuple(x for x in args[1:] if isinstance(x, search_type))
    return args[0], targets


def unwrap_optional(typ: Any) -> Any:
    """Optional[T] => T. Other unions are returned as-is.

    Examples:
    - Optional[int] => int
    - Union[int, None] => int
    - Union[int, str] => Union[int, str]
    """
    if get_origin(typ) not in _UNION_ORIGINS:
        return typ
    options = tuple(t for t in get_args(typ) if t is not NoneType)
    if len(options) == 1:
        return options[0]
    return typ
