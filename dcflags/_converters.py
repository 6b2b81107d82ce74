"""Helper for using type annotations to generate converters, which map a single string
from the command line onto a new value for a field.

Each converter takes the incoming text and the field's current value. Some examples
of type annotations and the resulting conversions:
```
    bool

        lambda text, current: True

    int

        lambda text, current: int(text)

    List[int]

        lambda text, current: list(current) + [int(text)]

    Dict[str, float]

        lambda text, current: {**current, key: float(value)}
            where key, value = text.split("=", 1)
```
Fields keep their value if conversion fails: converters never mutate `current`.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import pathlib
from typing import Any, Callable, Dict, Optional, Tuple
from typing import Literal as LiteralAlternate

from typing_extensions import Literal, get_args, get_origin

from . import _resolver, _settings


class UnsupportedTypeAnnotationError(Exception):
    """Exception raised when an unsupported type annotation is detected."""


class SlotKind(enum.Enum):
    BOOL = enum.auto()
    SCALAR = enum.auto()
    REPEATED = enum.auto()
    KEYED = enum.auto()


ConvertFn = Callable[[str, Any], Any]
_ScalarFn = Callable[[str], Any]


@dataclasses.dataclass(frozen=True)
class Converter:
    kind: SlotKind
    convert: ConvertFn
    """Maps (text, current value) to a new value. Raises `ValueError` on bad input."""
    make_metavar: Callable[[], str]
    """Evaluated on access, so that settings changes are reflected."""

    @property
    def metavar(self) -> str:
        """Placeholder for the option argument, for help rendering."""
        return self.make_metavar()


def converter_from_type(typ: Any, base: int = 10) -> Converter:
    """Build a converter for a field type. Raises `UnsupportedTypeAnnotationError`
    for types outside of the supported set:

    - `bool`.
    - Scalars: `str`, `int`, `float`, paths, enums, and `Literal[...]`.
    - Sequences of scalars: `List[T]`, `Sequence[T]`, `Tuple[T, ...]`.
    - Mappings between scalars: `Dict[K, V]`, `Mapping[K, V]`.

    Each of these can also be wrapped in `Optional[]`.
    """
    typ = _resolver.unwrap_optional(_resolver.unwrap_annotated(typ)[0])

    if typ is bool:
        return Converter(
            kind=SlotKind.BOOL,
            # Presence of the flag is all that matters.
            convert=lambda text, current: True,
            make_metavar=lambda: "",
        )

    scalar = _scalar_from_type(typ, base)
    if scalar is not None:
        make, metavar = scalar
        return Converter(
            kind=SlotKind.SCALAR,
            convert=lambda text, current: make(text),
            make_metavar=lambda: metavar,
        )

    origin = get_origin(typ)
    if typ in (list, tuple, collections.abc.Sequence) or origin in (
        list,
        tuple,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
    ):
        return _converter_from_sequence(typ, base)

    if typ in (dict, collections.abc.Mapping) or origin in (
        dict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    ):
        return _converter_from_mapping(typ, base)

    raise UnsupportedTypeAnnotationError(
        f"Options can't be bound to fields of type {typ}."
    )


def _scalar_from_type(typ: Any, base: int) -> Optional[Tuple[_ScalarFn, str]]:
    """Returns a (string => instance, metavar) pair, or `None` if `typ` is not a
    scalar type."""
    typ = _resolver.unwrap_optional(_resolver.unwrap_annotated(typ)[0])

    if typ is str:
        return str, "STR"

    if typ is int:

        def int_from_str(text: str) -> int:
            return int(text, base)

        return int_from_str, "INT"

    if typ is float:
        return float, "FLOAT"

    if isinstance(typ, type) and issubclass(typ, pathlib.PurePath):
        return typ, "PATH"

    if isinstance(typ, type) and issubclass(typ, enum.Enum):
        enum_type = typ
        names = tuple(enum_type.__members__.keys())

        def enum_from_str(text: str) -> Any:
            if text not in enum_type.__members__:
                raise ValueError(f"invalid choice (choose from {', '.join(names)})")
            return enum_type[text]

        return enum_from_str, "{" + ",".join(names) + "}"

    # typing.Literal and typing_extensions.Literal differ on some Python versions.
    if get_origin(typ) in (Literal, LiteralAlternate):
        choices = get_args(typ)
        str_choices = tuple(str(x) for x in choices)
        if not all(isinstance(x, (str, int)) for x in choices):
            raise UnsupportedTypeAnnotationError(
                f"Literal choices must be strings or integers, but got {typ}."
            )

        def literal_from_str(text: str) -> Any:
            if text not in str_choices:
                raise ValueError(
                    f"invalid choice (choose from {', '.join(str_choices)})"
                )
            return choices[str_choices.index(text)]

        return literal_from_str, "{" + ",".join(str_choices) + "}"

    return None


def _scalar_or_raise(typ: Any, base: int, container: Any) -> Tuple[_ScalarFn, str]:
    scalar = _scalar_from_type(typ, base)
    if scalar is None:
        raise UnsupportedTypeAnnotationError(
            f"Expected {container} to contain only scalar types, but found {typ}."
        )
    return scalar


def _converter_from_sequence(typ: Any, base: int) -> Converter:
    """Converter for repeated options: list, Sequence, Tuple[T, ...]. Each occurrence
    appends a single element."""
    args = get_args(typ)
    origin = get_origin(typ) or typ
    container_type: Any = tuple if origin is tuple else list

    if origin is tuple and len(args) > 0:
        if len(args) != 2 or args[1] is not Ellipsis:
            raise UnsupportedTypeAnnotationError(
                f"Only variable-length tuples (Tuple[T, ...]) are supported, but got"
                f" {typ}."
            )
        contained_type = args[0]
    elif len(args) == 1:
        (contained_type,) = args
    else:
        # Unsubscripted sequences hold strings.
        contained_type = str

    make, metavar = _scalar_or_raise(contained_type, base, typ)

    def sequence_converter(text: str, current: Any) -> Any:
        out = list(current) if current is not None else []
        out.append(make(text))
        return container_type(out)

    return Converter(
        kind=SlotKind.REPEATED,
        convert=sequence_converter,
        make_metavar=lambda: metavar,
    )


def _converter_from_mapping(typ: Any, base: int) -> Converter:
    """Converter for keyed options: Dict[K, V], Mapping[K, V]. Each occurrence inserts
    a single `key=value` pair."""
    args = get_args(typ)
    if len(args) == 2:
        key_type, val_type = args
    else:
        key_type, val_type = str, str

    make_key, key_metavar = _scalar_or_raise(key_type, base, typ)
    make_val, val_metavar = _scalar_or_raise(val_type, base, typ)

    def mapping_converter(text: str, current: Any) -> Any:
        delimiter = _settings.options["key_value_delimiter"]
        key, found, val = text.partition(delimiter)
        if found == "":
            raise ValueError(f"expected KEY{delimiter}VALUE, but no {delimiter!r} found")
        out: Dict[Any, Any] = dict(current) if current is not None else {}
        out[make_key(key)] = make_val(val)
        return out

    return Converter(
        kind=SlotKind.KEYED,
        convert=mapping_converter,
        make_metavar=lambda: (
            key_metavar + _settings.options["key_value_delimiter"] + val_metavar
        ),
    )
