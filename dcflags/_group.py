"""Interface for generating option groups from dataclass instances."""

from __future__ import annotations

import collections.abc
import dataclasses
from typing import Any, Dict, List, Optional, Set

from typing_extensions import get_origin

from . import _converters, _docstrings, _resolver, _strings, _tags, _warnings
from ._errors import ErrorKind, GroupError
from ._option import Callback, Option, StoredSlot


@dataclasses.dataclass(eq=False)
class Group:
    """A named set of options, discovered from the fields of a dataclass instance.

    Construction never raises: structural problems are stored in `error`, which
    should be checked right away. A group with an error must not be used.

    Example::

        @dataclasses.dataclass
        class Options:
            verbose: Annotated[bool, dcflags.conf.opt(short="v", long="verbose")] = False

        options = Options()
        group = dcflags.Group("Application Options", options)
        group.raise_for_error()

        group.short_names["v"].set(None)
        assert options.verbose
    """

    name: str
    """Label for the group, for example to title a section of helptext."""
    data: Any
    """The container. Options write to its fields directly."""

    options: List[Option] = dataclasses.field(init=False, default_factory=list)
    """Options in declaration order, with nested groups spliced in place."""
    long_names: Dict[str, Option] = dataclasses.field(init=False, default_factory=dict)
    short_names: Dict[str, Option] = dataclasses.field(init=False, default_factory=dict)
    description: str = dataclasses.field(init=False, default="")
    """Docstring of the container's class, if hand-written."""
    error: Optional[GroupError] = dataclasses.field(init=False, default=None)

    def __post_init__(self) -> None:
        try:
            self._scan()
        except GroupError as e:
            self.error = e

    def raise_for_error(self) -> None:
        """Raise the construction error, if there is one."""
        if self.error is not None:
            raise self.error

    def lookup(self, flag: str) -> Optional[Option]:
        """Find the option spelled as `flag`, for example `-v` or `--verbose`.

        Returns `None` for unknown options."""
        if flag.startswith("--"):
            return self.long_names.get(flag[2:])
        elif flag.startswith("-"):
            return self.short_names.get(flag[1:])
        return None

    def _scan(self) -> None:
        if not _resolver.is_dataclass_instance(self.data) or _resolver.is_frozen(
            self.data
        ):
            raise GroupError(
                ErrorKind.NOT_POINTER_TO_STRUCT,
                "provided data is not a mutable dataclass instance, but"
                f" {type(self.data)}",
            )
        self.description = _docstrings.get_dataclass_description(type(self.data))
        self._scan_struct(self.data, prefix="", parent_ids=set())

    def _scan_struct(self, obj: Any, prefix: str, parent_ids: Set[int]) -> None:
        # Cycle detection. Note that 'parent' here refers to in the nesting
        # hierarchy, not the superclass.
        if id(obj) in parent_ids:
            raise GroupError(
                ErrorKind.UNSUPPORTED_TYPE,
                f"found a cyclic reference to {type(obj)}",
                prefix,
            )
        parent_ids = parent_ids | {id(obj)}

        cls = type(obj)
        try:
            fields = _resolver.resolved_fields(cls)
        except (NameError, TypeError) as e:
            raise GroupError(
                ErrorKind.UNSUPPORTED_TYPE,
                f"could not resolve type hints for {cls}: {e}",
                prefix or None,
            ) from e

        for field in fields:
            field_name = _strings.make_field_name([prefix, field.name])
            value = getattr(obj, field.name, None)
            tag = _tags.parse_field_tag(field, value, field_name)

            if tag.kind is _tags.TagKind.SKIP:
                if tag.warning is not None:
                    _warnings.warn(tag.warning)
                continue

            if tag.kind is _tags.TagKind.RECURSE:
                if not _resolver.is_dataclass_instance(value) or _resolver.is_frozen(
                    value
                ):
                    raise GroupError(
                        ErrorKind.NOT_POINTER_TO_STRUCT,
                        "embedded value is not a mutable dataclass instance, but"
                        f" {type(value)}",
                        field_name,
                    )
                self._scan_struct(value, field_name, parent_ids)
                continue

            if tag.short_name is None and tag.long_name is None:
                _warnings.warn(
                    f"Field {field_name} has option metadata but neither a short nor"
                    " a long name, and will be ignored."
                )
                continue

            description = tag.description
            if description is None:
                description = _docstrings.get_field_docstring(cls, field.name) or ""

            self._add(
                Option(
                    short_name=tag.short_name,
                    long_name=tag.long_name,
                    description=description,
                    default=tag.default,
                    optional_argument=tag.optional_argument,
                    field_name=field_name,
                    target=_make_target(obj, field.name, field_name, tag, value),
                )
            )

    def _add(self, option: Option) -> None:
        # Check both indices before inserting into either.
        if option.short_name is not None and option.short_name in self.short_names:
            raise GroupError(
                ErrorKind.DUPLICATE_SHORT_NAME,
                f"short name -{option.short_name} is already used by"
                f" {self.short_names[option.short_name].field_name}",
                option.field_name,
            )
        if option.long_name is not None and option.long_name in self.long_names:
            raise GroupError(
                ErrorKind.DUPLICATE_LONG_NAME,
                f"long name --{option.long_name} is already used by"
                f" {self.long_names[option.long_name].field_name}",
                option.field_name,
            )

        self.options.append(option)
        if option.short_name is not None:
            self.short_names[option.short_name] = option
        if option.long_name is not None:
            self.long_names[option.long_name] = option


def new_group(name: str, data: Any) -> Group:
    """Create an option group from a dataclass instance. Check `Group.error` before
    using the result."""
    return Group(name, data)


def _make_target(
    obj: Any, attribute: str, field_name: str, tag: _tags.FieldTag, value: Any
) -> StoredSlot | Callback:
    typ = _resolver.unwrap_optional(tag.typ)
    try:
        if typ is collections.abc.Callable or (
            get_origin(typ) is collections.abc.Callable
        ):
            return Callback.from_field(typ, value)

        converter = _converters.converter_from_type(typ, base=tag.base)
    except _converters.UnsupportedTypeAnnotationError as e:
        raise GroupError(ErrorKind.UNSUPPORTED_TYPE, e.args[0], field_name) from e

    if converter.kind is _converters.SlotKind.BOOL and (
        tag.default is not None or tag.optional_argument
    ):
        _warnings.warn(
            f"Field {field_name} is a boolean option; `default` and `optional` are"
            " ignored for boolean options."
        )
    return StoredSlot(owner=obj, attribute=attribute, converter=converter)
