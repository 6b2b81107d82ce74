"""Option descriptors, and the two kinds of targets an option can be bound to."""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any, Callable, Optional, Union

from typing_extensions import get_args

from . import _converters, _strings
from ._errors import ConversionError


@dataclasses.dataclass(frozen=True, eq=False)
class StoredSlot:
    """A writable reference to a field of a dataclass instance."""

    owner: Any
    attribute: str
    converter: _converters.Converter

    def get(self) -> Any:
        return getattr(self.owner, self.attribute)

    def assign(self, text: str, option: str) -> None:
        """Convert `text` and write the result to the field. The field is left
        untouched if conversion fails."""
        try:
            value = self.converter.convert(text, self.get())
        except ValueError as e:
            reason = str(e.args[0]) if len(e.args) > 0 else type(e).__name__
            raise ConversionError(option, text, reason) from e
        setattr(self.owner, self.attribute, value)


@dataclasses.dataclass(frozen=True, eq=False)
class Callback:
    """A function called each time the option appears."""

    function: Callable[..., Any]
    takes_argument: bool

    @staticmethod
    def from_field(typ: Any, value: Any) -> Callback:
        """Bind to the callable stored in a field annotated as `Callable[...]`.

        The number of arguments comes from the annotation when it lists them
        (`Callable[[], None]` or `Callable[[str], None]`), and from the signature of
        the stored function otherwise."""
        if not callable(value):
            raise _converters.UnsupportedTypeAnnotationError(
                f"Expected a callable for a field annotated as {typ}, but got {value!r}."
            )

        args = get_args(typ)
        # `Callable[..., T]`, `Callable[P, T]` and `Callable[Concatenate[...], T]` say
        # nothing definite about arity; only an explicit list does.
        if len(args) > 0 and type(args[0]) is list:
            param_count = len(args[0])
        else:
            try:
                signature = inspect.signature(value)
            except (TypeError, ValueError):
                # No signature, this is often the case with builtins.
                signature = None
            if signature is None:
                param_count = 1
            else:
                param_count = sum(
                    1
                    for p in signature.parameters.values()
                    if p.default is inspect.Parameter.empty
                    and p.kind
                    in (
                        inspect.Parameter.POSITIONAL_ONLY,
                        inspect.Parameter.POSITIONAL_OR_KEYWORD,
                    )
                )

        if param_count > 1:
            raise _converters.UnsupportedTypeAnnotationError(
                f"Option callbacks take zero or one argument, but {value!r} takes"
                f" {param_count}."
            )
        return Callback(function=value, takes_argument=param_count == 1)

    def call(self, text: str) -> None:
        if self.takes_argument:
            self.function(text)
        else:
            self.function()


@dataclasses.dataclass(frozen=True, eq=False)
class Option:
    """A single command-line option, bound to a field of its container.

    At least one of `short_name` and `long_name` is set. `default` and
    `optional_argument` are never used for boolean fields, which take no
    argument."""

    short_name: Optional[str]
    """Single character, activated with `-<short_name>`."""
    long_name: Optional[str]
    """Activated with `--<long_name>`."""
    description: str
    default: Optional[str]
    """Textual value assigned when the flag appears without an argument. Only used
    when `optional_argument` is set."""
    optional_argument: bool
    field_name: str
    """Dotted path to the bound field, from the root of the container."""
    target: Union[StoredSlot, Callback]

    @property
    def is_bool(self) -> bool:
        return (
            isinstance(self.target, StoredSlot)
            and self.target.converter.kind is _converters.SlotKind.BOOL
        )

    @property
    def takes_argument(self) -> bool:
        """Whether the option accepts an argument at all. Drivers can use this to
        decide if the next command-line token belongs to the option."""
        if isinstance(self.target, Callback):
            return self.target.takes_argument
        return not self.is_bool

    @property
    def metavar(self) -> str:
        if isinstance(self.target, Callback):
            return "STR" if self.target.takes_argument else ""
        return self.target.converter.metavar

    def set(self, value: Optional[str]) -> None:
        """Set the option from a command-line argument, or from the absence of one if
        `value` is `None`.

        Raises:
            ConversionError: If the text can't be converted to the field's type.
        """
        text = value if value is not None else ""
        if isinstance(self.target, Callback):
            self.target.call(text)
        else:
            self.target.assign(text, option=str(self))

    def apply_default(self) -> None:
        """Handle a flag that appeared without an attached argument."""
        if self.optional_argument and not self.is_bool and self.default is not None:
            self.set(self.default)
        else:
            self.set(None)

    def __str__(self) -> str:
        return _strings.format_flag(self.short_name, self.long_name)
