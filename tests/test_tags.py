import dataclasses
from typing import Any, Dict

import pytest
from typing_extensions import Annotated

from dcflags import _resolver, _tags
from dcflags._errors import ErrorKind, GroupError
from dcflags.conf import Embed, NoFlag, opt


def _fields(cls: Any) -> Dict[str, dataclasses.Field]:
    return {field.name: field for field in _resolver.resolved_fields(cls)}


def test_option_tag() -> None:
    @dataclasses.dataclass
    class A:
        level: Annotated[
            int,
            opt(
                short="l",
                long="level",
                description="Level.",
                default="3",
                optional=True,
                base=8,
            ),
        ] = 0

    tag = _tags.parse_field_tag(_fields(A)["level"], 0, "level")
    assert tag == _tags.FieldTag(
        kind=_tags.TagKind.OPTION,
        typ=int,
        short_name="l",
        long_name="level",
        description="Level.",
        default="3",
        optional_argument=True,
        base=8,
    )


def test_empty_names_are_unset() -> None:
    @dataclasses.dataclass
    class A:
        x: Annotated[int, opt(short="", long="x")] = 0

    tag = _tags.parse_field_tag(_fields(A)["x"], 0, "x")
    assert tag.short_name is None
    assert tag.long_name == "x"


def test_outermost_opt_wins() -> None:
    Inner = Annotated[int, opt(long="inner")]

    @dataclasses.dataclass
    class A:
        x: Annotated[Inner, opt(long="outer")] = 0

    tag = _tags.parse_field_tag(_fields(A)["x"], 0, "x")
    assert tag.long_name == "outer"


def test_skip() -> None:
    @dataclasses.dataclass
    class A:
        plain: int = 0
        hidden: NoFlag[Annotated[int, opt(long="hidden")]] = 0
        _private: Annotated[int, opt(long="private")] = 0

    fields = _fields(A)
    for name in ("plain", "hidden", "_private"):
        tag = _tags.parse_field_tag(fields[name], 0, name)
        assert tag.kind is _tags.TagKind.SKIP

    assert _tags.parse_field_tag(fields["plain"], 0, "plain").warning is None
    assert _tags.parse_field_tag(fields["hidden"], 0, "hidden").warning is None
    assert "private" in str(
        _tags.parse_field_tag(fields["_private"], 0, "_private").warning
    )


def test_recurse() -> None:
    @dataclasses.dataclass
    class Inner:
        pass

    @dataclasses.dataclass
    class A:
        inner: Inner = dataclasses.field(default_factory=Inner)
        anything: Embed[Any] = None

    fields = _fields(A)
    assert (
        _tags.parse_field_tag(fields["inner"], Inner(), "inner").kind
        is _tags.TagKind.RECURSE
    )
    assert (
        _tags.parse_field_tag(fields["anything"], None, "anything").kind
        is _tags.TagKind.RECURSE
    )
    # Without an instance, unmarked fields are skipped.
    assert (
        _tags.parse_field_tag(fields["inner"], None, "inner").kind
        is _tags.TagKind.SKIP
    )


def test_short_name_too_long() -> None:
    @dataclasses.dataclass
    class A:
        x: Annotated[int, opt(short="xy")] = 0

    with pytest.raises(GroupError) as e:
        _tags.parse_field_tag(_fields(A)["x"], 0, "parent.x")
    assert e.value.kind is ErrorKind.SHORT_NAME_TOO_LONG
    assert e.value.field_name == "parent.x"
