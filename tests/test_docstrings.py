import dataclasses

from typing_extensions import Annotated

from dcflags import _docstrings
from dcflags.conf import opt


def test_field_docstrings() -> None:
    @dataclasses.dataclass
    class DocstringOptions:
        """Options with every kind of field documentation.

        Attributes:
            from_attributes: Documented in the class docstring.
        """

        from_attributes: Annotated[int, opt(long="a")] = 0
        from_docstring: Annotated[int, opt(long="b")] = 0
        """Documented below the field."""
        from_inline: Annotated[int, opt(long="c")] = 0  # Documented inline.

        # Documented above the field.
        # Across two lines.
        from_above: Annotated[int, opt(long="d")] = 0

        undocumented: Annotated[int, opt(long="e")] = 0

    def get(name: str):
        return _docstrings.get_field_docstring(DocstringOptions, name)

    assert get("from_attributes") == "Documented in the class docstring."
    assert get("from_docstring") == "Documented below the field."
    assert get("from_inline") == "Documented inline."
    assert get("from_above") == "Documented above the field.\nAcross two lines."
    assert get("undocumented") is None


def test_inherited_field_docstring() -> None:
    @dataclasses.dataclass
    class DocstringParent:
        level: Annotated[int, opt(long="level")] = 0
        """Inherited."""

    @dataclasses.dataclass
    class DocstringChild(DocstringParent):
        other: int = 0

    assert _docstrings.get_field_docstring(DocstringChild, "level") == "Inherited."


def test_dynamic_dataclass() -> None:
    cls = dataclasses.make_dataclass("Dynamic", [("x", int, 0)])
    assert _docstrings.get_field_docstring(cls, "x") is None
    assert _docstrings.get_dataclass_description(cls) == ""


def test_dataclass_description() -> None:
    @dataclasses.dataclass
    class DescribedOptions:
        """Short description.

        Longer description."""

        x: int = 0

    assert (
        _docstrings.get_dataclass_description(DescribedOptions)
        == "Short description.\nLonger description."
    )
