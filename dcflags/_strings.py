"""Utilities and constants for working with strings."""

import textwrap
from typing import Optional, Sequence


def make_field_name(parts: Sequence[str]) -> str:
    """Join parts of a field name together. Used for nesting.

    ('parent', 'child') => 'parent.child'
    ('', 'child') => 'child'
    """
    return ".".join(part for part in parts if len(part) > 0)


def dedent(text: str) -> str:
    """Same as textwrap.dedent, but ignores the first line."""
    first_line, line_break, rest = text.partition("\n")
    if line_break == "":
        return textwrap.dedent(text)
    return f"{first_line.strip()}\n{textwrap.dedent(rest)}"


def format_flag(short_name: Optional[str], long_name: Optional[str]) -> str:
    """Canonical spelling of an option.

    ('v', 'verbose') => '-v, --verbose'
    ('v', None) => '-v'
    (None, 'verbose') => '--verbose'
    """
    if short_name is not None:
        if long_name is not None:
            return f"-{short_name}, --{long_name}"
        return f"-{short_name}"
    elif long_name is not None:
        return f"--{long_name}"
    return ""
