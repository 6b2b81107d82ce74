"""Library-wide settings.

Values are read once from the environment when dcflags is imported, and can be
temporarily overridden with the context managers below.
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

from typing_extensions import TypedDict


class OptionsDict(TypedDict):
    """Options for dcflags.

    Attributes:
        key_value_delimiter: Separator between key and value for options bound to
            mapping fields, for example `--define name=value`.
    """

    key_value_delimiter: str


def read_option(str_name: str, default: str) -> str:
    value = os.environ.get(str_name, default)
    assert len(value) > 0, f"{str_name} cannot be empty."
    return value


options: OptionsDict = {
    "key_value_delimiter": read_option("PYTHON_DCFLAGS_KEY_VALUE_DELIMITER", "="),
}


@contextlib.contextmanager
def key_value_delimiter_context(delimiter: str) -> Iterator[None]:
    """Context for setting the key/value delimiter. Not thread-safe."""
    assert len(delimiter) > 0, "Delimiter cannot be empty."
    restore = options["key_value_delimiter"]
    options["key_value_delimiter"] = delimiter
    try:
        yield
    finally:
        options["key_value_delimiter"] = restore
