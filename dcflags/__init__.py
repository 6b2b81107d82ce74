"""Declarative command-line options for dataclasses.

Fields annotated with :func:`dcflags.conf.opt` become options in a :class:`Group`,
which command-line drivers use to look options up by name and assign values to them.
"""

from . import conf
from ._converters import SlotKind, UnsupportedTypeAnnotationError
from ._errors import ConversionError, ErrorKind, GroupError
from ._group import Group, new_group
from ._option import Callback, Option, StoredSlot
from ._warnings import DcflagsWarning

__version__ = "0.1.0"

__all__ = [
    "conf",
    "Callback",
    "ConversionError",
    "DcflagsWarning",
    "ErrorKind",
    "Group",
    "GroupError",
    "Option",
    "SlotKind",
    "StoredSlot",
    "UnsupportedTypeAnnotationError",
    "new_group",
]
