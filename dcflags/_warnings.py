"""Custom warning category for dcflags."""

import inspect
import warnings


class DcflagsWarning(UserWarning):
    """Warning category for dcflags-specific warnings.

    This can be used to filter dcflags warnings:
    >>> import warnings
    >>> warnings.filterwarnings("ignore", category=DcflagsWarning)
    """

    pass


def warn(message: str) -> None:
    """Emit a `DcflagsWarning`, attributed to the first caller outside of dcflags.

    Group scanning is recursive, so a fixed `stacklevel` would point into dcflags
    itself."""
    stacklevel = 1
    frame = inspect.currentframe()
    while frame is not None and _is_internal(frame.f_globals.get("__name__", "")):
        frame = frame.f_back
        stacklevel += 1
    del frame
    warnings.warn(message, category=DcflagsWarning, stacklevel=stacklevel)


def _is_internal(module_name: str) -> bool:
    return module_name == "dcflags" or module_name.startswith("dcflags.")
