from __future__ import annotations

import dataclasses
from typing import Any, Optional


@dataclasses.dataclass(frozen=True)
class _OptConfig:
    short: Optional[str]
    long: Optional[str]
    description: Optional[str]
    default: Optional[str]
    optional: bool
    base: int


def opt(
    *,
    short: Optional[str] = None,
    long: Optional[str] = None,
    description: Optional[str] = None,
    default: Optional[str] = None,
    optional: bool = False,
    base: int = 10,
) -> Any:
    """Attach command-line option metadata to a dataclass field.

    Example::

        from dataclasses import dataclass, field
        from typing import Annotated, List
        from dcflags import conf

        @dataclass
        class Options:
            verbose: Annotated[bool, conf.opt(short="v", long="verbose")] = False

            # Repeated flags append: -I a -I b => ["a", "b"].
            include: Annotated[List[str], conf.opt(short="I")] = field(
                default_factory=list
            )

            # `--level` alone sets 3; `--level 5` sets 5.
            level: Annotated[
                int, conf.opt(long="level", default="3", optional=True)
            ] = 0

    At least one of `short` or `long` must be set for the field to become an option.

    Args:
        short: Single-character name, activated with `-<short>`.
        long: Long name, activated with `--<long>`.
        description: Text for help rendering. The field's docstring is used by
            default.
        default: Textual value assigned when the flag appears without an argument.
            Only used together with `optional=True`, and never for boolean fields.
        optional: Whether the argument to the flag may be omitted.
        base: Radix used for integer fields. `0` infers it from prefixes like `0x`.

    Returns:
        A configuration object that should be attached to a type using `Annotated[]`.
    """
    return _OptConfig(
        # Empty strings are treated as unset.
        short=short if short else None,
        long=long if long else None,
        description=description,
        default=default,
        optional=optional,
        base=base,
    )
