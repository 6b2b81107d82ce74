"""Helpers for pulling option descriptions out of dataclass source code.

An option without an explicit `description=` falls back to, in order:
- An `Attributes:` entry in the class docstring.
- A docstring on the line after the field.
- A comment on the same line as the field.
- Contiguous comments directly above the field.
"""

import dataclasses
import functools
import inspect
import io
import tokenize
from typing import Dict, List, Optional, Type

import docstring_parser

from . import _strings


@dataclasses.dataclass(frozen=True)
class _Token:
    token_type: int
    content: str
    logical_line: int
    actual_line: int


@dataclasses.dataclass(frozen=True)
class _FieldData:
    logical_line: int
    actual_line: int


@dataclasses.dataclass(frozen=True)
class _ClassTokenization:
    tokens_from_logical_line: Dict[int, List[_Token]]
    tokens_from_actual_line: Dict[int, List[_Token]]
    field_data_from_name: Dict[str, _FieldData]

    @staticmethod
    @functools.lru_cache(maxsize=8)
    def make(clz) -> "_ClassTokenization":
        """Parse the source code of a class, and cache some tokenization information."""
        readline = io.BytesIO(inspect.getsource(clz).encode("utf-8")).readline

        tokens: List[_Token] = []
        tokens_from_logical_line: Dict[int, List[_Token]] = {1: []}
        tokens_from_actual_line: Dict[int, List[_Token]] = {1: []}
        field_data_from_name: Dict[str, _FieldData] = {}

        logical_line: int = 1
        actual_line: int = 1
        for toktype, tok, _start, _end, _line in tokenize.tokenize(readline):
            # `tokenize.NEWLINE` ends a logical line; `tokenize.NL` only ends a
            # physical one.
            if toktype == tokenize.NEWLINE:
                logical_line += 1
                actual_line += 1
                tokens_from_logical_line[logical_line] = []
                tokens_from_actual_line[actual_line] = []
            elif toktype == tokenize.NL:
                actual_line += 1
                tokens_from_actual_line[actual_line] = []
            elif toktype is not tokenize.INDENT:
                token = _Token(
                    token_type=toktype,
                    content=tok,
                    logical_line=logical_line,
                    actual_line=actual_line,
                )
                tokens.append(token)
                tokens_from_logical_line[logical_line].append(token)
                tokens_from_actual_line[actual_line].append(token)

        for i, token in enumerate(tokens[:-1]):
            # Naive heuristic for field names: a name followed by a colon, at the
            # start of a line.
            if (
                token.token_type == tokenize.NAME
                and tokens[i + 1].content == ":"
                and token == tokens_from_actual_line[token.actual_line][0]
                and token.content not in field_data_from_name
            ):
                field_data_from_name[token.content] = _FieldData(
                    logical_line=token.logical_line,
                    actual_line=token.actual_line,
                )

        return _ClassTokenization(
            tokens_from_logical_line=tokens_from_logical_line,
            tokens_from_actual_line=tokens_from_actual_line,
            field_data_from_name=field_data_from_name,
        )


def _get_class_tokenization_with_field(
    cls: Type, field_name: str
) -> Optional[_ClassTokenization]:
    # Search for the field in this class + all dataclass parents.
    for search_cls in cls.mro():
        if not dataclasses.is_dataclass(search_cls):
            continue
        try:
            tokenization = _ClassTokenization.make(search_cls)  # type: ignore
        except (OSError, TypeError):
            # Dynamic dataclasses and classes defined in notebooks or the REPL have
            # no retrievable source. We just assume there's no docstring.
            return None

        if field_name in tokenization.field_data_from_name:
            return tokenization

    return None


def _get_attribute_docstring(cls: Type, field_name: str) -> Optional[str]:
    for search_cls in cls.mro():
        if search_cls.__module__ == "builtins" or search_cls.__doc__ is None:
            continue
        try:
            params = docstring_parser.parse(search_cls.__doc__).params
        except docstring_parser.ParseError:
            continue
        for param in params:
            if param.arg_name == field_name and param.description is not None:
                return param.description.strip()
    return None


def get_field_docstring(cls: Type, field_name: str) -> Optional[str]:
    """Get docstring for a field in a class."""

    docstring = _get_attribute_docstring(cls, field_name)
    if docstring is not None:
        return docstring

    tokenization = _get_class_tokenization_with_field(cls, field_name)
    if tokenization is None:
        return None

    field_data = tokenization.field_data_from_name[field_name]

    # Check for docstring-style comment. This should be on the next logical line.
    logical_line = field_data.logical_line + 1
    if len(tokenization.tokens_from_logical_line.get(logical_line, [])) >= 1:
        first_token = tokenization.tokens_from_logical_line[logical_line][0]
        first_token_content = first_token.content.strip()

        if (
            first_token.token_type == tokenize.STRING
            and first_token_content.startswith('"""')
            and first_token_content.endswith('"""')
        ):
            return _strings.dedent(first_token_content[3:-3]).strip()

    # Check for comment on the same line as the field.
    final_token_on_line = tokenization.tokens_from_logical_line[
        field_data.logical_line
    ][-1]
    if final_token_on_line.token_type == tokenize.COMMENT:
        comment: str = final_token_on_line.content
        assert comment.startswith("#")
        return comment[1:].strip()

    # Check for comments that come before the field. Comments can cover multiple
    # (grouped) fields, for example:
    #
    #     # Output verbosity.
    #     verbose: Annotated[bool, opt(short="v")] = False
    #     quiet: Annotated[bool, opt(short="q")] = False
    comments: List[str] = []
    current_actual_line = field_data.actual_line - 1
    while current_actual_line in tokenization.tokens_from_actual_line:
        actual_line_tokens = tokenization.tokens_from_actual_line[current_actual_line]
        current_actual_line -= 1

        # We stop looking if we find an empty line.
        if len(actual_line_tokens) == 0:
            break

        if (
            len(actual_line_tokens) == 1
            and actual_line_tokens[0].token_type == tokenize.COMMENT
        ):
            (comment_token,) = actual_line_tokens
            assert comment_token.content.startswith("#")
            comments.append(comment_token.content[1:].strip())
        elif len(comments) > 0:
            # Comments should be contiguous.
            break

    if len(comments) > 0:
        return "\n".join(reversed(comments))

    return None


def get_dataclass_description(cls: Type) -> str:
    """Get dataclass docstring, but only if it is hand-specified.

    Note that `dataclasses.dataclass` will automatically populate __doc__ based on
    the fields of the class if a docstring is not specified; this helper ignores
    these docstrings."""
    if cls.__doc__ is None:
        return ""

    # Ignore default docstrings, as generated by `dataclasses.dataclass`.
    default_doc = cls.__name__ + str(inspect.signature(cls)).replace(" -> None", "")
    if cls.__doc__ == default_doc:
        return ""

    parsed = docstring_parser.parse(cls.__doc__)
    parts: List[str] = []
    if parsed.short_description is not None:
        parts.append(parsed.short_description)
    if parsed.long_description is not None:
        parts.append(parsed.long_description)
    return "\n".join(parts)
