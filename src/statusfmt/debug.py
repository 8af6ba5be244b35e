"""Human-readable AST dump for --debug and CLI output."""

from __future__ import annotations

import sys
from typing import TextIO

from statusfmt.ast import (
    Arg,
    FormatTemplate,
    Formatter,
    Icon,
    Placeholder,
    Recursive,
    Text,
    Token,
)


def dump_ast(template: FormatTemplate, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    _dump_template(template, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_template(template: FormatTemplate, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Template\n")
    for i, alternative in enumerate(template.alternatives, start=1):
        f.write(f"{_indent(depth + 1)}Alternative {i}\n")
        for token in alternative.tokens:
            _dump_token(token, depth + 2, f)


def _dump_token(token: Token, depth: int, f: TextIO) -> None:
    if isinstance(token, Text):
        f.write(f"{_indent(depth)}Text({token.value!r})\n")
    elif isinstance(token, Placeholder):
        f.write(f"{_indent(depth)}Placeholder ${token.name}\n")
        if token.formatter is not None:
            _dump_formatter(token.formatter, depth + 1, f)
    elif isinstance(token, Icon):
        f.write(f"{_indent(depth)}Icon {token.name}\n")
    elif isinstance(token, Recursive):
        f.write(f"{_indent(depth)}Recursive\n")
        _dump_template(token.template, depth + 1, f)


def _dump_formatter(formatter: Formatter, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Formatter .{formatter.name}\n")
    for arg in formatter.args:
        _dump_arg(arg, depth + 1, f)


def _dump_arg(arg: Arg, depth: int, f: TextIO) -> None:
    if arg.value is None:
        f.write(f"{_indent(depth)}Arg {arg.key}\n")
    else:
        f.write(f"{_indent(depth)}Arg {arg.key}={arg.value!r}\n")
