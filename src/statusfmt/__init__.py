"""Status-bar format template parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from statusfmt.ast import FormatTemplate

__version__ = "0.1.0"


def parse(source: str, max_depth: int | None = None) -> FormatTemplate:
    """Parse a format template string into its AST."""
    from statusfmt.parser import parse as parse_template

    return parse_template(source, max_depth)
