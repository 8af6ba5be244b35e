"""Error types with formatted source context."""

from __future__ import annotations

from statusfmt.chars import Position
from statusfmt.constants import DEFAULT_FILENAME


class ParseError(Exception):
    """Raised on the first parse error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = DEFAULT_FILENAME, first_line: int = 1) -> str:
        """Render the error with the offending source line and a caret.

        *first_line* is the line number of the template's first line when
        the template was taken from a larger file.
        """
        lines = self.source.split("\n")
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_num = str(self.position.line + first_line - 1)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line_num}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class ExpectedCharError(ParseError):
    """A specific character was required; *actual* is None at end of input."""

    def __init__(
        self, expected: str, actual: str | None, position: Position, source: str
    ) -> None:
        self.expected = expected
        self.actual = actual
        got = "EOF" if actual is None else f"'{actual}'"
        super().__init__(f"expected '{expected}', got {got}", position, source)


class TrailingInputError(ParseError):
    """The template ended before the input did."""

    def __init__(self, char: str, position: Position, source: str) -> None:
        self.char = char
        super().__init__(f"unexpected '{char}'", position, source)


class NestingDepthError(ParseError):
    """Raised when { ... } nesting exceeds the configured maximum."""

    def __init__(self, max_depth: int, position: Position, source: str) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"template nesting exceeds maximum depth of {max_depth}", position, source
        )


class ArgValueError(Exception):
    """Raised when a formatter argument cannot be converted to the requested type."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        self.message = message
        super().__init__(message)
