"""Format template parser: recursive descent over the source characters."""

from __future__ import annotations

import logging
from collections.abc import Callable

from statusfmt.ast import (
    Arg,
    FormatTemplate,
    Formatter,
    Icon,
    Placeholder,
    Recursive,
    Text,
    Token,
    TokenList,
)
from statusfmt.chars import (
    ESCAPE_CHAR,
    Position,
    is_ident_char,
    is_mark,
    is_space,
    is_text_char,
    is_value_char,
)
from statusfmt.constants import EXCERPT_LENGTH, MAX_NESTING_DEPTH
from statusfmt.depth import depth_clamp
from statusfmt.errors import (
    ExpectedCharError,
    NestingDepthError,
    ParseError,
    TrailingInputError,
)

logger = logging.getLogger(__name__)

_ICON_PREFIX = "icon_"


class Parser:
    """Recursive descent parser for format templates.

    Each production method returns its node and advances past it, returns
    None without consuming anything when the input does not start with
    that production, or raises ParseError once the production is committed
    (its leading character has been consumed).
    """

    def __init__(self, source: str, max_depth: int = MAX_NESTING_DEPTH) -> None:
        self._source = source
        self._pos = 0
        self._depth = 0
        self._max_depth = depth_clamp(max_depth)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def rest(self) -> str:
        """The unconsumed remainder of the input."""
        return self._source[self._pos :]

    @property
    def at_eof(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _at(self, ch: str) -> bool:
        return self._peek() == ch

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _take_while(self, pred: Callable[[str], bool]) -> str:
        start = self._pos
        while self._pos < len(self._source) and pred(self._source[self._pos]):
            self._pos += 1
        return self._source[start : self._pos]

    def _take_word(self, pred: Callable[[str], bool]) -> str | None:
        """Run of *pred* characters, where combining marks may follow the first."""
        if self.at_eof or not pred(self._peek()):
            return None
        return self._take_while(lambda ch: pred(ch) or is_mark(ch))

    def _expect(self, ch: str) -> None:
        if not self._at(ch):
            raise self._expected(ch)
        self._advance()

    # ------------------------------------------------------------------
    # Lexical primitives
    # ------------------------------------------------------------------

    def spaces(self) -> None:
        self._take_while(is_space)

    def identifier(self) -> str | None:
        return self._take_word(is_ident_char)

    def arg_value(self) -> str | None:
        """Bare value, or single-quoted value with the quotes stripped."""
        if self._at("'"):
            self._advance()
            value = self._take_while(lambda ch: ch != "'")
            self._expect("'")
            return value
        return self._take_word(is_value_char)

    # ------------------------------------------------------------------
    # Arguments and formatters
    # ------------------------------------------------------------------

    def parse_arg(self) -> Arg | None:
        key = self.identifier()
        if key is None:
            return None
        if not self._at(":"):
            return Arg(key)
        self._advance()  # consume ':'
        value = self.arg_value()
        if value is None:
            raise self._expected("'")
        return Arg(key, value)

    def parse_args(self) -> tuple[Arg, ...] | None:
        if not self._at("("):
            return None
        self._advance()  # consume '('

        args: list[Arg] = []
        self.spaces()
        arg = self.parse_arg()
        if arg is not None:
            args.append(arg)
            while True:
                saved_pos = self._pos
                self.spaces()
                if not self._at(","):
                    self._pos = saved_pos
                    break
                self._advance()  # consume ','
                self.spaces()
                arg = self.parse_arg()
                if arg is None:
                    # Trailing comma: leave it for the ')' check to report
                    self._pos = saved_pos
                    break
                args.append(arg)

        self.spaces()
        self._expect(")")
        return tuple(args)

    def parse_formatter(self) -> Formatter | None:
        if not self._at("."):
            return None
        self._advance()  # consume '.'
        name = self._require_identifier("formatter name after '.'")
        args = self.parse_args()
        return Formatter(name, args or ())

    def parse_placeholder(self) -> Placeholder | None:
        if not self._at("$"):
            return None
        self._advance()  # consume '$'
        name = self._require_identifier("placeholder name after '$'")
        return Placeholder(name, self.parse_formatter())

    def parse_icon(self) -> str | None:
        if not self._at("^"):
            return None
        self._advance()  # consume '^'
        if not self._source.startswith(_ICON_PREFIX, self._pos):
            raise self._fail(f"'{_ICON_PREFIX}' after '^'")
        self._pos += len(_ICON_PREFIX)
        return self._require_identifier("icon name")

    # ------------------------------------------------------------------
    # Text and templates
    # ------------------------------------------------------------------

    def parse_text(self) -> str | None:
        """Maximal run of literal text with backslash escapes decoded."""
        parts: list[str] = []
        while not self.at_eof:
            ch = self._peek()
            if ch == ESCAPE_CHAR:
                escape_pos = self._pos
                self._advance()
                if self.at_eof:
                    raise ParseError(
                        "dangling '\\' at end of input",
                        Position.at(self._source, escape_pos),
                        self._source,
                    )
                parts.append(self._advance())
            elif is_text_char(ch):
                parts.append(self._take_while(is_text_char))
            else:
                break
        return "".join(parts) or None

    def parse_recursive(self) -> FormatTemplate | None:
        if not self._at("{"):
            return None
        if self._depth >= self._max_depth:
            raise NestingDepthError(self._max_depth, self._position(), self._source)
        self._advance()  # consume '{'

        self._depth += 1
        try:
            template = self.parse_format_template()
        finally:
            self._depth -= 1

        self._expect("}")
        return template

    def parse_token(self) -> Token | None:
        text = self.parse_text()
        if text is not None:
            return Text(text)
        placeholder = self.parse_placeholder()
        if placeholder is not None:
            return placeholder
        icon = self.parse_icon()
        if icon is not None:
            return Icon(icon)
        template = self.parse_recursive()
        if template is not None:
            return Recursive(template)
        return None

    def parse_token_list(self) -> TokenList:
        tokens: list[Token] = []
        while (token := self.parse_token()) is not None:
            tokens.append(token)
        return TokenList(tuple(tokens))

    def parse_format_template(self) -> FormatTemplate:
        alternatives = [self.parse_token_list()]
        while self._at("|"):
            self._advance()
            alternatives.append(self.parse_token_list())
        return FormatTemplate(tuple(alternatives))

    def parse(self) -> FormatTemplate:
        """Parse the whole input as one template."""
        logger.debug("parsing template %r", self._source)
        try:
            template = self.parse_format_template()
            if not self.at_eof:
                raise TrailingInputError(self._peek(), self._position(), self._source)
        except ParseError as exc:
            logger.debug("parse failed at offset %d: %s", exc.position.offset, exc.message)
            raise
        return template

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_identifier(self, what: str) -> str:
        name = self.identifier()
        if name is None:
            raise self._fail(what)
        return name

    def _position(self) -> Position:
        return Position.at(self._source, self._pos)

    def _expected(self, ch: str) -> ExpectedCharError:
        actual = self._peek() or None
        return ExpectedCharError(ch, actual, self._position(), self._source)

    def _fail(self, what: str) -> ParseError:
        """Generic committed failure naming the production and nearby input."""
        excerpt = self.rest[:EXCERPT_LENGTH]
        near = f"near '{excerpt}'" if excerpt else "at end of input"
        return ParseError(f"expected {what} {near}", self._position(), self._source)


def parse(source: str, max_depth: int | None = None) -> FormatTemplate:
    """Convenience function: parse template source and return its AST."""
    if max_depth is None:
        max_depth = MAX_NESTING_DEPTH
    return Parser(source, max_depth).parse()
