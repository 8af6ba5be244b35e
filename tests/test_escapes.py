"""Test literal text runs and backslash escapes."""

import pytest

from statusfmt.ast import Placeholder, Text
from statusfmt.errors import ParseError


class TestTextRuns:
    def test_plain(self, parser_for):
        p = parser_for("hello world")
        assert p.parse_text() == "hello world"
        assert p.at_eof

    def test_stops_at_specials(self, parser_for):
        for special in "$^{}|":
            p = parser_for(f"ab{special}cd")
            assert p.parse_text() == "ab"
            assert p.rest == f"{special}cd"

    def test_empty_does_not_match(self, parser_for):
        p = parser_for("$x")
        assert p.parse_text() is None
        assert p.rest == "$x"

    def test_eof_does_not_match(self, parser_for):
        assert parser_for("").parse_text() is None

    def test_keeps_whitespace(self, single_alternative):
        assert single_alternative("  a \t b  ") == (Text("  a \t b  "),)

    def test_non_special_punctuation(self, single_alternative):
        assert single_alternative("N/A: 50% (ok), 'quoted'") == (
            Text("N/A: 50% (ok), 'quoted'"),
        )


class TestEscapes:
    def test_escaped_specials(self, single_alternative):
        for special in "$^{}|\\":
            assert single_alternative("\\" + special) == (Text(special),)

    def test_escaped_ordinary_char(self, single_alternative):
        assert single_alternative("\\n") == (Text("n"),)

    def test_escape_inside_run(self, parser_for):
        p = parser_for(" abc \\$ $var")
        assert p.parse_text() == " abc $ "
        assert p.rest == "$var"

    def test_leading_escape(self, parser_for):
        p = parser_for("\\{x\\}")
        assert p.parse_text() == "{x}"
        assert p.at_eof

    def test_consecutive_escapes(self, single_alternative):
        assert single_alternative("\\\\\\|") == (Text("\\|"),)

    def test_escaped_pipe_does_not_split(self, parse_source):
        template = parse_source("a\\|b")
        assert len(template.alternatives) == 1
        assert template.alternatives[0].tokens == (Text("a|b"),)

    def test_escaped_newline(self, single_alternative):
        assert single_alternative("a\\\nb") == (Text("a\nb"),)

    def test_escape_between_placeholders(self, single_alternative):
        assert single_alternative("$a\\$$b") == (
            Placeholder("a"),
            Text("$"),
            Placeholder("b"),
        )


class TestDanglingEscape:
    def test_alone(self, parse_source):
        with pytest.raises(ParseError, match="dangling"):
            parse_source("\\")

    def test_after_text(self, parse_source):
        with pytest.raises(ParseError) as exc_info:
            parse_source("abc\\")
        assert exc_info.value.position.offset == 3
