"""Tests for icons, nested templates, token lists and alternatives."""

from __future__ import annotations

import pytest

from statusfmt import parse as package_parse
from statusfmt.ast import (
    Arg,
    FormatTemplate,
    Formatter,
    Icon,
    Placeholder,
    Recursive,
    Text,
    TokenList,
)
from statusfmt.errors import ParseError


class TestIcon:
    def test_icon(self, parser_for):
        p = parser_for("^icon_my_icon")
        assert p.parse_icon() == "my_icon"
        assert p.at_eof

    def test_single_char_name(self, parser_for):
        assert parser_for("^icon_m").parse_icon() == "m"

    def test_stops_at_text(self, parser_for):
        p = parser_for("^icon_net_up ")
        assert p.parse_icon() == "net_up"
        assert p.rest == " "

    def test_missing_name(self, parser_for):
        with pytest.raises(ParseError, match="expected icon name"):
            parser_for("^icon_").parse_icon()

    def test_missing_prefix(self, parser_for):
        with pytest.raises(ParseError, match="expected 'icon_' after '\\^'"):
            parser_for("^2").parse_icon()

    def test_not_an_icon(self, parser_for):
        assert parser_for("icon_x").parse_icon() is None


class TestTokenList:
    def test_mixed(self, parser_for):
        p = parser_for(" abc \\$ $var.str(a:b)$x ")
        assert p.parse_token_list() == TokenList(
            (
                Text(" abc $ "),
                Placeholder("var", Formatter("str", (Arg("a", "b"),))),
                Placeholder("x"),
                Text(" "),
            )
        )
        assert p.at_eof

    def test_stops_at_pipe(self, parser_for):
        p = parser_for("a|b")
        assert p.parse_token_list() == TokenList((Text("a"),))
        assert p.rest == "|b"

    def test_stops_at_closing_brace(self, parser_for):
        p = parser_for("a}b")
        assert p.parse_token_list() == TokenList((Text("a"),))
        assert p.rest == "}b"

    def test_empty(self, parser_for):
        assert parser_for("").parse_token_list() == TokenList(())

    def test_adjacent_placeholders(self, single_alternative):
        assert single_alternative("$a$b") == (Placeholder("a"), Placeholder("b"))

    def test_formatter_then_text(self, single_alternative):
        assert single_alternative("$a.eng(w:4)B/s") == (
            Placeholder("a", Formatter("eng", (Arg("w", "4"),))),
            Text("B/s"),
        )

    def test_placeholder_name_with_combining_marks(self, single_alternative):
        assert single_alternative("$\u0928\u093e\u092e ok") == (
            Placeholder("\u0928\u093e\u092e"),
            Text(" ok"),
        )


class TestAlternatives:
    def test_simple(self, parse_source):
        assert parse_source("simple") == FormatTemplate((TokenList((Text("simple"),)),))

    def test_two_alternatives(self, parse_source):
        assert parse_source(" $x.str() | N/A ") == FormatTemplate(
            (
                TokenList(
                    (
                        Text(" "),
                        Placeholder("x", Formatter("str", ())),
                        Text(" "),
                    )
                ),
                TokenList((Text(" N/A "),)),
            )
        )

    def test_empty_input(self, parse_source):
        assert parse_source("") == FormatTemplate((TokenList(()),))

    def test_lone_pipe(self, parse_source):
        assert parse_source("|") == FormatTemplate((TokenList(()), TokenList(())))

    def test_empty_middle_alternative(self, parse_source):
        template = parse_source("a||b")
        assert [len(alt.tokens) for alt in template.alternatives] == [1, 0, 1]

    def test_pipes_inside_braces_are_nested(self, parse_source):
        template = parse_source("a{b|c}d")
        assert len(template.alternatives) == 1


class TestRecursive:
    def test_full_example(self, parse_source):
        assert parse_source(" ^icon_my_icon {$x.str()|N/A} ") == FormatTemplate(
            (
                TokenList(
                    (
                        Text(" "),
                        Icon("my_icon"),
                        Text(" "),
                        Recursive(
                            FormatTemplate(
                                (
                                    TokenList((Placeholder("x", Formatter("str", ())),)),
                                    TokenList((Text("N/A"),)),
                                )
                            )
                        ),
                        Text(" "),
                    )
                ),
            )
        )

    def test_empty_braces(self, single_alternative):
        assert single_alternative("{}") == (Recursive(FormatTemplate((TokenList(()),))),)

    def test_deep_nesting(self, single_alternative):
        tokens = single_alternative("{{{x}}}")
        inner = tokens[0]
        for _ in range(2):
            assert isinstance(inner, Recursive)
            inner = inner.template.alternatives[0].tokens[0]
        assert isinstance(inner, Recursive)
        assert inner.template.alternatives[0].tokens == (Text("x"),)

    def test_unclosed(self, parse_source):
        with pytest.raises(ParseError, match="expected '}', got EOF"):
            parse_source("{$x|N/A")

    def test_stray_closing_brace(self, parse_source):
        with pytest.raises(ParseError, match="unexpected '}'"):
            parse_source("a}")


class TestPackageEntryPoint:
    def test_same_result(self, parse_source):
        assert package_parse("$a|b") == parse_source("$a|b")

    def test_max_depth_passed_through(self):
        with pytest.raises(ParseError, match="maximum depth of 1"):
            package_parse("{{x}}", max_depth=1)
