"""Shared test fixtures and Hypothesis profiles.

Hypothesis profile selection:
- HYPOTHESIS_PROFILE env var -> explicit override ("dev" or "ci")
- CI=true -> "ci" (fewer examples, derandomized)
- Otherwise -> "dev"
"""

from __future__ import annotations

import os

import pytest
from hypothesis import settings

from statusfmt.ast import FormatTemplate, Token
from statusfmt.parser import Parser, parse

settings.register_profile("dev", max_examples=300)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


@pytest.fixture
def parse_source():
    """Return a helper that parses a full template."""

    def _parse(source: str, max_depth: int | None = None) -> FormatTemplate:
        return parse(source, max_depth)

    return _parse


@pytest.fixture
def parser_for():
    """Return a helper that builds a Parser positioned at the start of source."""

    def _parser(source: str) -> Parser:
        return Parser(source)

    return _parser


@pytest.fixture
def single_alternative():
    """Return a helper that parses source and returns the tokens of its only alternative."""

    def _tokens(source: str) -> tuple[Token, ...]:
        template = parse(source)
        assert len(template.alternatives) == 1, (
            f"Expected 1 alternative, got {len(template.alternatives)}"
        )
        return template.alternatives[0].tokens

    return _tokens
