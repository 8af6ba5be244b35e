"""AST node types for parsed format templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, TypeVar

from statusfmt.errors import ArgValueError

T = TypeVar("T")

_BOOL_LITERALS = {"true": True, "false": False}


@dataclass(frozen=True, slots=True)
class Arg:
    """Formatter argument: key or key:value."""

    key: str
    value: str | None = None

    def parse_value(self, target: type[T]) -> T:
        """Convert the textual value to *target*.

        A bare key (no value) reads as True when *target* is bool; any other
        combination requires a value that converts cleanly. bool accepts
        exactly 'true' and 'false'.

        Raises:
            ArgValueError: If the value is missing or cannot be converted.
        """
        if target is bool and self.value is None:
            return True  # type: ignore[return-value]
        if self.value is None:
            raise ArgValueError(self.key, f"missing value for argument '{self.key}'")
        try:
            return _convert(self.value, target)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ArgValueError(self.key, f"invalid value for argument '{self.key}'") from exc


def _convert(value: str, target: type[T]) -> T:
    if target is bool:
        if value not in _BOOL_LITERALS:
            raise ValueError(f"not a boolean literal: {value!r}")
        return _BOOL_LITERALS[value]  # type: ignore[return-value]
    if target is str:
        return value  # type: ignore[return-value]
    return target(value)  # type: ignore[call-arg]


@dataclass(frozen=True, slots=True)
class Formatter:
    """Formatter applied to a placeholder: .name(args...)."""

    name: str
    args: tuple[Arg, ...] = ()


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Value reference: $name with an optional formatter."""

    name: str
    formatter: Formatter | None = None


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text with escapes already resolved."""

    value: str


@dataclass(frozen=True, slots=True)
class Icon:
    """Icon reference ^icon_name; holds the name without the prefix."""

    name: str


@dataclass(frozen=True, slots=True)
class Recursive:
    """Nested template from { ... }."""

    template: FormatTemplate


Token: TypeAlias = Text | Placeholder | Icon | Recursive


@dataclass(frozen=True, slots=True)
class TokenList:
    """One alternative: an ordered, possibly empty, run of tokens."""

    tokens: tuple[Token, ...] = ()


@dataclass(frozen=True, slots=True)
class FormatTemplate:
    """Root node: one or more '|'-separated alternatives."""

    alternatives: tuple[TokenList, ...]
