"""Command-line interface for statusfmt."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from statusfmt.chars import split_lines
from statusfmt.constants import CONFIG_FILENAME, MAX_NESTING_DEPTH
from statusfmt.errors import ParseError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    templates: list[str]
    output_file: Path | None
    max_depth: int
    check: bool
    debug: bool
    verbose: bool


@dataclass(frozen=True, slots=True)
class TemplateSource:
    """One template to parse, with where it came from for diagnostics."""

    filename: str
    line: int
    text: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="statusfmt",
        description="Parse status-bar format templates and dump their structure",
    )
    p.add_argument(
        "input",
        nargs="?",
        help="Template file, one template per line ('-' for stdin)",
    )
    p.add_argument(
        "-t",
        "--template",
        action="append",
        default=[],
        metavar="TEXT",
        help="Template given on the command line (repeatable)",
    )
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum {{...}} nesting depth (default: {MAX_NESTING_DEPTH})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument("--check", action="store_true", help="Only report errors, print no AST")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def check_depth(value: Any, origin: str) -> int:
    """Validate a max_depth setting, which must be a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise argparse.ArgumentTypeError(
            f"invalid max_depth from {origin} (expected a positive integer): {value!r}"
        )
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    input_dir = Path(".")
    if input_file is not None and str(input_file) != "-" and input_file.parent.parts:
        input_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    max_depth = MAX_NESTING_DEPTH
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict) and "max_depth" in cfg_parser:
        max_depth = check_depth(cfg_parser["max_depth"], "config")
    if args.max_depth is not None:
        max_depth = check_depth(args.max_depth, "--max-depth")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        templates=list(args.template),
        output_file=output_file,
        max_depth=max_depth,
        check=args.check,
        debug=args.debug,
        verbose=args.verbose,
    )


def collect_templates(options: CliOptions) -> list[TemplateSource]:
    """Read templates from the input file (one per non-blank line) and -t flags."""
    sources: list[TemplateSource] = []

    if options.input_file is not None:
        if str(options.input_file) == "-":
            filename = "<stdin>"
            text = sys.stdin.read()
        else:
            filename = str(options.input_file)
            text = options.input_file.read_text(encoding="utf-8")
        for lineno, line in enumerate(split_lines(text), start=1):
            if line.strip():
                sources.append(TemplateSource(filename, lineno, line))

    for i, template in enumerate(options.templates, start=1):
        sources.append(TemplateSource(f"<template {i}>", 1, template))

    return sources


def parse_templates(options: CliOptions, sources: list[TemplateSource]) -> tuple[str, int]:
    """Parse every source, returning the AST dump text and the error count.

    Errors are reported to stderr as they are found; parsing continues with
    the next template.
    """
    from statusfmt.debug import dump_ast
    from statusfmt.parser import parse

    out = io.StringIO()
    errors = 0

    for src in sources:
        try:
            template = parse(src.text, options.max_depth)
        except ParseError as exc:
            print(exc.format(src.filename, first_line=src.line), file=sys.stderr)
            errors += 1
            continue

        if options.debug:
            dump_ast(template, file=sys.stderr)
        if not options.check:
            out.write(f"# {src.filename}:{src.line}\n")
            dump_ast(template, file=out)

    return out.getvalue(), errors


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.input is None and not args.template:
        print("error: no input file or --template given", file=sys.stderr)
        return 2

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        sources = collect_templates(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    dump, errors = parse_templates(options, sources)

    if not options.check:
        if options.output_file:
            options.output_file.write_text(dump, encoding="utf-8")
        else:
            sys.stdout.write(dump)

    return 1 if errors else 0
