"""Command-line interface: lex a Sylan source file and print its tokens."""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sylan.errors import LexError, SourceReadError
from sylan.tokens import TokenKind, line_and_column

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    skip_comments: bool
    positions: bool
    debug: bool
    log_level: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="sylan",
        description="Lex a Sylan source file and print one token per line",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover sylan.toml)",
    )
    p.add_argument(
        "--skip-comments",
        action="store_true",
        default=None,
        help="Leave comment tokens out of the output",
    )
    p.add_argument(
        "--positions",
        action="store_true",
        default=None,
        help="Prefix each token with its line:column",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens with offsets to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "sylan.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_flag(config: dict[str, Any], table: str, key: str) -> bool:
    section = config.get(table)
    if isinstance(section, dict):
        value = section.get(key)
        if isinstance(value, bool):
            return value
    return False


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    skip_comments = _config_flag(config, "lexer", "skip_comments")
    if args.skip_comments is not None:
        skip_comments = args.skip_comments

    positions = _config_flag(config, "output", "positions")
    if args.positions is not None:
        positions = args.positions

    log_level = "WARNING"
    cfg_logging = config.get("logging")
    if isinstance(cfg_logging, dict) and "level" in cfg_logging:
        log_level = str(cfg_logging["level"]).upper()
        if log_level not in _LOG_LEVELS:
            raise argparse.ArgumentTypeError(f"invalid log level in config: {log_level}")
    if args.verbose:
        log_level = "DEBUG"

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        skip_comments=skip_comments,
        positions=positions,
        debug=args.debug,
        log_level=log_level,
    )


def check_input(path: Path) -> str | None:
    """Return an error message if *path* cannot be lexed, else None."""
    if not path.exists():
        return f"path does not exist: '{path}'"
    if not path.is_file():
        return f"file is not a regular file: '{path}'"
    if not os.access(path, os.R_OK):
        return f"file is not readable: '{path}'"
    return None


def lex_file(options: CliOptions) -> str:
    """Read and lex a source file, returning the printable token listing."""
    from sylan.debug import dump_tokens
    from sylan.lexer import Lexer
    from sylan.source import SourceStream

    data = options.input_file.read_bytes()
    source = data.decode("latin-1")
    lexer = Lexer(SourceStream(io.BytesIO(data)), source)
    positioned = list(lexer.positioned())
    logger.info("lexed %d tokens from %s", len(positioned), options.input_file)

    if options.debug:
        dump_tokens(positioned, source, file=sys.stderr)

    lines = []
    for start, token in positioned:
        if options.skip_comments and token.kind is TokenKind.COMMENT:
            continue
        if options.positions:
            line, col = line_and_column(source, start.offset)
            lines.append(f"{line}:{col}\t{token}")
        else:
            lines.append(str(token))
    return "".join(f"{line}\n" for line in lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=options.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    problem = check_input(options.input_file)
    if problem is not None:
        print(f"error: {problem}", file=sys.stderr)
        return 1

    try:
        listing = lex_file(options)
    except LexError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except (SourceReadError, OSError) as exc:
        logger.debug("read failure", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(listing, encoding="utf-8")
    else:
        sys.stdout.write(listing)

    return 0
