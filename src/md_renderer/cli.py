"""Command line entry point for md-renderer.

Reads a Markdown document, re-renders it in canonical form and writes the
result to stdout, a file, or back over the input.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    MD_RENDERER_CONFIG: Explicit config file path (optional)
    MD_RENDERER_STRICT: Fail when content is dropped (optional, default: false)
    LOG_LEVEL: Logging level (optional, default: WARNING)
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .config_loader import load_hierarchical_config
from .config_schema import UnifiedConfig, build_config
from .converters import render_with_diagnostics
from .errors import ConfigError, StrictModeError
from .file_handler import (
    decode_bytes,
    read_file_with_encoding,
    validate_file_path,
    write_file,
)
from .logger import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_STRICT = 2


def get_bool_env(key: str) -> bool | None:
    """Return True/False from env var, or None if unset."""
    val = os.getenv(key)
    if val is None:
        return None
    return val.lower() in ("true", "1", "yes", "on")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md-renderer",
        description="Re-render Markdown documents in canonical form",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Normalise a file to stdout
  md-renderer README.md

  # Read from stdin
  cat notes.md | md-renderer -

  # Rewrite a file in place, keeping its encoding
  md-renderer --in-place docs/guide.md

  # CI check: exit 1 when the file is not canonical
  md-renderer --check docs/guide.md

Content the renderer does not support (tables, raw HTML, soft line
breaks, definition lists) is dropped and reported on stderr.
        """,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Markdown file to render ('-' or omitted for stdin)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o",
        "--output",
        help="Write the result to this file instead of stdout",
    )
    output.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite the input file with the result",
    )
    output.add_argument(
        "--check",
        action="store_true",
        help="Write nothing; exit 1 if the input is not already canonical",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit 2 if any content could not be rendered",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also append log records to this file",
    )
    parser.add_argument(
        "--debug-format",
        choices=["text", "json"],
        help="Log record format (default: text)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"md-renderer version {__version__}",
    )
    return parser


def _load_config() -> UnifiedConfig:
    load_dotenv()
    return build_config(load_hierarchical_config())


def _read_input(source: str) -> tuple[str, str, Path | None]:
    """Return (content, encoding, path); path is None for stdin."""
    if source == "-":
        content, encoding = decode_bytes(sys.stdin.buffer.read())
        return content, encoding, None

    path = validate_file_path(source)
    content, encoding = read_file_with_encoding(path)
    logger.debug("Read %s (%s)", path, encoding)
    return content, encoding, path


def main(argv: list[str] | None = None) -> int:
    """Run the renderer and return a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.in_place and args.input == "-":
        parser.error("--in-place requires an input file")

    try:
        config = _load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(
        debug=args.debug,
        log_file=args.log_file or config.logging.file,
        debug_format=args.debug_format or config.logging.format,
        level=config.logging.level,
    )

    if args.strict:
        strict = True
    else:
        env_strict = get_bool_env("MD_RENDERER_STRICT")
        strict = env_strict if env_strict is not None else config.render.strict

    try:
        content, encoding, path = _read_input(args.input)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        result = render_with_diagnostics(
            content,
            strict=strict,
            trailing_newline=config.render.trailing_newline,
        )
    except StrictModeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_STRICT

    name = str(path) if path else "<stdin>"

    if args.check:
        if result.changed:
            print(f"would reformat {name}", file=sys.stderr)
            return EXIT_ERROR
        return EXIT_OK

    try:
        if args.in_place:
            # path is set: --in-place with stdin was rejected above
            written = write_file(path, result.text, encoding)
            logger.info("Rewrote %s (%d bytes)", name, written)
        elif args.output:
            written = write_file(Path(args.output), result.text)
            logger.info("Wrote %s (%d bytes)", args.output, written)
        else:
            sys.stdout.write(result.text)
            sys.stdout.flush()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
