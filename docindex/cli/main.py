#!/usr/bin/env python
"""Generate index.html for a tree of markdown articles.

Usage:
    docindex                      # scan the current directory
    docindex path/to/repo         # scan another checkout
    docindex --output site/index.html --config curation.yml

Config lookup (first match wins):
    1. --config PATH
    2. ROOT/scripts/config.yml
    3. ROOT/docindex.yml

Article dates come from git history. Without history the current date is
used and reported; pass --strict-dates to fail instead.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from ..config import load_config
from ..errors import DocIndexError
from ..generator import GenerationResult, generate

LOGGER_NAME = "docindex"


def configure_logging(verbosity: int) -> None:
    """Route docindex logs through Rich on stderr.

    Args:
        verbosity: 0 for warnings, 1 for info, 2+ for debug
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=verbosity >= 2,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False


def report(result: GenerationResult, console: Console) -> None:
    """Print the progress summary lines."""
    console.print(f"✅ {result.output_path.name} generated successfully!", soft_wrap=True)
    console.print(
        f"📊 Found {result.document_count} articles in {result.category_count} categories",
        soft_wrap=True,
    )
    fallback = result.fallback_dates
    if fallback:
        console.print(
            f"[dim]⚠ {len(fallback)} article(s) dated from the current date "
            "(no git history); output is not reproducible[/dim]",
            soft_wrap=True,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docindex",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("root", nargs="?", default=".", help="Content root to scan (default: .)")
    parser.add_argument("--output", "-o", help="Output file (default: ROOT/index.html)")
    parser.add_argument("--config", "-c", help="Curation config YAML file")
    parser.add_argument(
        "--strict-dates",
        action="store_true",
        help="Fail when an article has no git history instead of using today's date",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show progress logs (-v for info, -vv for debug)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress the summary lines on stdout",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full tracebacks on error",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the docindex CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.root, args.config)
        result = generate(
            root=args.root,
            output=args.output,
            config=config,
            strict_dates=args.strict_dates,
        )
    except DocIndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            raise
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            raise
        return 1
    except KeyboardInterrupt:
        print("\nAborted by user", file=sys.stderr)
        return 1

    if not args.quiet:
        report(result, Console())
    return 0


if __name__ == "__main__":
    sys.exit(main())
