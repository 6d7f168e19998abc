"""CLI entry point."""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, Optional

from ... import __version__
from ...application.batch_service import BatchService
from ...application.filters import linkify, url_to_image
from ...domain.configuration import ConverterConfig, with_cli_overrides
from ...domain.errors import Txt2HtmlError
from ...domain.models import Stage
from ...infrastructure.config_loader import load_config
from ...shared.logging import configure_logger


logger = logging.getLogger("txt2html")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txt2html",
        description="Convert plain text files into minimal HTML documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  txt2html notes.txt > notes.html
  txt2html -t "Release notes" --linkify notes.txt site/
  txt2html -c txt2html.yaml --images docs/ public/
  cat notes.txt | txt2html -t notes
        """,
    )
    parser.add_argument("source", nargs="?", default="-", help="Text file, directory, or - for stdin")
    parser.add_argument("destination", nargs="?", help="Output file or directory (default: stdout)")
    parser.add_argument("-c", "--config", type=Path, help="Configuration file (.json, .yaml, .yml or .py)")
    parser.add_argument("-t", "--title", help="Document title (default: source file name)")
    parser.add_argument("-l", "--linkify", action="store_true", help="Turn '[x] URL' lines into links")
    parser.add_argument("-i", "--images", action="store_true", help="Turn bare image URL lines into <img> tags")
    parser.add_argument("-f", "--force", action="store_true", help="Convert even when the output is up to date")
    parser.add_argument("--no-copy", action="store_true", help="Do not copy non-text files in directory mode")
    parser.add_argument(
        "--no-preserve-timestamps",
        action="store_true",
        help="Leave output modification times at conversion time",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=__version__, help="Print version and exit")
    return parser


def _log_level(args: argparse.Namespace) -> Optional[int]:
    if args.quiet:
        return logging.ERROR
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    return None


def apply_cli(config: ConverterConfig, args: argparse.Namespace) -> ConverterConfig:
    overrides: Dict[str, object] = {
        "title": args.title,
        "force": True if args.force else None,
        "copy_other_files": False if args.no_copy else None,
        "preserve_timestamps": False if args.no_preserve_timestamps else None,
        "log_level": _log_level(args),
    }
    config = with_cli_overrides(config, overrides)

    hooks = config.hooks
    if args.linkify:
        hooks = hooks.extended(Stage.PRE, linkify)
    if args.images:
        hooks = hooks.extended(Stage.PRE, url_to_image)
    return replace(config, hooks=hooks)


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logger(ConverterConfig().logging)
    try:
        config = load_config(args.config)
        config = apply_cli(config, args)
        configure_logger(config.logging)
        report = BatchService(config).run(args.source, args.destination)
    except Txt2HtmlError as exc:
        logger.error("%s", exc)
        return 1

    logger.debug("Batch report: %s", report.to_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
