# src/main.py - v1
"""CLI entry point: serve, export, import commands.

Usage:
    annosync serve [--addr :6969] [--root DIR]
    annosync export [--root DIR] [-o FILE]
    annosync import PAYLOAD [--root DIR]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from annosync.core.errors import AnnoSyncError
from annosync.version import __version__

if TYPE_CHECKING:
    from annosync.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from annosync.config.settings import ConfigurationError, load_settings

    try:
        settings = load_settings(**_settings_overrides(args))
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except AnnoSyncError as exc:
        logger.error("%s", exc)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="annosync",
        description=f"annosync v{__version__}: sync PDF highlights by content hash",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser(
        "serve", help="Serve POST /export and POST /import over HTTP",
    )
    p_serve.add_argument(
        "--addr", default=None,
        help="Listen address host:port (default: :6969)",
    )
    p_serve.add_argument(
        "--root", type=Path, default=None,
        help="Directory tree to export from and import into (default: .)",
    )
    p_serve.set_defaults(func=_cmd_serve)

    # --- export ---
    p_export = subparsers.add_parser(
        "export", help="Print the annotations of every document as JSON",
    )
    p_export.add_argument(
        "--root", type=Path, default=None,
        help="Directory tree to export (default: .)",
    )
    p_export.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write JSON to this file instead of stdout",
    )
    p_export.set_defaults(func=_cmd_export)

    # --- import ---
    p_import = subparsers.add_parser(
        "import", help="Merge an export JSON file into matching documents",
    )
    p_import.add_argument(
        "payload", help="Export JSON file, or '-' to read stdin",
    )
    p_import.add_argument(
        "--root", type=Path, default=None,
        help="Directory tree to import into (default: .)",
    )
    p_import.set_defaults(func=_cmd_import)

    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, object]:
    """Map CLI flags that were given onto Settings fields."""
    overrides: dict[str, object] = {}
    if getattr(args, "addr", None):
        overrides["listen_addr"] = args.addr
    if getattr(args, "root", None) is not None:
        overrides["scan_root"] = args.root
    return overrides


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the HTTP server."""
    from annosync.api.server import run_server

    run_server(settings)
    return 0


def _cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    """Export annotations to stdout or a file."""
    from annosync.api.facade import export_highlights
    from annosync.api.models import dump_export

    summaries = export_highlights(
        settings.scan_root, extension=settings.document_extension,
    )
    text = json.dumps(dump_export(summaries), indent=2)
    if args.output is None:
        print(text)
    else:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %d document(s) to %s", len(summaries), args.output)
    return 0


def _cmd_import(args: argparse.Namespace, settings: Settings) -> int:
    """Import an export file and print the summary."""
    from annosync.api.facade import import_highlights
    from annosync.api.models import dump_import_summary

    if args.payload == "-":
        body = sys.stdin.buffer.read()
    else:
        payload_path = Path(args.payload)
        if not payload_path.is_file():
            logger.error("Payload file not found: %s", payload_path)
            return 1
        body = payload_path.read_bytes()

    summary = import_highlights(
        settings.scan_root, body, extension=settings.document_extension,
    )
    print(json.dumps(dump_import_summary(summary), indent=2))
    return 1 if any(outcome.error for outcome in summary.files) else 0


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from annosync.logging.logger import setup_logging_from_settings

    setup_logging_from_settings(settings, level="DEBUG" if verbose else None)


if __name__ == "__main__":
    sys.exit(main())
