# src/main.py — v2
"""CLI entry point — show and download commands.

Usage:
    filepreview show <locator> [--name NAME] [--more N]
    filepreview download <locator> [--name NAME] [-o DIR]

A locator is a URL or a local path. Local files are loaded into the
session's blob registry and previewed as ephemeral handles.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from filepreview.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="filepreview",
        description=f"filepreview v{__version__} — file preview resolver",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- show ---
    p_show = subparsers.add_parser("show", help="Preview a file in the terminal")
    p_show.add_argument("locator", help="URL or local path")
    p_show.add_argument("--name", default=None, help="Display name (default: from locator)")
    p_show.add_argument(
        "--more", type=int, default=0,
        help="Expand the line/row window this many times",
    )
    p_show.set_defaults(func=_cmd_show)

    # --- download ---
    p_download = subparsers.add_parser("download", help="Save a file locally")
    p_download.add_argument("locator", help="URL or local path")
    p_download.add_argument("--name", default=None, help="File name to save as")
    p_download.add_argument(
        "-o", "--output", type=Path, default=Path("."),
        help="Target directory (default: current directory)",
    )
    p_download.set_defaults(func=_cmd_download)

    return parser


async def _cmd_show(args: argparse.Namespace) -> int:
    """Resolve a file and print its preview."""
    from filepreview.presentation.views import ErrorView

    async with _CommandSession(args) as session:
        view = await session.open(args.locator, args.name or "")
        for _ in range(max(args.more, 0)):
            view = session.show_more()
        if view is None:
            view = session.view
        _print_view(view)
        return 1 if isinstance(view, ErrorView) else 0


async def _cmd_download(args: argparse.Namespace) -> int:
    """Fetch a file and write it to disk."""
    from filepreview.core.errors import FetchError

    async with _CommandSession(args) as session:
        session.select(args.locator, args.name or "")
        try:
            trigger = await session.download()
        except FetchError as exc:
            logger.error("Download failed: %s", exc)
            return 1

    args.output.mkdir(parents=True, exist_ok=True)
    target = args.output / Path(trigger.filename).name
    target.write_bytes(trigger.data)
    print(f"Saved {len(trigger.data)} bytes to {target}")
    return 0


class _CommandSession:
    """Async context: settings, cache, fetcher and session for one command.

    Local paths are swapped for ephemeral handles before the session sees them.
    """

    def __init__(self, args: argparse.Namespace) -> None:
        self._args = args

    async def __aenter__(self):
        from filepreview.cache.cache_factory import create_cache_store
        from filepreview.config.settings import load_settings
        from filepreview.fetching.blob_registry import BlobRegistry
        from filepreview.fetching.fetcher import ContentFetcher
        from filepreview.presentation.session import PreviewSession

        settings = load_settings()
        _setup_logging(self._args.verbose, settings.log_level, settings.log_format)
        blobs = BlobRegistry(origin="cli")
        path = Path(self._args.locator)
        if path.is_file():
            self._args.locator = blobs.create(path.read_bytes(), name=path.name)
            self._args.name = self._args.name or path.name

        self._fetcher = ContentFetcher(
            create_cache_store(settings), blobs=blobs, settings=settings,
        )
        self._session = PreviewSession(self._fetcher, settings=settings)
        return self._session

    async def __aexit__(self, *exc_info: object) -> None:
        self._session.close()
        self._fetcher.blobs.revoke_all()
        await self._fetcher.aclose()


def _print_view(view: object) -> None:
    """Print a view in plain text."""
    from filepreview.presentation import views as v

    header = getattr(view, "header", None)
    if header is not None and (header.label or header.badge):
        badge = f" [{header.badge}]" if header.badge else ""
        print(f"== {header.label}{badge}")

    if isinstance(view, v.CodeView):
        width = len(str(view.text.total_lines))
        for line in view.text.lines:
            print(f"{line.number:>{width}}  {line.text}")
        if view.text.can_show_more:
            print(f"... {view.text.hidden_lines} more lines (--more shows {view.text.show_more_count})")
    elif isinstance(view, v.SpreadsheetView):
        print(" | ".join(view.table.headers))
        for row in view.table.rows:
            print(" | ".join(row))
        if view.table.hidden_rows:
            print(f"... {view.table.hidden_rows} more rows")
    elif isinstance(view, v.ErrorView):
        print(f"Preview unavailable: {view.message}")
        if view.can_download:
            print("Use `filepreview download` to fetch the file instead.")
    elif isinstance(view, v.ImageView):
        print(f"Image: {view.source}")
    elif isinstance(view, v.VideoView):
        print(f"Video ({view.mime_type}): {view.source}")
    elif isinstance(view, v.PdfView):
        print(f"PDF: {view.source}")
    elif isinstance(view, v.DocumentView):
        print(f"{view.subtype.capitalize()} file: no inline preview, download to open.")
    else:
        print("Loading...")


def _setup_logging(verbose: bool, level: str = "INFO", log_format: str = "text") -> None:
    """Configure logging for CLI usage."""
    from filepreview.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else level, log_format=log_format)


if __name__ == "__main__":
    sys.exit(main())
