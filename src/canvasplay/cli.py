"""Command-line interface for canvasplay.

Thin package entrypoint over :mod:`canvasplay.app.sandbox`, so the console
script and ``python -m canvasplay`` share one parser and one runner.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from canvasplay import __version__
from canvasplay.app import sandbox


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments using the app's parser."""
    return sandbox.parse_args(argv)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Synchronous entrypoint for the canvasplay CLI."""
    args = parse_args(argv)

    if args.version:
        print(f"canvasplay {__version__}")
        return

    _configure_logging(args.log_level)
    if args.demo:
        sandbox.render_demo(args)
        return
    try:
        asyncio.run(run_async(argv))
    except KeyboardInterrupt:
        # Allow graceful cancellation via Ctrl+C
        pass


async def run_async(argv: list[str] | None = None) -> None:
    """Async entrypoint for programmatic usage/testing.

    Tests and programmatic callers can ``await run_async(...)`` to run the
    application without starting a nested event loop.
    """
    args = parse_args(argv)
    if args.version:
        print(f"canvasplay {__version__}")
        return
    if args.demo:
        sandbox.render_demo(args)
    elif args.headless:
        await sandbox._main_headless_async(args)
    else:
        await sandbox.main_async(args)


if __name__ == "__main__":
    main()
