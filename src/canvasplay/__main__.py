"""Console entrypoint for the canvasplay sandbox.

Delegates to :mod:`canvasplay.cli` so that ``python -m canvasplay`` and
the installed ``canvasplay`` console script run the same code.
"""

from __future__ import annotations

from canvasplay.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`canvasplay.cli.main`)."""
    cli_main()


if __name__ == "__main__":
    main()
