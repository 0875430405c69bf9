"""Console entrypoint for the gridsketch application.

This module delegates to :mod:`gridsketch.cli` so that running
``python -m gridsketch`` or the installed ``gridsketch`` console script
executes the same application code.
"""

from __future__ import annotations

from gridsketch.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`gridsketch.cli.main`)."""
    cli_main()


if __name__ == "__main__":
    main()
