"""Typeing CLI entry point.

Allows running via `python -m typeing` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .config import HELP, USAGE, parse_args
from .errors import ConfigError, TypeingError
from .version import get_version_string


def _configure_logging() -> None:
    # The screen belongs to the test, so log records only go to a file
    log_path = os.environ.get("TYPEING_LOG")
    if log_path:
        logging.basicConfig(
            filename=log_path,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    try:
        config = parse_args(args)
    except ConfigError as e:
        print(f"typeing: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2
    if config.show_help:
        print(HELP)
        return 0
    if config.show_version:
        print(get_version_string())
        return 0

    _configure_logging()

    # Lazy import to avoid importing UI deps for --help and --version
    from .app import Typeing
    try:
        Typeing(config).run()
    except TypeingError as e:
        print(f"typeing: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
