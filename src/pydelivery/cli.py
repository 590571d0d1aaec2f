"""Command-line entry point: ``pydelivery [PRELOAD]``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import IO, Any, TextIO

from pydelivery.app import run_app
from pydelivery.config import DeliveryConfig

_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INTERRUPTED = 130


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pydelivery",
        description=(
            "Accumulate package weight per postal code. Enter '<weight> <postal code>' "
            "lines; 'quit' ends input. A summary is printed every minute."
        ),
    )
    parser.add_argument(
        "preload",
        nargs="?",
        default=None,
        help="Optional file with initial records, one '<weight> <postal code>' per line.",
    )
    return parser.parse_args(argv)


def _interactive_stream(stdin: IO[Any]) -> IO[Any]:
    # Prefer raw bytes so undecodable input is reported per line.
    return getattr(stdin, "buffer", stdin)


def main(
    argv: Sequence[str] | None = None,
    *,
    config: DeliveryConfig | None = None,
    stdin: IO[Any] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = _parse_args(argv)
    err = stderr if stderr is not None else sys.stderr

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=err,
    )

    effective = config or DeliveryConfig()
    interactive = _interactive_stream(stdin if stdin is not None else sys.stdin)
    try:
        stats = asyncio.run(run_app(args.preload, interactive, config=effective, out=stdout, errors=err))
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    _logger.debug("Finished stopped_by=%s accepted=%s rejected=%s", stats.stopped_by, stats.accepted, stats.rejected)
    return EXIT_OK
