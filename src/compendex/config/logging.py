"""Root logger setup for command-line runs."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Send log records to stderr so index files written to stdout stay clean.

    Per-record policy and admission decisions are logged at DEBUG; pass
    summaries at INFO. ``force=True`` replaces handlers installed earlier.
    """

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=force,
    )
