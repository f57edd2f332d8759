from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from compendex.app import build_compendium
from compendex.config import (
    TOOLS_ROOT_ENV_VAR,
    ConfigurationError,
    configure_logging,
    load_compendium_config,
    resolve_tools_root,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SOURCE_FAILURES = 1
EXIT_CONFIGURATION_ERROR = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a cross-linked compendium index")
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="JSON or YAML configuration file",
    )
    parser.add_argument(
        "--tools-root",
        type=Path,
        help=f"Source data checkout (defaults to config, then ${TOOLS_ROOT_ENV_VAR})",
    )
    parser.add_argument(
        "--full-index",
        type=Path,
        help="Write every admitted key with its variants and referrers to this file",
    )
    parser.add_argument(
        "--filtered-index",
        type=Path,
        help="Write the sorted list of included keys to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-record decisions",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        config = load_compendium_config(parsed_args.config)
        tools_root = resolve_tools_root(parsed_args.tools_root, config.tools_root)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(EXIT_CONFIGURATION_ERROR)

    try:
        compendium = build_compendium(config, tools_root)
        compendium.write_indexes(
            full_index=parsed_args.full_index,
            filtered_index=parsed_args.filtered_index,
        )
    except Exception:
        log.exception("Fatal error while building the compendium")
        sys.exit(EXIT_SOURCE_FAILURES)

    if not compendium.report.ok:
        log.error(
            "Failed to read %d source file(s): %s",
            len(compendium.report.failed_files),
            ", ".join(compendium.report.failed_files),
        )
        sys.exit(EXIT_SOURCE_FAILURES)
    sys.exit(EXIT_OK)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
