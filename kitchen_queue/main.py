"""Entry point for the kitchen-queue Textual app."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from kitchen_queue.config import DATA_PATH, DEBUG_LOG_PATH
from kitchen_queue.data import load_catalog
from kitchen_queue.persistence import load_queue
from kitchen_queue.queue_app import KitchenQueueApp

logger = logging.getLogger(__name__)


def configure_logging(log_path: str | Path = DEBUG_LOG_PATH, level: int = logging.INFO) -> None:
    """Send logs to a file; the terminal belongs to the UI."""
    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Restaurant order queue console")
    parser.add_argument("-i", "--input", default=DATA_PATH, help="Order file to load at startup")
    parser.add_argument("-o", "--output", default=None, help="Order file to save on exit (defaults to --input)")
    parser.add_argument("--log-file", default=DEBUG_LOG_PATH, help="Debug log destination")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Load the order file, run the console, save on exit."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, logging.DEBUG if args.debug else logging.INFO)

    catalog = load_catalog()
    loaded = load_queue(args.input, catalog)
    output_path = args.output or args.input
    logger.info("startup input=%s output=%s orders=%s", args.input, output_path, len(loaded.queue))

    KitchenQueueApp(catalog, loaded.queue, output_path, load_error=loaded.error).run()


if __name__ == "__main__":
    main()
