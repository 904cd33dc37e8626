"""Command-line entry point for screenshotting a generated site."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Sequence

from playwright.async_api import Error as PlaywrightError

from .config import SnapshotConfig, default_concurrency
from .errors import SnapshotError
from .snapshots import run_snapshots

logger = logging.getLogger("sitesnap.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Render every HTML page of a static site to desktop and mobile "
            "screenshots using headless Chromium."
        ),
    )
    parser.add_argument(
        "--site-dir",
        required=True,
        help="Directory containing the generated site",
    )
    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory where screenshots should be written",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=default_concurrency(),
        help="Maximum number of pages rendered at once (default: CPU count)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--task-timeout",
        type=float,
        default=None,
        help="Give up on a single page after this many seconds",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Keep rendering other pages when one of them fails",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)
    if args.concurrency < 1:
        parser.error("--concurrency must be at least 1")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = SnapshotConfig(
        site_dir=os.path.abspath(args.site_dir),
        output_dir=os.path.abspath(args.output_dir),
        concurrency=args.concurrency,
        navigation_timeout=args.timeout,
        task_timeout=args.task_timeout,
        keep_going=args.keep_going,
    )

    try:
        summary = asyncio.run(run_snapshots(config))
    except (SnapshotError, PlaywrightError) as exc:
        logger.error("Screenshot run failed: %s", exc, exc_info=args.verbose)
        return 1

    if summary.failures:
        for failure in summary.failures:
            logger.error("Failed: %s", failure.error)
        logger.error(
            "%d of %d pages failed", len(summary.failures), summary.total
        )
        return 1

    print("all done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
