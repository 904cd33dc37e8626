"""High-level orchestration for screenshotting a whole site."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional, TextIO

from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    async_playwright,
)

from .capture import capture_page
from .config import CHROMIUM_ARGS, SnapshotConfig
from .errors import CaptureError, LaunchError
from .models import CaptureResult, PageTask, RunSummary
from .pages import build_page_tasks
from .pool import WorkerPool
from .progress import ProgressBar

logger = logging.getLogger("sitesnap")

BrowserLauncher = Callable[[], AsyncContextManager[Browser]]


@asynccontextmanager
async def launch_browser() -> AsyncIterator[Browser]:
    """Start headless Chromium for the run and close it when done."""
    async with async_playwright() as playwright:
        # only locally generated, trusted HTML is ever loaded
        logger.info("Starting Chromium without a sandbox")
        try:
            browser = await playwright.chromium.launch(
                headless=True, args=list(CHROMIUM_ARGS)
            )
        except PlaywrightError as exc:
            raise LaunchError(f"Failed to launch Chromium: {exc}") from exc
        try:
            yield browser
        finally:
            logger.info("Closing Chromium")
            await browser.close()


@dataclass
class RunContext:
    """Everything a page task needs that is shared across the run."""

    config: SnapshotConfig
    browser: Browser
    progress: ProgressBar

    async def capture(self, task: PageTask) -> CaptureResult:
        coro = capture_page(self.browser, task, self.config.navigation_timeout)
        if self.config.task_timeout is None:
            return await coro
        try:
            return await asyncio.wait_for(coro, self.config.task_timeout)
        except asyncio.TimeoutError as exc:
            raise CaptureError(
                task.source_file_path,
                f"timed out after {self.config.task_timeout:.1f}s",
                exc,
            ) from exc

    def completed(self, result: CaptureResult) -> None:
        logger.debug(
            "Captured %s in %.2fs", result.task.source_file_path, result.seconds
        )
        self.progress.tick()


async def run_snapshots(
    config: SnapshotConfig,
    launcher: BrowserLauncher = launch_browser,
    progress_stream: Optional[TextIO] = None,
) -> RunSummary:
    """Screenshot every page under ``config.site_dir``."""
    overall_start = time.perf_counter()
    logger.info("Taking screenshots of all pages in %s", config.site_dir)
    logger.info("Writing screenshots to %s", config.output_dir)

    tasks: List[PageTask] = build_page_tasks(config.site_dir, config.output_dir)
    summary = RunSummary(total=len(tasks))
    if not tasks:
        logger.warning("No HTML files found under %s", config.site_dir)
        return summary

    async with launcher() as browser:
        context = RunContext(
            config=config,
            browser=browser,
            progress=ProgressBar(len(tasks), stream=progress_stream),
        )
        pool: WorkerPool[PageTask, CaptureResult] = WorkerPool(
            context.capture,
            config.concurrency,
            keep_going=config.keep_going,
            on_result=context.completed,
        )
        logger.debug(
            "Rendering %d pages with up to %d tabs", len(tasks), config.concurrency
        )
        try:
            await pool.run(tasks)
        finally:
            context.progress.finish()
            summary.results = pool.results
            summary.failures = pool.failures
            summary.elapsed_seconds = time.perf_counter() - overall_start

    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        summary.elapsed_seconds,
        len(summary.results),
        summary.total,
        len(summary.failures),
    )
    return summary
