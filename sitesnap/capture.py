"""Rendering a page task into its desktop and mobile screenshots."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional

from filetype import guess
from playwright.async_api import Browser, Error as PlaywrightError, Page

from .config import DESKTOP, MOBILE, ViewportProfile
from .errors import CaptureError
from .models import CaptureResult, PageTask

logger = logging.getLogger("sitesnap")

PROFILES = (DESKTOP, MOBILE)


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.extension.lower()
    return None


def image_path_for(task: PageTask, profile: ViewportProfile) -> Path:
    return Path(task.image_path(profile.suffix))


def tab_options(task: PageTask, profile: ViewportProfile) -> dict:
    """Arguments for ``Browser.new_page`` for the given viewport profile."""
    options = {"viewport": profile.size_for(task.is_index_page)}
    if profile.is_mobile:
        options["is_mobile"] = True
        options["has_touch"] = True
    return options


@asynccontextmanager
async def open_tab(
    browser: Browser,
    task: PageTask,
    profile: ViewportProfile,
    navigation_timeout: float,
) -> AsyncIterator[Page]:
    """Open a tab with its own browser context and always close it."""
    page = await browser.new_page(**tab_options(task, profile))
    try:
        page.set_default_navigation_timeout(navigation_timeout * 1000)
        yield page
    finally:
        await page.close()


def write_image(data: bytes, destination: Path, task: PageTask) -> None:
    extension = detect_image_format(data)
    if extension != "png":
        raise CaptureError(
            task.source_file_path,
            f"screenshot is not a PNG image (detected {extension or 'unknown'})",
        )
    try:
        destination.write_bytes(data)
    except OSError as exc:
        raise CaptureError(
            task.source_file_path, f"failed to write {destination}: {exc}", exc
        ) from exc


async def capture_profile(
    browser: Browser,
    task: PageTask,
    profile: ViewportProfile,
    navigation_timeout: float = 30.0,
) -> Path:
    """Load the page at one viewport and save its screenshot."""
    destination = image_path_for(task, profile)
    try:
        async with open_tab(browser, task, profile, navigation_timeout) as page:
            await page.goto(task.source_url)
            # index pages get a tall viewport instead of a full-page capture
            data = await page.screenshot(full_page=not task.is_index_page)
    except PlaywrightError as exc:
        raise CaptureError(
            task.source_file_path, f"{profile.name} capture failed: {exc}", exc
        ) from exc
    write_image(data, destination, task)
    logger.debug("Saved %s screenshot to %s", profile.name, destination)
    return destination


async def capture_page(
    browser: Browser,
    task: PageTask,
    navigation_timeout: float = 30.0,
) -> CaptureResult:
    """Write the desktop screenshot, then the mobile one, for a page task."""
    start = time.perf_counter()
    output_dir = Path(task.output_image_path).parent
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CaptureError(
            task.source_file_path, f"failed to create {output_dir}: {exc}", exc
        ) from exc

    written: List[Path] = []
    for profile in PROFILES:
        written.append(
            await capture_profile(browser, task, profile, navigation_timeout)
        )
    return CaptureResult(
        task=task,
        written=written,
        seconds=time.perf_counter() - start,
    )
