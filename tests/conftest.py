"""
Shared pytest fixtures for sitesnap tests.

The fake browser mimics the slice of the Playwright async API the capture
code uses, so no Chromium is needed.
"""

import asyncio
import base64
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError


# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class FakePage:
    def __init__(self, browser, options):
        self.browser = browser
        self.options = options
        self.url = None
        self.navigation_timeout = None
        self.screenshots = []
        self.closed = False

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    async def goto(self, url):
        self.url = url
        self.browser.events.append(("goto", url, self.options["viewport"]["width"]))
        await asyncio.sleep(self.browser.delay)
        if any(url.endswith(name) for name in self.browser.fail_on):
            raise PlaywrightError(f"net::ERR_FAILED at {url}")

    async def screenshot(self, full_page=False):
        self.screenshots.append({"full_page": full_page})
        await asyncio.sleep(self.browser.delay)
        if self.browser.screenshot_error:
            raise PlaywrightError("Target page, context or browser has been closed")
        return self.browser.image_bytes

    async def close(self):
        self.closed = True
        self.browser.open_tabs -= 1


class FakeBrowser:
    def __init__(self, delay=0.0):
        self.delay = delay
        self.pages = []
        self.events = []
        self.fail_on = set()
        self.screenshot_error = False
        self.image_bytes = PNG_BYTES
        self.open_tabs = 0
        self.peak_open_tabs = 0
        self.close_count = 0

    async def new_page(self, **options):
        page = FakePage(self, options)
        self.pages.append(page)
        self.open_tabs += 1
        self.peak_open_tabs = max(self.peak_open_tabs, self.open_tabs)
        return page


@pytest.fixture
def fake_browser():
    return FakeBrowser()


@pytest.fixture
def fake_launcher(fake_browser):
    """Launcher that hands out ``fake_browser`` and counts closes."""

    @asynccontextmanager
    async def launcher():
        try:
            yield fake_browser
        finally:
            fake_browser.close_count += 1

    return launcher


@pytest.fixture
def site(tmp_path):
    """Small generated site: an index page and a nested page."""
    root = tmp_path / "site"
    (root / "about").mkdir(parents=True)
    (root / "index.html").write_text("<h1>home</h1>")
    (root / "about" / "team.html").write_text("<h1>team</h1>")
    return root


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "out"
