"""Exceptions raised while taking screenshots."""

from __future__ import annotations

from typing import Optional


class SnapshotError(Exception):
    """Base class for every failure surfaced to the command line."""


class DiscoveryError(SnapshotError):
    """The site directory is missing or unreadable."""


class LaunchError(SnapshotError):
    """Chromium could not be started."""


class CaptureError(SnapshotError):
    """Rendering or saving a single page failed."""

    def __init__(self, source_path: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{source_path}: {message}")
        self.source_path = source_path
        self.cause = cause
