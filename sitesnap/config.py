"""Configuration objects and constants for a screenshot run."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

CHROMIUM_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")


def default_concurrency() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class ViewportProfile:
    """Viewport used for one of the two captures taken per page."""

    name: str
    width: int
    height: int
    index_height: int
    suffix: str
    is_mobile: bool = False

    def size_for(self, is_index_page: bool) -> dict:
        height = self.index_height if is_index_page else self.height
        return {"width": self.width, "height": height}


DESKTOP = ViewportProfile(
    name="desktop",
    width=1366,
    height=768,
    index_height=3000,
    suffix=".png",
)

MOBILE = ViewportProfile(
    name="mobile",
    width=411,
    height=731,
    index_height=3000,
    suffix=".mobile.png",
    is_mobile=True,
)


@dataclass(frozen=True)
class SnapshotConfig:
    """Top-level settings that control discovery and rendering."""

    site_dir: str
    output_dir: str
    concurrency: int = 0
    navigation_timeout: float = 30.0
    task_timeout: Optional[float] = None
    keep_going: bool = False

    def __post_init__(self) -> None:
        if self.concurrency <= 0:
            object.__setattr__(self, "concurrency", default_concurrency())
