"""Data models used throughout the screenshot pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import MOBILE


@dataclass(frozen=True)
class PageTask:
    """One HTML file and the two images it renders to."""

    source_file_path: str
    source_url: str
    output_image_path: str
    is_index_page: bool

    def image_path(self, suffix: str) -> str:
        """Output path with the desktop ``.png`` suffix swapped for ``suffix``."""
        return self.output_image_path[: -len(".png")] + suffix

    @property
    def mobile_image_path(self) -> str:
        return self.image_path(MOBILE.suffix)


@dataclass
class CaptureResult:
    """Images written for a single page task."""

    task: PageTask
    written: List[Path]
    seconds: float


@dataclass
class TaskFailure:
    task: PageTask
    error: BaseException


@dataclass
class RunSummary:
    """Outcome of a full batch."""

    total: int
    results: List[CaptureResult] = field(default_factory=list)
    failures: List[TaskFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return not self.failures and len(self.results) == self.total
