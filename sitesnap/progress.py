"""Console progress bar with a completion-rate based ETA."""

from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO

PROGRESS_FORMAT = "screenshotting {current} of {total}, estimated {eta:.1f}s remaining"


class ProgressBar:
    """Counts completed pages and redraws a single status line."""

    def __init__(
        self,
        total: int,
        stream: Optional[TextIO] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.total = total
        self.current = 0
        self.stream = stream if stream is not None else sys.stderr
        self.clock = clock
        self._start = clock()
        self._live = bool(getattr(self.stream, "isatty", lambda: False)())
        self._line_open = False

    @property
    def eta(self) -> float:
        if not self.current:
            return 0.0
        per_item = (self.clock() - self._start) / self.current
        return per_item * (self.total - self.current)

    def render(self) -> str:
        return PROGRESS_FORMAT.format(
            current=self.current, total=self.total, eta=self.eta
        )

    def tick(self) -> None:
        self.current += 1
        if self._live:
            self.stream.write("\r" + self.render())
            self._line_open = True
            if self.current >= self.total:
                self.finish()
                return
        else:
            self.stream.write(self.render() + "\n")
        self.stream.flush()

    def finish(self) -> None:
        """End the live line so later output starts on a fresh one."""
        if self._line_open:
            self.stream.write("\n")
            self.stream.flush()
            self._line_open = False
