"""Periodic completion notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, int], None]


def log_progress(current: int, total: int, percent: int) -> None:
    logger.info("Progress: %d/%d (%d%%)", current, total, percent)


class ProgressReporter:
    """Call *callback* whenever progress crosses another *step* percent.

    The callback receives ``(current, total, percent)``. Crossing several
    steps in one ``advance`` produces a single call. A callback that raises
    is logged and otherwise ignored.
    """

    def __init__(self, total: int, callback: ProgressCallback | None = None, step: int = 10) -> None:
        self.total = total
        self.current = 0
        self._callback = callback or log_progress
        self._step = max(1, step)
        self._bucket = 0

    def advance(self, n: int = 1) -> None:
        if self.total <= 0:
            return
        self.current += n
        percent = min(100, self.current * 100 // self.total)
        bucket = percent // self._step
        if bucket > self._bucket:
            self._bucket = bucket
            try:
                self._callback(self.current, self.total, percent)
            except Exception:
                logger.warning("Progress callback failed at %d/%d", self.current, self.total, exc_info=True)
