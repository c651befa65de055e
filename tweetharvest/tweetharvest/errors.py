"""Exceptions raised while harvesting an account."""

from __future__ import annotations

from pathlib import Path


class HarvestError(Exception):
    """Base class for every harvest failure."""


class ScrapeProcessError(HarvestError):
    """The external scraper could not be spawned or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class MalformedOutputError(HarvestError):
    """A line of the scraper's output file is not a JSON object."""

    def __init__(self, path: Path, lineno: int, detail: str) -> None:
        super().__init__(f"{path.name}:{lineno}: {detail}")
        self.path = path
        self.lineno = lineno
