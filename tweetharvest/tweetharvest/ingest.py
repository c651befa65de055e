"""Run the external scraper for one request and read back its output.

Each call writes to its own scratch file, named after the handle, the
window bounds and a random suffix, so concurrent calls never share a path.
The file is removed before the call returns or raises.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import tempfile
import uuid
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from tweetharvest.errors import MalformedOutputError, ScrapeProcessError
from tweetharvest.models import ScrapeTask, TimeWindow

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_.-]")


def scratch_path(
    handle: str, window: TimeWindow | None = None, scratch_dir: str | Path | None = None
) -> Path:
    """Return a fresh output path for one scraper invocation."""
    directory = Path(scratch_dir or tempfile.gettempdir())
    parts = ["tweets", _UNSAFE_RE.sub("_", handle) or "_"]
    if window is not None:
        parts.append(window.start.strftime("%Y%m%dT%H%M%S"))
        parts.append(window.end.strftime("%Y%m%dT%H%M%S"))
    parts.append(uuid.uuid4().hex[:12])
    return directory / ("-".join(parts) + ".json")


def build_command(executable: str, task: ScrapeTask) -> list[str]:
    cmd = [executable, "-u", task.handle, "-o", str(task.temp_path), "--json"]
    if task.window is None:
        cmd.append("--profile-full")
    else:
        cmd.extend(["--since", task.window.since, "--until", task.window.until])
    return cmd


def iter_json_lines(path: Path) -> Iterator[dict[str, Any]]:
    """Yield one object per non-blank line of *path*.

    A line that does not decode to a JSON object raises
    ``MalformedOutputError``; the rest of the file is not read.
    """
    with path.open(encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, 1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                raise MalformedOutputError(path, lineno, exc.msg) from exc
            if not isinstance(obj, dict):
                raise MalformedOutputError(path, lineno, f"expected an object, got {type(obj).__name__}")
            yield obj


@asynccontextmanager
async def _scratch_file(path: Path) -> AsyncIterator[Path]:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


async def _run_scraper(cmd: list[str]) -> None:
    logger.debug("Spawning %s", " ".join(cmd))
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ScrapeProcessError(f"Failed to start {cmd[0]}: {exc}") from exc

    _, stderr = await proc.communicate()
    if proc.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()
        message = f"{cmd[0]} exited with status {proc.returncode}"
        if detail:
            message = f"{message}: {detail.splitlines()[-1]}"
        raise ScrapeProcessError(message, returncode=proc.returncode, stderr=detail)


async def ingest_tweets(
    executable: str,
    handle: str,
    window: TimeWindow | None = None,
    *,
    scratch_dir: str | Path | None = None,
) -> list[dict[str, Any]]:
    """Scrape *handle* (optionally bounded by *window*) and return raw records.

    A missing output file after a clean exit means the account had nothing
    to report and yields an empty list.
    """
    task = ScrapeTask(handle=handle, window=window, temp_path=scratch_path(handle, window, scratch_dir))
    async with _scratch_file(task.temp_path) as path:
        await _run_scraper(build_command(executable, task))
        if not path.exists():
            return []
        return list(iter_json_lines(path))
