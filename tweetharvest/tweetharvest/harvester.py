"""Harvest every tweet of a batch of accounts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from functools import partial
from typing import Any

from tweetharvest.config import Config
from tweetharvest.executor import clamp_concurrency, run_bounded
from tweetharvest.handles import resolve_handle
from tweetharvest.ingest import ingest_tweets
from tweetharvest.intervals import plan_windows
from tweetharvest.models import FailureRecord, JobResult, NormalizedRecord, Strategy, TimeWindow
from tweetharvest.normalize import normalize_tweet
from tweetharvest.progress import ProgressCallback, ProgressReporter
from tweetharvest.retry import RetryPolicy
from tweetharvest.stats import JobStats
from tweetharvest.strategy import select_strategy

_logger = logging.getLogger(__name__)

RawTweets = list[dict[str, Any]]
IngestFn = Callable[..., Awaitable[RawTweets]]
Planner = Callable[[], Iterable[TimeWindow]]


class Harvester:
    """Run one job: every account reference to a list of normalized records.

    Failures stay with the account they belong to; ``run`` itself does not
    raise for them. Collaborators (stats, progress, logger, the ingester and
    the window planner) are passed in so callers and tests can swap them.
    """

    def __init__(
        self,
        config: Config,
        *,
        stats: JobStats | None = None,
        progress: ProgressCallback | None = None,
        logger: logging.Logger | None = None,
        retry: RetryPolicy | None = None,
        ingest: IngestFn = ingest_tweets,
        planner: Planner = plan_windows,
    ) -> None:
        self.config = config
        self.stats = stats or JobStats()
        self.log = logger or _logger
        self.retry = retry or RetryPolicy(
            max_attempts=config.retry_attempts, backoff=config.retry_backoff
        )
        self._progress = progress
        self._ingest = ingest
        self._planner = planner
        self._slots = asyncio.Semaphore(clamp_concurrency(config.concurrency))

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    async def run(self, references: Sequence[int | str]) -> JobResult:
        records: list[NormalizedRecord] = []
        failures: list[FailureRecord] = []
        success = 0
        progress = ProgressReporter(len(references), self._progress, self.config.progress_step)
        # One slot per in-flight scraper process, shared by every account of the job.
        self._slots = asyncio.Semaphore(clamp_concurrency(self.config.concurrency))

        outcomes = await run_bounded(
            [partial(self._harvest_account, ref) for ref in references],
            self.config.concurrency,
            on_done=lambda _outcome: progress.advance(),
        )

        for outcome in sorted(outcomes, key=lambda o: o.index):
            ref = references[outcome.index]
            if outcome.ok:
                success += 1
                self.stats.count("success")
                records.extend(outcome.value or [])
                continue
            self.log.error("Failed to scrape %s: %s", ref, outcome.error)
            self.stats.fail(term=str(ref), reason=str(outcome.error))
            failures.append(FailureRecord(term=str(ref), reason=str(outcome.error)))

        return JobResult(records=records, total=len(references), success=success, failures=failures)

    # ------------------------------------------------------------------
    # Per-account work
    # ------------------------------------------------------------------

    async def _harvest_account(self, ref: int | str) -> list[NormalizedRecord]:
        self.stats.count("total")
        self.log.info("Harvesting %s", ref)
        handle = resolve_handle(ref)
        strategy = await select_strategy(
            handle,
            self.config.strategy,
            profile_url=self.config.profile_url,
            timeout=self.config.http_timeout,
        )
        self.log.info("Using %s strategy for %s", strategy.value, handle)

        if strategy is Strategy.PROFILE:
            raw = await self._fetch(handle, None)
        else:
            raw = await self._fetch_intervals(handle)

        self.stats.count("fetched", len(raw))
        self.log.info("We have scraped %d tweets for %s.", len(raw), ref)
        return [normalize_tweet(tweet, ref) for tweet in raw]

    async def _fetch(self, handle: str, window: TimeWindow | None) -> RawTweets:
        label = f"{handle} [{window.since} - {window.until}]" if window else f"{handle} [profile]"

        async def attempt() -> RawTweets:
            async with self._slots:
                return await self._ingest(
                    self.config.executable, handle, window, scratch_dir=self.config.scratch_dir
                )

        return await self.retry.run(attempt, label=label)

    async def _fetch_intervals(self, handle: str) -> RawTweets:
        windows = list(self._planner())
        if not windows:
            return []

        progress = ProgressReporter(len(windows), self._progress, self.config.progress_step)
        outcomes = await run_bounded(
            [partial(self._fetch, handle, window) for window in windows],
            self.config.concurrency,
            on_done=lambda _outcome: progress.advance(),
        )

        raw: RawTweets = []
        last_error: Exception | None = None
        for outcome in outcomes:
            if outcome.ok:
                raw.extend(outcome.value or [])
                continue
            window = windows[outcome.index]
            last_error = outcome.error
            self.log.warning(
                "Skipping %s window %s - %s: %s", handle, window.since, window.until, outcome.error
            )

        # An account is only failed when no window could be fetched at all.
        if last_error is not None and all(not o.ok for o in outcomes):
            raise last_error
        return raw
