"""Named counters and failure records collected during a job."""

from __future__ import annotations

from collections import Counter

from tweetharvest.models import FailureRecord


class JobStats:
    """In-memory stats sink.

    Counters used by the harvester: ``total``, ``success`` and ``fetched``.
    """

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()
        self.failures: list[FailureRecord] = []

    def count(self, name: str, n: int = 1) -> None:
        self.counts[name] += n

    def fail(self, term: str, reason: str) -> None:
        self.failures.append(FailureRecord(term=term, reason=reason))
