"""Tests for ProgressReporter."""

from __future__ import annotations

import logging

import pytest

from tweetharvest.progress import ProgressReporter


def test_fires_once_per_step() -> None:
    calls: list[tuple[int, int, int]] = []
    reporter = ProgressReporter(20, lambda c, t, p: calls.append((c, t, p)), step=10)

    for _ in range(20):
        reporter.advance()

    assert [p for _, _, p in calls] == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
    assert calls[-1] == (20, 20, 100)


def test_big_jump_fires_once() -> None:
    calls: list[int] = []
    reporter = ProgressReporter(10, lambda c, t, p: calls.append(p), step=10)

    reporter.advance(5)
    reporter.advance(5)

    assert calls == [50, 100]


def test_small_totals_fire_every_unit() -> None:
    calls: list[int] = []
    reporter = ProgressReporter(3, lambda c, t, p: calls.append(c), step=5)
    for _ in range(3):
        reporter.advance()
    assert calls == [1, 2, 3]


def test_zero_total_is_silent() -> None:
    calls: list[int] = []
    ProgressReporter(0, lambda c, t, p: calls.append(p)).advance()
    assert calls == []


def test_raising_callback_is_logged_and_ignored(caplog: pytest.LogCaptureFixture) -> None:
    seen: list[int] = []

    def callback(current: int, total: int, percent: int) -> None:
        seen.append(current)
        if current == 1:
            raise RuntimeError("callback exploded")

    reporter = ProgressReporter(2, callback, step=50)
    with caplog.at_level(logging.WARNING, logger="tweetharvest.progress"):
        reporter.advance()
        reporter.advance()

    assert seen == [1, 2]
    assert reporter.current == 2
    assert "Progress callback failed at 1/2" in caplog.text
