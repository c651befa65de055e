"""Tests for JSON Lines output."""

from __future__ import annotations

import json
from pathlib import Path

from tweetharvest.normalize import normalize_tweet
from tweetharvest.output import write_records

_RECORDS = [
    normalize_tweet({"id": i, "user_id": 5, "created_at": 1609459200000, "link": "http://x"}, "@foo")
    for i in range(3)
]


def test_write_records(tmp_path: Path) -> None:
    path = write_records(_RECORDS, str(tmp_path / "out.jsonl"))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    first = json.loads(lines[0])
    assert first["tweet_id"] == "0"
    assert first["_sc_id_fields"] == ["tweet_id"]
    assert first["tweet_time"].startswith("2021-01-01T00:00:00")
    assert first["_sc_media"] == [{"type": "url", "term": "http://x"}]


def test_write_creates_directory(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "dir" / "out.jsonl"
    write_records([], str(out))
    assert out.exists()
