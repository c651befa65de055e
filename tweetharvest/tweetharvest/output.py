"""JSON Lines output for harvested records."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

import click

from tweetharvest.models import NormalizedRecord


def _to_line(record: NormalizedRecord) -> str:
    return json.dumps(record.model_dump(by_alias=True, mode="json"), ensure_ascii=False)


def write_records(records: Iterable[NormalizedRecord], output_path: str) -> Path:
    """Write one JSON object per line to *output_path*. Returns the path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        for record in records:
            fh.write(_to_line(record) + "\n")
    return path


def dump_records(records: Iterable[NormalizedRecord]) -> None:
    """Print records to stdout, one per line."""
    for record in records:
        click.echo(_to_line(record))
