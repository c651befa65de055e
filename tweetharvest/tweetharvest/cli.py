"""CLI entry point for tweetharvest."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from tweetharvest.config import Config
from tweetharvest.models import StrategyMode


def _read_accounts(links_file: str) -> list[str]:
    return [
        line.strip()
        for line in Path(links_file).read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]


@click.command()
@click.option("--account", "-a", multiple=True, help="Account handle, @handle, numeric id or profile URL")
@click.option("--accounts-file", "-f", type=click.Path(exists=True), help="File with accounts (one per line)")
@click.option(
    "--strategy",
    "-s",
    type=click.Choice([m.value for m in StrategyMode]),
    default=None,
    help="Fetch strategy (default: auto)",
)
@click.option("--twint", "executable", default=None, help="Path to the twint executable")
@click.option("--concurrency", "-c", type=int, default=None, help="Windows fetched in parallel (1-8)")
@click.option("--output", "-o", default=None, help="Write JSON Lines here instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def main(
    account: tuple[str, ...],
    accounts_file: str | None,
    strategy: str | None,
    executable: str | None,
    concurrency: int | None,
    output: str | None,
    verbose: bool,
) -> None:
    """tweetharvest — collect every tweet of the given accounts."""
    from dataclasses import replace

    from tweetharvest.harvester import Harvester
    from tweetharvest.output import dump_records, write_records

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = Config.from_env()

    overrides: dict[str, object] = {}
    if strategy:
        overrides["strategy"] = StrategyMode(strategy)
    if executable:
        overrides["executable"] = executable
    if concurrency is not None:
        overrides["concurrency"] = concurrency
    if overrides:
        config = replace(config, **overrides)

    accounts = list(account)
    if accounts_file:
        accounts.extend(_read_accounts(accounts_file))

    if not accounts:
        click.echo("No accounts given. Use --account or --accounts-file.", err=True)
        sys.exit(1)

    result = asyncio.run(Harvester(config).run(accounts))

    if output:
        write_records(result.records, output)
    else:
        dump_records(result.records)

    click.echo(
        f"{len(result.records)} records from {result.success}/{result.total} accounts",
        err=True,
    )
    for failure in result.failures:
        click.echo(f"  ✗ {failure.term}: {failure.reason}", err=True)

    if not result.records and result.failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
