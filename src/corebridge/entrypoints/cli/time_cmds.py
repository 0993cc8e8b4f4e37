"""``corebridge time`` — convert Instant records to and from timestamps."""

import json

import click
import click_extra as clickx
import pandas as pd

from corebridge.domain import Instant, TimeError


@click.group(cls=clickx.ExtraGroup, name="time")
def time_group() -> None:
    """Inspect Instant values."""


@time_group.command("format")
@click.argument("seconds", type=int)
@click.argument("nanos", type=int)
def format_instant(seconds: int, nanos: int) -> None:
    """Print the Instant SECONDS/NANOS as an ISO-8601 UTC timestamp."""
    try:
        timestamp = Instant(seconds, nanos).to_timestamp()
    except TimeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(timestamp.isoformat())


@time_group.command("parse")
@click.argument("timestamp")
def parse_timestamp(timestamp: str) -> None:
    """Print TIMESTAMP as an Instant record. Naive timestamps are read as UTC."""
    try:
        parsed = pd.Timestamp(timestamp)
    except ValueError as e:
        raise click.ClickException(f"Not a valid timestamp: {timestamp!r}") from e
    if pd.isna(parsed):
        raise click.ClickException(f"Not a valid timestamp: {timestamp!r}")
    try:
        instant = Instant.from_timestamp(parsed)
    except TimeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(instant.to_dict()))
