"""New command."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum

import typer

from ulidkit.cli.commands import common
from ulidkit.generation import generator_from_settings, timestamp_from_datetime
from ulidkit.identifier import TIMESTAMP_MASK
from ulidkit.logging import log_context
from ulidkit.settings import get_settings

logger = logging.getLogger(__name__)


class Policy(str, Enum):
    FAST = "fast"
    CRYPTO = "crypto"


def parse_moment(value: str) -> int:
    """Parse an ISO 8601 instant (``Z`` suffix allowed) into epoch milliseconds."""

    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = f"{candidate[:-1]}+00:00"
    try:
        moment = datetime.fromisoformat(candidate)
    except ValueError:
        common.fail(f"invalid ISO 8601 datetime {value!r}")
    timestamp = timestamp_from_datetime(moment)
    if not 0 <= timestamp <= TIMESTAMP_MASK:
        common.fail(f"{value!r} is outside the ULID timestamp range")
    return timestamp


def run_new(
    *,
    count: int = 1,
    timestamp: int | None = None,
    at: str | None = None,
    policy: Policy | None = None,
    seed: int | None = None,
    encoding: common.Encoding = common.Encoding.TEXT,
    as_json: bool = False,
) -> None:
    """Generate new ULIDs."""

    if timestamp is not None and at is not None:
        common.fail("--timestamp and --at cannot be combined")
    if at is not None:
        timestamp = parse_moment(at)

    settings = get_settings()
    overrides: dict[str, object] = {}
    if policy is not None:
        overrides["randomness"] = policy.value
        # An explicit policy replaces any ULIDKIT_SEED; only --seed re-seeds.
        overrides["seed"] = None
    if seed is not None:
        overrides["seed"] = seed
    if overrides:
        settings = settings.model_copy(update=overrides)

    generator = generator_from_settings(settings)
    ulids = generator.batch(count, timestamp)
    logger.debug(
        "ulidkit.new.generated",
        extra=log_context(count=count, policy=settings.randomness, seeded=settings.seed is not None),
    )

    if as_json:
        typer.echo(json.dumps([common.describe(ulid) for ulid in ulids], indent=2))
        return
    for ulid in ulids:
        typer.echo(common.encode_value(ulid, encoding))


def register(app: typer.Typer) -> None:
    @app.command(name="new", help=run_new.__doc__)
    def new(
        count: int = typer.Option(1, "--count", "-n", min=1, help="Number of ULIDs to generate."),
        timestamp: int | None = typer.Option(
            None,
            "--timestamp",
            "-t",
            min=0,
            max=TIMESTAMP_MASK,
            help="Timestamp in milliseconds since the Unix epoch (default: now).",
        ),
        at: str | None = typer.Option(
            None,
            "--at",
            help="ISO 8601 instant to use as the timestamp, e.g. 2024-05-01T12:00:00Z.",
        ),
        policy: Policy | None = typer.Option(
            None,
            "--policy",
            case_sensitive=False,
            help="Randomness policy (default: ULIDKIT_RANDOMNESS).",
        ),
        seed: int | None = typer.Option(
            None,
            "--seed",
            help="Seed a reproducible generator (default: ULIDKIT_SEED unless --policy is given).",
        ),
        encoding: common.Encoding = typer.Option(
            common.Encoding.TEXT,
            "--format",
            "-f",
            case_sensitive=False,
            help="Output encoding for each ULID.",
        ),
        as_json: bool = typer.Option(False, "--json", help="Print every decoded field as JSON."),
    ) -> None:
        run_new(
            count=count,
            timestamp=timestamp,
            at=at,
            policy=policy,
            seed=seed,
            encoding=encoding,
            as_json=as_json,
        )
