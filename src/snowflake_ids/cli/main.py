"""
snowflake-ids CLI

Command-line interface for minting and inspecting snowflake identifiers.

Usage:
    snowflake next --node-id 7 --count 5
    snowflake parse 123456789012345678
    snowflake info --node-id 7
    snowflake node-id
    snowflake bench --count 100000 --threads 8

Node id and epoch fall back to SNOWFLAKE_NODE_ID / SNOWFLAKE_CUSTOM_EPOCH,
then to hardware derivation and the default epoch.
"""

import json
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import typer
from typing_extensions import Annotated

from snowflake_ids.generator import Snowflake, SnowflakeParts
from snowflake_ids.kernel.errors import ClockRegression, InvalidConfiguration
from snowflake_ids.kernel.logging import LogOperation, configure_logging, get_logger
from snowflake_ids.kernel.node_id import HardwareNodeIdProvider
from snowflake_ids.kernel.settings import ENV_CUSTOM_EPOCH, GeneratorSettings

# Logs go to stderr; stdout carries only command output
configure_logging(
    json_output=False,
    log_level=os.getenv("SNOWFLAKE_LOG_LEVEL", "WARNING"),
)

logger = get_logger(__name__)

app = typer.Typer(
    name="snowflake",
    help="snowflake-ids - Coordination-free 64-bit identifiers",
    add_completion=False,
)

NodeIdOption = Annotated[
    Optional[int],
    typer.Option("--node-id", help="Node identifier (0-1023)"),
]
EpochOption = Annotated[
    Optional[int],
    typer.Option("--epoch", help="Custom epoch in milliseconds since 1970"),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def get_generator(node_id: Optional[int] = None, epoch: Optional[int] = None) -> Snowflake:
    """Build a generator from options, falling back to environment settings"""
    try:
        settings = GeneratorSettings.from_env()
        return Snowflake(
            node_id if node_id is not None else settings.node_id,
            epoch if epoch is not None else settings.custom_epoch,
        )
    except InvalidConfiguration as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def get_decoder(epoch: Optional[int] = None) -> Snowflake:
    """Build a generator used only for parsing; the node id is never consulted"""
    try:
        if epoch is None:
            epoch_env = {ENV_CUSTOM_EPOCH: os.getenv(ENV_CUSTOM_EPOCH, "")}
            epoch = GeneratorSettings.from_env(epoch_env).custom_epoch
        return Snowflake(0, epoch)
    except InvalidConfiguration as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def parts_to_dict(snowflake_id: int, parts: SnowflakeParts) -> dict:
    return {
        "id": snowflake_id,
        "timestamp": parts.timestamp,
        "created_at": parts.created_at.isoformat(),
        "node_id": parts.node_id,
        "sequence": parts.sequence,
    }


@app.command("next")
def next_ids(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of identifiers to generate"),
    ] = 1,
    node_id: NodeIdOption = None,
    epoch: EpochOption = None,
    as_json: JsonOption = False,
) -> None:
    """Generate new identifiers"""
    generator = get_generator(node_id, epoch)

    try:
        ids = [generator.next_id() for _ in range(count)]
    except ClockRegression as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(
            json.dumps([parts_to_dict(i, generator.parse(i)) for i in ids], indent=2)
        )
        return

    for snowflake_id in ids:
        typer.echo(str(snowflake_id))


@app.command()
def parse(
    snowflake_id: Annotated[int, typer.Argument(help="Identifier to decompose")],
    epoch: EpochOption = None,
    as_json: JsonOption = False,
) -> None:
    """Decompose an identifier into timestamp, node id and sequence"""
    generator = get_decoder(epoch)
    parts = generator.parse(snowflake_id)

    if as_json:
        typer.echo(json.dumps(parts_to_dict(snowflake_id, parts), indent=2))
        return

    typer.echo(f"ID: {snowflake_id}")
    typer.echo(f"  Timestamp: {parts.timestamp} ({parts.created_at.isoformat()})")
    typer.echo(f"  Node ID: {parts.node_id}")
    typer.echo(f"  Sequence: {parts.sequence}")


@app.command()
def info(
    node_id: NodeIdOption = None,
    epoch: EpochOption = None,
) -> None:
    """Show the generator layout and configuration"""
    generator = get_generator(node_id, epoch)
    typer.echo(generator.describe())


@app.command("node-id")
def node_id_command(as_json: JsonOption = False) -> None:
    """Show the node id derived from local hardware"""
    result = HardwareNodeIdProvider().provide()

    if as_json:
        typer.echo(json.dumps(result.model_dump(), indent=2))
        return

    typer.echo(f"Node ID: {result.node_id}")
    typer.echo(f"  Source: {result.source}")
    if result.detail:
        typer.echo(f"  Detail: {result.detail}")


@app.command()
def bench(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Total identifiers to generate"),
    ] = 100_000,
    threads: Annotated[
        int,
        typer.Option("--threads", "-t", min=1, help="Number of concurrent threads"),
    ] = 4,
    node_id: NodeIdOption = None,
) -> None:
    """Generate identifiers from several threads and check uniqueness"""
    generator = get_generator(node_id)

    share, remainder = divmod(count, threads)
    batches = [share + (1 if i < remainder else 0) for i in range(threads)]

    def worker(batch: int) -> list[int]:
        return [generator.next_id() for _ in range(batch)]

    ids: list[int] = []
    try:
        with LogOperation(logger, "bench", count=count, threads=threads) as op:
            with ThreadPoolExecutor(max_workers=threads) as pool:
                for chunk in pool.map(worker, batches):
                    ids.extend(chunk)
    except ClockRegression as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    unique = len(set(ids))
    seconds = op.duration_ms / 1000
    rate = len(ids) / seconds if seconds > 0 else float("inf")

    typer.echo(f"Generated {len(ids)} ids on {threads} thread(s) in {op.duration_ms:.2f} ms")
    typer.echo(f"  Throughput: {rate:,.0f} ids/sec")
    typer.echo(f"  Unique: {unique}/{len(ids)}")

    if unique != len(ids):
        typer.echo("Error: duplicate identifiers generated", err=True)
        raise typer.Exit(1)


def main() -> None:
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
