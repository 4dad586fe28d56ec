"""``s3deployer key PATH...``: show object and cache keys without network access."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from s3deployer.cli.commands._runtime import load_settings
from s3deployer.core.identity import compute_object_key, derive_cache_key
from s3deployer.models.asset import FileAsset
from s3deployer.models.triggers import ChangeTrigger

console = Console()


def key_cmd(
    paths: list[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Processed asset files.",
    ),
    trigger: str = typer.Option(
        None,
        "--trigger",
        "-t",
        help="Change trigger: filemtime, md5 or sha1. Defaults to the configured one.",
    ),
) -> None:
    """Print the object key and cache key each asset maps to."""
    mode = ChangeTrigger.parse(trigger or load_settings().changes_trigger)

    table = Table(title=f"Object keys ({mode.value})")
    table.add_column("Asset", style="cyan")
    table.add_column("Object key", style="green")
    table.add_column("Cache key", style="dim")

    for path in paths:
        object_key = compute_object_key(FileAsset(path), mode)
        table.add_row(str(path), object_key, derive_cache_key(object_key))

    console.print(table)
