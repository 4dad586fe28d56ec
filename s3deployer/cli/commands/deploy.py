"""``s3deployer lookup`` and ``s3deployer deploy``.

``deploy`` skips assets that are already deployed unless ``--force`` is
given, and exits non-zero if any upload fails.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from s3deployer.cli.commands._runtime import build_deployer, load_settings
from s3deployer.config import DeployerSettings
from s3deployer.core.errors import ActivationError, ConfigurationError, DeployError
from s3deployer.core.deployer import S3Deployer
from s3deployer.models.asset import FileAsset

console = Console()


def _activate(settings: DeployerSettings) -> S3Deployer:
    try:
        return build_deployer(settings)
    except (ConfigurationError, ActivationError, ValueError) as exc:
        console.print(f"[bold red]Deployer unavailable:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc


def lookup_cmd(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Processed asset file.",
    ),
) -> None:
    """Print the URL of an already deployed asset."""
    deployer = _activate(load_settings())
    asset = FileAsset(path)
    url = deployer.get_deployed_file(asset)
    if url is None:
        console.print(f"[yellow]Not deployed:[/yellow] {deployer.object_key(asset)}")
        raise typer.Exit(code=1)
    console.print(url, soft_wrap=True)


def deploy_cmd(
    paths: list[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Processed asset files.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Upload even if the asset is already deployed.",
    ),
) -> None:
    """Deploy assets to the configured bucket."""
    deployer = _activate(load_settings())

    table = Table(title=f"Deploy to {deployer.bucket}")
    table.add_column("Asset", style="cyan")
    table.add_column("Object key")
    table.add_column("Status", justify="center")
    table.add_column("URL", style="dim")

    failures = 0
    for path in paths:
        asset = FileAsset(path)
        try:
            outcome = deployer.ensure_deployed(asset, force=force)
        except DeployError as exc:
            failures += 1
            table.add_row(str(path), exc.object_key, "[red]failed[/red]", f"{exc.code}: {exc.message}")
            continue
        status = "[green]uploaded[/green]" if outcome.uploaded else "[blue]cached[/blue]"
        table.add_row(str(path), outcome.object_key, status, outcome.url)

    console.print(table)
    if failures:
        console.print(f"[bold red]{failures} of {len(paths)} assets failed to deploy.[/bold red]")
        raise typer.Exit(code=1)
