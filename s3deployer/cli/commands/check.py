"""``s3deployer check``: validate configuration and build the store client."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from s3deployer.cli.commands._runtime import build_gate, load_settings
from s3deployer.core.errors import ActivationError, ConfigurationError

console = Console()


def check_cmd() -> None:
    """Activate the deployer and report its readiness."""
    settings = load_settings()
    try:
        gate = build_gate(settings)
    except ValueError as exc:
        console.print(f"[bold red]Invalid settings:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    try:
        ready = gate.activate()
    except ConfigurationError as exc:
        console.print(
            Panel(
                "\n".join(
                    ["[bold red]Configuration error[/bold red]", ""]
                    + [f"  - missing [bold]{field}[/bold]" for field in exc.missing]
                    + ["", "[dim]Set S3DEPLOYER_<FIELD> or add it to .env.[/dim]"]
                ),
                title="[bold]s3deployer[/bold]",
                border_style="red",
            )
        )
        raise typer.Exit(code=1) from exc
    except ActivationError as exc:
        console.print(f"[bold red]Activation failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        Panel(
            "\n".join([
                "[bold green]Deployer ready[/bold green]",
                "",
                f"[bold]State:[/bold]     {gate.state.value}",
                f"[bold]Bucket:[/bold]    {ready.bucket}",
                f"[bold]Region:[/bold]    {ready.region}",
                f"[bold]Trigger:[/bold]   {ready.trigger.value}",
                f"[bold]MIME:[/bold]      {'autodetect' if ready.autodetect_mime else 'off'}",
                f"[bold]Store:[/bold]     {settings.store_backend}",
                f"[bold]Cache:[/bold]     {settings.cache_backend}",
            ]),
            title="[bold]s3deployer[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
