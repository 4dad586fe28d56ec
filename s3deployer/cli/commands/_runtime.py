"""Shared wiring for CLI commands: settings -> gate -> deployer."""

from __future__ import annotations

import logging
from functools import partial

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from s3deployer.cache import build_cache
from s3deployer.config import DeployerSettings, SettingsConfigurator
from s3deployer.core.deployer import S3Deployer
from s3deployer.core.gate import DeployerGate, StoreFactory
from s3deployer.models.store import ConnectionParams
from s3deployer.stores import ObjectStore
from s3deployer.stores.local import LocalObjectStore
from s3deployer.stores.s3 import S3ObjectStore

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def load_settings() -> DeployerSettings:
    """Load settings, exiting with a readable report if any value is invalid."""
    try:
        return DeployerSettings()
    except ValidationError as exc:
        lines = ["[bold red]Invalid settings[/bold red]", ""]
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            lines.append(f"  - [bold]{escape(field)}[/bold]: {escape(error['msg'])}")
        lines += ["", "[dim]Check S3DEPLOYER_<FIELD> in the environment or .env.[/dim]"]
        console.print(
            Panel("\n".join(lines), title="[bold]s3deployer[/bold]", border_style="red")
        )
        raise typer.Exit(code=1) from exc


def _local_store(settings: DeployerSettings, params: ConnectionParams) -> ObjectStore:
    return LocalObjectStore(settings.local_store_root)


def store_factory(settings: DeployerSettings) -> StoreFactory:
    """Pick the store backend named by ``settings.store_backend``."""
    backend = settings.store_backend.strip().lower()
    if backend == "local":
        return partial(_local_store, settings)
    if backend == "s3":
        return partial(
            S3ObjectStore.from_params,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
        )
    raise ValueError(f"Unknown store backend {settings.store_backend!r}. Use 's3' or 'local'.")


def build_gate(settings: DeployerSettings) -> DeployerGate:
    return DeployerGate(SettingsConfigurator(settings), store_factory(settings))


def build_deployer(settings: DeployerSettings) -> S3Deployer:
    """Activate the gate and wire the deployer to the configured cache."""
    ready = build_gate(settings).activate()
    return S3Deployer(ready, build_cache(settings))
