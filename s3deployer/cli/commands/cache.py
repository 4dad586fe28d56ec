"""``s3deployer purge-cache``: drop expired rows from the SQLite lookup cache."""

from __future__ import annotations

import typer
from rich.console import Console

from s3deployer.cache.sqlite import SqliteCache
from s3deployer.cli.commands._runtime import load_settings

console = Console()


def purge_cache_cmd() -> None:
    """Remove expired entries from the SQLite lookup cache."""
    settings = load_settings()
    if settings.cache_backend.strip().lower() != "sqlite":
        console.print(f"[yellow]Cache backend is {settings.cache_backend!r}; nothing to purge.[/yellow]")
        raise typer.Exit(code=0)

    cache = SqliteCache(settings.cache_path)
    removed = cache.purge_expired()
    console.print(
        f"Purged [bold]{removed}[/bold] expired entries; "
        f"[bold]{cache.count()}[/bold] live entries remain in {cache.db_path}"
    )
