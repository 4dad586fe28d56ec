"""Main Typer application: imports and registers all CLI commands.

Entry point: ``s3deployer`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from s3deployer.cli.commands._runtime import configure_logging, load_settings
from s3deployer.cli.commands.cache import purge_cache_cmd
from s3deployer.cli.commands.check import check_cmd
from s3deployer.cli.commands.deploy import deploy_cmd, lookup_cmd
from s3deployer.cli.commands.keys import key_cmd

app = typer.Typer(
    name="s3deployer",
    help="s3deployer: idempotent deployment of processed static assets to Amazon S3.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging("DEBUG" if verbose else load_settings().log_level)


# Register subcommands
app.command(name="key", help="Show the object key each asset maps to.")(key_cmd)
app.command(name="lookup", help="Print the URL of an already deployed asset.")(lookup_cmd)
app.command(name="deploy", help="Deploy assets, skipping ones already deployed.")(deploy_cmd)
app.command(name="check", help="Validate configuration and report readiness.")(check_cmd)
app.command(name="purge-cache", help="Purge expired lookup cache entries.")(purge_cache_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
