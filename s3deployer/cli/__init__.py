"""s3deployer CLI: Typer-based command-line interface.

Provides the ``s3deployer`` command with subcommands for computing object
keys, looking up and deploying assets, checking configuration and purging
the lookup cache.

All output uses Rich for formatted terminal display.
"""
