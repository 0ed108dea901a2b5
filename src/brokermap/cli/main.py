"""Main CLI entry point."""

import click
from brokermap.database.factories import create_sqlite_database
from brokermap.logging_config import setup_logging

# Import and register all commands at module level
from brokermap.cli.commands import (
    account,
    activity,
    import_cmd,
    mapping,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BROKERMAP_DB_PATH environment variable)",
    envvar="BROKERMAP_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
    envvar="BROKERMAP_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """brokermap - Import brokerage activity exports.

    Map the columns, activity types and tickers of any broker's CSV export
    to your accounts once, then import every new export with the saved
    mapping.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
account.register_commands(cli)
mapping.register_commands(cli)
import_cmd.register_commands(cli)
activity.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
