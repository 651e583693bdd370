"""Main CLI entry point."""

import click
from digiledger.database.factories import create_sqlite_database
from digiledger.logging_config import LOG_FORMATS, LOG_LEVELS, clear_context, configure_logging

# Import and register all commands at module level
from digiledger.cli.commands import account, user, transaction, balance


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DIGILEDGER_DB_PATH environment variable)",
    envvar="DIGILEDGER_DB_PATH",
)
@click.option(
    "--user",
    "acting_user",
    help="Acting user ID or email for commands that record a creator",
    envvar="DIGILEDGER_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="DIGILEDGER_LOG_LEVEL",
    help="Log level for diagnostic output on stderr",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default="console",
    show_default=True,
    envvar="DIGILEDGER_LOG_FORMAT",
    help="Log output format",
)
@click.pass_context
def cli(ctx, db_path: str | None, acting_user: str | None, log_level: str, log_format: str):
    """Digiledger - double-entry bookkeeping.

    Maintain a chart of accounts, record journal transactions with debit
    and credit entries, and check CSV trial balances.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level, log_format=log_format)
    clear_context()
    ctx.obj["acting_user"] = acting_user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and ctx.invoked_subcommand != "balance":
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
user.register_commands(cli)
transaction.register_commands(cli)
balance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
