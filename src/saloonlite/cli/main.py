"""Main CLI entry point."""

import logging

import click
from saloonlite.database.factories import create_sqlite_database
from saloonlite.domain.errors import StorageError

# Import and register all commands at module level
from saloonlite.cli.commands import (
    backup,
    dashboard,
    expense,
    pin,
    preferences,
    sale,
    service,
    summary,
    view,
)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SALOONLITE_DB_PATH environment variable)",
    envvar="SALOONLITE_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """SaloonLite - Sales and expense tracking for a barber shop.

    Record sales and expenses, manage the service catalog, review daily
    summaries and dashboard analytics, and back up or restore all data.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_sqlite_database(database_path=db_path)
            db.connect()
            db.initialize_schema()
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
sale.register_commands(cli)
expense.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)
dashboard.register_commands(cli)
service.register_commands(cli)
pin.register_commands(cli)
preferences.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
