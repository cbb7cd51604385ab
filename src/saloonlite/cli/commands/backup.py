"""Backup export and import commands."""

import click
from saloonlite.domain.backup import BackupService
from saloonlite.domain.errors import DomainError, StorageError
from saloonlite.cli.error_handling import handle_domain_error


@click.command("export")
@click.argument("output_file", required=False, type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_data(ctx, output_file: str | None):
    """Export all data as a JSON backup (to stdout if no file is given)."""
    db = ctx.obj["db"]
    service = BackupService(db)

    try:
        if output_file is None:
            click.echo(service.export_data())
            return
        service.export_to_file(output_file)
    except (StorageError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported backup to {output_file}")


@click.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Replace existing data without asking for confirmation")
@click.pass_context
def import_data(ctx, backup_file: str, yes: bool):
    """Restore all data from a JSON backup, replacing what is stored."""
    db = ctx.obj["db"]
    service = BackupService(db)

    if not yes:
        click.confirm("This replaces all sales, expenses, services and settings. Continue?", abort=True)

    try:
        service.import_from_file(backup_file)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Imported backup from {backup_file}")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(export_data)
    cli.add_command(import_data)
