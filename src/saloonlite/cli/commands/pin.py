"""PIN commands."""

import click
from datetime import datetime
from saloonlite.domain.errors import DomainError, StorageError
from saloonlite.domain.pin import MAX_ATTEMPTS, PinService
from saloonlite.cli.error_handling import handle_domain_error


@click.group()
def pin_group():
    """Check and change the entry PIN."""
    pass


@pin_group.command("verify")
@click.option("--pin", prompt=True, hide_input=True, help="PIN to check")
@click.pass_context
def verify_pin(ctx, pin: str):
    """Check a PIN. Three wrong attempts lock entry for five minutes."""
    db = ctx.obj["db"]
    service = PinService(db)

    try:
        result = service.verify_pin(pin)
    except StorageError as e:
        handle_domain_error(ctx, e)

    if result.success:
        click.echo(result.message)
        return
    click.echo(f"Error: {result.message}", err=True)
    ctx.exit(1)


@pin_group.command("change")
@click.option("--current", "current_pin", prompt="Current PIN", hide_input=True, help="PIN in use")
@click.option(
    "--new",
    "new_pin",
    prompt="New PIN",
    hide_input=True,
    confirmation_prompt="Confirm new PIN",
    help="New four digit PIN",
)
@click.pass_context
def change_pin(ctx, current_pin: str, new_pin: str):
    """Change the entry PIN."""
    db = ctx.obj["db"]
    service = PinService(db)

    try:
        service.change_pin(current_pin, new_pin, confirm_pin=new_pin)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo("PIN updated successfully!")


@pin_group.command("status")
@click.pass_context
def pin_status(ctx):
    """Show whether a custom PIN is set and whether entry is locked."""
    db = ctx.obj["db"]
    service = PinService(db)

    settings = service.get_settings()
    now = datetime.now()
    if settings is None:
        click.echo("PIN: default (not changed yet)")
        click.echo(f"Attempts remaining: {MAX_ATTEMPTS}")
        return

    click.echo(f"PIN: custom (last changed {settings.last_modified:%Y-%m-%d %H:%M})")
    if service.is_locked(now):
        click.echo(f"Locked until {settings.lock_until:%Y-%m-%d %H:%M:%S}")
    else:
        remaining = MAX_ATTEMPTS - settings.failed_attempts if settings.lock_until is None else MAX_ATTEMPTS
        click.echo(f"Attempts remaining: {remaining}")


def register_commands(cli):
    """Register PIN commands with main CLI."""
    cli.add_command(pin_group, name="pin")
