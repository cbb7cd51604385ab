"""Preference commands."""

import click
from saloonlite.domain.errors import DomainError, StorageError
from saloonlite.domain.preferences import THEMES, PreferencesService
from saloonlite.cli.error_handling import handle_domain_error


@click.group()
def preferences_group():
    """Show and change business preferences."""
    pass


@preferences_group.command("show")
@click.pass_context
def show_preferences(ctx):
    """Show the current preferences."""
    db = ctx.obj["db"]
    service = PreferencesService(db)

    prefs = service.get_preferences()
    click.echo(f"Business name: {prefs.business_name}")
    click.echo(f"Business type: {prefs.business_type}")
    click.echo(f"Currency: {prefs.currency}")
    click.echo(f"Theme: {prefs.theme}")
    click.echo(f"Notifications: {'on' if prefs.notification_enabled else 'off'}")
    click.echo(f"Default categories: {', '.join(prefs.default_categories)}")


@preferences_group.command("set")
@click.option("--business-name", help="Business name")
@click.option("--business-type", help="Business type (e.g., 'Barber Shop')")
@click.option("--currency", help="Currency code shown with amounts (e.g., GHS)")
@click.option("--theme", type=click.Choice(THEMES), help="Color theme")
@click.option("--notifications/--no-notifications", default=None, help="Enable or disable notifications")
@click.option("--category", "categories", multiple=True, help="Default category (repeat to set several)")
@click.pass_context
def set_preferences(
    ctx,
    business_name: str | None,
    business_type: str | None,
    currency: str | None,
    theme: str | None,
    notifications: bool | None,
    categories: tuple[str, ...],
):
    """Change one or more preferences."""
    db = ctx.obj["db"]
    service = PreferencesService(db)

    changes = {
        "business_name": business_name,
        "business_type": business_type,
        "currency": currency,
        "theme": theme,
        "notification_enabled": notifications,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if categories:
        changes["default_categories"] = categories

    if not changes:
        click.echo("Error: Nothing to change; see 'preferences set --help'", err=True)
        ctx.exit(1)

    try:
        service.update_preferences(**changes)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo("Preferences updated.")


def register_commands(cli):
    """Register preference commands with main CLI."""
    cli.add_command(preferences_group, name="preferences")
