"""Import mapping commands."""

import click
from brokermap.cli.account_resolution import resolve_account_or_exit
from brokermap.cli.error_handling import handle_domain_error
from brokermap.domain.account import AccountService
from brokermap.domain.entities import ActivityType, ImportField
from brokermap.domain.errors import DomainError
from brokermap.domain.import_mapping import ImportMappingService

FIELD_CHOICES = [f.value for f in ImportField]
ACTIVITY_CHOICES = [t.value for t in ActivityType]


@click.group()
def mapping_group():
    """Manage per-account CSV import mappings."""
    pass


@mapping_group.command("show")
@click.argument("account")
@click.pass_context
def show_mapping(ctx, account: str):
    """Show the import mapping of an account."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    mapping = ImportMappingService(db).get_mapping(account_id)

    click.echo(f"\nImport mapping for account {account_id}:")
    click.echo("-" * 60)
    click.echo("Columns:")
    for import_field in ImportField:
        header = mapping.field_mappings.get(import_field)
        click.echo(f"  {import_field.value:14s} <- {header if header else '(unmapped)'}")

    click.echo("Activity types:")
    if not mapping.activity_mappings:
        click.echo("  (none)")
    for activity_type, patterns in mapping.activity_mappings:
        click.echo(f"  {activity_type.value:14s} <- {', '.join(patterns)}")

    click.echo("Symbols:")
    if not mapping.symbol_mappings:
        click.echo("  (none)")
    for csv_symbol, symbol in sorted(mapping.symbol_mappings.items()):
        click.echo(f"  {csv_symbol} -> {symbol}")


@mapping_group.command("field")
@click.argument("account")
@click.argument("field_name", metavar="FIELD", type=click.Choice(FIELD_CHOICES))
@click.argument("header", required=False)
@click.pass_context
def map_field(ctx, account: str, field_name: str, header: str | None):
    """Map a CSV column HEADER to FIELD. Omit HEADER to unmap the field."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        ImportMappingService(db).map_field(account_id, ImportField(field_name), header)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if header:
        click.echo(f"Mapped column '{header}' to '{field_name}'")
    else:
        click.echo(f"Unmapped '{field_name}'")


@mapping_group.command("activity")
@click.argument("account")
@click.argument("csv_value")
@click.argument(
    "activity_type", type=click.Choice(ACTIVITY_CHOICES, case_sensitive=False)
)
@click.pass_context
def map_activity(ctx, account: str, csv_value: str, activity_type: str):
    """Map CSV activity values starting with CSV_VALUE to ACTIVITY_TYPE."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        ImportMappingService(db).map_activity_type(
            account_id, csv_value, ActivityType(activity_type.upper())
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Mapped activity value '{csv_value}' to {activity_type.upper()}")


@mapping_group.command("symbol")
@click.argument("account")
@click.argument("csv_symbol")
@click.argument("symbol", required=False)
@click.pass_context
def map_symbol(ctx, account: str, csv_symbol: str, symbol: str | None):
    """Replace ticker CSV_SYMBOL with SYMBOL on import. Omit SYMBOL to remove."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        ImportMappingService(db).map_symbol(account_id, csv_symbol, symbol)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if symbol:
        click.echo(f"Mapped symbol '{csv_symbol}' to '{symbol}'")
    else:
        click.echo(f"Removed symbol mapping for '{csv_symbol}'")


def register_commands(cli):
    """Register mapping commands with main CLI."""
    cli.add_command(mapping_group, name="mapping")
