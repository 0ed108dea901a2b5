"""Account management commands."""

import click
from brokermap.cli.error_handling import handle_domain_error
from brokermap.domain.account import AccountService
from brokermap.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--currency",
    default="USD",
    show_default=True,
    help="Default currency for rows without a currency column",
)
@click.pass_context
def create_account(ctx, name: str, currency: str):
    """Create a new account.

    Examples:
        brokermap account create "Interactive Brokers"
        brokermap account create "Degiro" --currency EUR
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(name=name, currency=currency)
        click.echo(f"Created account '{name}' (ID: {account_id}, Currency: {currency.upper()})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Currency: {acc.currency}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
