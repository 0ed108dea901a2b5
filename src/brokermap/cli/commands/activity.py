"""Activity listing commands."""

import click
from brokermap.cli.account_resolution import resolve_account_or_exit
from brokermap.domain.account import AccountService


@click.group()
def activity_group():
    """View imported activities."""
    pass


@activity_group.command("list")
@click.option("--account", help="Filter by account name or ID")
@click.pass_context
def list_activities(ctx, account: str | None):
    """List imported activities."""
    db = ctx.obj["db"]

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    activities = db.list_activities(account_id=account_id)
    if not activities:
        click.echo("No activities found.")
        return

    click.echo(f"\n{'Date':<12} {'Type':<14} {'Symbol':<10} {'Quantity':>12} {'Price':>12} {'Cur':<4}")
    click.echo("-" * 70)
    for a in activities:
        click.echo(
            f"{a.date:<12} {a.activity_type:<14} {a.symbol:<10} "
            f"{a.quantity:>12.4f} {a.unit_price:>12.4f} {a.currency:<4}"
        )


def register_commands(cli):
    """Register activity commands with main CLI."""
    cli.add_command(activity_group, name="activity")
