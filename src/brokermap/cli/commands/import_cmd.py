"""CSV import command."""

import click
from brokermap.cli.account_resolution import resolve_account_or_exit
from brokermap.cli.error_handling import handle_domain_error
from brokermap.domain.account import AccountService
from brokermap.domain.activity_import import ActivityImportService
from brokermap.domain.errors import DomainError
from brokermap.domain.import_mapping import ImportMappingService
from brokermap.domain.orchestrator import ImportOrchestrator
from brokermap.utils.csv_reader import read_csv


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--check-only",
    is_flag=True,
    default=False,
    help="Save the mapping and check the activities without importing them",
)
@click.pass_context
def import_csv(ctx, csv_file: str, account: str, check_only: bool):
    """Import activities from a CSV file using the account's saved mapping."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    mapping_service = ImportMappingService(db)
    import_service = ActivityImportService(db)

    try:
        dataset = read_csv(csv_file)
        mapping = mapping_service.get_mapping(account_id)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    preview = import_service.preview(dataset, mapping)
    if not preview.gaps.is_empty:
        click.echo(f"Error: {preview.gaps.describe()}", err=True)
        click.echo("Use 'mapping field' and 'mapping activity' to complete the mapping.", err=True)
        ctx.exit(1)

    if preview.report:
        click.echo(f"Validation failed for {len(preview.report)} rows:", err=True)
        for row_index, errors in preview.report.items():
            click.echo(f"  Row {row_index}: {', '.join(errors)}", err=True)
        ctx.exit(1)

    failures = []
    orchestrator = ImportOrchestrator(mapping_service, import_service, on_error=failures.append)
    checked = orchestrator.run(mapping, preview.candidates)
    if checked is None:
        click.echo(f"Error: {failures[-1]}", err=True)
        ctx.exit(1)

    invalid = [(i, a) for i, a in enumerate(checked, start=1) if not a.is_valid]
    click.echo(f"\nChecked {len(checked)} activities:")
    click.echo(f"  Valid: {len(checked) - len(invalid)}")
    if invalid:
        click.echo(f"  Skipped: {len(invalid)}")
        for row_index, activity in invalid:
            click.echo(f"    Row {row_index}: {activity.comment}")

    if check_only:
        click.echo("Check only: no activities were imported.")
        return

    created = orchestrator.confirm()
    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {created} activities")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
