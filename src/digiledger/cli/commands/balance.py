"""CSV balance checker commands."""

import click
from digiledger.domain.balance_checker import BalanceCheckerService


@click.group()
def balance_group():
    """Check CSV trial balances."""
    pass


@balance_group.command("check")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--show-entries", is_flag=True, help="List every parsed row")
@click.pass_context
def check_balance(ctx, csv_file: str, show_entries: bool):
    """Check that debits equal credits in a CSV file.

    The file needs the header Account,Description,Debit,Credit. Rows that
    cannot be read are reported and left out of the totals. Exits with
    status 1 when the file does not balance or any line could not be read.
    """
    service = BalanceCheckerService()
    with open(csv_file, "rb") as f:
        result = service.check_balance(f)

    if show_entries and result.entries:
        click.echo(f"{'Account':25s} {'Debit':>14s} {'Credit':>14s}  Description")
        click.echo("-" * 80)
        for entry in result.entries:
            click.echo(
                f"{entry.account:25s} {entry.debit:>14,} {entry.credit:>14,}  "
                f"{entry.description}"
            )
        click.echo("")

    click.echo(f"Entries: {result.entry_count}")
    click.echo(f"Total debits: {result.total_debits:,}")
    click.echo(f"Total credits: {result.total_credits:,}")
    if not result.is_balanced:
        click.echo(f"Balanced: no (difference {result.difference:,})")
    elif result.errors:
        click.echo("Balanced: not verified (some lines could not be read)")
    else:
        click.echo("Balanced: yes")

    if result.errors:
        click.echo(f"Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"  {error}", err=True)

    if not result.is_balanced or result.errors:
        ctx.exit(1)


@balance_group.command("template")
@click.argument("output", type=click.Path(dir_okay=False, writable=True), required=False)
def template(output: str | None):
    """Write a CSV template to OUTPUT, or to stdout when omitted."""
    data = BalanceCheckerService().generate_template()
    if output is None:
        click.echo(data.decode("utf-8"), nl=False)
        return

    with open(output, "wb") as f:
        f.write(data)
    click.echo(f"Template written to {output}")


def register_commands(cli):
    """Register balance checker commands with main CLI."""
    cli.add_command(balance_group, name="balance")
