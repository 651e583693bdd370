"""Transaction management commands."""

import click
from digiledger.cli.entry_options import entry_to_input, parse_entry_spec
from digiledger.cli.error_handling import handle_domain_error
from digiledger.domain.account import AccountService
from digiledger.domain.entities import AMOUNT_SCALE, TransactionInput, TransactionStatus
from digiledger.domain.errors import DomainError
from digiledger.domain.transaction import TransactionService
from digiledger.domain.user import UserService
from digiledger.logging_config import bind_context
from digiledger.utils.date_parser import parse_date, parse_date_range

STATUS_CHOICES = [s.value for s in TransactionStatus]
AMOUNT_FORMAT = f",.{AMOUNT_SCALE}f"

ENTRY_HELP = (
    "Entry as [ENTRY_ID=]ACCOUNT:TYPE:AMOUNT[:DESCRIPTION]; repeat for each entry"
)


def _echo_transaction(txn) -> None:
    click.echo(f"Transaction {txn.id} [{txn.status.value}]")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Description: {txn.description}")
    if txn.reference_number:
        click.echo(f"  Reference: {txn.reference_number}")
    if txn.creator_name:
        click.echo(f"  Created by: {txn.creator_name}")
    click.echo("  Entries:")
    for e in txn.entries:
        line = (
            f"    #{e.id:<4d} {e.account_code:10s} {e.account_name:30s} "
            f"{e.entry_type.value:6s} {e.amount:>18{AMOUNT_FORMAT}}"
        )
        if e.description:
            line += f"  {e.description}"
        click.echo(line)
    click.echo(
        f"  Total debits: {txn.total_debits:{AMOUNT_FORMAT}}  "
        f"Total credits: {txn.total_credits:{AMOUNT_FORMAT}}"
    )


def _resolve_acting_user(ctx) -> int:
    try:
        user = UserService(ctx.obj["db"]).resolve_acting_user(ctx.obj.get("acting_user"))
    except DomainError as e:
        click.echo("Hint: pass --user or set DIGILEDGER_USER.", err=True)
        handle_domain_error(ctx, e)
    bind_context(user_id=user.id)
    return user.id


def _parse_entries(ctx, entry_specs) -> tuple:
    account_service = AccountService(ctx.obj["db"])
    try:
        return tuple(parse_entry_spec(spec, account_service) for spec in entry_specs)
    except DomainError as e:
        handle_domain_error(ctx, e)


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage journal transactions."""
    pass


@transaction_group.command("create")
@click.option("--description", required=True, help="Transaction description")
@click.option("--date", "txn_date", required=True, help="Transaction date (YYYY-MM-DD, 'today', ...)")
@click.option("--reference", help="Reference number")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    default=TransactionStatus.DRAFT.value,
    show_default=True,
    help="Initial status",
)
@click.option("--entry", "entries", multiple=True, help=ENTRY_HELP)
@click.pass_context
def create_transaction(ctx, description, txn_date, reference, status, entries):
    """Create a transaction.

    DRAFT transactions may be unbalanced; PENDING_APPROVAL transactions
    need total debits equal to total credits.

    Examples:
        digiledger --user me@example.com transaction create --description "Sale" \\
            --date 2024-01-15 --entry 1000:DEBIT:100 --entry 4000:CREDIT:100
    """
    service = TransactionService(ctx.obj["db"])
    user_id = _resolve_acting_user(ctx)

    payload = TransactionInput(
        description=description,
        date=_parse_date_or_exit(ctx, txn_date),
        status=TransactionStatus(status.upper()),
        entries=_parse_entries(ctx, entries),
        reference_number=reference,
    )

    try:
        txn = service.create_transaction(payload, user_id=user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    _echo_transaction(txn)


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--description", help="Transaction description")
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD, 'today', ...)")
@click.option("--reference", help="Reference number")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    help="New status",
)
@click.option("--entry", "entries", multiple=True, help=ENTRY_HELP)
@click.pass_context
def update_transaction(ctx, transaction_id, description, txn_date, reference, status, entries):
    """Update a DRAFT transaction.

    Options that are not given keep their current value. When any
    --entry is given, the entries replace the whole entry set: prefix an
    entry with its ID (e.g. 17=1000:DEBIT:50) to edit it in place;
    existing entries that are not listed are removed.

    Examples:
        digiledger transaction update 3 --status PENDING_APPROVAL
        digiledger transaction update 3 --entry 5=1000:DEBIT:75 --entry 6=4000:CREDIT:75
    """
    service = TransactionService(ctx.obj["db"])
    user_id = _resolve_acting_user(ctx)

    try:
        current = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    payload = TransactionInput(
        description=description if description is not None else current.description,
        date=_parse_date_or_exit(ctx, txn_date) if txn_date is not None else current.date,
        status=TransactionStatus(status.upper()) if status is not None else current.status,
        entries=(
            _parse_entries(ctx, entries)
            if entries
            else tuple(entry_to_input(e) for e in current.entries)
        ),
        reference_number=reference if reference is not None else current.reference_number,
    )

    try:
        txn = service.update_transaction(transaction_id, payload, user_id=user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {txn.id}")
    _echo_transaction(txn)


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a transaction with its entries."""
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_transaction(txn)


@transaction_group.command("list")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    help="Only show transactions with this status",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_transactions(ctx, status, start_date, end_date):
    """List transactions, newest first."""
    service = TransactionService(ctx.obj["db"])

    try:
        start, end = parse_date_range(start_date, end_date)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    transactions = service.list_transactions(
        status=TransactionStatus(status.upper()) if status else None,
        start_date=start,
        end_date=end,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'ID':>4s}  {'Date':10s}  {'Status':16s}  {'Debits':>18s}  {'Credits':>18s}  Description"
    )
    click.echo("-" * 98)
    for txn in transactions:
        click.echo(
            f"{txn.id:>4d}  {txn.date!s:10s}  {txn.status.value:16s}  "
            f"{txn.total_debits:>18{AMOUNT_FORMAT}}  {txn.total_credits:>18{AMOUNT_FORMAT}}  "
            f"{txn.description}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a DRAFT transaction and its entries."""
    service = TransactionService(ctx.obj["db"])

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
