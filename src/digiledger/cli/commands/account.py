"""Account management commands."""

import click
from digiledger.cli.account_resolution import resolve_account_or_exit
from digiledger.cli.error_handling import handle_domain_error
from digiledger.domain.account import AccountService
from digiledger.domain.entities import AccountCategory
from digiledger.domain.errors import DomainError

CATEGORY_CHOICES = [c.value for c in AccountCategory]


def _echo_account(acc) -> None:
    status = "active" if acc.is_active else "inactive"
    click.echo(
        f"ID: {acc.id:3d} | {acc.code:10s} | {acc.name:30s} | "
        f"{acc.category.value:9s} | {acc.normal_balance.value:6s} | {status}"
    )


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--category",
    required=True,
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    help="Account category",
)
@click.option("--description", help="Account description")
@click.pass_context
def create_account(ctx, code: str, name: str, category: str, description: str | None):
    """Create a new account.

    The normal balance is derived from the category: ASSET and EXPENSE
    accounts are debit-normal, the others credit-normal.

    Examples:
        digiledger account create 1000 Cash --category ASSET
        digiledger account create 4000 "Service Revenue" --category revenue
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(
            code=code, name=name, category=category, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    acc = service.get_account(account_id)
    click.echo(f"Created account '{acc.code} - {acc.name}' (ID: {account_id})")
    click.echo(f"Normal balance: {acc.normal_balance.value}")


@account_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide deactivated accounts")
@click.pass_context
def list_accounts(ctx, active_only: bool):
    """List all accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(include_inactive=not active_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 90)
    for acc in accounts:
        _echo_account(acc)


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show one account. ACCOUNT can be an account code or ID."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    click.echo(f"ID: {acc.id}")
    click.echo(f"Code: {acc.code}")
    click.echo(f"Name: {acc.name}")
    click.echo(f"Category: {acc.category.value}")
    click.echo(f"Normal balance: {acc.normal_balance.value}")
    click.echo(f"Active: {'yes' if acc.is_active else 'no'}")
    if acc.description:
        click.echo(f"Description: {acc.description}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--description", help="New description")
@click.pass_context
def update_account(ctx, account: str, name: str | None, description: str | None) -> None:
    """Update an account's name or description.

    Code and category cannot be changed after creation.

    Examples:
        digiledger account update 1000 --name "Cash on Hand"
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    current = service.require_account(account_id)

    try:
        acc = service.update_account(
            account_id,
            name=name if name is not None else current.name,
            description=description if description is not None else current.description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated account '{acc.code} - {acc.name}'")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str) -> None:
    """Deactivate an account so no new entries can post to it."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.deactivate_account(account_id)
    click.echo(f"Deactivated account '{acc.code} - {acc.name}'")


@account_group.command("activate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def activate_account(ctx, account: str) -> None:
    """Reactivate a deactivated account."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.activate_account(account_id)
    click.echo(f"Activated account '{acc.code} - {acc.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
