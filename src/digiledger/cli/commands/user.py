"""User management commands."""

import click
from digiledger.cli.error_handling import handle_domain_error
from digiledger.domain.errors import DomainError
from digiledger.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email", metavar="EMAIL")
@click.option("--first-name", required=True, help="First name")
@click.option("--last-name", required=True, help="Last name")
@click.pass_context
def create_user(ctx, email: str, first_name: str, last_name: str):
    """Create a user.

    Examples:
        digiledger user create jane@example.com --first-name Jane --last-name Doe
    """
    service = UserService(ctx.obj["db"])

    try:
        user_id = service.create_user(email=email, first_name=first_name, last_name=last_name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created user '{email.strip().lower()}' (ID: {user_id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = UserService(ctx.obj["db"])

    users = service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.email:30s} | {u.full_name}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
