"""CLI error handling helpers."""

import click

from digiledger.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    UnauthorizedError,
)

# Exit code 2 is left to click for usage errors.
EXIT_CODES = {
    NotFoundError: 3,
    ConflictError: 4,
    UnauthorizedError: 5,
}


def exit_code_for(error: Exception) -> int:
    """Return the process exit code for a domain error."""
    for error_type, code in EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(exit_code_for(error))
