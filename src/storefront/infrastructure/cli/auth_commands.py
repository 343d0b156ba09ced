"""CLI commands for admin access."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.auth.passwords import hash_password
from storefront.infrastructure.bootstrap import access_guard


@click.command("login")
@click.option("--email", required=True, help="Admin email.")
@click.password_option("--password", confirmation_prompt=False, help="Admin password.")
def auth_login(email: str, password: str) -> None:
    """Exchange admin credentials for a 24h token."""
    try:
        token = access_guard().issue_credential(email, password)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(token)


@click.command("hash-password")
@click.password_option("--password", help="Password to hash.")
def auth_hash_password(password: str) -> None:
    """Print a hash for STOREFRONT_ADMIN_PASSWORD_HASH."""
    click.echo(hash_password(password))
