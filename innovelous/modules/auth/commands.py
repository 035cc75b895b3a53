"""
Admin CLI
=========

    flask create-admin admin@example.com
"""

import click
from . import auth_bp
from .gate import get_auth_gate
from ...core.errors import ValidationError
from ...core.remote import RemoteError


@auth_bp.cli.command('create-admin')
@click.argument('email')
@click.password_option()
def create_admin(email, password):
    """Create or replace the admin credential record"""
    try:
        get_auth_gate().set_credentials(email, password)
    except ValidationError as e:
        raise click.BadParameter(e.message)
    except RemoteError as e:
        raise click.ClickException(f"Could not store credentials: {e}")
    click.echo(f"Admin credentials saved for {email.strip().lower()}")
