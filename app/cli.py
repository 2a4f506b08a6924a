# app/cli.py
"""
Flask CLI commands: flask --app run <command>
"""
import click

from . import db
from app.utils.errors import NotFound
from app.utils.gateway import get_gateway
from app.utils.tokens import issue_token


def register_commands(app):
    @app.cli.command('init-db')
    def init_db():
        """Create all database tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('create-admin')
    @click.argument('uid')
    @click.argument('email')
    @click.option('--name', default='Administrator', help='Display name for the account')
    def create_admin(uid, email, name):
        """Create or promote an admin account and print a bearer token."""
        gateway = get_gateway()
        try:
            gateway.update(uid, 'users', uid, {'role': 'admin', 'email': email})
            click.echo(f'Promoted {uid} to admin.')
        except NotFound:
            gateway.put(uid, 'users', uid, {
                'uid': uid,
                'email': email,
                'name': name,
                'role': 'admin',
                'loginCount': 0,
            })
            click.echo(f'Created admin account {uid}.')
        click.echo(issue_token(uid, role='admin'))

    @app.cli.command('issue-token')
    @click.argument('uid')
    def issue_token_command(uid):
        """Print a fresh bearer token for an existing account."""
        try:
            account = get_gateway().get(uid, 'users', uid)
        except NotFound:
            raise click.ClickException(f'No account with uid {uid}')
        click.echo(issue_token(uid, role=account.get('role', 'user')))
