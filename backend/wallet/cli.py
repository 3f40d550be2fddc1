# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/wallet/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create all tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# User inspection/bootstrap:
# - python -m flask users create --name Ana --email ana@example.com --password secret
#   Create an account (prompts if options are omitted).
# - python -m flask users list
#   List all accounts.
#
# Session maintenance:
# - python -m flask sessions revoke-user 1
#   Delete every session of a user (forces sign-in on all devices).

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import User
from .services import get_services
from .services.auth_service import DuplicateAccount
from .validation import SIGN_UP_SCHEMA, ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database tables created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete.")


@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('create')
@click.option('--name', prompt=True, help='Display name')
@click.option('--email', prompt=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@with_appcontext
def create_user_cli(name, email, password):
    """Create a new account, same rules as POST /sign-up."""
    try:
        payload = SIGN_UP_SCHEMA.validate({"name": name, "email": email, "password": password})
        user = get_services().accounts.sign_up(**payload)
    except ValidationError as e:
        raise click.ClickException(f"FAIL {e}")
    except DuplicateAccount as e:
        raise click.ClickException(f"FAIL {e}")

    click.echo(f"PASS Created user: {user.name} ({user.email})")
    click.echo(f"     User ID: {user.id}")
    click.echo("SECURITY Password securely hashed with bcrypt")


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with session and entry counts."""
    users = db.session.query(User).order_by(User.id).all()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<5} {'Name':<20} {'Email':<30} {'Sessions':<10} {'Entries'}")
    click.echo("="*80)

    for user in users:
        click.echo(
            f"{user.id:<5} {user.name:<20} {user.email:<30} "
            f"{len(user.sessions):<10} {len(user.transactions)}"
        )

    click.echo("="*80 + "\n")


@click.group('sessions')
def sessions_group():
    """Session maintenance commands."""


@sessions_group.command('revoke-user')
@click.argument('user_id', type=int)
@with_appcontext
def revoke_user_sessions(user_id):
    """Delete every session of USER_ID."""
    user = db.session.query(User).filter_by(id=user_id).first()
    if not user:
        raise click.ClickException(f"FAIL User ID {user_id} not found")

    count = get_services().registry.destroy_all_for_user(user_id)
    click.echo(f"PASS Revoked {count} session(s) for {user.email}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(sessions_group)
