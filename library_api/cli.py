import click
from flask import current_app
from flask.cli import with_appcontext

from library_api.extensions import db
from library_api.services.auth_service import AuthService
from library_api.utils.errors import ValidationError


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create all tables (development shortcut for ``flask db upgrade``)."""
    db.create_all()
    click.echo("Database tables created.")


@click.command("create-admin")
@click.argument("name")
@click.argument("email")
@click.password_option()
@with_appcontext
def create_admin_command(name, email, password):
    """Create an admin account; registration only ever creates members."""
    if len(password) < 8:
        raise click.ClickException("Password must be at least 8 characters.")
    try:
        user = AuthService.register(name=name, email=email, password=password, role="admin")
    except ValidationError as e:
        db.session.rollback()
        raise click.ClickException("; ".join(m for msgs in e.errors.values() for m in msgs))
    current_app.logger.info(f"[cli] admin created id={user.id}")
    click.echo(f"Admin {user.email} created (id={user.id}).")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
