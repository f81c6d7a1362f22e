"""Flask CLI commands."""
import click
from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from quizmaster import db
from quizmaster.auth.models import User
from quizmaster.auth.utils import (
    hash_password,
    is_valid_email,
    normalize_email,
    validate_password,
    validate_username,
)


def create_admin(username: str, email: str, password: str) -> tuple[User, bool]:
    """
    Create an admin account, or promote the existing account with this email.

    Returns (user, created).
    """
    email = normalize_email(email)
    if not is_valid_email(email):
        raise click.BadParameter("Please provide a valid email address", param_hint="--email")

    user = User.query.filter_by(email=email).first()
    if user:
        user.role = "admin"
        created = False
    else:
        username = username.strip()
        ok, error = validate_username(username)
        if not ok:
            raise click.BadParameter(error, param_hint="--username")
        ok, error = validate_password(password)
        if not ok:
            raise click.BadParameter(error, param_hint="--password")
        if User.query.filter_by(username=username).first():
            raise click.BadParameter("User with this username already exists", param_hint="--username")
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role="admin",
        )
        db.session.add(user)
        created = True

    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Could not save admin account: {exc}")
    return user, created


def register_cli(app: Flask) -> None:

    @app.cli.command("create-admin")
    @click.option("--username", required=True, help="Username for a new account.")
    @click.option("--email", required=True, help="Email of the account to create or promote.")
    @click.password_option(help="Password for a new account.")
    def create_admin_command(username, email, password):
        """Seed an admin account (or promote an existing one)."""
        user, created = create_admin(username, email, password)
        action = "Created" if created else "Promoted"
        click.echo(f"{action} admin {user.username} <{user.email}> (id={user.id})")
