"""Flask CLI commands for Pursewise."""

from __future__ import annotations

import click

from .errors import ValidationFailed


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("pursewise-seed-categories")
    def pursewise_seed_categories() -> None:
        """Insert the default category catalogue if none exists."""

        from .context import get_context
        from .services.categories import ensure_default_categories

        created = ensure_default_categories(get_context().categories)
        if created:
            click.echo(f"Seeded {created} default categories.")
        else:
            click.echo("Categories already present; nothing to do.")

    @app.cli.command("pursewise-create-user")
    @click.argument("username")
    @click.option("--name", default="", help="Display name")
    @click.option("--email", default="", help="Contact email")
    @click.password_option()
    def pursewise_create_user(username: str, name: str, email: str, password: str) -> None:
        """Create a login for USERNAME."""

        from .context import get_context
        from .services.auth import create_user

        try:
            user = create_user(
                username=username,
                password=password,
                name=name,
                email=email,
                repository=get_context().users,
            )
        except ValidationFailed as exc:
            for field_name, messages in exc.errors.items():
                for message in messages:
                    click.echo(f"{field_name}: {message}", err=True)
            raise click.exceptions.Exit(1) from exc
        click.echo(f"Created user {user.username} (id={user.id}).")
