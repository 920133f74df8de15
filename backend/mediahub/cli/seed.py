"""``flask seed`` commands for demo users, videos and relationships."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext

from mediahub.core.config import ENV_VAR
from mediahub.core.extensions import db
from mediahub.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _refuse_in_production() -> None:
    """Abort destructive commands outside development and testing."""
    env = os.getenv(ENV_VAR, "development").strip().lower()
    if env == "production" and not current_app.config.get("TESTING"):
        raise click.UsageError("'flask seed fresh' is disabled when APP_ENV=production.")


def _run(verbose: bool) -> None:
    try:
        summary = seed_data.run_all(db, verbose=verbose)
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding stage.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.getLogger(seed_data.__name__).setLevel(logging.INFO)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Insert demo data; rows that already exist are left untouched."""
    _run(bool(ctx.obj.get("verbose", False)))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed."""
    _refuse_in_production()
    if not yes:
        click.confirm("This drops all mediahub tables. Continue?", abort=True)
    LOGGER.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _run(bool(ctx.obj.get("verbose", False)))
