# Overview: Flask CLI command groups for bootstrap, backup and settings.

# backend/bodega/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to bodega (PowerShell: $env:FLASK_APP="bodega").
# - Use: python -m flask <group> <command> [options]
#
# System:
# - python -m flask system init-db
#   Create the records table if it doesn't exist (use `flask db upgrade` for migrations).
# - python -m flask system reset --yes
#   Empty every collection (deletes all data).
# - python -m flask system backup backup.json
#   Write every collection to a JSON file.
# - python -m flask system restore backup.json
#   Replace collections with the contents of a JSON backup.
#
# Settings:
# - python -m flask settings show
# - python -m flask settings set-rate 36.5
#   Set the Bs/USD exchange rate used for new sales, purchases and receipts.

import json

import click
from flask.cli import with_appcontext

from .errors import BodegaError
from .extensions import db
from .services import settings_service, storage_service


@click.group('system')
def system_group():
    """System bootstrap and data commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create tables for a fresh install."""
    db.create_all()
    click.echo("PASS Database tables ready")


@system_group.command('reset')
@click.option('--yes', is_flag=True, help='Confirm deleting every record')
@with_appcontext
def reset(yes):
    """Empty every collection."""
    if not yes:
        raise click.UsageError("Refusing to reset without --yes")
    storage_service.reset_all()
    click.echo("PASS All collections cleared")


@system_group.command('backup')
@click.argument('path', type=click.Path(dir_okay=False, writable=True))
@with_appcontext
def backup(path):
    """Export every collection to PATH as JSON."""
    snapshot = storage_service.export_all()
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(snapshot, fh, ensure_ascii=False, indent=2)
    total = sum(len(records) for records in snapshot.values())
    click.echo(f"PASS Wrote {total} records to {path}")


@system_group.command('restore')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@with_appcontext
def restore(path):
    """Replace collections with the contents of the JSON backup at PATH."""
    with open(path, encoding="utf-8") as fh:
        try:
            snapshot = json.load(fh)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid backup file: {e}")
    try:
        counts = storage_service.import_all(snapshot)
    except BodegaError as e:
        raise click.ClickException(str(e))
    for collection, count in counts.items():
        click.echo(f"PASS {collection}: {count} records")


@click.group('settings')
def settings_group():
    """Exchange rate and settings commands."""


@settings_group.command('show')
@with_appcontext
def show_settings():
    settings = settings_service.get_settings()
    click.echo(f"Exchange rate: {settings['exchange_rate']}")
    click.echo(f"Last update:   {settings['last_rate_update'] or 'never'}")


@settings_group.command('set-rate')
@click.argument('rate')
@with_appcontext
def set_rate(rate):
    """Set the Bs/USD exchange rate."""
    try:
        settings = settings_service.update_exchange_rate(rate)
    except BodegaError as e:
        raise click.ClickException(str(e))
    click.echo(f"PASS Exchange rate set to {settings['exchange_rate']}")


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(settings_group)
