"""Record store maintenance commands."""

from __future__ import annotations
import click

from .helpers import cli, fail, get_store
from ..errors import LsmError
from ..sources import JsonLinesSource


@cli.command('import-records')
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--collection', default=None, help='Target collection (default: database.collection)')
@click.pass_context
def import_records(ctx: click.Context, input_path: str, collection: str | None):
    """Load a JSON-lines file into the record store."""
    cfg = ctx.obj
    target = collection or cfg['database']['collection']
    try:
        with get_store(cfg) as store:
            count = store.insert_records(target, JsonLinesSource(input_path))
            total = store.count(target)
    except LsmError as e:
        fail(ctx, str(e))
        return
    click.echo(f"{click.style('✓', fg='green')} Imported {count} record(s) into '{target}' ({total} total)")


@cli.command('collections')
@click.pass_context
def list_collections(ctx: click.Context):
    """List collections in the record store with their sizes."""
    try:
        with get_store(ctx.obj) as store:
            sizes = [(name, store.count(name)) for name in store.list_collections()]
    except LsmError as e:
        fail(ctx, str(e))
        return
    if not sizes:
        click.echo("No collections")
        return
    for name, size in sizes:
        click.echo(f"{name}\t{size}")


__all__ = ["import_records", "list_collections"]
