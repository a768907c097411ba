"""Datastore commands for rbxsync."""

from __future__ import annotations

from typing import Optional

import click

from rbxsync.cli.common import (
    Context,
    global_options,
    handle_errors,
    parse_json_value,
    print_models,
)
from rbxsync.core.output import OutputFormat, print_json, print_success
from rbxsync.models.datastore import Datastore, EntryKey
from rbxsync.services.datastores import DatastoreService


@click.group()
def datastore() -> None:
    """Query and edit standard datastores."""
    pass


@datastore.command("list")
@click.option("--limit", "-l", type=int, help="Page size")
@click.option("--cursor", "-c", help="Cursor from a previous page")
@click.option("--prefix", help="Only datastores whose name starts with this")
@global_options
@handle_errors
def datastore_list(
    ctx: Context,
    limit: Optional[int],
    cursor: Optional[str],
    prefix: Optional[str],
) -> None:
    """List datastores in the universe.

    Example:
        rbxsync datastore list --limit 10
    """
    page = DatastoreService(ctx.get_client()).list_datastores(
        limit=limit, cursor=cursor, prefix=prefix
    )
    print_models(ctx, page.items, Datastore.table_columns(), page.next_cursor)


@datastore.command("entries")
@click.argument("name")
@click.option("--limit", "-l", type=int, help="Page size")
@click.option("--cursor", "-c", help="Cursor from a previous page")
@click.option("--prefix", help="Only keys starting with this")
@click.option("--scope", help="Entry scope (default: global)")
@global_options
@handle_errors
def datastore_entries(
    ctx: Context,
    name: str,
    limit: Optional[int],
    cursor: Optional[str],
    prefix: Optional[str],
    scope: Optional[str],
) -> None:
    """List entry keys in a datastore.

    Example:
        rbxsync datastore entries PlayerData --prefix user_
    """
    page = DatastoreService(ctx.get_client()).list_entries(
        name, limit=limit, cursor=cursor, prefix=prefix, scope=scope
    )
    print_models(ctx, page.items, EntryKey.table_columns(), page.next_cursor, id_field="key")


@datastore.command("get")
@click.argument("name")
@click.argument("key")
@click.option("--scope", help="Entry scope (default: global)")
@global_options
@handle_errors
def datastore_get(ctx: Context, name: str, key: str, scope: Optional[str]) -> None:
    """Print the JSON value stored under KEY.

    Example:
        rbxsync datastore get PlayerData user_42
    """
    entry = DatastoreService(ctx.get_client()).get_entry(name, key, scope=scope)
    print_json(entry.value)


@datastore.command("set")
@click.argument("name")
@click.argument("key")
@click.argument("value")
@click.option("--scope", help="Entry scope (default: global)")
@global_options
@handle_errors
def datastore_set(ctx: Context, name: str, key: str, value: str, scope: Optional[str]) -> None:
    """Store a JSON VALUE under KEY.

    Example:
        rbxsync datastore set PlayerData user_42 '{"coins": 10}'
    """
    result = DatastoreService(ctx.get_client()).set_entry(
        name, key, parse_json_value(value), scope=scope
    )
    if ctx.output_format == OutputFormat.JSON:
        print_json(result.value)
    else:
        print_success(f"Entry written: {name}/{key}")


@datastore.command("delete")
@click.argument("name")
@click.argument("key")
@click.option("--scope", help="Entry scope (default: global)")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@global_options
@handle_errors
def datastore_delete(ctx: Context, name: str, key: str, scope: Optional[str], yes: bool) -> None:
    """Delete the entry stored under KEY.

    Example:
        rbxsync datastore delete PlayerData user_42 --yes
    """
    if not yes:
        click.confirm(f"Delete {name}/{key}?", abort=True)
    DatastoreService(ctx.get_client()).delete_entry(name, key, scope=scope)
    print_success(f"Entry deleted: {name}/{key}")
