"""Generic resource listing command for rbxsync."""

from __future__ import annotations

from typing import Optional

import click

from rbxsync.cli.common import Context, global_options, handle_errors, print_models
from rbxsync.models.base import ResourceSummary
from rbxsync.services.resources import ResourceService


@click.group()
def resource() -> None:
    """List any Open Cloud collection."""
    pass


@resource.command("list")
@click.argument("path")
@click.option("--items-key", default="items", show_default=True, help="Key holding the items")
@click.option("--limit", "-l", type=int, help="Page size (max 100)")
@click.option("--cursor", "-c", help="Cursor from a previous page")
@global_options
@handle_errors
def resource_list(
    ctx: Context,
    path: str,
    items_key: str,
    limit: Optional[int],
    cursor: Optional[str],
) -> None:
    """List id, name and creation time from PATH.

    PATH may contain {universe_id}, which is filled from the configured
    universe.

    Example:
        rbxsync resource list '/cloud/v2/universes/{universe_id}/subscription-products'
    """
    service = ResourceService(ctx.get_client(), path, items_key=items_key)
    page = service.list_page(limit=limit, cursor=cursor)
    print_models(ctx, page.items, ResourceSummary.table_columns(), page.next_cursor)
