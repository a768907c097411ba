"""Game pass commands for rbxsync."""

from __future__ import annotations

from typing import Optional

import click

from rbxsync.cli.common import Context, global_options, handle_errors, print_models
from rbxsync.core.output import OutputFormat, print_json, print_success
from rbxsync.models.game_pass import GamePass
from rbxsync.services.game_passes import GamePassService


@click.group()
def gamepass() -> None:
    """Manage game passes."""
    pass


@gamepass.command("list")
@click.option("--limit", "-l", type=int, help="Page size (max 100)")
@click.option("--cursor", "-c", help="Cursor from a previous page")
@global_options
@handle_errors
def gamepass_list(ctx: Context, limit: Optional[int], cursor: Optional[str]) -> None:
    """List game passes in the universe.

    Example:
        rbxsync gamepass list -o json
    """
    page = GamePassService(ctx.get_client()).list_page(limit=limit, cursor=cursor)
    print_models(ctx, page.items, GamePass.table_columns(), page.next_cursor)


@gamepass.command("create")
@click.argument("name")
@click.option("--description", "-d", default="", help="Store description")
@click.option("--price", type=int, help="Price in Robux")
@global_options
@handle_errors
def gamepass_create(ctx: Context, name: str, description: str, price: Optional[int]) -> None:
    """Create a game pass.

    Example:
        rbxsync gamepass create "VIP" --price 250
    """
    created = GamePassService(ctx.get_client()).create(name, description, price)
    if ctx.quiet:
        click.echo(created.id)
    elif ctx.output_format == OutputFormat.JSON:
        print_json(created.to_dict())
    else:
        print_success(f"Created game pass '{name}' ({created.id})")
