"""Developer product commands for rbxsync."""

from __future__ import annotations

from typing import Optional

import click

from rbxsync.cli.common import Context, global_options, handle_errors, print_models
from rbxsync.core.output import OutputFormat, print_json, print_success
from rbxsync.models.developer_product import DeveloperProduct
from rbxsync.services.developer_products import DeveloperProductService


@click.group()
def product() -> None:
    """Manage developer products."""
    pass


@product.command("list")
@click.option("--limit", "-l", type=int, help="Page size (max 50)")
@click.option("--cursor", "-c", help="Cursor from a previous page")
@global_options
@handle_errors
def product_list(ctx: Context, limit: Optional[int], cursor: Optional[str]) -> None:
    """List developer products in the universe."""
    page = DeveloperProductService(ctx.get_client()).list_page(limit=limit, cursor=cursor)
    print_models(ctx, page.items, DeveloperProduct.table_columns(), page.next_cursor)


@product.command("create")
@click.argument("name")
@click.option("--price", type=int, required=True, help="Price in Robux")
@click.option("--description", "-d", default="", help="Store description")
@global_options
@handle_errors
def product_create(ctx: Context, name: str, price: int, description: str) -> None:
    """Create a developer product.

    Example:
        rbxsync product create "100 Coins" --price 25
    """
    created = DeveloperProductService(ctx.get_client()).create(name, price, description)
    if ctx.quiet:
        click.echo(created.id)
    elif ctx.output_format == OutputFormat.JSON:
        print_json(created.to_dict())
    else:
        print_success(f"Created developer product '{name}' ({created.id})")
