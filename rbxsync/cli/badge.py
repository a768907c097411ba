"""Badge commands for rbxsync."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from rbxsync.cli.common import Context, global_options, handle_errors, print_models
from rbxsync.core.output import OutputFormat, print_json, print_success
from rbxsync.models.badge import Badge
from rbxsync.services.badges import BadgeService


@click.group()
def badge() -> None:
    """Manage badges."""
    pass


@badge.command("list")
@click.option(
    "--limit",
    "-l",
    type=click.Choice(["10", "25", "50", "100"]),
    help="Page size",
)
@click.option("--cursor", "-c", help="Cursor from a previous page")
@global_options
@handle_errors
def badge_list(ctx: Context, limit: Optional[str], cursor: Optional[str]) -> None:
    """List badges in the universe."""
    page = BadgeService(ctx.get_client()).list_page(
        limit=int(limit) if limit else None, cursor=cursor
    )
    print_models(ctx, page.items, Badge.table_columns(), page.next_cursor)


@badge.command("create")
@click.argument("name")
@click.option("--description", "-d", default="", help="Badge description")
@click.option(
    "--payment-source",
    type=click.Choice(["user", "group"]),
    help="Who pays the creation fee",
)
@click.option(
    "--icon",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="PNG icon to upload with the badge",
)
@global_options
@handle_errors
def badge_create(
    ctx: Context,
    name: str,
    description: str,
    payment_source: Optional[str],
    icon: Optional[Path],
) -> None:
    """Create a badge.

    Example:
        rbxsync badge create "First Win" --payment-source user --icon win.png
    """
    created = BadgeService(ctx.get_client()).create(name, description, payment_source, icon)
    if ctx.quiet:
        click.echo(created.id)
    elif ctx.output_format == OutputFormat.JSON:
        print_json(created.to_dict())
    else:
        print_success(f"Created badge '{name}' ({created.id})")
