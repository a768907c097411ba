"""Universe and place commands for rbxsync."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from rbxsync.cli.common import Context, global_options, handle_errors
from rbxsync.core.output import OutputFormat, print_json, print_success
from rbxsync.services.universes import VERSION_TYPES, PlaceService, UniverseService
from rbxsync.sync.project import UniverseSettings


@click.group()
def universe() -> None:
    """Manage universe settings."""
    pass


@universe.command("update")
@click.option("--name", help="Display name")
@click.option("--description", help="Description")
@click.option("--genre", help="Genre")
@click.option(
    "--device",
    "devices",
    multiple=True,
    help="Playable device (can repeat), e.g. DEVICE_TYPE_COMPUTER",
)
@global_options
@handle_errors
def universe_update(
    ctx: Context,
    name: Optional[str],
    description: Optional[str],
    genre: Optional[str],
    devices: tuple[str, ...],
) -> None:
    """Update universe settings; only the given options change.

    Example:
        rbxsync universe update --name "My Game" --device DEVICE_TYPE_PHONE
    """
    settings = UniverseSettings(
        name=name,
        description=description,
        genre=genre,
        playable_devices=list(devices) or None,
    ).to_patch()

    result = UniverseService(ctx.get_client()).update_settings(settings)
    if ctx.output_format == OutputFormat.JSON:
        print_json(result.value)
    else:
        print_success(f"Updated universe settings: {', '.join(settings)}")


@click.group()
def place() -> None:
    """Publish places."""
    pass


@place.command("publish")
@click.argument("place_id")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--version-type",
    type=click.Choice(list(VERSION_TYPES)),
    default="Published",
    show_default=True,
    help="Publish live or only save the version",
)
@global_options
@handle_errors
def place_publish(ctx: Context, place_id: str, file_path: Path, version_type: str) -> None:
    """Upload a .rbxl or .rbxlx file as a new place version.

    Example:
        rbxsync place publish 123456 build/game.rbxl
    """
    version = PlaceService(ctx.get_client()).publish(place_id, file_path, version_type)
    if ctx.quiet:
        click.echo(version.version_number)
    elif ctx.output_format == OutputFormat.JSON:
        print_json(version.to_dict())
    else:
        print_success(f"Published place {place_id} as version {version.version_number}")
