"""Main CLI entry point for rbxsync."""

from __future__ import annotations

import click

from rbxsync import __version__

# Import command groups
from rbxsync.cli.api import api
from rbxsync.cli.badge import badge
from rbxsync.cli.config_cmd import config
from rbxsync.cli.datastore import datastore
from rbxsync.cli.gamepass import gamepass
from rbxsync.cli.product import product
from rbxsync.cli.resource import resource
from rbxsync.cli.sync_cmd import export, publish, sync
from rbxsync.cli.universe import place, universe

# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="rbxsync")
def cli() -> None:
    """rbxsync - Manage Roblox experiences through the Open Cloud APIs.

    Query datastores, manage game passes, developer products and badges,
    publish places, and keep a universe in sync with a project file.

    Get started:

      export ROBLOX_API_KEY=...    # Or put it in .env

      rbxsync config init          # Create config file

      rbxsync gamepass list        # List game passes

    Use --help on any command for more information.
    """
    pass


# =============================================================================
# Register Commands
# =============================================================================

cli.add_command(config)
cli.add_command(datastore)
cli.add_command(gamepass)
cli.add_command(product)
cli.add_command(badge)
cli.add_command(resource)
cli.add_command(universe)
cli.add_command(place)
cli.add_command(sync)
cli.add_command(publish)
cli.add_command(export)
cli.add_command(api)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
