"""Project workflow commands: sync, publish and export."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from rbxsync.cli.common import Context, ExitCode, global_options, handle_errors
from rbxsync.core.output import (
    OutputFormat,
    print_error,
    print_json,
    print_output,
    print_success,
)
from rbxsync.sync import PROJECT_FILE, ProjectConfig, export_universe, publish_places, run_sync

project_dir_option = click.option(
    "--project-dir",
    "-C",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help=f"Directory containing {PROJECT_FILE}",
)


@click.command()
@project_dir_option
@global_options
@handle_errors
def sync(ctx: Context, project_dir: Path) -> None:
    """Bring the universe in line with rbxsync.yaml.

    Creates missing game passes, developer products and badges, updates
    declared fields, and records remote ids in .rbxsync/state.yaml.

    Example:
        rbxsync sync -C my-game
    """
    project = ProjectConfig.load(project_dir / PROJECT_FILE)
    report = run_sync(ctx.get_client(), project, project_dir)

    rows = [action.to_dict() for action in report.actions]
    if ctx.output_format == OutputFormat.JSON and not ctx.quiet:
        print_json({"universe_updated": report.universe_updated, "actions": rows})
        return

    print_output(
        rows,
        format=ctx.output_format,
        columns=["kind", "name", "id", "action"],
        quiet=ctx.quiet,
    )
    if not ctx.quiet:
        print_success(f"Sync complete: {report.created} created, {len(rows)} synced")


@click.command()
@project_dir_option
@global_options
@handle_errors
def publish(ctx: Context, project_dir: Path) -> None:
    """Publish every place marked 'publish: true' in rbxsync.yaml.

    Example:
        rbxsync publish
    """
    project = ProjectConfig.load(project_dir / PROJECT_FILE)
    results = publish_places(ctx.get_client(), project, project_dir)

    rows = [r.to_dict() for r in results]
    print_output(
        rows,
        format=ctx.output_format,
        columns=["place_id", "file_path", "version_number", "error"],
        quiet=ctx.quiet,
        id_field="place_id",
    )

    failed = [r for r in results if not r.ok]
    if failed:
        print_error(f"{len(failed)} of {len(results)} places failed to publish")
        raise SystemExit(ExitCode.GENERAL_ERROR)


@click.command()
@click.option(
    "--file",
    "-f",
    "out_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: config.luau, or config.lua with --lua)",
)
@click.option("--lua", "format_lua", is_flag=True, help="Write a .lua file instead of .luau")
@global_options
@handle_errors
def export(ctx: Context, out_file: Optional[Path], format_lua: bool) -> None:
    """Export game passes, developer products and badges as a Luau table.

    Example:
        rbxsync export -f src/shared/Config.luau
    """
    text = export_universe(ctx.get_client())
    path = out_file or Path("config.lua" if format_lua else "config.luau")
    path.write_text(text)
    if ctx.quiet:
        click.echo(str(path))
    else:
        print_success(f"Exported to {path}")
