"""Raw API access commands for rbxsync.

Provides direct access to Open Cloud endpoints as an escape hatch.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import click

from rbxsync.cli.common import (
    Context,
    global_options,
    handle_errors,
    parse_json_value,
    parse_params,
)
from rbxsync.core.exceptions import InvalidArgumentError
from rbxsync.core.output import OutputFormat, print_json, print_output
from rbxsync.services.raw import RawService


@click.group()
def api() -> None:
    """Raw API access (escape hatch).

    Execute requests directly against Open Cloud endpoints, with the same
    API key and error handling as every other command.

    Examples:

        rbxsync api get /cloud/v2/universes/123

        rbxsync api get /datastores/v1/universes/123/standard-datastores -P limit=5

        rbxsync api post /some/endpoint --data '{"name": "x"}'
    """
    pass


params_option = click.option(
    "--params",
    "-P",
    multiple=True,
    help="Query parameters as key=value (can repeat)",
)
data_option = click.option(
    "--data",
    "-d",
    help="Request body (JSON string)",
)
file_option = click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read JSON body from file",
)


def _read_body(data: Optional[str], file_path: Optional[Path]) -> Any:
    if data and file_path:
        raise InvalidArgumentError("Use either --data or --file, not both")
    if file_path:
        return parse_json_value(file_path.read_text(), field="file")
    if data:
        return parse_json_value(data, field="data")
    return None


def _print_result(ctx: Context, value: Any) -> None:
    """Show a list of objects as a table, anything else as JSON."""
    if ctx.output_format == OutputFormat.TABLE:
        rows = value
        if isinstance(value, dict):
            # Open Cloud listings wrap their items in a single list field
            lists = [v for v in value.values() if isinstance(v, list)]
            if len(lists) == 1:
                rows = lists[0]
        if isinstance(rows, list) and rows and all(isinstance(r, dict) for r in rows):
            print_output(rows, format=ctx.output_format, columns=list(rows[0].keys()))
            return
    print_json(value)


@api.command("get")
@click.argument("path")
@params_option
@global_options
@handle_errors
def api_get(ctx: Context, path: str, params: tuple[str, ...]) -> None:
    """GET request to any Open Cloud endpoint.

    Examples:

        rbxsync api get /cloud/v2/universes/123 -o json
    """
    result = RawService(ctx.get_client()).get(path, parse_params(params) or None)
    _print_result(ctx, result.value)


@api.command("post")
@click.argument("path")
@params_option
@data_option
@file_option
@global_options
@handle_errors
def api_post(
    ctx: Context,
    path: str,
    params: tuple[str, ...],
    data: Optional[str],
    file_path: Optional[Path],
) -> None:
    """POST a JSON body to any Open Cloud endpoint."""
    body = _read_body(data, file_path)
    result = RawService(ctx.get_client()).post(path, body, parse_params(params) or None)
    print_json(result.value)


@api.command("patch")
@click.argument("path")
@params_option
@data_option
@file_option
@global_options
@handle_errors
def api_patch(
    ctx: Context,
    path: str,
    params: tuple[str, ...],
    data: Optional[str],
    file_path: Optional[Path],
) -> None:
    """PATCH a JSON body to any Open Cloud endpoint."""
    body = _read_body(data, file_path)
    result = RawService(ctx.get_client()).patch(path, body, parse_params(params) or None)
    print_json(result.value)


@api.command("delete")
@click.argument("path")
@params_option
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@global_options
@handle_errors
def api_delete(ctx: Context, path: str, params: tuple[str, ...], yes: bool) -> None:
    """DELETE any Open Cloud endpoint."""
    if not yes:
        click.confirm(f"DELETE {path}?", abort=True)
    result = RawService(ctx.get_client()).delete(path, parse_params(params) or None)
    print_json(result.value)
