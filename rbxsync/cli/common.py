"""Common CLI utilities, decorators, and helpers."""

from __future__ import annotations

import json
import sys
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import click

from rbxsync.core.client import OpenCloudClient
from rbxsync.core.config import Config, resolve_client_config
from rbxsync.core.exceptions import (
    ConfigurationError,
    DecodeError,
    InvalidArgumentError,
    NetworkError,
    RbxSyncError,
    UpstreamError,
)
from rbxsync.core.logging import get_logger, setup_logging
from rbxsync.core.output import OutputFormat, print_error, print_json, print_output

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCode:
    """Standard exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 2
    CONFIG_ERROR = 3
    NETWORK_ERROR = 4
    UPSTREAM_ERROR = 5
    DECODE_ERROR = 6


EXIT_CODES: dict[type[RbxSyncError], int] = {
    InvalidArgumentError: ExitCode.INVALID_ARGUMENT,
    ConfigurationError: ExitCode.CONFIG_ERROR,
    NetworkError: ExitCode.NETWORK_ERROR,
    UpstreamError: ExitCode.UPSTREAM_ERROR,
    DecodeError: ExitCode.DECODE_ERROR,
}


def exit_code_for(error: RbxSyncError) -> int:
    """Map an error kind to its process exit code."""
    for error_type, code in EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR


# =============================================================================
# Context Object
# =============================================================================


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[Config] = None
        self.client: Optional[OpenCloudClient] = None
        self.profile_name: Optional[str] = None
        self.universe_id: Optional[str] = None
        self.output_format: OutputFormat = OutputFormat.TABLE
        self.quiet: bool = False
        self.verbose: bool = False

    def get_client(self) -> OpenCloudClient:
        """Get or create the Open Cloud client.

        Raises:
            ConfigurationError: If no API key is available.
        """
        if self.client is not None:
            return self.client

        if self.config is None:
            self.config = Config.load()

        client_config = resolve_client_config(
            self.config,
            profile_name=self.profile_name,
            universe_id=self.universe_id,
        )
        logger.debug("Using %s (universe=%s)", client_config.base_url, client_config.universe_id)
        self.client = OpenCloudClient(client_config)
        return self.client


pass_context = click.make_pass_decorator(Context, ensure=True)


# =============================================================================
# Global Options
# =============================================================================


def global_options(f: F) -> F:
    """Add global options to a command."""

    @click.option(
        "--profile",
        "-p",
        envvar="RBXSYNC_PROFILE",
        help="Config profile to use",
    )
    @click.option(
        "--universe",
        "-u",
        "universe_id",
        help="Universe ID (overrides ROBLOX_UNIVERSE_ID)",
    )
    @click.option(
        "--output",
        "-o",
        "output_format",
        type=click.Choice(["json", "table"]),
        default="table",
        help="Output format",
    )
    @click.option(
        "--quiet",
        "-q",
        is_flag=True,
        help="Minimal output (IDs only)",
    )
    @click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose output",
    )
    @pass_context
    @wraps(f)
    def wrapper(
        ctx: Context,
        profile: Optional[str],
        universe_id: Optional[str],
        output_format: str,
        quiet: bool,
        verbose: bool,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Populate context from global options and invoke the command."""
        ctx.profile_name = profile
        ctx.universe_id = universe_id
        ctx.output_format = OutputFormat.from_string(output_format)
        ctx.quiet = quiet
        ctx.verbose = verbose

        setup_logging(quiet=quiet, verbose=verbose)

        try:
            ctx.config = Config.load()
        except ConfigurationError as e:
            print_error(str(e))
            sys.exit(ExitCode.CONFIG_ERROR)

        return f(ctx, *args, **kwargs)

    return wrapper  # type: ignore


# =============================================================================
# Error Handling
# =============================================================================


def handle_errors(f: F) -> F:
    """Report rbxsync errors and exit with the code for their kind."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Capture errors and exit with consistent messaging."""
        try:
            return f(*args, **kwargs)
        except RbxSyncError as e:
            print_error(str(e))
            sys.exit(exit_code_for(e))

    return wrapper  # type: ignore


# =============================================================================
# Argument Helpers
# =============================================================================


def parse_params(params: tuple[str, ...]) -> list[tuple[str, str]]:
    """Parse repeated key=value options, keeping their order.

    Raises:
        InvalidArgumentError: If an item has no '='.
    """
    pairs = []
    for param in params:
        if "=" not in param:
            raise InvalidArgumentError(f"Expected key=value, got '{param}'", field="params")
        key, value = param.split("=", 1)
        pairs.append((key, value))
    return pairs


def parse_json_value(text: str, field: str = "value") -> Any:
    """Parse a JSON literal given on the command line.

    Raises:
        InvalidArgumentError: If the text is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"Invalid JSON for {field}: {e}", field=field) from e


# =============================================================================
# Listing Output
# =============================================================================


def print_models(
    ctx: Context,
    items: list[Any],
    columns: list[str],
    next_cursor: Optional[str] = None,
    id_field: str = "id",
) -> None:
    """Print model instances as a table, JSON or bare ids."""
    if ctx.output_format == OutputFormat.JSON and not ctx.quiet:
        print_json({"items": [item.to_dict() for item in items], "next_cursor": next_cursor})
        return

    print_output(
        [item.to_row(columns) for item in items],
        format=ctx.output_format,
        columns=columns,
        quiet=ctx.quiet,
        id_field=id_field,
    )
    if next_cursor and not ctx.quiet:
        click.echo(f"Next page: --cursor {next_cursor}", err=True)
