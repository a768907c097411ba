"""Config commands for rbxsync."""

from __future__ import annotations

from typing import Optional

import click

from rbxsync.cli.common import handle_errors
from rbxsync.core.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from rbxsync.core.config import CONFIG_FILE, ENV_API_KEY, Config
from rbxsync.core.exceptions import ConfigurationError
from rbxsync.core.output import (
    OutputFormat,
    print_key_value,
    print_output,
    print_success,
    print_warning,
)


@click.group()
def config() -> None:
    """Manage rbxsync configuration.

    The API key is never stored; set ROBLOX_API_KEY in the environment or a
    local .env file.
    """
    pass


@config.command("init")
@click.option("--universe", "universe_id", prompt="Universe ID", help="Default universe ID")
@click.option("--base-url", default=DEFAULT_BASE_URL, show_default=True, help="API base URL")
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds",
)
@click.option("--profile", default="default", help="Profile name")
@click.option("--force", is_flag=True, help="Overwrite an existing profile")
@handle_errors
def config_init(
    universe_id: str,
    base_url: str,
    timeout: float,
    profile: str,
    force: bool,
) -> None:
    """Create configuration file with a new profile.

    Example:
        rbxsync config init --universe 123456
    """
    if timeout <= 0:
        raise ConfigurationError("Timeout must be positive", field="timeout", value=timeout)

    cfg = Config.load() if CONFIG_FILE.exists() else Config()
    if profile in cfg.profiles and not force:
        raise ConfigurationError(
            f"Profile '{profile}' already exists. Use --force to overwrite.",
            field="profile",
            value=profile,
        )

    cfg.add_profile(profile, base_url=base_url, universe_id=universe_id or None, timeout=timeout)
    if len(cfg.profiles) == 1:
        cfg.default_profile = profile
    cfg.save()

    print_success(f"Configuration saved to {CONFIG_FILE}")
    print_key_value(
        {
            "profile": profile,
            "base_url": base_url,
            "universe_id": universe_id or "-",
            "timeout": f"{timeout}s",
        }
    )
    print_warning(f"Set {ENV_API_KEY} in your environment or .env file to authenticate")


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
@handle_errors
def config_show(output: str) -> None:
    """Show current configuration."""
    cfg = Config.load()

    data = {
        "config_file": str(CONFIG_FILE),
        "default_profile": cfg.default_profile,
        "output_format": cfg.output_format,
        "profiles": list(cfg.profiles.keys()),
    }

    if output == "json":
        data["profile_details"] = {name: p.to_dict() for name, p in cfg.profiles.items()}
        print_output(data, format=OutputFormat.JSON)
        return

    print_key_value(data, title="Configuration")
    click.echo()
    for name, profile in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo(f"Profile: {name}{marker}")
        print_key_value(
            {
                "base_url": profile.base_url,
                "universe_id": profile.universe_id or "-",
                "timeout": f"{profile.timeout}s",
            }
        )
        click.echo()


@config.command("set-default")
@click.argument("profile")
@handle_errors
def config_set_default(profile: str) -> None:
    """Switch the default profile.

    Example:
        rbxsync config set-default staging
    """
    cfg = Config.load()
    cfg.set_default_profile(profile)
    cfg.save()
    print_success(f"Switched to profile '{profile}'")


@config.command("add-profile")
@click.argument("name")
@click.option("--universe", "universe_id", help="Default universe ID")
@click.option("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Request timeout in seconds")
@handle_errors
def config_add_profile(
    name: str,
    universe_id: Optional[str],
    base_url: str,
    timeout: float,
) -> None:
    """Add a new profile.

    Example:
        rbxsync config add-profile staging --universe 654321
    """
    cfg = Config.load()
    if name in cfg.profiles:
        raise ConfigurationError(f"Profile '{name}' already exists.", field="profile", value=name)

    cfg.add_profile(name, base_url=base_url, universe_id=universe_id, timeout=timeout)
    cfg.save()
    print_success(f"Profile '{name}' added")
