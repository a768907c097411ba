"""Configuration management for rbxsync.

Supports YAML profiles, a local ``.env`` file and environment variable
overrides. The API key is only ever read from the environment or the command
line; it is never written to the config file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from rbxsync.core.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from rbxsync.core.exceptions import ConfigurationError

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "rbxsync"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Environment variable names
ENV_API_KEY = "ROBLOX_API_KEY"
ENV_UNIVERSE_ID = "ROBLOX_UNIVERSE_ID"
ENV_BASE_URL = "ROBLOX_BASE_URL"
ENV_TIMEOUT = "ROBLOX_TIMEOUT"
ENV_PROFILE = "RBXSYNC_PROFILE"


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Connection settings for one Open Cloud target."""

    base_url: str = DEFAULT_BASE_URL
    universe_id: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {"base_url": self.base_url, "timeout": self.timeout}
        if self.universe_id:
            data["universe_id"] = self.universe_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        universe_id = data.get("universe_id")
        return cls(
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            universe_id=str(universe_id) if universe_id is not None else None,
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        )


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = "default"
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file with environment variable overrides.

        Priority (highest to lowest):
        1. Environment variables (including a local ``.env``)
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed.
        """
        load_dotenv()

        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", "default")
                config.output_format = data.get("output_format", "table")

                for name, pdata in (data.get("profiles") or {}).items():
                    config.profiles[name] = Profile.from_dict(pdata or {})
            except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Failed to load config {path}: {e}") from e

        if profile := os.getenv(ENV_PROFILE):
            config.default_profile = profile

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file (never includes the API key).

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name, falling back to built-in defaults.

        An explicitly requested profile must exist; the default profile may be
        absent, in which case environment variables and defaults apply.

        Raises:
            ConfigurationError: If a named profile does not exist.
        """
        if name is not None and name not in self.profiles:
            raise ConfigurationError(f"Profile not found: {name}", field="profile", value=name)
        return self.profiles.get(name or self.default_profile) or Profile()

    def add_profile(
        self,
        name: str,
        base_url: str = DEFAULT_BASE_URL,
        universe_id: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Profile:
        """Add or update a profile."""
        profile = Profile(base_url=base_url, universe_id=universe_id, timeout=timeout)
        self.profiles[name] = profile
        return profile

    def set_default_profile(self, name: str) -> None:
        """Set the default profile.

        Raises:
            ConfigurationError: If profile doesn't exist.
        """
        if name not in self.profiles:
            raise ConfigurationError(f"Profile not found: {name}", field="profile", value=name)
        self.default_profile = name


# =============================================================================
# Client Config Resolution
# =============================================================================


def resolve_client_config(
    config: Config,
    *,
    profile_name: Optional[str] = None,
    api_key: Optional[str] = None,
    universe_id: Optional[str] = None,
    base_url: Optional[str] = None,
) -> ClientConfig:
    """Build the immutable client configuration.

    Precedence for each setting: explicit argument, environment variable,
    profile value, built-in default.

    Raises:
        ConfigurationError: If no API key is available or the timeout is invalid.
    """
    profile = config.get_profile(profile_name)

    key = api_key or os.getenv(ENV_API_KEY)
    if not key or not key.strip():
        raise ConfigurationError(f"{ENV_API_KEY} environment variable not set", field="api_key")

    timeout_raw = os.getenv(ENV_TIMEOUT)
    try:
        timeout = float(timeout_raw) if timeout_raw else profile.timeout
    except ValueError as e:
        raise ConfigurationError(
            f"{ENV_TIMEOUT} must be a number of seconds", field="timeout", value=timeout_raw
        ) from e
    if timeout <= 0:
        raise ConfigurationError("Timeout must be positive", field="timeout", value=timeout)

    return ClientConfig(
        api_key=key.strip(),
        base_url=base_url or os.getenv(ENV_BASE_URL) or profile.base_url,
        universe_id=universe_id or os.getenv(ENV_UNIVERSE_ID) or profile.universe_id,
        timeout=timeout,
    )
