"""Declarative project file (``rbxsync.yaml``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ConfigDict, Field, ValidationError

from rbxsync.core.exceptions import ConfigurationError
from rbxsync.models.base import BaseModel

PROJECT_FILE = "rbxsync.yaml"


class ProjectModel(BaseModel):
    """Base for project file sections (frozen, unknown keys rejected)."""

    model_config = ConfigDict(extra="forbid")


class UniverseSettings(ProjectModel):
    """Universe settings to apply; unset fields are left alone."""

    name: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    playable_devices: Optional[list[str]] = None

    def to_patch(self) -> dict[str, Any]:
        """Render the API patch body for the fields that are set."""
        patch: dict[str, Any] = {}
        if self.name is not None:
            patch["name"] = self.name
        if self.description is not None:
            patch["description"] = self.description
        if self.genre is not None:
            patch["genre"] = self.genre
        if self.playable_devices is not None:
            patch["playableDevices"] = self.playable_devices
        return patch


class GamePassConfig(ProjectModel):
    name: str
    description: Optional[str] = None
    price_in_robux: Optional[int] = Field(None, ge=0)
    is_for_sale: Optional[bool] = None


class DeveloperProductConfig(ProjectModel):
    name: str
    description: Optional[str] = None
    price_in_robux: int = Field(..., ge=0)


class BadgeConfig(ProjectModel):
    name: str
    description: Optional[str] = None
    is_enabled: Optional[bool] = None
    payment_source: Optional[str] = None


class PlaceConfig(ProjectModel):
    place_id: str
    file_path: str
    publish: bool = False


class ProjectConfig(ProjectModel):
    """Everything one universe should look like."""

    universe: UniverseSettings = Field(default_factory=UniverseSettings)
    game_passes: list[GamePassConfig] = Field(default_factory=list)
    developer_products: list[DeveloperProductConfig] = Field(default_factory=list)
    badges: list[BadgeConfig] = Field(default_factory=list)
    places: list[PlaceConfig] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load and validate a project file.

        Raises:
            ConfigurationError: If the file is missing, not YAML, or invalid.
        """
        if not path.is_file():
            raise ConfigurationError(f"Project file not found: {path}", field="project")
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read project file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Project file {path} must contain a mapping")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid project file {path}: {problems}") from e
