"""Local sync state (``.rbxsync/state.yaml``).

Maps each declared resource name to the remote id it was synced to, so later
runs update instead of creating duplicates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from rbxsync.core.exceptions import ConfigurationError

STATE_DIR = ".rbxsync"
STATE_FILE = "state.yaml"

KINDS = ("game_passes", "developer_products", "badges")


@dataclass
class SyncState:
    """Remote ids per resource kind and name."""

    game_passes: dict[str, str] = field(default_factory=dict)
    developer_products: dict[str, str] = field(default_factory=dict)
    badges: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def path_for(project_root: Path) -> Path:
        return project_root / STATE_DIR / STATE_FILE

    @classmethod
    def load(cls, project_root: Path) -> "SyncState":
        """Load state, or an empty state when no file exists yet.

        Raises:
            ConfigurationError: If the state file is unreadable.
        """
        path = cls.path_for(project_root)
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read state file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"State file {path} must contain a mapping")

        state = cls()
        for kind in KINDS:
            entries = data.get(kind) or {}
            if not isinstance(entries, dict):
                raise ConfigurationError(f"State file {path}: '{kind}' must be a mapping")
            for name, entry in entries.items():
                # Entries are {"id": ...}; bare ids are accepted too
                resource_id = entry.get("id") if isinstance(entry, dict) else entry
                if resource_id is not None:
                    state.resources(kind)[str(name)] = str(resource_id)
        return state

    def save(self, project_root: Path) -> None:
        """Write state to disk, creating the state directory if needed."""
        path = self.path_for(project_root)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            kind: {name: {"id": rid} for name, rid in self.resources(kind).items()}
            for kind in KINDS
        }

    def resources(self, kind: str) -> dict[str, str]:
        if kind not in KINDS:
            raise ValueError(f"Unknown resource kind: {kind}")
        return getattr(self, kind)

    def get_id(self, kind: str, name: str) -> Optional[str]:
        return self.resources(kind).get(name)

    def set_id(self, kind: str, name: str, resource_id: str) -> None:
        self.resources(kind)[name] = resource_id
