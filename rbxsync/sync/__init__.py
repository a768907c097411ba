"""Project sync workflows: sync, publish and export."""

from __future__ import annotations

from .engine import (
    PublishResult,
    SyncAction,
    SyncEngine,
    SyncReport,
    export_universe,
    publish_places,
    render_lua,
    run_sync,
)
from .project import PROJECT_FILE, ProjectConfig
from .state import SyncState

__all__ = [
    "PROJECT_FILE",
    "ProjectConfig",
    "SyncState",
    "SyncEngine",
    "SyncReport",
    "SyncAction",
    "PublishResult",
    "run_sync",
    "publish_places",
    "export_universe",
    "render_lua",
]
