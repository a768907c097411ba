"""Sync, publish and export workflows.

Each workflow is a sequence of single requests made through the services;
nothing runs concurrently and nothing is retried.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from rbxsync.core.exceptions import RbxSyncError
from rbxsync.core.logging import LogContext, get_logger
from rbxsync.services import (
    BadgeService,
    DeveloperProductService,
    GamePassService,
    PlaceService,
    UniverseService,
)

from .project import ProjectConfig
from .state import SyncState

if TYPE_CHECKING:
    from rbxsync.core.client import OpenCloudClient

logger = get_logger(__name__)

# Listings used for name matching and export always ask for the largest page
GAME_PASS_PAGE_SIZE = 100
PRODUCT_PAGE_SIZE = 50
BADGE_PAGE_SIZE = 100


# =============================================================================
# Results
# =============================================================================


@dataclass
class SyncAction:
    """What happened to one declared resource."""

    kind: str
    name: str
    id: str
    action: str  # "created" or "updated"

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "name": self.name, "id": self.id, "action": self.action}


@dataclass
class SyncReport:
    universe_updated: bool = False
    actions: list[SyncAction] = field(default_factory=list)

    def record(self, kind: str, name: str, resource_id: str, created: bool) -> None:
        self.actions.append(SyncAction(kind, name, resource_id, "created" if created else "updated"))

    @property
    def created(self) -> int:
        return sum(1 for a in self.actions if a.action == "created")


@dataclass
class PublishResult:
    place_id: str
    file_path: str
    version_number: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "place_id": self.place_id,
            "file_path": self.file_path,
            "version_number": self.version_number,
            "error": self.error,
        }


# =============================================================================
# Sync
# =============================================================================


class SyncEngine:
    """Brings a universe in line with a project file.

    For each declared resource the remote id is taken from the state file,
    then from the first page of the remote listing (matched by name), and
    otherwise the resource is created. Declared fields are then patched.
    """

    def __init__(
        self,
        client: "OpenCloudClient",
        project: ProjectConfig,
        state: SyncState,
    ) -> None:
        self.project = project
        self.state = state
        self.universes = UniverseService(client)
        self.game_passes = GamePassService(client)
        self.products = DeveloperProductService(client)
        self.badges = BadgeService(client)

    def run(self) -> SyncReport:
        """Run a full sync; stops at the first error."""
        report = SyncReport()
        with LogContext("sync", logger) as ctx:
            patch = self.project.universe.to_patch()
            if patch:
                ctx.info("Updating universe settings: %s", ", ".join(patch))
                self.universes.update_settings(patch)
                report.universe_updated = True

            self._sync_game_passes(report, ctx)
            self._sync_products(report, ctx)
            self._sync_badges(report, ctx)
        return report

    @staticmethod
    def _remote_ids(items: Iterable[Any]) -> dict[str, str]:
        return {item.name: item.id for item in items}

    def _resolve(self, kind: str, name: str, remote: dict[str, str]) -> Optional[str]:
        return self.state.get_id(kind, name) or remote.get(name)

    def _sync_game_passes(self, report: SyncReport, ctx: LogContext) -> None:
        kind = "game_passes"
        if not self.project.game_passes:
            return
        remote = self._remote_ids(self.game_passes.list(limit=GAME_PASS_PAGE_SIZE))

        for declared in self.project.game_passes:
            resource_id = self._resolve(kind, declared.name, remote)
            created = resource_id is None
            if resource_id is None:
                ctx.info("Creating game pass: %s", declared.name)
                resource_id = self.game_passes.create(
                    declared.name, declared.description or "", declared.price_in_robux
                ).id
            self.state.set_id(kind, declared.name, resource_id)

            ctx.info("Updating game pass: %s (%s)", declared.name, resource_id)
            self.game_passes.update(
                resource_id,
                name=declared.name,
                description=declared.description,
                price=declared.price_in_robux,
                is_for_sale=declared.is_for_sale,
            )
            report.record(kind, declared.name, resource_id, created)

    def _sync_products(self, report: SyncReport, ctx: LogContext) -> None:
        kind = "developer_products"
        if not self.project.developer_products:
            return
        remote = self._remote_ids(self.products.list(limit=PRODUCT_PAGE_SIZE))

        for declared in self.project.developer_products:
            resource_id = self._resolve(kind, declared.name, remote)
            created = resource_id is None
            if resource_id is None:
                ctx.info("Creating developer product: %s", declared.name)
                resource_id = self.products.create(
                    declared.name, declared.price_in_robux, declared.description or ""
                ).id
            self.state.set_id(kind, declared.name, resource_id)

            ctx.info("Updating developer product: %s (%s)", declared.name, resource_id)
            self.products.update(
                resource_id,
                name=declared.name,
                description=declared.description,
                price=declared.price_in_robux,
            )
            report.record(kind, declared.name, resource_id, created)

    def _sync_badges(self, report: SyncReport, ctx: LogContext) -> None:
        kind = "badges"
        if not self.project.badges:
            return
        remote = self._remote_ids(self.badges.list(limit=BADGE_PAGE_SIZE))

        for declared in self.project.badges:
            resource_id = self._resolve(kind, declared.name, remote)
            created = resource_id is None
            if resource_id is None:
                ctx.info("Creating badge: %s", declared.name)
                resource_id = self.badges.create(
                    declared.name, declared.description or "", declared.payment_source
                ).id
            self.state.set_id(kind, declared.name, resource_id)

            ctx.info("Updating badge: %s (%s)", declared.name, resource_id)
            self.badges.update(
                resource_id,
                name=declared.name,
                description=declared.description,
                enabled=declared.is_enabled,
            )
            report.record(kind, declared.name, resource_id, created)


def run_sync(client: "OpenCloudClient", project: ProjectConfig, project_root: Path) -> SyncReport:
    """Load state, sync, and save state (also when the sync fails midway)."""
    state = SyncState.load(project_root)
    try:
        return SyncEngine(client, project, state).run()
    finally:
        state.save(project_root)


# =============================================================================
# Publish
# =============================================================================


def publish_places(
    client: "OpenCloudClient",
    project: ProjectConfig,
    project_root: Path,
) -> list[PublishResult]:
    """Publish every place marked ``publish: true``.

    A missing file or a failed upload is recorded and the remaining places
    are still published.
    """
    service = PlaceService(client)
    results: list[PublishResult] = []

    for place in project.places:
        if not place.publish:
            continue
        result = PublishResult(place_id=place.place_id, file_path=place.file_path)
        path = project_root / place.file_path
        if not path.is_file():
            result.error = "file not found"
            logger.error("File not found: %s", path)
            results.append(result)
            continue

        logger.info("Publishing place %s from %s", place.place_id, place.file_path)
        try:
            result.version_number = service.publish(place.place_id, path).version_number
        except RbxSyncError as e:
            result.error = str(e)
            logger.error("Failed to publish place %s: %s", place.place_id, e)
        results.append(result)

    return results


# =============================================================================
# Export
# =============================================================================


def _lua_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def render_lua(sections: dict[str, list[dict[str, Any]]]) -> str:
    """Render resource listings as a Lua table literal.

    Strings are quoted, numeric ids and prices are left bare.
    """
    lines = ["return {"]
    for section, rows in sections.items():
        lines.append(f"  {section} = {{")
        for row in rows:
            lines.append("    {")
            for key, value in row.items():
                if value is None:
                    continue
                if key == "id" and str(value).isdigit():
                    rendered = str(value)
                elif isinstance(value, bool):
                    rendered = "true" if value else "false"
                elif isinstance(value, int):
                    rendered = str(value)
                else:
                    rendered = _lua_string(str(value))
                lines.append(f"      {key} = {rendered},")
            lines.append("    },")
        lines.append("  },")
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_universe(client: "OpenCloudClient") -> str:
    """Fetch game passes, developer products and badges and render them as Lua."""
    with LogContext("export", logger, universe=client.universe_id):
        passes = GamePassService(client).list(limit=GAME_PASS_PAGE_SIZE)
        products = DeveloperProductService(client).list(limit=PRODUCT_PAGE_SIZE)
        badges = BadgeService(client).list(limit=BADGE_PAGE_SIZE)

    return render_lua(
        {
            "game_passes": [{"name": p.name, "id": p.id, "price": p.price} for p in passes],
            "developer_products": [
                {"name": p.name, "id": p.id, "price": p.price} for p in products
            ],
            "badges": [{"name": b.name, "id": b.id} for b in badges],
        }
    )
