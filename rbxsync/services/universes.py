"""Universe and place services."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from rbxsync.core.exceptions import InvalidArgumentError
from rbxsync.models.base import Untyped
from rbxsync.models.place import PlaceVersion

from .base import BaseService

UNIVERSE_PATH = "/cloud/v2/universes/{universe_id}"
PLACE_VERSIONS_PATH = "/universes/v1/{universe_id}/places/{place_id}/versions"

VERSION_TYPES = ("Published", "Saved")
PLACE_CONTENT_TYPES = {".rbxl": "application/octet-stream", ".rbxlx": "application/xml"}


class UniverseService(BaseService):
    """Service for universe settings."""

    def update_settings(self, settings: Mapping[str, Any]) -> Untyped:
        """Patch universe settings (name, description, genre, playableDevices, ...).

        Raises:
            InvalidArgumentError: If settings is empty
        """
        if not settings:
            raise InvalidArgumentError("Nothing to update: no settings given")
        path = UNIVERSE_PATH.format(universe_id=self._universe_id())
        return Untyped(self.client.patch(path, dict(settings)))


class PlaceService(BaseService):
    """Service for place publishing."""

    def publish(
        self,
        place_id: str,
        file_path: Path,
        version_type: str = "Published",
    ) -> PlaceVersion:
        """Upload a place file as a new version.

        Args:
            place_id: Place ID inside the configured universe
            file_path: .rbxl or .rbxlx file
            version_type: "Published" or "Saved"

        Returns:
            PlaceVersion with the new version number
        """
        place_id = self._require(place_id, "place_id")
        if version_type not in VERSION_TYPES:
            raise InvalidArgumentError(
                f"version type must be one of {', '.join(VERSION_TYPES)}",
                field="version_type",
                value=version_type,
            )
        content_type = PLACE_CONTENT_TYPES.get(file_path.suffix.lower())
        if content_type is None:
            raise InvalidArgumentError(
                "place file must be .rbxl or .rbxlx", field="file_path", value=str(file_path)
            )
        if not file_path.is_file():
            raise InvalidArgumentError(
                "place file not found", field="file_path", value=str(file_path)
            )

        path = PLACE_VERSIONS_PATH.format(universe_id=self._universe_id(), place_id=place_id)
        body = self.client.post_content(
            path,
            file_path.read_bytes(),
            content_type,
            query=[("versionType", version_type)],
        )
        return self._decode(PlaceVersion, body, path)
