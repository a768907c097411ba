"""Badge model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from .base import ResourceSummary


class Badge(ResourceSummary):
    """A badge awarded inside a universe."""

    description: str | None = None
    enabled: bool | None = None
    icon_image_id: str | None = Field(
        None, validation_alias=AliasChoices("icon_image_id", "iconImageId")
    )

    @classmethod
    def table_columns(cls) -> list[str]:
        return ["id", "name", "enabled", "created_at"]
