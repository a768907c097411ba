"""Place publishing models."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from .base import BaseModel


class PlaceVersion(BaseModel):
    """Version created by publishing or saving a place file."""

    version_number: int = Field(..., validation_alias=AliasChoices("version_number", "versionNumber"))
