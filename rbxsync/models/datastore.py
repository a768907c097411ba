"""Datastore models."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from .base import BaseModel, ResourceSummary


class Datastore(ResourceSummary):
    """A standard datastore; its name doubles as its id."""

    id: str = Field(..., validation_alias=AliasChoices("id", "name"))


class EntryKey(BaseModel):
    """Key of one datastore entry."""

    key: str
    scope: str = "global"

    @property
    def id(self) -> str:
        return self.key

    @classmethod
    def table_columns(cls) -> list[str]:
        return ["key", "scope"]
