"""Base models shared by all Open Cloud resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import AliasChoices
from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field

T = TypeVar("T")


class BaseModel(PydanticBaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return list(cls.model_fields)

    def to_row(self, columns: list[str] | None = None) -> dict[str, Any]:
        """Convert model to row dict for table output."""
        data = self.to_dict()
        return {col: data.get(col, "") for col in columns or self.table_columns()}


class ResourceSummary(BaseModel):
    """Minimal view of any listed remote resource."""

    id: str = Field(..., validation_alias=AliasChoices("id", "ID"))
    name: str = Field(..., validation_alias=AliasChoices("name", "displayName"))
    created_at: datetime | None = Field(
        None,
        validation_alias=AliasChoices(
            "created_at", "createdAt", "created", "createdTime", "createdTimestamp"
        ),
    )

    @classmethod
    def table_columns(cls) -> list[str]:
        return ["id", "name", "created_at"]


@dataclass(frozen=True)
class Untyped:
    """A JSON value whose schema is not modelled."""

    value: Any

    def to_dict(self) -> Any:
        return self.value


@dataclass
class Page(Generic[T]):
    """One page of a listing plus the cursor for the next one."""

    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.next_cursor)


class CreatedResource(BaseModel):
    """Identifier returned by a create call."""

    id: str = Field(..., validation_alias=AliasChoices("id", "gamePassId", "productId", "assetId"))
