"""Game pass model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from .base import ResourceSummary


class GamePass(ResourceSummary):
    """A game pass sold inside a universe."""

    id: str = Field(..., validation_alias=AliasChoices("id", "gamePassId"))
    description: str | None = Field(None, description="Store description")
    price: int | None = Field(
        None, validation_alias=AliasChoices("price", "priceInRobux"), description="Price in Robux"
    )
    is_for_sale: bool | None = Field(None, validation_alias=AliasChoices("is_for_sale", "isForSale"))
    icon_asset_id: str | None = Field(
        None, validation_alias=AliasChoices("icon_asset_id", "iconAssetId")
    )

    @classmethod
    def table_columns(cls) -> list[str]:
        return ["id", "name", "price", "is_for_sale"]
