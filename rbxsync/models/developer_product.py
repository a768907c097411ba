"""Developer product model."""

from __future__ import annotations

from pydantic import AliasChoices, AliasPath, Field

from .base import ResourceSummary


class DeveloperProduct(ResourceSummary):
    """A consumable developer product."""

    id: str = Field(..., validation_alias=AliasChoices("id", "productId"))
    description: str | None = None
    price: int | None = Field(
        None,
        validation_alias=AliasChoices(
            "price",
            "priceInRobux",
            AliasPath("priceInformation", "defaultPriceInRobux"),
        ),
    )
    is_for_sale: bool | None = Field(None, validation_alias=AliasChoices("is_for_sale", "isForSale"))

    @classmethod
    def table_columns(cls) -> list[str]:
        return ["id", "name", "price", "is_for_sale"]
