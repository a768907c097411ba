"""Developer product service."""

from __future__ import annotations

import builtins
from typing import Optional

from rbxsync.models.base import CreatedResource, Page, Untyped
from rbxsync.models.developer_product import DeveloperProduct

from .base import BaseService, Listing

PRODUCTS_PATH = "/developer-products/v2/universes/{universe_id}/developer-products"

PRODUCTS = Listing(
    path=f"{PRODUCTS_PATH}/creator",
    items_key="developerProducts",
    model=DeveloperProduct,
    limit_param="pageSize",
    cursor_param="pageToken",
    max_page_size=50,
)


class DeveloperProductService(BaseService):
    """Service for developer product operations."""

    def list_page(
        self, limit: Optional[int] = None, cursor: Optional[str] = None
    ) -> Page[DeveloperProduct]:
        """Fetch one page of developer products."""
        return self._list_page(PRODUCTS, limit=limit, cursor=cursor, universe_id=self._universe_id())

    def list(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> builtins.list[DeveloperProduct]:
        """List developer products in the universe.

        Args:
            limit: Maximum number of results (1-50)
            cursor: Page token from a previous page

        Returns:
            List of DeveloperProduct objects
        """
        return self.list_page(limit=limit, cursor=cursor).items

    def create(
        self,
        name: str,
        price: int,
        description: str = "",
    ) -> CreatedResource:
        """Create a developer product.

        Returns:
            The new product id
        """
        fields = {
            "name": self._require(name, "name"),
            "price": self._check_price(price),
            "description": description,
        }
        path = PRODUCTS_PATH.format(universe_id=self._universe_id())
        body = self.client.post_form(path, fields)
        return self._decode(CreatedResource, body, path)

    def update(
        self,
        product_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[int] = None,
        icon_asset_id: Optional[str] = None,
    ) -> Untyped:
        """Update a developer product; only the given fields change."""
        changes = self._changes(
            name=name,
            description=description,
            price=self._check_price(price),
            iconAssetId=icon_asset_id,
        )
        product_id = self._require(product_id, "product_id")
        path = f"{PRODUCTS_PATH.format(universe_id=self._universe_id())}/{product_id}"
        return Untyped(self.client.patch_form(path, changes))
