"""Game pass service."""

from __future__ import annotations

import builtins
from typing import Optional

from rbxsync.models.base import CreatedResource, Page, Untyped
from rbxsync.models.game_pass import GamePass

from .base import BaseService, Listing

GAME_PASSES_PATH = "/game-passes/v1/universes/{universe_id}/game-passes"

GAME_PASSES = Listing(path=GAME_PASSES_PATH, items_key="gamePasses", model=GamePass)


class GamePassService(BaseService):
    """Service for game pass operations."""

    def list_page(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> Page[GamePass]:
        """Fetch one page of game passes."""
        return self._list_page(
            GAME_PASSES, limit=limit, cursor=cursor, universe_id=self._universe_id()
        )

    def list(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> builtins.list[GamePass]:
        """List game passes in the universe.

        Args:
            limit: Maximum number of results (1-100)
            cursor: Cursor from a previous page

        Returns:
            List of GamePass objects
        """
        return self.list_page(limit=limit, cursor=cursor).items

    def create(
        self,
        name: str,
        description: str = "",
        price: Optional[int] = None,
    ) -> CreatedResource:
        """Create a game pass.

        Args:
            name: Game pass name
            description: Store description
            price: Price in Robux (omitted leaves it off sale)

        Returns:
            The new game pass id
        """
        fields = {
            "name": self._require(name, "name"),
            "description": description,
        }
        if price is not None:
            fields["price"] = self._check_price(price)

        path = GAME_PASSES_PATH.format(universe_id=self._universe_id())
        body = self.client.post_form(path, fields)
        return self._decode(CreatedResource, body, path)

    def update(
        self,
        game_pass_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[int] = None,
        is_for_sale: Optional[bool] = None,
        icon_asset_id: Optional[str] = None,
    ) -> Untyped:
        """Update a game pass; only the given fields change.

        Raises:
            InvalidArgumentError: If no field is given
        """
        changes = self._changes(
            name=name,
            description=description,
            price=self._check_price(price),
            isForSale=is_for_sale,
            iconAssetId=icon_asset_id,
        )
        game_pass_id = self._require(game_pass_id, "game_pass_id")
        path = f"{GAME_PASSES_PATH.format(universe_id=self._universe_id())}/{game_pass_id}"
        return Untyped(self.client.patch_form(path, changes))
