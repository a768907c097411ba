"""Badge service.

Listing goes to the legacy badges host; creation and updates go through the
Open Cloud legacy-badges endpoints.
"""

from __future__ import annotations

import builtins
from pathlib import Path
from typing import Optional

from rbxsync.core.exceptions import InvalidArgumentError
from rbxsync.models.badge import Badge
from rbxsync.models.base import CreatedResource, Page, Untyped

from .base import BaseService, Listing

BADGES_HOST = "https://badges.roblox.com"
CREATE_PATH = "/legacy-badges/v1/universes/{universe_id}/badges"
UPDATE_PATH = "/legacy-badges/v1/badges/{badge_id}"

BADGES = Listing(
    path=BADGES_HOST + "/v1/universes/{universe_id}/badges",
    items_key="data",
    model=Badge,
    allowed_page_sizes=frozenset({10, 25, 50, 100}),
)

PAYMENT_SOURCE_TYPES = {"user": "1", "group": "2"}


class BadgeService(BaseService):
    """Service for badge operations."""

    def list_page(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> Page[Badge]:
        """Fetch one page of badges."""
        return self._list_page(BADGES, limit=limit, cursor=cursor, universe_id=self._universe_id())

    def list(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> builtins.list[Badge]:
        """List badges in the universe.

        Args:
            limit: Page size (10, 25, 50 or 100)
            cursor: Cursor from a previous page

        Returns:
            List of Badge objects
        """
        return self.list_page(limit=limit, cursor=cursor).items

    def create(
        self,
        name: str,
        description: str = "",
        payment_source: Optional[str] = None,
        icon: Optional[Path] = None,
    ) -> CreatedResource:
        """Create a badge.

        Args:
            name: Badge name
            description: Badge description
            payment_source: "user" or "group" (who pays the creation fee)
            icon: Optional PNG icon to upload with the badge

        Returns:
            The new badge id
        """
        fields = {"name": self._require(name, "name"), "description": description}

        if payment_source is not None:
            source_type = PAYMENT_SOURCE_TYPES.get(payment_source.lower())
            if source_type is None:
                raise InvalidArgumentError(
                    "payment source must be 'user' or 'group'",
                    field="payment_source",
                    value=payment_source,
                )
            fields["paymentSourceType"] = source_type

        files = None
        if icon is not None:
            if not icon.is_file():
                raise InvalidArgumentError("icon file not found", field="icon", value=str(icon))
            files = {"request.files": (icon.name, icon.read_bytes(), "image/png")}

        path = CREATE_PATH.format(universe_id=self._universe_id())
        body = self.client.post_form(path, fields, files)
        return self._decode(CreatedResource, body, path)

    def update(
        self,
        badge_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> Untyped:
        """Update badge configuration; only the given fields change."""
        changes = self._changes(name=name, description=description, enabled=enabled)
        path = UPDATE_PATH.format(badge_id=self._require(badge_id, "badge_id"))
        return Untyped(self.client.patch(path, changes))
