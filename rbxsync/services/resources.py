"""Generic listing service for any Open Cloud collection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from rbxsync.models.base import Page, ResourceSummary

from .base import DEFAULT_MAX_PAGE_SIZE, BaseService, Listing

if TYPE_CHECKING:
    from rbxsync.core.client import OpenCloudClient


class ResourceService(BaseService):
    """Lists summaries (id, name, creation time) from a collection path."""

    def __init__(
        self,
        client: "OpenCloudClient",
        path: str,
        items_key: str = "items",
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> None:
        super().__init__(client)
        self.listing = Listing(
            path=path,
            items_key=items_key,
            model=ResourceSummary,
            max_page_size=max_page_size,
        )

    def list_page(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> Page[ResourceSummary]:
        """Fetch one page of summaries.

        Args:
            limit: Page size, 1..max_page_size
            cursor: Cursor returned by a previous page

        Returns:
            Page with summaries and the next cursor
        """
        path = self.listing.path
        if "{universe_id}" in path:
            return self._list_page(
                self.listing, limit=limit, cursor=cursor, universe_id=self._universe_id()
            )
        return self._list_page(self.listing, limit=limit, cursor=cursor)

    def list_resources(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> list[ResourceSummary]:
        """List summaries from a single page.

        Raises:
            InvalidArgumentError: If limit is out of range (no request is made)
            DecodeError: If the body is not a listing of summaries
        """
        return self.list_page(limit=limit, cursor=cursor).items
