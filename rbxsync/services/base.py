"""Base service with common methods for all Open Cloud services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from pydantic import ValidationError

from rbxsync.core.exceptions import ConfigurationError, DecodeError, InvalidArgumentError
from rbxsync.models.base import BaseModel, Page

if TYPE_CHECKING:
    from rbxsync.core.client import OpenCloudClient

M = TypeVar("M", bound=BaseModel)

DEFAULT_MAX_PAGE_SIZE = 100
CURSOR_KEYS = ("nextPageCursor", "nextPageToken", "nextCursor")


@dataclass(frozen=True)
class Listing:
    """Shape of a single-page listing endpoint.

    ``path`` may contain ``{universe_id}`` and other placeholders filled by
    the calling service.
    """

    path: str
    items_key: str
    model: type[BaseModel]
    limit_param: str = "limit"
    cursor_param: str = "cursor"
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE
    allowed_page_sizes: Optional[frozenset[int]] = None


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, client: "OpenCloudClient") -> None:
        """Initialize service with an Open Cloud client.

        Args:
            client: Configured OpenCloudClient instance
        """
        self.client = client

    # =========================================================================
    # Validation
    # =========================================================================

    def _universe_id(self) -> str:
        """Return the configured universe ID.

        Raises:
            ConfigurationError: If no universe ID is configured
        """
        universe_id = self.client.universe_id
        if not universe_id:
            raise ConfigurationError(
                "Universe ID required. Set ROBLOX_UNIVERSE_ID or use --universe",
                field="universe_id",
            )
        return universe_id

    @staticmethod
    def _validate_limit(limit: Any, listing: Listing) -> Optional[int]:
        """Check ``limit`` is absent or a page size the endpoint accepts.

        Raises:
            InvalidArgumentError: If the limit is out of range
        """
        if limit is None:
            return None
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidArgumentError("limit must be an integer", field="limit", value=limit)
        if listing.allowed_page_sizes is not None:
            if limit not in listing.allowed_page_sizes:
                allowed = ", ".join(str(n) for n in sorted(listing.allowed_page_sizes))
                raise InvalidArgumentError(
                    f"limit must be one of {allowed}", field="limit", value=limit
                )
        elif not 1 <= limit <= listing.max_page_size:
            raise InvalidArgumentError(
                f"limit must be between 1 and {listing.max_page_size}",
                field="limit",
                value=limit,
            )
        return limit

    @staticmethod
    def _require(value: Optional[str], field: str) -> str:
        """Reject empty identifiers before building a path."""
        if value is None or not str(value).strip():
            raise InvalidArgumentError(f"{field} must not be empty", field=field, value=value)
        return str(value).strip()

    @staticmethod
    def _changes(**fields: Any) -> dict[str, Any]:
        """Collect the fields of a partial update, dropping unset ones.

        Raises:
            InvalidArgumentError: If nothing would change
        """
        changes = {key: value for key, value in fields.items() if value is not None}
        if not changes:
            raise InvalidArgumentError("Nothing to update: no fields given")
        return changes

    @staticmethod
    def _check_price(price: Optional[int]) -> Optional[int]:
        if price is None:
            return None
        if isinstance(price, bool) or not isinstance(price, int) or price < 0:
            raise InvalidArgumentError(
                "price must be a non-negative integer", field="price", value=price
            )
        return price

    # =========================================================================
    # Decoding
    # =========================================================================

    @staticmethod
    def _decode(model: type[M], data: Any, path: str) -> M:
        """Decode a JSON value into ``model``.

        Raises:
            DecodeError: If required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise DecodeError(path, f"expected a JSON object, got {type(data).__name__}")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise DecodeError(path, f"invalid {model.__name__} ({fields})") from e

    def _decode_page(self, body: Any, listing: Listing, path: str) -> Page[Any]:
        """Decode a listing body into a page of models.

        A missing items key is an empty page; anything else that is not a
        list of objects is a decode error.
        """
        if not isinstance(body, dict):
            raise DecodeError(path, f"expected a JSON object, got {type(body).__name__}")

        raw_items = body.get(listing.items_key)
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise DecodeError(path, f"'{listing.items_key}' is not a list")

        items = [self._decode(listing.model, item, path) for item in raw_items]
        cursor = next((body[key] for key in CURSOR_KEYS if body.get(key)), None)
        return Page(items=items, next_cursor=str(cursor) if cursor else None)

    # =========================================================================
    # Listing
    # =========================================================================

    def _list_page(
        self,
        listing: Listing,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        query: Optional[list[tuple[str, Any]]] = None,
        **path_params: str,
    ) -> Page[Any]:
        """Fetch and decode one page of ``listing``.

        The limit is validated before any request is made.
        """
        limit = self._validate_limit(limit, listing)
        path = listing.path
        for key, value in path_params.items():
            # Literal substitution; other braces in a user path are left alone
            path = path.replace(f"{{{key}}}", value)

        pairs: list[tuple[str, Any]] = list(query or [])
        if limit is not None:
            pairs.append((listing.limit_param, limit))
        if cursor:
            pairs.append((listing.cursor_param, cursor))

        body = self.client.get(path, pairs)
        return self._decode_page(body, listing, path)
