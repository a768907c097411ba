"""Datastore service for standard datastore operations."""

from __future__ import annotations

from typing import Any, Optional

from rbxsync.core.exceptions import InvalidArgumentError
from rbxsync.models.base import Page, Untyped
from rbxsync.models.datastore import Datastore, EntryKey

from .base import BaseService, Listing

MAX_NAME_LENGTH = 50
MAX_KEY_LENGTH = 50

DATASTORES_PATH = "/datastores/v1/universes/{universe_id}/standard-datastores"
ENTRIES_PATH = f"{DATASTORES_PATH}/datastore/entries"
ENTRY_PATH = f"{ENTRIES_PATH}/entry"

DATASTORES = Listing(path=DATASTORES_PATH, items_key="datastores", model=Datastore)
ENTRIES = Listing(path=ENTRIES_PATH, items_key="keys", model=EntryKey)


class DatastoreService(BaseService):
    """Service for standard datastores and their entries."""

    def _name(self, datastore: str) -> str:
        name = self._require(datastore, "datastore")
        if len(name) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"datastore name must be at most {MAX_NAME_LENGTH} characters",
                field="datastore",
                value=name,
            )
        return name

    def _key(self, key: str) -> str:
        entry_key = self._require(key, "key")
        if len(entry_key) > MAX_KEY_LENGTH:
            raise InvalidArgumentError(
                f"entry key must be at most {MAX_KEY_LENGTH} characters",
                field="key",
                value=entry_key,
            )
        return entry_key

    def list_datastores(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        prefix: Optional[str] = None,
    ) -> Page[Datastore]:
        """List datastores in the universe.

        Args:
            limit: Page size
            cursor: Cursor from a previous page
            prefix: Only return datastores whose name starts with this

        Returns:
            Page of Datastore objects
        """
        return self._list_page(
            DATASTORES,
            limit=limit,
            cursor=cursor,
            query=[("prefix", prefix)],
            universe_id=self._universe_id(),
        )

    def list_entries(
        self,
        datastore: str,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        prefix: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> Page[EntryKey]:
        """List entry keys in a datastore.

        Args:
            datastore: Datastore name
            limit: Page size
            cursor: Cursor from a previous page
            prefix: Only return keys starting with this
            scope: Entry scope (server default is "global")

        Returns:
            Page of EntryKey objects
        """
        return self._list_page(
            ENTRIES,
            limit=limit,
            cursor=cursor,
            query=[("datastoreName", self._name(datastore)), ("scope", scope), ("prefix", prefix)],
            universe_id=self._universe_id(),
        )

    def _entry_query(
        self, datastore: str, key: str, scope: Optional[str]
    ) -> list[tuple[str, Optional[str]]]:
        return [
            ("datastoreName", self._name(datastore)),
            ("entryKey", self._key(key)),
            ("scope", scope),
        ]

    def get_entry(self, datastore: str, key: str, scope: Optional[str] = None) -> Untyped:
        """Get the stored value of an entry.

        Entry values are arbitrary JSON, so the result is untyped.
        """
        query = self._entry_query(datastore, key, scope)
        path = ENTRY_PATH.format(universe_id=self._universe_id())
        return Untyped(self.client.get(path, query))

    def set_entry(
        self,
        datastore: str,
        key: str,
        value: Any,
        scope: Optional[str] = None,
    ) -> Untyped:
        """Create or overwrite an entry with a JSON value.

        Returns:
            The entry version information returned by the API
        """
        if value is None:
            raise InvalidArgumentError("entry value must not be null", field="value")
        query = self._entry_query(datastore, key, scope)
        path = ENTRY_PATH.format(universe_id=self._universe_id())
        return Untyped(self.client.post(path, value, query))

    def delete_entry(self, datastore: str, key: str, scope: Optional[str] = None) -> bool:
        """Delete an entry.

        Returns:
            True if successful
        """
        query = self._entry_query(datastore, key, scope)
        path = ENTRY_PATH.format(universe_id=self._universe_id())
        self.client.delete(path, query)
        return True
