"""Untyped access to arbitrary Open Cloud endpoints (escape hatch)."""

from __future__ import annotations

from typing import Any, Optional

from rbxsync.core.exceptions import InvalidArgumentError
from rbxsync.models.base import Untyped

from .base import BaseService


class RawService(BaseService):
    """Sends requests to any path through the same key and error handling."""

    @staticmethod
    def _check_path(path: str) -> str:
        if not path.startswith(("/", "https://")):
            raise InvalidArgumentError(
                "path must start with '/' or 'https://'", field="path", value=path
            )
        return path

    def get(self, path: str, query: Optional[list[tuple[str, str]]] = None) -> Untyped:
        return Untyped(self.client.get(self._check_path(path), query))

    def post(
        self,
        path: str,
        body: Any = None,
        query: Optional[list[tuple[str, str]]] = None,
    ) -> Untyped:
        return Untyped(self.client.post(self._check_path(path), body, query))

    def patch(
        self,
        path: str,
        body: Any = None,
        query: Optional[list[tuple[str, str]]] = None,
    ) -> Untyped:
        return Untyped(self.client.patch(self._check_path(path), body, query))

    def delete(self, path: str, query: Optional[list[tuple[str, str]]] = None) -> Untyped:
        return Untyped(self.client.delete(self._check_path(path), query))
