"""Data models for rbxsync.

Provides Pydantic models for Open Cloud responses, plus the ``Untyped``
variant for bodies whose schema is not modelled.
"""

from __future__ import annotations

from .badge import Badge
from .base import BaseModel, CreatedResource, Page, ResourceSummary, Untyped
from .datastore import Datastore, EntryKey
from .developer_product import DeveloperProduct
from .game_pass import GamePass
from .place import PlaceVersion

__all__ = [
    # Base
    "BaseModel",
    "ResourceSummary",
    "CreatedResource",
    "Untyped",
    "Page",
    # Resources
    "Badge",
    "Datastore",
    "EntryKey",
    "DeveloperProduct",
    "GamePass",
    "PlaceVersion",
]
