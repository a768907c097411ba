"""Service layer for Open Cloud operations.

Each service method is one typed request/response exchange.
"""

from __future__ import annotations

from .badges import BadgeService
from .base import BaseService, Listing
from .datastores import DatastoreService
from .developer_products import DeveloperProductService
from .game_passes import GamePassService
from .raw import RawService
from .resources import ResourceService
from .universes import PlaceService, UniverseService

__all__ = [
    "BaseService",
    "Listing",
    "ResourceService",
    "DatastoreService",
    "GamePassService",
    "DeveloperProductService",
    "BadgeService",
    "UniverseService",
    "PlaceService",
    "RawService",
]
