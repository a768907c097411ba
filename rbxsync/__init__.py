"""rbxsync - A CLI for the Roblox Open Cloud API.

This package provides a command-line interface and a small typed client for
Roblox Open Cloud, supporting common workflows like:
- List and query datastores and datastore entries
- Manage game passes, developer products and badges
- Update universe settings and publish places
- Sync a declarative project file with a live universe
"""

__version__ = "0.1.0"

from rbxsync.core.client import ClientConfig, OpenCloudClient
from rbxsync.core.exceptions import (
    ConfigurationError,
    DecodeError,
    InvalidArgumentError,
    NetworkError,
    RbxSyncError,
    UpstreamError,
)

__all__ = [
    "__version__",
    "ClientConfig",
    "OpenCloudClient",
    "RbxSyncError",
    "ConfigurationError",
    "InvalidArgumentError",
    "NetworkError",
    "UpstreamError",
    "DecodeError",
]
