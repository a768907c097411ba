"""Core modules for rbxsync."""

from rbxsync.core.client import (
    DEFAULT_BASE_URL,
    ClientConfig,
    Envelope,
    OpenCloudClient,
    RequestDescriptor,
)
from rbxsync.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile, resolve_client_config
from rbxsync.core.exceptions import (
    ConfigurationError,
    DecodeError,
    InvalidArgumentError,
    NetworkError,
    RbxSyncError,
    UpstreamError,
)
from rbxsync.core.logging import LogContext, get_logger, setup_logging
from rbxsync.core.output import (
    OutputFormat,
    console,
    print_error,
    print_json,
    print_output,
    print_success,
    print_table,
    print_warning,
)

__all__ = [
    # Exceptions
    "RbxSyncError",
    "ConfigurationError",
    "InvalidArgumentError",
    "NetworkError",
    "UpstreamError",
    "DecodeError",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "resolve_client_config",
    # Client
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "Envelope",
    "OpenCloudClient",
    "RequestDescriptor",
    # Output
    "OutputFormat",
    "print_output",
    "print_table",
    "print_json",
    "print_error",
    "print_warning",
    "print_success",
    "console",
    # Logging
    "get_logger",
    "setup_logging",
    "LogContext",
]
