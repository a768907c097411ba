"""Exception hierarchy for rbxsync.

Every failure raised by the client and the service layer is one of a small,
closed set of kinds so the CLI can map each to an exit code.
"""

from __future__ import annotations

from typing import Any


class RbxSyncError(Exception):
    """Base exception for all rbxsync errors."""

    kind = "error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message, "kind": self.kind}
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Local Errors (no request attempted)
# =============================================================================


class ConfigurationError(RbxSyncError):
    """Missing or invalid configuration (credential, universe, files)."""

    kind = "config"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidArgumentError(RbxSyncError):
    """Caller-supplied parameter failed local validation."""

    kind = "invalid_argument"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Remote Errors
# =============================================================================


class NetworkError(RbxSyncError):
    """The request could not complete (DNS, TCP, TLS, timeout)."""

    kind = "network"

    def __init__(self, url: str, cause: str | None = None):
        msg = f"Network error calling {url}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, {"url": url})
        self.url = url
        self.cause = cause


class UpstreamError(RbxSyncError):
    """The API answered with a non-2xx status."""

    kind = "upstream"

    def __init__(self, status: int, message: str, path: str):
        super().__init__(message, {"status": status, "path": path})
        self.status = status
        self.path = path


class DecodeError(RbxSyncError):
    """A 2xx body could not be parsed into the expected shape."""

    kind = "decode"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Unexpected response from {path}: {reason}", {"path": path})
        self.path = path
        self.reason = reason
