"""HTTP client for the Roblox Open Cloud API.

Every request goes through one send path that injects the API key, renders
the fully-qualified URL, and classifies failures into the rbxsync error kinds.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import httpx

from rbxsync import __version__
from rbxsync.core.exceptions import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    UpstreamError,
)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_BASE_URL = "https://apis.roblox.com"
DEFAULT_TIMEOUT = 30.0
API_KEY_HEADER = "x-api-key"
USER_AGENT = f"rbxsync/{__version__}"
MAX_ERROR_BODY_CHARS = 200

QueryPairs = Sequence[tuple[str, Any]]


# =============================================================================
# Value Types
# =============================================================================


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings handed to the client at construction."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    universe_id: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key='***', base_url={self.base_url!r}, "
            f"universe_id={self.universe_id!r}, timeout={self.timeout!r})"
        )


@dataclass(frozen=True)
class RequestDescriptor:
    """A single outbound call: method, path, ordered query and JSON body."""

    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    body: Any = None

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query: QueryPairs | Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> RequestDescriptor:
        """Create a descriptor, dropping ``None`` query values and stringifying the rest."""
        pairs = query.items() if isinstance(query, Mapping) else (query or ())
        normalized = tuple(
            (str(key), _query_value(value)) for key, value in pairs if value is not None
        )
        return cls(method=method.upper(), path=path, query=normalized, body=body)

    def url(self, base_url: str) -> str:
        """Render the fully-qualified URL for this request."""
        url = self.path if _is_absolute(self.path) else f"{base_url.rstrip('/')}{self.path}"
        if self.query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(self.query)}"
        return url


@dataclass(frozen=True)
class Envelope:
    """Decoded body and status of one successful exchange."""

    status: int
    body: Any
    path: str


def _is_absolute(path: str) -> bool:
    return path.startswith(("http://", "https://"))


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# OpenCloudClient
# =============================================================================


@dataclass
class OpenCloudClient:
    """HTTP client for Open Cloud with key injection and error classification."""

    config: ClientConfig
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    _client: httpx.Client | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Reject an empty credential before any request can be built."""
        if not self.config.api_key or not self.config.api_key.strip():
            raise ConfigurationError(
                "API key is required. Set ROBLOX_API_KEY or pass --api-key",
                field="api_key",
            )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def universe_id(self) -> str | None:
        return self.config.universe_id

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.Client:
        """Get or create the pooled HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.config.timeout,
                headers={
                    API_KEY_HEADER: self.config.api_key,
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                },
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> OpenCloudClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Send Path
    # =========================================================================

    def request(
        self,
        descriptor: RequestDescriptor,
        *,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Envelope:
        """Send a request and return its envelope.

        Args:
            descriptor: Method, path, query and optional JSON body.
            data: Multipart/form fields.
            files: Multipart file parts.
            content: Raw request body.
            headers: Extra headers (the API key header is always set by the client).

        Returns:
            Envelope with the status and decoded JSON body.

        Raises:
            NetworkError: If the request could not complete.
            UpstreamError: If the API answered with a non-2xx status.
            DecodeError: If a 2xx body is not valid JSON.
        """
        url = descriptor.url(self.config.base_url)
        client = self._get_client()

        try:
            resp = client.request(
                descriptor.method,
                url,
                json=descriptor.body,
                data=data,
                files=files,
                content=content,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(url, f"Timeout after {self.config.timeout}s") from e
        except httpx.DecodingError as e:
            # Body is read eagerly, so a bad Content-Encoding surfaces here
            raise DecodeError(descriptor.path, f"body could not be decoded ({e})") from e
        except httpx.TooManyRedirects as e:
            raise NetworkError(url, str(e) or "Too many redirects") from e
        except httpx.RequestError as e:
            raise NetworkError(url, str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise UpstreamError(resp.status_code, _error_message(resp), descriptor.path)

        return Envelope(
            status=resp.status_code,
            body=_decode_body(resp, descriptor.path),
            path=descriptor.path,
        )

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def get(self, path: str, query: QueryPairs | Mapping[str, Any] | None = None) -> Any:
        """GET request returning decoded JSON."""
        return self.request(RequestDescriptor.build("GET", path, query)).body

    def post(
        self,
        path: str,
        body: Any = None,
        query: QueryPairs | Mapping[str, Any] | None = None,
    ) -> Any:
        """POST a JSON body and return decoded JSON."""
        return self.request(RequestDescriptor.build("POST", path, query, body)).body

    def patch(
        self,
        path: str,
        body: Any = None,
        query: QueryPairs | Mapping[str, Any] | None = None,
    ) -> Any:
        """PATCH a JSON body and return decoded JSON."""
        return self.request(RequestDescriptor.build("PATCH", path, query, body)).body

    def delete(self, path: str, query: QueryPairs | Mapping[str, Any] | None = None) -> Any:
        """DELETE request returning decoded JSON (``{}`` for an empty body)."""
        return self.request(RequestDescriptor.build("DELETE", path, query)).body

    def post_form(
        self,
        path: str,
        fields: Mapping[str, Any],
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """POST multipart form fields."""
        return self._send_form("POST", path, fields, files)

    def patch_form(
        self,
        path: str,
        fields: Mapping[str, Any],
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """PATCH multipart form fields."""
        return self._send_form("PATCH", path, fields, files)

    def post_content(
        self,
        path: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        query: QueryPairs | Mapping[str, Any] | None = None,
    ) -> Any:
        """POST a raw body with an explicit content type."""
        return self.request(
            RequestDescriptor.build("POST", path, query),
            content=content,
            headers={"Content-Type": content_type},
        ).body

    def _send_form(
        self,
        method: str,
        path: str,
        fields: Mapping[str, Any],
        files: Mapping[str, Any] | None,
    ) -> Any:
        descriptor = RequestDescriptor.build(method, path)
        form = {key: form_value(value) for key, value in fields.items()}
        if files:
            return self.request(descriptor, data=form, files=files).body
        # (None, value) parts force multipart encoding without file names
        parts = {key: (None, value) for key, value in form.items()}
        return self.request(descriptor, files=parts).body


# =============================================================================
# Helpers
# =============================================================================


def form_value(value: Any) -> str:
    """Render a JSON scalar as a multipart text field."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _decode_body(resp: httpx.Response, path: str) -> Any:
    try:
        if not resp.content.strip():
            return {}
        return resp.json()
    except httpx.DecodingError as e:
        raise DecodeError(path, f"body could not be decoded ({e})") from e
    except ValueError as e:
        raise DecodeError(path, f"body is not valid JSON ({e})") from e


def _error_message(resp: httpx.Response) -> str:
    """Best-effort human-readable message from an error response."""
    try:
        data = resp.json()
    except ValueError:
        data = None

    message = _message_from(data)
    if message:
        return message

    text = resp.text.strip()
    if text:
        if len(text) > MAX_ERROR_BODY_CHARS:
            return text[:MAX_ERROR_BODY_CHARS] + "..."
        return text
    return resp.reason_phrase or f"HTTP {resp.status_code}"


def _message_from(data: Any) -> str | None:
    # Handles {"message": ...}, {"error": "..."}, {"error": {"message": ...}}
    # and the legacy {"errors": [{"message": ...}]} shape
    if not isinstance(data, dict):
        return None

    message = data.get("message")
    if isinstance(message, str) and message:
        return message

    error = data.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]

    errors = data.get("errors")
    if isinstance(errors, list):
        messages = [
            e["message"] for e in errors if isinstance(e, dict) and isinstance(e.get("message"), str)
        ]
        if messages:
            return "; ".join(messages)
    return None
