"""Tests for rbxsync.core.client module."""

from __future__ import annotations

import json
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from rbxsync.core.client import (
    API_KEY_HEADER,
    MAX_ERROR_BODY_CHARS,
    ClientConfig,
    OpenCloudClient,
    RequestDescriptor,
    form_value,
)
from rbxsync.core.exceptions import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    UpstreamError,
)

# =============================================================================
# ClientConfig / RequestDescriptor
# =============================================================================


class TestClientConfig:
    def test_trailing_slash_removed(self):
        config = ClientConfig(api_key="k", base_url="https://api.example.com/")
        assert config.base_url == "https://api.example.com"

    def test_repr_masks_key(self):
        config = ClientConfig(api_key="super-secret")
        assert "super-secret" not in repr(config)

    def test_empty_key_rejected(self):
        with pytest.raises(ConfigurationError):
            OpenCloudClient(ClientConfig(api_key=""))

    def test_whitespace_key_rejected(self):
        with pytest.raises(ConfigurationError):
            OpenCloudClient(ClientConfig(api_key="   "))


class TestRequestDescriptor:
    def test_url_joins_base_and_path(self):
        desc = RequestDescriptor.build("get", "/v1/items", [("limit", 5)])
        assert desc.method == "GET"
        assert desc.url("https://api.example.com") == "https://api.example.com/v1/items?limit=5"

    def test_absolute_path_kept(self):
        desc = RequestDescriptor.build("GET", "https://badges.roblox.com/v1/universes/1/badges")
        assert desc.url("https://apis.roblox.com") == "https://badges.roblox.com/v1/universes/1/badges"

    def test_none_values_dropped_and_bools_lowercased(self):
        desc = RequestDescriptor.build("GET", "/x", [("a", None), ("b", True), ("c", 3)])
        assert desc.query == (("b", "true"), ("c", "3"))

    def test_query_round_trip(self):
        pairs = [("prefix", "a b&c"), ("cursor", "x/y=z"), ("limit", "10")]
        desc = RequestDescriptor.build("GET", "/v1/items", pairs)
        url = desc.url("https://api.example.com")
        assert parse_qsl(urlsplit(url).query) == pairs

    def test_existing_query_string_extended(self):
        desc = RequestDescriptor.build("GET", "/v1/items?x=1", {"y": "2"})
        assert desc.url("https://api.example.com") == "https://api.example.com/v1/items?x=1&y=2"


# =============================================================================
# Send path
# =============================================================================


class TestSend:
    def test_get_builds_url_and_injects_key(self, make_client):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"items": []})

        client = make_client(handler)
        body = client.get("/v1/items", [("limit", 5)])

        assert body == {"items": []}
        assert len(seen) == 1
        assert str(seen[0].url) == "https://api.example.com/v1/items?limit=5"
        assert seen[0].method == "GET"
        assert seen[0].headers[API_KEY_HEADER] == "test-key"

    def test_post_sends_json_body(self, make_client):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"version": "1"})

        client = make_client(handler)
        client.post("/v1/entry", {"coins": 10}, [("entryKey", "k")])

        assert json.loads(seen[0].content) == {"coins": 10}
        assert seen[0].url.params["entryKey"] == "k"
        assert seen[0].headers[API_KEY_HEADER] == "test-key"

    def test_patch_sends_json_body(self, make_client):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"path": "universes/123"})

        client = make_client(handler)
        client.patch("/cloud/v2/universes/123", {"name": "My Game"})

        assert seen[0].method == "PATCH"
        assert json.loads(seen[0].content) == {"name": "My Game"}
        assert seen[0].headers[API_KEY_HEADER] == "test-key"

    def test_empty_success_body_is_empty_object(self, make_client):
        client = make_client(lambda request: httpx.Response(204))
        assert client.delete("/v1/entry") == {}

    def test_non_json_success_is_decode_error(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(DecodeError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.path == "/v1/items"

    def test_form_post_is_multipart(self, make_client):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"gamePassId": 5})

        client = make_client(handler)
        client.post_form("/game-passes", {"name": "VIP", "price": 10, "isForSale": True})

        content_type = seen[0].headers["content-type"]
        assert content_type.startswith("multipart/form-data")
        assert b'name="name"' in seen[0].content
        assert b"VIP" in seen[0].content
        assert b"true" in seen[0].content
        assert seen[0].headers[API_KEY_HEADER] == "test-key"

    def test_post_content_sets_content_type(self, make_client):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"versionNumber": 3})

        client = make_client(handler)
        client.post_content("/places", b"data", "application/xml", [("versionType", "Saved")])

        assert seen[0].headers["content-type"] == "application/xml"
        assert seen[0].content == b"data"
        assert seen[0].url.params["versionType"] == "Saved"
        assert seen[0].headers[API_KEY_HEADER] == "test-key"


class TestErrorClassification:
    def test_message_field_used(self, make_client):
        client = make_client(lambda request: httpx.Response(403, json={"message": "forbidden"}))
        with pytest.raises(UpstreamError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.status == 403
        assert exc_info.value.message == "forbidden"
        assert exc_info.value.path == "/v1/items"

    def test_nested_error_message(self, make_client):
        client = make_client(
            lambda request: httpx.Response(400, json={"error": {"message": "bad input"}})
        )
        with pytest.raises(UpstreamError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.message == "bad input"

    def test_legacy_errors_list(self, make_client):
        client = make_client(
            lambda request: httpx.Response(
                400, json={"errors": [{"code": 1, "message": "Invalid badge"}]}
            )
        )
        with pytest.raises(UpstreamError) as exc_info:
            client.get("/v1/badges")
        assert exc_info.value.message == "Invalid badge"

    def test_long_text_body_truncated(self, make_client):
        client = make_client(lambda request: httpx.Response(500, text="x" * 500))
        with pytest.raises(UpstreamError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.status == 500
        assert exc_info.value.message == "x" * MAX_ERROR_BODY_CHARS + "..."

    def test_empty_error_body_uses_reason(self, make_client):
        client = make_client(lambda request: httpx.Response(404))
        with pytest.raises(UpstreamError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.message == "Not Found"

    def test_connect_error_is_network_error(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(NetworkError) as exc_info:
            client.get("/v1/items")
        assert "connection refused" in str(exc_info.value)
        assert exc_info.value.url == "https://api.example.com/v1/items"

    def test_timeout_is_network_error(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        with pytest.raises(NetworkError) as exc_info:
            client.get("/v1/items")
        assert "Timeout" in str(exc_info.value)

    def test_redirect_loop_is_network_error(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": str(request.url)})

        client = make_client(handler)
        with pytest.raises(NetworkError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.url == "https://api.example.com/v1/items"

    def test_bad_content_encoding_is_decode_error(self, make_client):
        client = make_client(
            lambda request: httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"notgzip"
            )
        )
        with pytest.raises(DecodeError) as exc_info:
            client.get("/v1/items")
        assert exc_info.value.path == "/v1/items"


class TestFormValue:
    def test_scalars(self):
        assert form_value(None) == ""
        assert form_value(False) == "false"
        assert form_value(12) == "12"
        assert form_value("x") == "x"

    def test_lists_are_json(self):
        assert form_value(["a", "b"]) == '["a", "b"]'


def test_context_manager_closes_client(make_client):
    client = make_client(lambda request: httpx.Response(200, json={}))
    with client:
        client.get("/v1/ping")
        assert client._client is not None
    assert client._client is None
