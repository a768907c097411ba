"""Unit tests for UniverseService, PlaceService and RawService."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from rbxsync.core.exceptions import DecodeError, InvalidArgumentError
from rbxsync.services.raw import RawService
from rbxsync.services.universes import PlaceService, UniverseService


class TestUniverseService:
    def test_update_settings(self, mock_client: MagicMock) -> None:
        mock_client.patch.return_value = {"displayName": "My Game"}

        result = UniverseService(mock_client).update_settings({"name": "My Game"})

        assert result.value == {"displayName": "My Game"}
        mock_client.patch.assert_called_once_with("/cloud/v2/universes/123", {"name": "My Game"})

    def test_empty_settings_rejected(self, mock_client: MagicMock) -> None:
        with pytest.raises(InvalidArgumentError):
            UniverseService(mock_client).update_settings({})
        mock_client.patch.assert_not_called()


class TestPlaceService:
    def test_publish_rbxl(self, mock_client: MagicMock, tmp_path: Path) -> None:
        place_file = tmp_path / "game.rbxl"
        place_file.write_bytes(b"<roblox!")
        mock_client.post_content.return_value = {"versionNumber": 12}

        version = PlaceService(mock_client).publish("999", place_file)

        assert version.version_number == 12
        mock_client.post_content.assert_called_once_with(
            "/universes/v1/123/places/999/versions",
            b"<roblox!",
            "application/octet-stream",
            query=[("versionType", "Published")],
        )

    def test_publish_rbxlx_saved(self, mock_client: MagicMock, tmp_path: Path) -> None:
        place_file = tmp_path / "game.rbxlx"
        place_file.write_text("<roblox/>")
        mock_client.post_content.return_value = {"versionNumber": 1}

        PlaceService(mock_client).publish("999", place_file, "Saved")

        args, kwargs = mock_client.post_content.call_args
        assert args[2] == "application/xml"
        assert kwargs["query"] == [("versionType", "Saved")]

    def test_bad_extension(self, mock_client: MagicMock, tmp_path: Path) -> None:
        other = tmp_path / "game.txt"
        other.write_text("x")
        with pytest.raises(InvalidArgumentError):
            PlaceService(mock_client).publish("999", other)
        mock_client.post_content.assert_not_called()

    def test_missing_file(self, mock_client: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(InvalidArgumentError):
            PlaceService(mock_client).publish("999", tmp_path / "missing.rbxl")

    def test_bad_version_type(self, mock_client: MagicMock, tmp_path: Path) -> None:
        place_file = tmp_path / "game.rbxl"
        place_file.write_bytes(b"x")
        with pytest.raises(InvalidArgumentError):
            PlaceService(mock_client).publish("999", place_file, "Live")

    def test_response_without_version(self, mock_client: MagicMock, tmp_path: Path) -> None:
        place_file = tmp_path / "game.rbxl"
        place_file.write_bytes(b"x")
        mock_client.post_content.return_value = {}
        with pytest.raises(DecodeError):
            PlaceService(mock_client).publish("999", place_file)


class TestRawService:
    def test_get_passes_query(self, mock_client: MagicMock) -> None:
        mock_client.get.return_value = [1, 2]
        result = RawService(mock_client).get("/v1/anything", [("a", "b")])
        assert result.value == [1, 2]
        mock_client.get.assert_called_once_with("/v1/anything", [("a", "b")])

    def test_absolute_url_allowed(self, mock_client: MagicMock) -> None:
        mock_client.post.return_value = {}
        RawService(mock_client).post("https://badges.roblox.com/v1/x", {"k": 1})
        mock_client.post.assert_called_once_with("https://badges.roblox.com/v1/x", {"k": 1}, None)

    def test_relative_path_rejected(self, mock_client: MagicMock) -> None:
        with pytest.raises(InvalidArgumentError):
            RawService(mock_client).delete("v1/anything")
        mock_client.delete.assert_not_called()
