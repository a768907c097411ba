"""Tests for the sync, publish and export workflows."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from rbxsync.core.exceptions import UpstreamError
from rbxsync.sync.engine import (
    SyncEngine,
    export_universe,
    publish_places,
    render_lua,
    run_sync,
)
from rbxsync.sync.project import ProjectConfig
from rbxsync.sync.state import SyncState

GAME_PASSES_PATH = "/game-passes/v1/universes/123/game-passes"
PRODUCTS_PATH = "/developer-products/v2/universes/123/developer-products"


def _project(**sections) -> ProjectConfig:
    return ProjectConfig.model_validate(sections)


def _listing_client(mock_client: MagicMock, listings: dict[str, dict]) -> MagicMock:
    """Answer GETs with the listing whose path matches."""

    def get(path, query=None):
        return listings.get(path, {})

    mock_client.get.side_effect = get
    return mock_client


# =============================================================================
# Sync
# =============================================================================


class TestSyncEngine:
    def test_creates_missing_and_records_ids(self, mock_client: MagicMock) -> None:
        _listing_client(mock_client, {})
        mock_client.post_form.side_effect = [{"gamePassId": 77}, {"productId": 5}, {"id": 9}]
        project = _project(
            universe={"name": "My Game"},
            game_passes=[{"name": "VIP", "price_in_robux": 250}],
            developer_products=[{"name": "Coins", "price_in_robux": 25}],
            badges=[{"name": "First Win"}],
        )
        state = SyncState()

        report = SyncEngine(mock_client, project, state).run()

        assert report.universe_updated
        assert report.created == 3
        assert [a.action for a in report.actions] == ["created"] * 3
        assert state.get_id("game_passes", "VIP") == "77"
        assert state.get_id("developer_products", "Coins") == "5"
        assert state.get_id("badges", "First Win") == "9"
        mock_client.patch.assert_any_call("/cloud/v2/universes/123", {"name": "My Game"})

    def test_state_id_is_updated_not_created(self, mock_client: MagicMock) -> None:
        _listing_client(mock_client, {})
        project = _project(game_passes=[{"name": "VIP", "price_in_robux": 300}])
        state = SyncState(game_passes={"VIP": "77"})

        report = SyncEngine(mock_client, project, state).run()

        assert report.actions[0].action == "updated"
        assert not report.universe_updated
        mock_client.post_form.assert_not_called()
        mock_client.patch_form.assert_called_once_with(
            f"{GAME_PASSES_PATH}/77", {"name": "VIP", "price": 300}
        )

    def test_remote_listing_matched_by_name(self, mock_client: MagicMock) -> None:
        _listing_client(
            mock_client,
            {
                f"{PRODUCTS_PATH}/creator": {
                    "developerProducts": [{"productId": 44, "name": "Coins"}]
                }
            },
        )
        project = _project(developer_products=[{"name": "Coins", "price_in_robux": 10}])
        state = SyncState()

        SyncEngine(mock_client, project, state).run()

        assert state.get_id("developer_products", "Coins") == "44"
        mock_client.post_form.assert_not_called()

    def test_name_matching_uses_largest_pages(self, mock_client: MagicMock) -> None:
        _listing_client(mock_client, {})
        mock_client.post_form.side_effect = [{"gamePassId": 77}, {"productId": 5}, {"id": 9}]
        project = _project(
            game_passes=[{"name": "VIP"}],
            developer_products=[{"name": "Coins", "price_in_robux": 25}],
            badges=[{"name": "First Win"}],
        )

        SyncEngine(mock_client, project, SyncState()).run()

        queries = [call.args[1] for call in mock_client.get.call_args_list]
        assert queries == [[("limit", 100)], [("pageSize", 50)], [("limit", 100)]]

    def test_empty_project_makes_no_requests(self, mock_client: MagicMock) -> None:
        report = SyncEngine(mock_client, _project(), SyncState()).run()
        assert report.actions == []
        mock_client.get.assert_not_called()
        mock_client.patch.assert_not_called()


class TestRunSync:
    def test_state_saved_after_failure(self, mock_client: MagicMock, tmp_path: Path) -> None:
        _listing_client(mock_client, {})
        mock_client.post_form.return_value = {"gamePassId": 77}
        mock_client.patch_form.side_effect = UpstreamError(500, "boom", GAME_PASSES_PATH)
        project = _project(game_passes=[{"name": "VIP"}])

        with pytest.raises(UpstreamError):
            run_sync(mock_client, project, tmp_path)

        assert SyncState.load(tmp_path).get_id("game_passes", "VIP") == "77"


# =============================================================================
# Publish
# =============================================================================


class TestPublishPlaces:
    def test_publishes_marked_places_and_reports_failures(
        self, mock_client: MagicMock, tmp_path: Path
    ) -> None:
        (tmp_path / "a.rbxl").write_bytes(b"a")
        (tmp_path / "b.rbxl").write_bytes(b"b")
        mock_client.post_content.side_effect = [
            {"versionNumber": 4},
            UpstreamError(409, "conflict", "/places"),
        ]
        project = _project(
            places=[
                {"place_id": "1", "file_path": "a.rbxl", "publish": True},
                {"place_id": "2", "file_path": "missing.rbxl", "publish": True},
                {"place_id": "3", "file_path": "b.rbxl", "publish": True},
                {"place_id": "4", "file_path": "a.rbxl", "publish": False},
            ]
        )

        results = publish_places(mock_client, project, tmp_path)

        assert [r.place_id for r in results] == ["1", "2", "3"]
        assert results[0].ok and results[0].version_number == 4
        assert results[1].error == "file not found"
        assert "conflict" in results[2].error
        assert mock_client.post_content.call_count == 2


# =============================================================================
# Export
# =============================================================================


class TestExport:
    def test_render_lua(self):
        text = render_lua(
            {
                "game_passes": [{"name": 'Say "hi"', "id": "77", "price": 250}],
                "badges": [{"name": "Win", "id": "9", "price": None}],
            }
        )
        assert text.startswith("return {\n")
        assert '      name = "Say \\"hi\\"",' in text
        assert "      id = 77," in text
        assert "      price = 250," in text
        assert "price = nil" not in text
        assert text.endswith("}\n")

    def test_export_universe(self, mock_client: MagicMock) -> None:
        _listing_client(
            mock_client,
            {
                GAME_PASSES_PATH: {"gamePasses": [{"gamePassId": 1, "name": "VIP", "price": 5}]},
                f"{PRODUCTS_PATH}/creator": {"developerProducts": []},
                "https://badges.roblox.com/v1/universes/123/badges": {
                    "data": [{"id": 3, "name": "Win"}]
                },
            },
        )

        text = export_universe(mock_client)

        assert "game_passes = {" in text
        assert 'name = "VIP",' in text
        assert "developer_products = {\n  }," in text
        assert 'name = "Win",' in text

    def test_export_requests_largest_pages(self, make_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        export_universe(make_client(handler))

        queries = {request.url.path: dict(request.url.params) for request in seen}
        assert queries == {
            GAME_PASSES_PATH: {"limit": "100"},
            f"{PRODUCTS_PATH}/creator": {"pageSize": "50"},
            "/v1/universes/123/badges": {"limit": "100"},
        }
        assert seen[2].url.host == "badges.roblox.com"
