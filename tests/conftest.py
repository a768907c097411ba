"""Pytest configuration and fixtures for rbxsync tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest

from rbxsync.core.client import ClientConfig, OpenCloudClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of tests."""
    for name in (
        "ROBLOX_API_KEY",
        "ROBLOX_UNIVERSE_ID",
        "ROBLOX_BASE_URL",
        "ROBLOX_TIMEOUT",
        "RBXSYNC_PROFILE",
    ):
        monkeypatch.delenv(name, raising=False)
    # Config.load() would otherwise read a .env from the working directory
    monkeypatch.setattr("rbxsync.core.config.load_dotenv", lambda *a, **kw: False)


@pytest.fixture
def client_config() -> ClientConfig:
    """Client config pointed at a fake host with a universe."""
    return ClientConfig(api_key="test-key", base_url="https://api.example.com", universe_id="123")


@pytest.fixture
def make_client(client_config: ClientConfig) -> Callable[[Handler], OpenCloudClient]:
    """Build a real OpenCloudClient whose transport is served by a handler."""

    def factory(handler: Handler) -> OpenCloudClient:
        return OpenCloudClient(client_config, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock OpenCloudClient."""
    client = MagicMock()
    client.base_url = "https://apis.roblox.com"
    client.universe_id = "123"
    return client


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: test
output_format: table

profiles:
  test:
    base_url: https://apis.example.org
    universe_id: 111
    timeout: 10

  production:
    base_url: https://apis.roblox.com
    universe_id: "222"
    timeout: 60
"""


@pytest.fixture
def sample_project_yaml() -> str:
    """Sample rbxsync.yaml project file."""
    return """
universe:
  name: My Game
  playable_devices:
    - DEVICE_TYPE_COMPUTER
    - DEVICE_TYPE_PHONE

game_passes:
  - name: VIP
    description: VIP perks
    price_in_robux: 250
    is_for_sale: true

developer_products:
  - name: 100 Coins
    price_in_robux: 25

badges:
  - name: First Win
    description: Win a round
    is_enabled: true

places:
  - place_id: "999"
    file_path: build/game.rbxl
    publish: true
  - place_id: "998"
    file_path: build/lobby.rbxl
"""
