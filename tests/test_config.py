"""Tests for rbxsync.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from rbxsync.core.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from rbxsync.core.config import Config, Profile, resolve_client_config
from rbxsync.core.exceptions import ConfigurationError

# =============================================================================
# Profile Tests
# =============================================================================


class TestProfile:
    """Tests for Profile dataclass."""

    def test_default_values(self):
        profile = Profile()
        assert profile.base_url == DEFAULT_BASE_URL
        assert profile.universe_id is None
        assert profile.timeout == DEFAULT_TIMEOUT

    def test_from_dict_stringifies_universe(self):
        profile = Profile.from_dict({"universe_id": 42, "timeout": 5})
        assert profile.universe_id == "42"
        assert profile.timeout == 5.0

    def test_to_dict_omits_missing_universe(self):
        assert "universe_id" not in Profile().to_dict()


# =============================================================================
# Config Tests
# =============================================================================


class TestConfig:
    """Tests for Config load/save."""

    def test_load_missing_file(self, tmp_path: Path):
        config = Config.load(tmp_path / "missing.yaml")
        assert config.profiles == {}
        assert config.default_profile == "default"

    def test_load_from_file(self, tmp_path: Path, sample_config_yaml: str):
        path = tmp_path / "config.yaml"
        path.write_text(sample_config_yaml)

        config = Config.load(path)

        assert config.default_profile == "test"
        assert set(config.profiles) == {"test", "production"}
        assert config.profiles["test"].universe_id == "111"
        assert config.profiles["production"].timeout == 60.0

    def test_env_profile_override(
        self, tmp_path: Path, sample_config_yaml: str, monkeypatch: pytest.MonkeyPatch
    ):
        path = tmp_path / "config.yaml"
        path.write_text(sample_config_yaml)
        monkeypatch.setenv("RBXSYNC_PROFILE", "production")

        assert Config.load(path).default_profile == "production"

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("profiles: [unclosed")
        with pytest.raises(ConfigurationError):
            Config.load(path)

    def test_save_round_trip(self, tmp_path: Path):
        path = tmp_path / "nested" / "config.yaml"
        config = Config()
        config.add_profile("dev", universe_id="7", timeout=15)
        config.set_default_profile("dev")

        config.save(path)
        loaded = Config.load(path)

        assert loaded.default_profile == "dev"
        assert loaded.profiles["dev"].universe_id == "7"
        assert loaded.profiles["dev"].timeout == 15.0

    def test_save_never_writes_api_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ROBLOX_API_KEY", "secret-key")
        path = tmp_path / "config.yaml"
        config = Config()
        config.add_profile("default", universe_id="1")
        config.save(path)

        assert "secret-key" not in path.read_text()
        assert "api_key" not in yaml.safe_load(path.read_text())["profiles"]["default"]

    def test_get_missing_named_profile(self):
        with pytest.raises(ConfigurationError):
            Config().get_profile("nope")

    def test_get_missing_default_profile_uses_defaults(self):
        assert Config().get_profile() == Profile()

    def test_set_default_unknown_profile(self):
        with pytest.raises(ConfigurationError):
            Config().set_default_profile("nope")


# =============================================================================
# Client Config Resolution
# =============================================================================


class TestResolveClientConfig:
    def test_missing_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_client_config(Config())
        assert "ROBLOX_API_KEY" in str(exc_info.value)

    def test_env_values(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ROBLOX_API_KEY", " key ")
        monkeypatch.setenv("ROBLOX_UNIVERSE_ID", "555")
        monkeypatch.setenv("ROBLOX_TIMEOUT", "12.5")

        result = resolve_client_config(Config())

        assert result.api_key == "key"
        assert result.universe_id == "555"
        assert result.timeout == 12.5
        assert result.base_url == DEFAULT_BASE_URL

    def test_precedence(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ROBLOX_API_KEY", "key")
        monkeypatch.setenv("ROBLOX_UNIVERSE_ID", "from-env")
        config = Config()
        config.add_profile("default", base_url="https://profile.example", universe_id="from-profile")

        result = resolve_client_config(config, universe_id="from-arg")
        assert result.universe_id == "from-arg"
        assert result.base_url == "https://profile.example"

        result = resolve_client_config(config)
        assert result.universe_id == "from-env"

    def test_profile_universe_used_without_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ROBLOX_API_KEY", "key")
        config = Config()
        config.add_profile("default", universe_id="from-profile")
        assert resolve_client_config(config).universe_id == "from-profile"

    @pytest.mark.parametrize("timeout", ["abc", "0", "-3"])
    def test_bad_timeout(self, monkeypatch: pytest.MonkeyPatch, timeout: str):
        monkeypatch.setenv("ROBLOX_API_KEY", "key")
        monkeypatch.setenv("ROBLOX_TIMEOUT", timeout)
        with pytest.raises(ConfigurationError):
            resolve_client_config(Config())
