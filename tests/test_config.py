"""Tests for configuration loading."""

import pytest
import yaml

from flashdeck.core.config import (
    API_TOKEN_ENV,
    API_URL_ENV,
    ApiConfig,
    Config,
    load_config,
    save_config,
)
from flashdeck.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv(API_URL_ENV, raising=False)
    monkeypatch.delenv(API_TOKEN_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        config = load_config()
        assert config.api.base_url == "http://localhost:8080"
        assert config.generation.max_cards == 20

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.dump({
            "api": {"base_url": "https://cards.example.org", "timeout": 30},
            "generation": {"max_cards": 50},
            "recording": {"device_index": 2},
        }))
        config = load_config(str(path))
        assert config.api.base_url == "https://cards.example.org"
        assert config.api.timeout == 30.0
        assert config.generation.max_cards == 50
        assert config.recording.device_index == 2

    def test_local_file_found(self, tmp_path):
        (tmp_path / "flashdeck.yaml").write_text("generation:\n  max_cards: 5\n")
        assert load_config().generation.max_cards == 5

    def test_env_overrides_url(self, monkeypatch):
        monkeypatch.setenv(API_URL_ENV, "http://env.test")
        assert load_config().api.base_url == "http://env.test"

    def test_token_from_env(self, monkeypatch):
        monkeypatch.setenv(API_TOKEN_ENV, "secret")
        assert ApiConfig().get_token() == "secret"
        assert ApiConfig(token="own").get_token() == "own"

    @pytest.mark.parametrize("max_cards", [0, 101])
    def test_max_cards_out_of_range(self, max_cards):
        with pytest.raises(ConfigError) as exc_info:
            Config.from_dict({"generation": {"max_cards": max_cards}})
        assert exc_info.value.config_key == "generation.max_cards"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("api: [unclosed")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_save_omits_token(self, tmp_path):
        config = Config()
        config.api.token = "secret"
        path = tmp_path / "out" / "config.yaml"
        save_config(config, str(path))
        assert "secret" not in path.read_text()
        assert load_config(str(path)).api.token is None
