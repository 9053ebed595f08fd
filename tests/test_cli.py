"""Tests for the command-line interface."""

from types import SimpleNamespace

import pytest
from click.testing import CliRunner

from flashdeck import cli as cli_module
from flashdeck.core.config import API_TOKEN_ENV, API_URL_ENV
from flashdeck.core.exceptions import ApiError
from flashdeck.core.models import Deck
from flashdeck.preview.store import PreviewStore

from conftest import FakeAiApi


class FakeDeckApi:
    def get_deck(self, deck_id):
        return Deck(id=deck_id, title="Photosynthesis")

    def list_decks(self):
        return []


class FakeCardApi:
    def list_cards(self, deck_id):
        return []


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Point the CLI at a temp session dir and fake backend."""
    monkeypatch.delenv(API_URL_ENV, raising=False)
    monkeypatch.delenv(API_TOKEN_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)

    session_dir = tmp_path / "sessions"
    (tmp_path / "flashdeck.yaml").write_text(f"storage:\n  session_dir: {session_dir}\n")

    api = SimpleNamespace(ai=FakeAiApi(), decks=FakeDeckApi(), cards=FakeCardApi())
    monkeypatch.setattr(cli_module, "get_api", lambda config: api)
    return api, PreviewStore(str(session_dir))


class TestCli:
    """Tests for the CLI commands."""

    def test_version(self):
        result = CliRunner().invoke(cli_module.cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_generate_stores_preview(self, env):
        api, store = env
        result = CliRunner().invoke(cli_module.cli, ["generate", "photosynthesis"])
        assert result.exit_code == 0, result.output
        assert "Question 1" in result.output
        assert store.get().session_id == "sess-1"

    def test_generate_requires_one_input(self, env, tmp_path):
        image = tmp_path / "a.png"
        image.write_bytes(b"png")
        result = CliRunner().invoke(cli_module.cli, ["generate", "topic", "--image", str(image)])
        assert result.exit_code != 0
        assert "exactly one" in result.output

    def test_max_cards_range(self, env):
        result = CliRunner().invoke(cli_module.cli, ["generate", "x", "--max-cards", "101"])
        assert result.exit_code != 0

    def test_preview_without_session(self, env):
        result = CliRunner().invoke(cli_module.cli, ["preview"])
        assert result.exit_code == 1
        assert "flashdeck generate" in result.output

    def test_regenerate_then_confirm(self, env):
        api, store = env
        runner = CliRunner()
        runner.invoke(cli_module.cli, ["generate", "photosynthesis"])

        result = runner.invoke(cli_module.cli, ["regenerate", "make it harder"])
        assert result.exit_code == 0, result.output
        assert "Photosynthesis, harder" in result.output

        result = runner.invoke(cli_module.cli, ["confirm"])
        assert result.exit_code == 0, result.output
        assert "Saved as deck 42" in result.output
        assert store.get() is None

    def test_api_error_exits(self, env):
        api, _ = env
        api.ai.error = ApiError("Failed to generate preview: 503")
        result = CliRunner().invoke(cli_module.cli, ["generate", "x"])
        assert result.exit_code == 1
        assert "Failed to generate preview: 503" in result.output

    def test_discard(self, env, sample_preview):
        _, store = env
        store.put(sample_preview)
        result = CliRunner().invoke(cli_module.cli, ["discard"])
        assert result.exit_code == 0
        assert store.get() is None

    def test_init_config(self, env, tmp_path):
        out = tmp_path / "sample.yaml"
        result = CliRunner().invoke(cli_module.cli, ["init-config", str(out)])
        assert result.exit_code == 0
        assert "max_cards: 20" in out.read_text()
