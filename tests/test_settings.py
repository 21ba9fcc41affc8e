"""Tests for fitbot.settings and fitbot.keys — TOML config and env loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fitbot import keys
from fitbot.keys import (
    CHAT_FUNCTION_PATH,
    default_chat_url,
    load_keys_env,
    supabase_credentials,
)
from fitbot.schemas.config import FitbotSettings
from fitbot.settings import load_settings

# Path to the real config file shipped with the package
_DEFAULTS = Path(__file__).parent.parent / "fitbot" / "config" / "defaults.toml"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SUPABASE_URL", "SUPABASE_PUBLISHABLE_KEY", "SUPABASE_SERVICE_ROLE_KEY",
        "FITBOT_CHAT_URL", "FITBOT_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_loads_bundled_defaults(self):
        settings = load_settings()
        assert isinstance(settings, FitbotSettings)
        assert settings.chat.max_line_retries == 3
        assert settings.chat.chunk_size == 4096
        assert settings.chat.greeting.startswith("Hi! I'm FitBot")
        assert settings.model.model == "gpt-4o-mini"
        assert "FitBot" in settings.model.system_prompt

    def test_explicit_path(self):
        assert load_settings(_DEFAULTS).model.api_key_env == "OPENAI_API_KEY"

    def test_chat_url_from_supabase_url(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co/")
        settings = load_settings()
        assert settings.chat.url == "https://abc.supabase.co" + CHAT_FUNCTION_PATH

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
        monkeypatch.setenv("FITBOT_CHAT_URL", "http://localhost:8000/chat")
        monkeypatch.setenv("FITBOT_MODEL", "anthropic/claude-haiku")
        settings = load_settings()
        assert settings.chat.url == "http://localhost:8000/chat"
        assert settings.model.model == "anthropic/claude-haiku"

    def test_no_url_configured(self):
        assert load_settings().chat.url == ""

    def test_unbounded_retries(self, tmp_path):
        config = tmp_path / "fitbot.toml"
        config.write_text(
            _DEFAULTS.read_text(encoding="utf-8").replace(
                "max_line_retries = 3", "max_line_retries = -1",
            ),
            encoding="utf-8",
        )
        assert load_settings(config).chat.max_line_retries is None

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_settings(Path("/nonexistent/fitbot.toml"))

    def test_invalid_values_raise(self, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text(
            '[chat]\ngreeting = "hi"\nchunk_size = 0\n\n'
            '[model]\nmodel = "m"\napi_key_env = "K"\nsystem_prompt = "s"\n',
            encoding="utf-8",
        )
        with pytest.raises(ValueError, match="Invalid FitBot config"):
            load_settings(config)


class TestKeys:
    def test_env_file_does_not_override(self, tmp_path, monkeypatch):
        env_file = tmp_path / "keys.env"
        env_file.write_text(
            "# comment\nSUPABASE_URL='https://from-file.supabase.co'\n"
            "FITBOT_MODEL=file-model\nnot a pair\n",
            encoding="utf-8",
        )
        # Empty counts as unset; setenv also restores the var afterwards
        monkeypatch.setenv("SUPABASE_URL", "")
        monkeypatch.setenv("FITBOT_MODEL", "shell-model")
        monkeypatch.setattr(keys, "KEYS_FILE", env_file)
        monkeypatch.chdir(tmp_path)

        load_keys_env()

        assert os.environ["SUPABASE_URL"] == "https://from-file.supabase.co"
        assert os.environ["FITBOT_MODEL"] == "shell-model"

    def test_credentials(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        monkeypatch.setenv("SUPABASE_PUBLISHABLE_KEY", "pk")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "sk")
        assert supabase_credentials() == ("https://x.supabase.co", "pk")
        assert supabase_credentials(service=True) == ("https://x.supabase.co", "sk")

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        with pytest.raises(RuntimeError, match="SUPABASE_PUBLISHABLE_KEY"):
            supabase_credentials()

    def test_default_chat_url(self, monkeypatch):
        assert default_chat_url() == ""
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        assert default_chat_url() == "https://x.supabase.co/functions/v1/fitness-chat"
