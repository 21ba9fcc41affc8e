"""Tests for the FitBot CLI.

Covers --version, plan rendering and JSON output, and the chat command
against a fake transport via CliRunner.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from fitbot import __version__
from fitbot.cli import app
from fitbot.errors import TransportError

# NO_COLOR=1 prevents Rich from injecting ANSI codes inside option names,
# which breaks substring matching in CI (headless, no TTY).
# COLUMNS=200 prevents wrapping that could split a flag across lines.
runner = CliRunner(env={"NO_COLOR": "1", "COLUMNS": "200"})


def _frame(text: str) -> bytes:
    payload = {"choices": [{"delta": {"content": text}}]}
    return f"data: {json.dumps(payload)}\n\n".encode()


class FakeTransport:
    """Stands in for ChatTransport; replays one canned reply per request."""

    instances: list[FakeTransport] = []
    chunks: list[bytes] = []
    error: TransportError | None = None

    def __init__(self, url, api_key, **kwargs) -> None:
        self.url = url
        self.api_key = api_key
        self.kwargs = kwargs
        self.requests = 0
        FakeTransport.instances.append(self)

    async def stream(self, messages):
        self.requests += 1
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_transport(monkeypatch):
    monkeypatch.setenv("FITBOT_CHAT_URL", "http://localhost:8000/functions/v1/fitness-chat")
    FakeTransport.instances = []
    FakeTransport.chunks = [_frame("Hel"), _frame("lo"), b"data: [DONE]\n\n"]
    FakeTransport.error = None
    with patch("fitbot.cli.ChatTransport", FakeTransport):
        yield FakeTransport


class TestVersionAndHelp:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("chat", "plan", "serve"):
            assert command in result.output


class TestPlanCommand:
    def test_json_output(self):
        result = runner.invoke(app, [
            "plan", "--height", "175", "--weight", "70",
            "--goal", "gain", "--activity", "high",
            "--equipment", "dumbbells", "--equipment", "pull_up_bar",
            "--diet", "nonveg", "--json",
        ])
        assert result.exit_code == 0, result.output
        plan = json.loads(result.output)
        assert plan["bmi"] == 22.86
        assert plan["category"] == "Healthy"
        assert "Pull-Ups (3x max)" in plan["exercises"]
        assert plan["diet"][0] == "Breakfast: Omelette + Whole wheat bread + Milk"
        assert [d["focus"] for d in plan["weekly_plan"]][-1] == "Rest Day"

    def test_rendered_output(self):
        result = runner.invoke(app, [
            "plan", "--height", "160", "--weight", "85", "--name", "Ana",
        ])
        assert result.exit_code == 0, result.output
        assert "Ana's Fitness Plan" in result.output
        assert "Obese" in result.output
        assert "Weekly Plan" in result.output
        assert "Important Notes" in result.output

    def test_invalid_measurements(self):
        result = runner.invoke(app, ["plan", "--height", "0", "--weight", "70"])
        assert result.exit_code == 1
        assert "Please enter valid height and weight" in result.output

    def test_unknown_goal_rejected(self):
        result = runner.invoke(app, [
            "plan", "--height", "170", "--weight", "70", "--goal", "bulk",
        ])
        assert result.exit_code != 0


class TestChatCommand:
    def test_one_shot_message(self, fake_transport):
        result = runner.invoke(app, ["chat", "--key", "pk_test", "-m", "Hi"])
        assert result.exit_code == 0, result.output
        assert "Hello" in result.output
        transport = fake_transport.instances[0]
        assert transport.url.endswith("/functions/v1/fitness-chat")
        assert transport.api_key == "pk_test"
        assert transport.requests == 1

    def test_url_option_wins(self, fake_transport):
        runner.invoke(app, ["chat", "--url", "http://other/chat", "-m", "Hi"])
        assert fake_transport.instances[0].url == "http://other/chat"

    def test_failure_shows_notice(self, fake_transport):
        fake_transport.chunks = []
        fake_transport.error = TransportError("Chat endpoint returned HTTP 500", 500)
        result = runner.invoke(app, ["chat", "-m", "Hi"])
        assert result.exit_code == 1
        assert "Failed to get response from AI" in result.output

    def test_interactive_until_exit(self, fake_transport):
        result = runner.invoke(app, ["chat"], input="Hi\n\nHow about legs?\nexit\n")
        assert result.exit_code == 0, result.output
        assert "your AI fitness coach" in result.output
        assert fake_transport.instances[0].requests == 2

    def test_missing_endpoint(self, monkeypatch):
        monkeypatch.delenv("FITBOT_CHAT_URL", raising=False)
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        result = runner.invoke(app, ["chat", "-m", "Hi"])
        assert result.exit_code == 1
        assert "No chat endpoint configured" in result.output
