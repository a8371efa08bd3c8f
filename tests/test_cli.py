"""
Tests for the command-line entry point
"""

import logging

import pytest

from chatbot import cli
from chatbot.session import ConversationSession

from tests.conftest import GROQ_KEY


@pytest.fixture
def groq_credentials(monkeypatch):
    monkeypatch.setattr(
        cli.config,
        "load_credentials",
        lambda: {"GOOGLE_API_KEY": "your_google_api_key_here", "GROQ_API_KEY": GROQ_KEY},
    )


class TestMain:

    def test_no_keys_exits_with_error(self, monkeypatch, capsys):
        monkeypatch.setattr(
            cli.config, "load_credentials", lambda: {"GOOGLE_API_KEY": None, "GROQ_API_KEY": ""}
        )
        assert cli.main([]) == 1
        assert "No API keys configured" in capsys.readouterr().out

    def test_warns_about_missing_provider(self, groq_credentials, monkeypatch, capsys):
        monkeypatch.setattr(ConversationSession, "run", lambda self: self.state)
        assert cli.main([]) == 0
        out = capsys.readouterr().out
        assert "Google API key not configured" in out
        assert "Groq API key not configured" not in out

    def test_interrupt_exits_cleanly(self, groq_credentials, monkeypatch, capsys):
        def interrupted(self):
            raise KeyboardInterrupt

        monkeypatch.setattr(ConversationSession, "run", interrupted)
        assert cli.main([]) == 0
        assert "shutting down gracefully" in capsys.readouterr().out

    def test_unexpected_failure_exits_with_error(self, groq_credentials, monkeypatch):
        def broken(self):
            raise RuntimeError("terminal went away")

        monkeypatch.setattr(ConversationSession, "run", broken)
        assert cli.main([]) == 1

    def test_model_option_preselects(self, groq_credentials, monkeypatch):
        selected = []
        monkeypatch.setattr(
            ConversationSession, "run", lambda self: selected.append(self.state.descriptor.id)
        )
        assert cli.main(["--model", "4"]) == 0
        assert selected == [4]

    def test_rejected_model_option_falls_back_to_menu(self, groq_credentials, monkeypatch, capsys):
        phases = []
        monkeypatch.setattr(ConversationSession, "run", lambda self: phases.append(self.state.phase))
        assert cli.main(["--model", "1"]) == 0
        assert "Cannot start with model 1" in capsys.readouterr().out
        assert [phase.value for phase in phases] == ["uninitialized"]


class TestResolveLogLevel:

    @pytest.mark.parametrize(
        "name, expected",
        [("DEBUG", logging.DEBUG), ("info", logging.INFO), (" warning ", logging.WARNING)],
    )
    def test_known_levels(self, name, expected):
        assert cli.resolve_log_level(name) == expected

    @pytest.mark.parametrize("name", ["verbose", "", "loud"])
    def test_unknown_level_falls_back_to_warning(self, name):
        assert cli.resolve_log_level(name) == logging.WARNING

    def test_unknown_level_does_not_abort_startup(self, groq_credentials, monkeypatch):
        monkeypatch.setattr(cli.config, "LOG_LEVEL", "verbose")
        monkeypatch.setattr(ConversationSession, "run", lambda self: self.state)
        assert cli.main([]) == 0
