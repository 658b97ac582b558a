"""
Tests for channel-aware logging configuration.
"""

import pytest

from edval.core.logging import (
    ChannelLogger,
    LogChannel,
    LogLevel,
    configure_logging,
    get_current_config,
    get_logger,
    get_rule_logger,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level="info", format="console", channels=None, force=True)


class TestConfigure:

    def test_explicit_arguments(self):
        configure_logging(level="debug", format="json", channels=["rule", "fix"], force=True)
        config = get_current_config()

        assert config["level"] == "DEBUG"
        assert config["format"] == "json"
        assert sorted(config["channels"]) == ["FIX", "RULE"]

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("EDVAL_LOG_LEVEL", "verbose")
        monkeypatch.setenv("EDVAL_LOG_CHANNELS", "engine, nonsense")

        configure_logging(force=True)
        config = get_current_config()

        assert config["level"] == "VERBOSE"
        assert config["channels"] == ["ENGINE"]

    def test_unknown_level_falls_back_to_info(self):
        assert LogLevel.from_string("loud") == LogLevel.INFO


class TestChannelLogger:

    def test_filtered_channel_is_quiet(self, capsys):
        configure_logging(level="debug", channels=["engine"], force=True)

        get_logger(LogChannel.FIX).info("fix_applied")

        assert "fix_applied" not in capsys.readouterr().err

    def test_silent_suppresses_errors(self, capsys):
        configure_logging(level="silent", force=True)

        get_logger(LogChannel.SYSTEM).error("rule_failed")

        assert "rule_failed" not in capsys.readouterr().err

    def test_rule_logger_channel(self):
        log = get_rule_logger("r20_images")

        assert isinstance(log, ChannelLogger)
        assert log.channel == LogChannel.RULE
        assert log.rule_name == "r20_images"

    def test_string_channel(self):
        assert get_logger("extract").channel == LogChannel.EXTRACT
        assert get_logger("bogus").channel == LogChannel.SYSTEM
