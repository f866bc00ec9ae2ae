"""Test logging setup."""
import json

import pytest
import structlog
from redenomination.config import Settings
from redenomination.utils.logging import get_logger, setup_logging

from tests.factories import make_engine


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    def test_json_output(self, capsys):
        setup_logging(Settings(log_level="INFO", log_json=True))
        get_logger("test").info("rule_updated", factor=1000)
        line = json.loads(capsys.readouterr().out.strip())
        assert line["event"] == "rule_updated"
        assert line["factor"] == 1000
        assert line["level"] == "info"
        assert line["logger"] == "test"
        assert "timestamp" in line

    def test_level_filtering(self, capsys):
        setup_logging(Settings(log_level="WARNING"))
        get_logger("test").info("hidden")
        assert capsys.readouterr().out == ""

    def test_keyword_overrides_settings(self, capsys):
        setup_logging(Settings(log_level="WARNING", log_json=True), log_level="debug", json=False)
        get_logger("test").debug("plugin_added")
        out = capsys.readouterr().out
        assert "plugin_added" in out
        assert not out.lstrip().startswith("{")

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(Settings(log_level="LOUD"))


class TestGetLogger:
    def test_library_events_carry_module_name(self):
        engine = make_engine()
        with structlog.testing.capture_logs() as logs:
            engine.update_rule(decimals=4)
        assert logs[0]["event"] == "rule_updated"
        assert logs[0]["logger"] == "redenomination.conversion.engine"

    def test_configured_after_import(self, capsys):
        logger = get_logger("late")
        setup_logging(Settings(log_level="INFO", log_json=True))
        logger.info("converted")
        assert json.loads(capsys.readouterr().out.strip())["logger"] == "late"
