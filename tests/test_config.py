"""
Tests for config resolution and component loggers.
"""

import logging

from scripts.cssblocks.lexer import Lexer
from scripts.cssblocks.logger import DEFAULT_LOGGER_CONFIG, Logger
from scripts.cssblocks.utils import resolve_config


class TestResolveConfig:

    def test_overrides_known_keys(self):
        """Known keys override defaults and unknown keys are dropped"""
        config = resolve_config({"level": logging.DEBUG, "bogus": True}, DEFAULT_LOGGER_CONFIG)
        assert config["level"] == logging.DEBUG
        assert config["name"] == DEFAULT_LOGGER_CONFIG["name"]
        assert "bogus" not in config

    def test_defaults_are_not_mutated(self):
        """Resolving works on a copy of the defaults"""
        resolve_config({"name": "changed"}, DEFAULT_LOGGER_CONFIG)
        assert DEFAULT_LOGGER_CONFIG["name"] == "cssblocks"

    def test_none_config(self):
        """A missing config yields the defaults"""
        assert resolve_config(None, DEFAULT_LOGGER_CONFIG) == DEFAULT_LOGGER_CONFIG


class TestLogger:

    def test_disabled_logger(self):
        """is_enabled False silences this logger without touching the shared one"""
        logger = Logger({"name": "cssblocks-test-disabled", "is_enabled": False}).logger
        assert logger.disabled
        assert not logger.isEnabledFor(logging.CRITICAL)
        assert not logging.getLogger("cssblocks-test-disabled").disabled

    def test_single_handler_per_name(self):
        """Creating the same logger twice attaches one handler"""
        Logger({"name": "cssblocks-test-handlers"})
        Logger({"name": "cssblocks-test-handlers"})
        assert len(logging.getLogger("cssblocks-test-handlers").handlers) == 1

    def test_default_level(self):
        """Component loggers default to warnings and above"""
        Logger({"name": "cssblocks-test-level"})
        assert logging.getLogger("cssblocks-test-level").level == logging.WARNING

    def test_caller_level_is_kept(self):
        """A level the application already set is left alone"""
        logging.getLogger("cssblocks-test-caller-level").setLevel(logging.DEBUG)
        Logger({"name": "cssblocks-test-caller-level", "level": logging.ERROR})
        assert logging.getLogger("cssblocks-test-caller-level").level == logging.DEBUG

    def test_enabled_and_disabled_in_a_row(self, caplog):
        """A disabled logger does not silence an enabled one of the same name"""
        quiet = Logger({"name": "cssblocks-test-pair", "is_enabled": False}).logger
        loud = Logger({"name": "cssblocks-test-pair"}).logger
        with caplog.at_level(logging.WARNING, logger="cssblocks-test-pair"):
            quiet.warning("quiet")
            loud.warning("loud")
            quiet.warning("quiet again")
        assert [record.getMessage() for record in caplog.records if record.name == "cssblocks-test-pair"] == ["loud"]

    def test_component_logger_toggle(self):
        """enable_logger switches one lexer's logger without affecting the next"""
        quiet = Lexer("a", config={"enable_logger": False})
        loud = Lexer("a")
        assert quiet.logger.disabled
        assert not loud.logger.disabled
        assert not logging.getLogger("Lexer Logger").disabled
