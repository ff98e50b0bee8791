"""
Config and logging setup tests
"""

import logging
import logging.handlers

import pytest
import yaml

from rootdigits.config import DEFAULTS, ConfigManager
from rootdigits.logging_config import setup_logging


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path"""

    def write(text):
        path = tmp_path / "rootdigits.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)

    return write


class TestConfigManager:
    """ConfigManager loading and lookup"""

    def test_defaults(self):
        config = ConfigManager()
        assert config.get("memoizer.chunk_size") == 100
        assert config.get("cli.digits") == 1000
        assert config.get("logging.file") is None
        assert config.get("logging.file", "fallback.log") == "fallback.log"

    def test_defaults_not_shared(self):
        config = ConfigManager()
        config.settings["memoizer"]["chunk_size"] = 7
        assert DEFAULTS["memoizer"]["chunk_size"] == 100

    def test_missing_key(self):
        config = ConfigManager()
        assert config.get("nope.nothing") is None
        assert config.get("memoizer.chunk_size.deeper", 5) == 5

    def test_load_merges(self, config_file):
        config = ConfigManager(config_file("memoizer:\n  chunk_size: 50\ncli:\n  digits: 20\n"))
        assert config.get("memoizer.chunk_size") == 50
        assert config.get("cli.digits") == 20
        assert config.get("logging.level") == "INFO"

    def test_missing_file(self, tmp_path):
        config = ConfigManager(str(tmp_path / "absent.yaml"))
        assert config.get("memoizer.chunk_size") == 100

    def test_empty_file(self, config_file):
        assert ConfigManager(config_file("")).get("cli.digits") == 1000

    def test_env_substitution(self, config_file, monkeypatch):
        monkeypatch.setenv("ROOTDIGITS_TEST_LEVEL", "DEBUG")
        config = ConfigManager(config_file("logging:\n  level: ${ROOTDIGITS_TEST_LEVEL}\n"))
        assert config.get("logging.level") == "DEBUG"

    def test_unset_env_left_alone(self, config_file, monkeypatch):
        monkeypatch.delenv("ROOTDIGITS_TEST_UNSET", raising=False)
        config = ConfigManager(config_file("logging:\n  file: ${ROOTDIGITS_TEST_UNSET}\n"))
        assert config.get("logging.file") == "${ROOTDIGITS_TEST_UNSET}"

    def test_not_a_mapping(self, config_file):
        with pytest.raises(ValueError):
            ConfigManager(config_file("- 1\n- 2\n"))

    def test_bad_yaml(self, config_file):
        with pytest.raises(yaml.YAMLError):
            ConfigManager(config_file("memoizer: [1, 2\n"))


class TestSetupLogging:
    """Logger handlers"""

    def test_console_only(self):
        logger = setup_logging(level="debug")
        assert logger.name == "rootdigits"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_calls_do_not_duplicate(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logging(level="bogus")

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "rootdigits.log"
        logger = setup_logging(str(log_file), "WARNING")
        try:
            rotating = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
            assert len(rotating) == 1
            assert rotating[0].maxBytes == 10 * 1024 * 1024
            assert rotating[0].backupCount == 5
            logger.warning("hello")
            rotating[0].flush()
            assert "hello" in log_file.read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers = []
