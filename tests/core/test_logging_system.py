"""Tests for the logging setup."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from oldnav.core import logging_system
from oldnav.core.logging_system import ROOT_LOGGER_NAME, get_logger, initialize_logging


@pytest.fixture
def fresh_root_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
    """Run a test with an unconfigured oldnav logger, restoring it afterwards."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_system, "_initialized", False)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestGetLogger:
    """Test logger naming."""

    def test_prefixes_module_names(self) -> None:
        """Test loggers end up in the oldnav hierarchy."""
        assert get_logger("tools.import").name == "oldnav.tools.import"

    def test_keeps_package_names(self) -> None:
        """Test names already inside the hierarchy are left alone."""
        assert get_logger("oldnav.navdata.database").name == "oldnav.navdata.database"
        assert get_logger("oldnav").name == "oldnav"


class TestInitializeLogging:
    """Test initialize_logging."""

    def test_level_and_handler(self, fresh_root_logger: logging.Logger) -> None:
        """Test the level is set and one handler installed."""
        before = len(fresh_root_logger.handlers)

        initialize_logging("DEBUG")
        initialize_logging("WARNING")

        assert fresh_root_logger.level == logging.WARNING
        assert len(fresh_root_logger.handlers) == before + 1

    def test_unknown_level(self, fresh_root_logger: logging.Logger) -> None:
        """Test an unknown level name falls back to INFO."""
        initialize_logging("NOISY")

        assert fresh_root_logger.level == logging.INFO

    def test_log_file(self, fresh_root_logger: logging.Logger, tmp_path: Path) -> None:
        """Test records are also written to the log file."""
        log_file = tmp_path / "logs" / "oldnav.log"

        initialize_logging(logging.INFO, log_file)
        get_logger("test").info("hello %s", "file")
        for handler in fresh_root_logger.handlers:
            handler.flush()

        assert "hello file" in log_file.read_text(encoding="utf-8")
