"""Tests for logger setup."""

import io

from modversion import logger as logger_module
from modversion.logger import logger, setup_logger


def test_setup_logger_writes_to_sink():
    sink = io.StringIO()
    setup_logger(level="INFO", sink=sink, colorize=False)
    logger.debug("hidden")
    logger.info("[缓存] 命中 1/2: 1.0")
    output = sink.getvalue()
    assert "hidden" not in output
    assert "| INFO     | [缓存] 命中 1/2: 1.0" in output


def test_env_enables_debug(monkeypatch):
    monkeypatch.setenv("MODVERSION_DEBUG", "1")
    sink = io.StringIO()
    setup_logger(sink=sink, colorize=False)
    assert "DEBUG 模式已启用" in sink.getvalue()


def test_exports():
    assert logger_module.__all__ == ["logger", "setup_logger"]
