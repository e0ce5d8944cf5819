"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from design_orchestrator.config import Config
from design_orchestrator.logging_config import LOG_FILE, setup_logging


@pytest.fixture
def logger_name(request):
	"""A throwaway logger name; handlers are removed afterwards."""
	name = f"design_orchestrator_test.{request.node.name}"
	yield name
	logger = logging.getLogger(name)
	for handler in list(logger.handlers):
		handler.close()
		logger.removeHandler(handler)


@pytest.fixture
def config(tmp_path: Path) -> Config:
	return Config(config_dir=tmp_path / "config", data_dir=tmp_path / "data", log_level="WARNING")


def test_console_only_without_config(logger_name):
	logger = setup_logging(level="DEBUG", name=logger_name)
	assert logger.level == logging.DEBUG
	assert len(logger.handlers) == 1
	assert not isinstance(logger.handlers[0], RotatingFileHandler)


def test_config_log_dir_gets_file(logger_name, config):
	logger = setup_logging(config, name=logger_name)

	file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
	assert len(file_handlers) == 1
	logger.debug("task finished")
	file_handlers[0].flush()
	assert "task finished" in (config.log_dir / LOG_FILE).read_text()


def test_level_falls_back_to_config(logger_name, config):
	logger = setup_logging(config, name=logger_name)
	console = next(h for h in logger.handlers if not isinstance(h, RotatingFileHandler))
	assert console.level == logging.WARNING


def test_explicit_level_beats_config(logger_name, config):
	logger = setup_logging(config, level="debug", name=logger_name)
	console = next(h for h in logger.handlers if not isinstance(h, RotatingFileHandler))
	assert console.level == logging.DEBUG


def test_repeat_call_adjusts_level_without_new_handlers(logger_name, config):
	setup_logging(config, name=logger_name)
	logger = setup_logging(config, level="ERROR", name=logger_name)

	assert len(logger.handlers) == 2
	console = next(h for h in logger.handlers if not isinstance(h, RotatingFileHandler))
	assert console.level == logging.ERROR


def test_unknown_level_falls_back_to_info(logger_name):
	logger = setup_logging(level="chatty", name=logger_name)
	assert logger.level == logging.INFO
