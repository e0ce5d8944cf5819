"""Logging setup for the design_orchestrator logger tree."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import Config

ROOT_LOGGER = "design_orchestrator"
LOG_FILE = "orchestrator.log"

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"


def _resolve_level(level: Optional[str], config: Optional[Config]) -> int:
	name = level or (config.log_level if config is not None else "INFO")
	return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def setup_logging(
	config: Optional[Config] = None,
	level: Optional[str] = None,
	name: str = ROOT_LOGGER,
) -> logging.Logger:
	"""
	Attach console and file handlers to the package logger.

	The level comes from `level`, then `config.log_level`, then INFO. When a
	config is given, task outcomes are also written to a rotating
	`orchestrator.log` under `config.log_dir`, which receives DEBUG and up
	regardless of the console level.

	Calling again only adjusts the console level; handlers are added once.
	"""
	log_level = _resolve_level(level, config)
	logger = logging.getLogger(name)
	logger.setLevel(logging.DEBUG if config is not None else log_level)

	existing = [h for h in logger.handlers if not isinstance(h, RotatingFileHandler)]
	if existing:
		for handler in existing:
			handler.setLevel(log_level)
		return logger

	console = logging.StreamHandler(sys.stdout)
	console.setLevel(log_level)
	console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
	logger.addHandler(console)

	if config is not None:
		config.log_dir.mkdir(parents=True, exist_ok=True)
		file_handler = RotatingFileHandler(
			config.log_dir / LOG_FILE,
			maxBytes=10 * 1024 * 1024,
			backupCount=5,
			encoding="utf-8",
		)
		file_handler.setLevel(logging.DEBUG)
		file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
		logger.addHandler(file_handler)

	return logger
