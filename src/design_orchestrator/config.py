"""Configuration system using platformdirs for cross-platform paths."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs

from .models import Provider

APP_NAME = "design-orchestrator"
ENV_PREFIX = "DESIGN_ORCHESTRATOR_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Config:
	"""Central configuration with XDG/platform conventions."""

	config_dir: Path = field(default_factory=lambda: Path(platformdirs.user_config_dir(APP_NAME)))
	data_dir: Path = field(default_factory=lambda: Path(platformdirs.user_data_dir(APP_NAME)))

	# Derived paths
	config_file: Path = field(init=False)
	log_dir: Path = field(init=False)

	# Orchestration settings
	max_concurrent_tasks: int = 3
	parallel: bool = False
	typical_request_cost: int = 1000
	rate_limit_window: float = 60.0
	enforce_timeouts: bool = False
	simulated_latency: float = 0.0
	log_level: str = "INFO"

	# Raw [[providers]] tables from config.toml
	providers: list[dict[str, Any]] = field(default_factory=list)

	def __post_init__(self) -> None:
		self.config_file = self.config_dir / "config.toml"
		self.log_dir = self.data_dir / "logs"

	def ensure_dirs(self) -> None:
		"""Create all required directories."""
		self.config_dir.mkdir(parents=True, exist_ok=True)
		self.data_dir.mkdir(parents=True, exist_ok=True)
		self.log_dir.mkdir(parents=True, exist_ok=True)


def _parse_bool(value: str) -> bool:
	return value.strip().lower() in _TRUE_VALUES


def _apply_env_overrides(config: Config) -> Config:
	"""Apply DESIGN_ORCHESTRATOR_* environment variable overrides."""
	env_map = {
		"CONFIG_DIR": ("config_dir", Path),
		"DATA_DIR": ("data_dir", Path),
		"MAX_CONCURRENT": ("max_concurrent_tasks", int),
		"PARALLEL": ("parallel", _parse_bool),
		"ENFORCE_TIMEOUTS": ("enforce_timeouts", _parse_bool),
		"LOG_LEVEL": ("log_level", str),
	}
	for suffix, (attr, convert) in env_map.items():
		val = os.getenv(ENV_PREFIX + suffix)
		if val:
			try:
				setattr(config, attr, convert(val))
			except ValueError as e:
				raise ValueError(f"Invalid value for {ENV_PREFIX}{suffix}: {val!r}") from e
	# Recompute derived paths after overrides
	config.__post_init__()
	return config


def _apply_toml(config: Config) -> Config:
	"""Apply config.toml overrides if file exists."""
	toml_path = config.config_file
	if not toml_path.exists():
		return config

	with open(toml_path, "rb") as f:
		data = tomllib.load(f)

	path_fields = {"config_dir", "data_dir"}
	for key, val in data.items():
		if key == "providers":
			if not isinstance(val, list):
				raise ValueError(f"'providers' in {toml_path} must be an array of tables")
			config.providers = list(val)
		elif hasattr(config, key):
			if key in path_fields:
				setattr(config, key, Path(os.path.expanduser(val)))
			else:
				setattr(config, key, val)

	# Recompute derived paths after toml overrides
	config.__post_init__()
	return config


def load_config(ensure_dirs: bool = True) -> Config:
	"""Load config with precedence: env vars > config.toml > defaults."""
	config = Config()
	# Env may relocate config_dir, so resolve it before reading the toml
	config = _apply_env_overrides(config)
	config = _apply_toml(config)
	config = _apply_env_overrides(config)
	if ensure_dirs:
		config.ensure_dirs()
	return config


def load_providers(config: Config) -> list[Provider]:
	"""
	Validate the [[providers]] tables from config.toml.

	Returns an empty list when none are configured.

	Raises:
		pydantic.ValidationError: if a provider table is malformed
	"""
	return [Provider.model_validate(entry) for entry in config.providers]
