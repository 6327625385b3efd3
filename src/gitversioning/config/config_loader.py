"""
Configuration loader for gitversioning.

Loads the YAML configuration file and validates it against the pydantic
schema.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from gitversioning.config.config_schema import VersioningConfigSchema

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".gitversioning.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
	"""Exception raised when configuration file is not found."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


class ConfigLoader:
	"""Loads the versioning configuration, falling back to schema defaults."""

	def __init__(self, config_file: Path | None = None, repo_root: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)
			repo_root: Repository root path, searched for a config file (optional)

		"""
		self.repo_root = repo_root
		self._resolved_config_file = self._resolve_config_file(config_file)
		self._config = self._load_config(explicit=config_file is not None)

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. .gitversioning.yml in the repository root, if given
		2. ./.gitversioning.yml in the current directory
		3. $XDG_CONFIG_HOME/gitversioning/config.yml

		Args:
			config_file: Explicitly provided config file path (optional)

		Returns:
			Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			return config_file.expanduser().resolve()

		candidates = []
		if self.repo_root is not None:
			candidates.append(self.repo_root / CONFIG_FILE_NAME)
		candidates.append(Path(CONFIG_FILE_NAME))
		candidates.append(Path(xdg_config_home) / "gitversioning" / "config.yml")
		for candidate in candidates:
			if candidate.exists():
				return candidate
		return None

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file.

		Raises:
			yaml.YAMLError: If the file cannot be parsed as valid YAML
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
			if content is None:  # Empty file
				return {}
			if not isinstance(content, dict):
				msg = f"File {file_path} does not contain a valid YAML dictionary"
				raise yaml.YAMLError(msg)
			return content

	def _load_config(self, *, explicit: bool) -> VersioningConfigSchema:
		"""
		Load configuration from file and parse it into VersioningConfigSchema.

		Raises:
			ConfigFileNotFoundError: If an explicitly given configuration file doesn't exist
			ConfigParsingError: If configuration file exists but cannot be loaded or parsed.

		"""
		file_config_dict: dict[str, Any] = {}
		if self._resolved_config_file is None:
			logger.info("No configuration file specified or found. Using default configuration.")
		elif not self._resolved_config_file.exists():
			msg = f"Configuration file not found: {self._resolved_config_file}"
			if explicit:
				raise ConfigFileNotFoundError(msg)
			logger.info("%s. Using default configuration.", msg)
		else:
			try:
				file_config_dict = self._parse_yaml_file(self._resolved_config_file)
				logger.info("Loaded configuration from %s", self._resolved_config_file)
			except yaml.YAMLError as e:
				msg = f"Configuration file {self._resolved_config_file} does not contain a valid YAML dictionary."
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
			except OSError as e:
				msg = f"Error accessing configuration file {self._resolved_config_file}: {e}"
				logger.exception(msg)
				raise ConfigParsingError(msg) from e

		try:
			return VersioningConfigSchema(**file_config_dict)
		except ValidationError as e:
			msg = f"Error parsing configuration into schema: {e}"
			logger.exception(msg)
			raise ConfigParsingError(msg) from e

	@property
	def config_file(self) -> Path | None:
		"""The configuration file in use, if any."""
		return self._resolved_config_file

	@property
	def get(self) -> VersioningConfigSchema:
		"""
		Get the loaded configuration.

		Returns:
			VersioningConfigSchema: The current configuration
		"""
		return self._config
