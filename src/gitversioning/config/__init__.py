"""Configuration for gitversioning."""

from gitversioning.config.config_loader import ConfigError, ConfigFileNotFoundError, ConfigLoader, ConfigParsingError
from gitversioning.config.config_schema import (
	PatchConfigSchema,
	RefConfigSchema,
	RefsConfigSchema,
	VersioningConfigSchema,
)

__all__ = [
	"ConfigError",
	"ConfigFileNotFoundError",
	"ConfigLoader",
	"ConfigParsingError",
	"PatchConfigSchema",
	"RefConfigSchema",
	"RefsConfigSchema",
	"VersioningConfigSchema",
]
