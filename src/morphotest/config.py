"""
morphotest Configuration System

Configuration for the test helpers, loaded from several sources and validated
with pydantic.

Features:
- Pydantic-based configuration models with validation
- Environment variable support (``MORPHOTEST_`` prefix) with type conversion
- JSON configuration file support
- Configuration priority system (later sources override earlier ones)
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger("morphotest.config")

ENV_PREFIX = "MORPHOTEST_"

_CLASS_PREFIX_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        "WARNING",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level",
    )
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    handlers: list[str] = Field(
        default_factory=list,
        description="Handlers to attach; empty lets records propagate",
    )
    file_path: Path | None = Field(
        None, description="Log file path (if file handler enabled)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("handlers")
    @classmethod
    def validate_handlers(cls, v):
        valid_handlers = {"console", "file"}
        for handler in v:
            if handler not in valid_handlers:
                raise ValueError(
                    f"Invalid handler: {handler}. Must be one of {valid_handlers}"
                )
        return v


class MorphoTestConfig(BaseModel):
    """Complete morphotest configuration."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    fixture_base_path: str = Field(
        "", description="Default base directory for fixture files"
    )
    proxy_class_prefix: str = Field(
        "AccessibleTestProxy",
        pattern=_CLASS_PREFIX_PATTERN,
        description="Prefix of generated accessible proxy class names",
    )
    mock_class_prefix: str = Field(
        "Mock",
        pattern=_CLASS_PREFIX_PATTERN,
        description="Prefix of generated mock class names",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("fixture_base_path", mode="before")
    @classmethod
    def coerce_path(cls, v):
        if isinstance(v, os.PathLike):
            return os.fspath(v)
        if isinstance(v, (int, float)):
            return str(v)
        return v

    def dict_for_container(self) -> dict[str, Any]:
        """Convert to dictionary format suitable for the dependency container."""
        return self.model_dump(mode="json")

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "MorphoTestConfig":
        """Create configuration from environment variables."""
        return cls(**EnvConfigSource(prefix).load())


class ConfigSource(ABC):
    """Abstract base class for configuration sources."""

    def __init__(self, required: bool = False):
        self.required = required

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from this source."""
        pass


class EnvConfigSource(ConfigSource):
    """Environment variable configuration source.

    ``MORPHOTEST_FIXTURE_BASE_PATH`` maps to ``fixture_base_path`` and
    ``MORPHOTEST_LOGGING_LEVEL`` to ``logging.level``. Variables that name no
    configuration field are ignored.
    """

    sections: dict[str, type[BaseModel]] = {"logging": LoggingConfig}

    def __init__(self, prefix: str = ENV_PREFIX, required: bool = False):
        super().__init__(required)
        self.prefix = prefix

    def load(self) -> dict[str, Any]:
        config: dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(self.prefix):
                continue
            config_key = key[len(self.prefix) :].lower()
            section, _, field_key = config_key.partition("_")
            if section in self.sections and field_key in self.sections[section].model_fields:
                config.setdefault(section, {})[field_key] = _parse_env_value(value)
            elif config_key in MorphoTestConfig.model_fields and config_key not in self.sections:
                config[config_key] = _parse_env_value(value)
            else:
                logger.debug(f"Ignoring unknown environment variable {key}")
        return config


class FileConfigSource(ConfigSource):
    """JSON file configuration source."""

    def __init__(self, file_path: str | Path, required: bool = False):
        super().__init__(required)
        self.file_path = Path(file_path)

    def load(self) -> dict[str, Any]:
        if not self.file_path.exists():
            if self.required:
                raise ConfigurationError(
                    f"Required configuration file not found: {self.file_path}"
                )
            return {}

        if self.file_path.suffix.lower() != ".json":
            raise ConfigurationError(
                f"Unsupported configuration file format: {self.file_path.suffix}"
            )
        try:
            with open(self.file_path, encoding="utf-8") as f:
                return json.load(f) or {}
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Failed to load configuration file {self.file_path}: {e}"
            ) from e


class DictConfigSource(ConfigSource):
    """Dictionary-based configuration source for programmatic configuration."""

    def __init__(self, config_dict: dict[str, Any], required: bool = False):
        super().__init__(required)
        self.config_dict = config_dict or {}

    def load(self) -> dict[str, Any]:
        return self.config_dict.copy()


class ConfigLoader:
    """Multi-source configuration loader; later sources take precedence."""

    def __init__(self):
        self.config_sources: list[ConfigSource] = []

    def add_env_source(self, prefix: str = ENV_PREFIX) -> "ConfigLoader":
        self.config_sources.append(EnvConfigSource(prefix))
        return self

    def add_file_source(
        self, file_path: str | Path, required: bool = False
    ) -> "ConfigLoader":
        self.config_sources.append(FileConfigSource(file_path, required))
        return self

    def add_dict_source(self, config_dict: dict[str, Any]) -> "ConfigLoader":
        self.config_sources.append(DictConfigSource(config_dict))
        return self

    def load(self) -> MorphoTestConfig:
        """Load and merge configuration from all sources."""
        merged_config: dict[str, Any] = {}
        for source in self.config_sources:
            merged_config = _deep_merge_dict(merged_config, source.load())

        logger.debug(f"Merged configuration from {len(self.config_sources)} sources")
        try:
            return MorphoTestConfig(**merged_config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate Python type."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _deep_merge_dict(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge_dict(result[key], value)
        else:
            result[key] = value

    return result
