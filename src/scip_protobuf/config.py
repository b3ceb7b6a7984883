"""Configuration management for scip-protobuf.

Supports loading configuration from:
1. Default values
2. Config file (--config, or .scip-protobuf.yaml in the project root)
3. Environment variables

Configuration precedence: env vars > config file > defaults
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .logging import get_logger, level_from_name

logger = get_logger("config")

CONFIG_FILENAME = ".scip-protobuf.yaml"

# Symbol identity sentinels. The index is self-contained, so the package
# manager and version slots carry no meaning.
DEFAULT_SCHEME = "."
DEFAULT_MANAGER = "."
DEFAULT_VERSION = "."

DEFAULT_LANGUAGE = "ProtocolBuffers"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """Configuration error."""

    pass


@dataclass
class SymbolConfig:
    """Fixed parts of every emitted symbol."""

    scheme: str = DEFAULT_SCHEME
    manager: str = DEFAULT_MANAGER
    version: str = DEFAULT_VERSION

    def validate(self) -> None:
        """Validate configuration.

        Raises ConfigError if validation fails.
        """
        if not self.scheme:
            raise ConfigError("symbols.scheme must not be empty")

        # The scheme is the one symbol part that is never escaped
        if " " in self.scheme:
            raise ConfigError(f"symbols.scheme must not contain spaces, got {self.scheme!r}")


@dataclass
class OutputConfig:
    """Per-document output settings."""

    language: str = DEFAULT_LANGUAGE
    include_documentation: bool = True

    def validate(self) -> None:
        if not self.language:
            raise ConfigError("output.language must not be empty")


@dataclass
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL
    json: bool = False

    @property
    def level_number(self) -> int:
        return level_from_name(self.level)

    def validate(self) -> None:
        try:
            level_from_name(self.level)
        except ValueError as e:
            raise ConfigError(str(e)) from e


@dataclass
class Config:
    """Main configuration container."""

    symbols: SymbolConfig = field(default_factory=SymbolConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate all configuration."""
        self.symbols.validate()
        self.output.validate()
        self.logging.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbols": {
                "scheme": self.symbols.scheme,
                "manager": self.symbols.manager,
                "version": self.symbols.version,
            },
            "output": {
                "language": self.output.language,
                "include_documentation": self.output.include_documentation,
            },
            "logging": {
                "level": self.logging.level,
                "json": self.logging.json,
            },
        }


def load_config(config_path: Path | None = None, project_root: Path | None = None) -> Config:
    """
    Load configuration from file and environment.

    Args:
        config_path: Explicit path to config file (optional)
        project_root: Project root to look for .scip-protobuf.yaml (optional)

    Returns:
        Validated Config object
    """
    config = Config()

    if config_path is None and project_root is not None:
        config_path = project_root / CONFIG_FILENAME

    if config_path and config_path.exists():
        try:
            config = _load_config_file(config_path)
            logger.debug("Loaded config from %s", config_path)
        except (OSError, ValueError, yaml.YAMLError, ConfigError) as e:
            logger.warning("Failed to load config from %s: %s", config_path, e)
            config = Config()

    config = _apply_env_overrides(config)

    config.validate()

    return config


def _load_config_file(config_path: Path) -> Config:
    """Load configuration from YAML file."""
    max_size = 1024 * 1024  # 1MB
    if config_path.stat().st_size > max_size:
        raise ConfigError(f"Config file too large: {config_path.stat().st_size} > {max_size}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return Config()

    if not isinstance(data, dict):
        raise ConfigError("Config file must be a YAML mapping")

    allowed_keys = {"symbols", "output", "logging"}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        logger.warning("Unknown config keys ignored: %s", unknown_keys)

    symbols_data = _section(data, "symbols")
    symbols = SymbolConfig(
        scheme=str(symbols_data.get("scheme", DEFAULT_SCHEME)),
        manager=str(symbols_data.get("manager", DEFAULT_MANAGER)),
        version=str(symbols_data.get("version", DEFAULT_VERSION)),
    )

    output_data = _section(data, "output")
    output = OutputConfig(
        language=str(output_data.get("language", DEFAULT_LANGUAGE)),
        include_documentation=bool(output_data.get("include_documentation", True)),
    )

    logging_data = _section(data, "logging")
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", DEFAULT_LOG_LEVEL)),
        json=bool(logging_data.get("json", False)),
    )

    return Config(symbols=symbols, output=output, logging=logging_config)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config."""
    env_level = os.environ.get("SCIP_PROTOBUF_LOG_LEVEL")
    if env_level:
        config.logging.level = env_level
        logger.debug("Using log level from env: %s", env_level)

    env_language = os.environ.get("SCIP_PROTOBUF_LANGUAGE")
    if env_language:
        config.output.language = env_language

    env_scheme = os.environ.get("SCIP_PROTOBUF_SCHEME")
    if env_scheme:
        config.symbols.scheme = env_scheme

    return config


def save_config(config: Config, config_path: Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration to save
        config_path: Path to write config file
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    logger.info("Saved config to %s", config_path)


def dump_config(config: Config) -> str:
    """Render configuration as YAML text."""
    return yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False)
