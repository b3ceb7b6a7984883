"""Tests for configuration functionality."""

import logging

import pytest

from scip_protobuf.config import (
    Config,
    ConfigError,
    LoggingConfig,
    OutputConfig,
    SymbolConfig,
    dump_config,
    load_config,
    save_config,
)


class TestSymbolConfig:
    """Tests for SymbolConfig."""

    def test_default_values(self):
        """Every identity slot defaults to the '.' sentinel."""
        config = SymbolConfig()
        assert config.scheme == "."
        assert config.manager == "."
        assert config.version == "."

    def test_validate_empty_scheme(self):
        with pytest.raises(ConfigError, match="scheme"):
            SymbolConfig(scheme="").validate()

    def test_validate_scheme_with_space(self):
        with pytest.raises(ConfigError, match="spaces"):
            SymbolConfig(scheme="my scheme").validate()


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self):
        config = OutputConfig()
        assert config.language == "ProtocolBuffers"
        assert config.include_documentation

    def test_validate_empty_language(self):
        with pytest.raises(ConfigError, match="language"):
            OutputConfig(language="").validate()


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_number(self):
        assert LoggingConfig(level="debug").level_number == logging.DEBUG

    def test_validate_unknown_level(self):
        with pytest.raises(ConfigError, match="level"):
            LoggingConfig(level="chatty").validate()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_defaults(self, project_root):
        """Should load defaults when no config file."""
        config = load_config(project_root=project_root)
        assert config.output.language == "ProtocolBuffers"
        assert config.symbols.scheme == "."

    def test_load_from_project_root(self, project_root):
        """Should pick up .scip-protobuf.yaml from the project root."""
        (project_root / ".scip-protobuf.yaml").write_text("""
symbols:
  scheme: scip-protobuf
output:
  language: proto
  include_documentation: false
logging:
  level: DEBUG
""")
        config = load_config(project_root=project_root)
        assert config.symbols.scheme == "scip-protobuf"
        assert config.output.language == "proto"
        assert not config.output.include_documentation
        assert config.logging.level == "DEBUG"

    def test_explicit_path_wins(self, tmp_path, project_root):
        (project_root / ".scip-protobuf.yaml").write_text("output:\n  language: ignored\n")
        explicit = tmp_path / "custom.yaml"
        explicit.write_text("output:\n  language: chosen\n")

        config = load_config(config_path=explicit, project_root=project_root)

        assert config.output.language == "chosen"

    def test_invalid_file_falls_back_to_defaults(self, project_root):
        (project_root / ".scip-protobuf.yaml").write_text("- just\n- a list\n")
        config = load_config(project_root=project_root)
        assert config.output.language == "ProtocolBuffers"

    def test_empty_file(self, project_root):
        (project_root / ".scip-protobuf.yaml").write_text("")
        assert load_config(project_root=project_root) == Config()

    def test_env_override_language(self, project_root, monkeypatch):
        """Environment variables should override config file."""
        (project_root / ".scip-protobuf.yaml").write_text("output:\n  language: proto\n")
        monkeypatch.setenv("SCIP_PROTOBUF_LANGUAGE", "protobuf")
        config = load_config(project_root=project_root)
        assert config.output.language == "protobuf"

    def test_env_override_log_level(self, project_root, monkeypatch):
        monkeypatch.setenv("SCIP_PROTOBUF_LOG_LEVEL", "WARNING")
        config = load_config(project_root=project_root)
        assert config.logging.level_number == logging.WARNING

    def test_env_override_is_validated(self, project_root, monkeypatch):
        monkeypatch.setenv("SCIP_PROTOBUF_SCHEME", "has space")
        with pytest.raises(ConfigError):
            load_config(project_root=project_root)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_and_load(self, tmp_path):
        config = Config(
            symbols=SymbolConfig(scheme="proto", manager="buf", version="v1"),
            output=OutputConfig(language="proto3", include_documentation=False),
        )
        config_path = tmp_path / "nested" / "config.yaml"

        save_config(config, config_path)
        loaded = load_config(config_path=config_path)

        assert loaded == config

    def test_dump_config(self):
        text = dump_config(Config())
        assert "language: ProtocolBuffers" in text
        assert text.index("symbols") < text.index("output")
