"""Unit tests for configuration management."""

import json
import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from attrspec.config import (
    AttrspecConfig,
    LogLevel,
    NormalizationConfig,
    ValidationConfig,
    create_default_config,
    find_config_file,
    load_config,
)


class TestSectionConfigs:
    """Test individual configuration sections."""

    def test_normalization_defaults(self):
        config = NormalizationConfig()
        assert config.eager_cardinality is False
        assert config.warn_on_unknown_keys is True

    def test_validation_defaults(self):
        config = ValidationConfig()
        assert config.blank_is_absent is True
        assert config.match_timeout == 1.0

    def test_validation_aliases(self):
        config = ValidationConfig(**{"blankIsAbsent": False, "matchTimeout": None})
        assert config.blank_is_absent is False
        assert config.match_timeout is None

    def test_match_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            ValidationConfig(match_timeout=0)

    def test_log_level_mapping(self):
        assert LogLevel.WARN.to_logging_level() == logging.WARNING
        assert LogLevel.DEBUG.to_logging_level() == logging.DEBUG


class TestAttrspecConfig:
    """Test complete AttrspecConfig model."""

    def test_config_from_dict(self):
        """Test config creation from dictionary."""
        config_data = {
            "normalization": {"eagerCardinality": True},
            "validation": {"blankIsAbsent": False},
            "logging": {"level": "debug"},
        }

        config = AttrspecConfig(**config_data)
        assert config.normalization.eager_cardinality is True
        assert config.validation.blank_is_absent is False
        assert config.logging.level == LogLevel.DEBUG

    def test_config_extra_fields_forbidden(self):
        """Test that extra fields are rejected."""
        with pytest.raises(ValueError):
            AttrspecConfig(invalid_field="should-fail")


class TestConfigFileOperations:
    """Test configuration file loading and discovery."""

    def test_load_config_with_file(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".attrspec.json"
            with open(config_file, "w") as f:
                json.dump({"validation": {"matchTimeout": 0.5}}, f)

            config = load_config(config_file)
            assert config.validation.match_timeout == 0.5

    def test_load_config_file_not_found(self):
        """Missing explicit file falls back to defaults."""
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "nonexistent.json")
            assert config == create_default_config()

    def test_load_config_invalid_json(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".attrspec.json"
            config_file.write_text("{invalid json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_config_invalid_structure(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".attrspec.json"
            config_file.write_text(json.dumps({"invalid": "structure"}))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_find_config_file_parent_dir(self):
        with TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".attrspec.json"
            config_file.touch()

            sub_dir = temp_path / "a" / "b"
            sub_dir.mkdir(parents=True)

            assert find_config_file(sub_dir) == config_file.resolve()

    def test_find_config_file_not_found(self):
        with TemporaryDirectory() as temp_dir:
            with patch("pathlib.Path.exists", return_value=False):
                assert find_config_file(Path(temp_dir)) is None

    def test_zero_config_operation(self):
        with patch("attrspec.config.find_config_file", return_value=None):
            config = load_config()
            assert config.validation.blank_is_absent is True
            assert config.logging.level == LogLevel.INFO
