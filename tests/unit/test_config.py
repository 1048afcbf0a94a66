"""Unit tests for configuration management."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from dsflint.config import (
    ApiVersionSetting,
    LinterConfig,
    OutputFormat,
    ValidationConfig,
    create_default_config,
    find_config_file,
    load_config,
)


class TestLinterConfig:
    """Test the complete LinterConfig model."""

    def test_defaults(self):
        """Test zero-config defaults."""
        config = LinterConfig()
        assert config.scan.resource_root == "src/main/resources"
        assert config.scan.bpmn_directory == "bpe"
        assert config.scan.fhir_directory == "fhir"
        assert "target/classes/**" in config.scan.exclude
        assert config.validation.api_version == ApiVersionSetting.AUTO
        assert config.validation.workers == 4
        assert config.output.format == "table"
        assert config.logging.level == "warn"

    def test_config_from_dict(self):
        """Test config creation from camelCase keys."""
        config = LinterConfig(**{
            "scan": {"resourceRoot": "resources", "exclude": ["generated/**"]},
            "validation": {"failOnWarn": True, "includeSuccess": True, "apiVersion": "v1", "workers": 2},
            "codes": {"extra": {"http://example.org/cs": ["A", "B"]}},
            "introspection": {"classIndex": "build/classes.json"},
            "output": {"format": "json", "directory": "reports"},
        })

        assert config.scan.resource_root == "resources"
        assert config.scan.exclude == ["generated/**"]
        assert config.validation.fail_on_warn is True
        assert config.validation.include_success is True
        assert config.validation.api_version == ApiVersionSetting.V1
        assert config.codes.extra == {"http://example.org/cs": ["A", "B"]}
        assert config.introspection.class_index == "build/classes.json"
        assert config.output.format == OutputFormat.JSON.value
        assert config.output.directory == "reports"

    def test_workers_must_be_positive(self):
        """Test worker count validation."""
        with pytest.raises(ValueError, match="workers"):
            ValidationConfig(workers=0)

    def test_invalid_api_version(self):
        with pytest.raises(ValueError):
            LinterConfig(validation={"apiVersion": "v3"})

    def test_config_extra_fields_forbidden(self):
        """Test that unknown top-level sections are rejected."""
        with pytest.raises(ValueError):
            LinterConfig(reporting={"html": True})


class TestConfigFileOperations:
    """Test configuration file loading and discovery."""

    def test_load_config_with_file(self):
        """Test loading config from an explicit file."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".dsflint.json"
            config_file.write_text(json.dumps({"validation": {"failOnWarn": True}}))

            config = load_config(config_file)
            assert config.validation.fail_on_warn is True

    def test_load_config_file_not_found(self):
        """Test that an explicit but missing file is an error."""
        with TemporaryDirectory() as temp_dir:
            with pytest.raises(FileNotFoundError):
                load_config(Path(temp_dir) / "missing.json")

    def test_load_config_invalid_json(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".dsflint.json"
            config_file.write_text("{invalid json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_config_invalid_structure(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".dsflint.json"
            config_file.write_text(json.dumps({"validation": {"workers": -1}}))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_find_config_file_parent_dir(self):
        """Test finding the config file in a parent directory."""
        with TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".dsflint.json"
            config_file.touch()
            sub_dir = temp_path / "a" / "b"
            sub_dir.mkdir(parents=True)

            assert find_config_file(sub_dir) == config_file.resolve()

    def test_zero_config_operation(self):
        """Test fallback to defaults when no config file exists."""
        with patch("dsflint.config.find_config_file", return_value=None):
            config = load_config()
        assert config == create_default_config()
