"""Configuration management for dsflint using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".dsflint.json"


class ApiVersionSetting(str, Enum):
    """API generation override; ``auto`` keeps what discovery detected."""
    AUTO = "auto"
    V1 = "v1"
    V2 = "v2"


class OutputFormat(str, Enum):
    """Console output formats."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ScanConfig(BaseModel):
    """Scanning configuration section."""
    resource_root: str = Field(alias="resourceRoot", default="src/main/resources")
    exclude: list[str] = Field(default_factory=lambda: [
        "target/classes/**",
        "target/test-classes/**",
        "node_modules/**",
    ])
    bpmn_directory: str = Field(alias="bpmnDirectory", default="bpe")
    fhir_directory: str = Field(alias="fhirDirectory", default="fhir")
    dependency_directory: str = Field(alias="dependencyDirectory", default="target/dependency")

    model_config = ConfigDict(populate_by_name=True)


class ValidationConfig(BaseModel):
    """Validation configuration section."""
    fail_on_warn: bool = Field(alias="failOnWarn", default=False)
    include_success: bool = Field(alias="includeSuccess", default=False)
    api_version: ApiVersionSetting = Field(alias="apiVersion", default=ApiVersionSetting.AUTO)
    workers: int = 4

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v):
        if v < 1:
            raise ValueError("workers must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class CodesConfig(BaseModel):
    """Extra code systems merged into the built-in authorization table."""
    extra: dict[str, list[str]] = Field(default_factory=dict)


class IntrospectionConfig(BaseModel):
    """Class index used to answer implementation class questions."""
    class_index: str | None = Field(alias="classIndex", default=None)

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE
    directory: str | None = None

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class LinterConfig(BaseModel):
    """Complete dsflint configuration model."""
    scan: ScanConfig = Field(default_factory=ScanConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    codes: CodesConfig = Field(default_factory=CodesConfig)
    introspection: IntrospectionConfig = Field(default_factory=IntrospectionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> LinterConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to a configuration file. If None, searches
                    the current directory and its parents for .dsflint.json

    Raises:
        FileNotFoundError: If a config file was given but does not exist
        ValueError: If the configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return create_default_config()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return LinterConfig(**config_data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .dsflint.json by searching up the directory tree."""
    current = Path(start_dir or Path.cwd()).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:
            return None
        current = parent


def create_default_config() -> LinterConfig:
    return LinterConfig()
