"""
Configuration management for objver.

Uses pydantic-settings to load configuration from environment variables,
an optional env file and an optional YAML file with proper validation.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError

DEFAULT_ENV_FILE = Path(".env")


class ObjverSettings(BaseSettings):
    """
    Settings for one invocation, loaded from environment variables
    (``BUCKET_NAME``, ``ACCESS_KEY``, ``SECRET_KEY``, ``REGION``, ``ENDPOINT``).
    """

    model_config = SettingsConfigDict(
        env_prefix="", env_file=DEFAULT_ENV_FILE, env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Object store
    bucket_name: str = Field(..., min_length=1, description="Versioned bucket to operate on")
    access_key: str = Field(..., min_length=1)
    secret_key: str = Field(..., min_length=1)
    endpoint: str = Field(..., description="S3-compatible endpoint URL")
    region: str = Field("us-east-1")

    # Logging
    log_level: str = Field("WARNING", description="Logging level")
    json_logs: bool = Field(False, description="Whether to output JSON format logs")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not re.match(r"^https?://[^/\s]+", v):
            raise ValueError(f"Invalid endpoint: {v}. Must be an http(s) URL")
        return v.rstrip("/")


def _expand_env_variables(obj: Any) -> Any:
    """Recursively expand environment variables in configuration values."""
    if isinstance(obj, str):
        # Match ${VAR_NAME} or ${VAR_NAME:default_value} patterns
        def replace_env_var(match):
            var_with_default = match.group(1)
            if ":" in var_with_default:
                var_name, default_value = var_with_default.split(":", 1)
                return os.getenv(var_name, default_value)
            return os.getenv(var_with_default, match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, obj)
    elif isinstance(obj, dict):
        return {key: _expand_env_variables(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_variables(item) for item in obj]
    return obj


def load_config_from_yaml(file_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML file with environment variable expansion.

    Args:
        file_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration values with env vars expanded

    Raises:
        ConfigurationError: If the file is missing, malformed or not a mapping
    """
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed configuration file {file_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration file {file_path} must contain a mapping")
    return _expand_env_variables(config)


def describe_validation_error(error: ValidationError) -> str:
    """Render a settings validation error using environment variable names."""
    problems: List[str] = []
    for err in error.errors():
        name = str(err["loc"][0]).upper() if err.get("loc") else "<settings>"
        if err.get("type") == "missing":
            problems.append(f"missing required setting {name}")
        else:
            problems.append(f"invalid setting {name}: {err.get('msg')}")
    return "; ".join(problems)


def load_settings(
    env_file: Optional[Path] = DEFAULT_ENV_FILE, config_file: Optional[Path] = None, **overrides: Any
) -> ObjverSettings:
    """
    Load settings from environment variables and configuration files.

    Args:
        env_file: Env file to read (None disables env file loading)
        config_file: Optional YAML file; its values take precedence over the environment
        **overrides: Command-line overrides; None values are ignored

    Returns:
        Validated ObjverSettings instance

    Raises:
        ConfigurationError: If a required setting is missing or invalid
    """
    config_data: Dict[str, Any] = {}
    if config_file:
        config_data = load_config_from_yaml(config_file)

    config_data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ObjverSettings(_env_file=env_file, **config_data)
    except ValidationError as e:
        raise ConfigurationError(describe_validation_error(e)) from e
