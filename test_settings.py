"""Tests for settings loading."""

from pathlib import Path

import pytest

from objver.config.settings import load_settings
from objver.core.exceptions import ConfigurationError

REQUIRED_ENV = {
    "BUCKET_NAME": "env-bucket",
    "ACCESS_KEY": "env-access",
    "SECRET_KEY": "env-secret",
    "ENDPOINT": "https://nyc3.example.com/",
}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in list(REQUIRED_ENV) + ["REGION", "LOG_LEVEL", "JSON_LOGS"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def full_env(clean_env):
    for name, value in REQUIRED_ENV.items():
        clean_env.setenv(name, value)
    return clean_env


def test_load_from_environment(full_env):
    settings = load_settings(env_file=None)

    assert settings.bucket_name == "env-bucket"
    assert settings.access_key == "env-access"
    assert settings.secret_key == "env-secret"
    assert settings.endpoint == "https://nyc3.example.com"
    assert settings.region == "us-east-1"
    assert settings.log_level == "WARNING"
    assert settings.json_logs is False


def test_bucket_override_wins(full_env):
    settings = load_settings(env_file=None, bucket_name="flag-bucket", log_level=None)

    assert settings.bucket_name == "flag-bucket"
    assert settings.log_level == "WARNING"


def test_missing_settings_are_named(clean_env):
    clean_env.setenv("ACCESS_KEY", "a")

    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(env_file=None)

    message = str(exc_info.value)
    assert "BUCKET_NAME" in message
    assert "SECRET_KEY" in message
    assert "ENDPOINT" in message
    assert "ACCESS_KEY" not in message


def test_env_file(clean_env, tmp_path):
    env_file = tmp_path / "objver.env"
    env_file.write_text(
        "BUCKET_NAME=file-bucket\nACCESS_KEY=fa\nSECRET_KEY=fs\nENDPOINT=http://minio:9000\nREGION=eu-west-1\n"
    )
    clean_env.setenv("BUCKET_NAME", "env-bucket")

    settings = load_settings(env_file=env_file)

    assert settings.bucket_name == "env-bucket"
    assert settings.region == "eu-west-1"
    assert settings.endpoint == "http://minio:9000"


def test_yaml_config_with_expansion(clean_env, tmp_path):
    config_file = tmp_path / "objver.yaml"
    config_file.write_text(
        "bucket_name: yaml-bucket\n"
        "access_key: ${YAML_ACCESS}\n"
        "secret_key: ${YAML_SECRET:fallback-secret}\n"
        "endpoint: http://localhost:9000\n"
        "log_level: debug\n"
    )
    clean_env.setenv("YAML_ACCESS", "expanded-access")

    settings = load_settings(env_file=None, config_file=config_file)

    assert settings.bucket_name == "yaml-bucket"
    assert settings.access_key == "expanded-access"
    assert settings.secret_key == "fallback-secret"
    assert settings.log_level == "DEBUG"


def test_missing_yaml_config(clean_env):
    with pytest.raises(ConfigurationError):
        load_settings(env_file=None, config_file=Path("does-not-exist.yaml"))


def test_yaml_config_must_be_mapping(clean_env, tmp_path):
    config_file = tmp_path / "objver.yaml"
    config_file.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        load_settings(env_file=None, config_file=config_file)


@pytest.mark.parametrize("name, value", [("LOG_LEVEL", "LOUD"), ("ENDPOINT", "nyc3.example.com")])
def test_invalid_settings(full_env, name, value):
    full_env.setenv(name, value)

    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(env_file=None)
    assert name in str(exc_info.value)
