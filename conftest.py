"""Shared pytest fixtures for objver tests."""

from unittest.mock import Mock

import pytest

import objver.storage.s3_client as s3_client_module
from objver.config.settings import ObjverSettings
from objver.storage.s3_client import ObjectStoreClient
from objver.versions.service import VersionService

HELLO_MD5 = "5d41402abc4b2a76b9719d911017c592"


@pytest.fixture
def settings():
    """Settings built without reading any env file"""
    return ObjverSettings(
        _env_file=None,
        bucket_name="test-bucket",
        access_key="test-access",
        secret_key="test-secret",
        endpoint="http://localhost:9000",
    )


@pytest.fixture
def mock_s3_client():
    """Mock boto3 S3 client for a bucket with versioning enabled"""
    client = Mock()
    client.get_bucket_versioning.return_value = {"Status": "Enabled"}
    client.list_objects_v2.return_value = {"Contents": [], "IsTruncated": False}
    client.list_object_versions.return_value = {"Versions": [], "IsTruncated": False}
    client.put_object.return_value = {"VersionId": "v-new", "ETag": f'"{HELLO_MD5}"'}
    client.delete_object.return_value = {"VersionId": "v1"}
    client.copy_object.return_value = {"VersionId": "v-copy", "CopyObjectResult": {"ETag": f'"{HELLO_MD5}"'}}
    return client


@pytest.fixture
def store(settings, mock_s3_client):
    return ObjectStoreClient(settings, client=mock_s3_client)


@pytest.fixture
def service(settings, store):
    return VersionService(settings, store=store)


@pytest.fixture
def cli_env(monkeypatch, tmp_path, mock_s3_client):
    """Environment for driving the CLI against the mock client"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BUCKET_NAME", "test-bucket")
    monkeypatch.setenv("ACCESS_KEY", "test-access")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("ENDPOINT", "http://localhost:9000")
    monkeypatch.delenv("REGION", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("JSON_LOGS", raising=False)
    monkeypatch.setattr(s3_client_module, "create_boto3_client", lambda settings: mock_s3_client)
    return tmp_path


def call_names(client):
    """Names of the store methods called on a mock client, in order."""
    return [name for name, _args, _kwargs in client.mock_calls]
