"""Shared pytest fixtures for test files."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from aurora_toolkit.common import waiter_utils
from aurora_toolkit.config import AuroraConfig
from aurora_toolkit.scripts.provisioning.resource_ledger import ResourceLedger

_CONFIG_ENV_VARS = (
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "DB_CLUSTER_IDENTIFIER",
    "DB_INSTANCE_IDENTIFIER",
    "DB_NAME",
    "DB_MASTER_USERNAME",
    "DB_MASTER_PASSWORD",
    "DB_ENGINE_VERSION",
)


class _StubBotoClient:
    """Minimal stub for boto3 clients used in tests."""

    def __init__(self, service_name: str, **kwargs):
        self.service_name = service_name
        self.region_name = kwargs.get("region_name")
        self.kwargs = kwargs
        self.exceptions = ClientError

    def __getattr__(self, name: str):
        def _method(*args, **kwargs):
            raise AssertionError(f"Unexpected AWS call in test: {self.service_name}.{name}")

        return _method


@pytest.fixture(autouse=True)
def stub_boto3_client(monkeypatch):
    """Replace boto3.client with a stub so tests don't call real AWS."""

    def fake_client(service_name, **kwargs):
        return _StubBotoClient(service_name, **kwargs)

    monkeypatch.setattr("boto3.client", fake_client)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Clear provisioner env vars and point the .env lookup at an empty file."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    monkeypatch.setenv("AURORA_ENV_FILE", str(env_file))
    return env_file


@pytest.fixture(autouse=True)
def no_wait(monkeypatch):
    """Make polling delays return immediately; the mock records requested delays."""
    wait_event = MagicMock()
    monkeypatch.setattr(waiter_utils, "_WAIT_EVENT", wait_event)
    return wait_event


@pytest.fixture
def ledger():
    """Fresh resource ledger."""
    return ResourceLedger()


@pytest.fixture
def aurora_config():
    """Config with short polling so timeouts are cheap to exercise."""
    return AuroraConfig(
        cluster_identifier="test-cluster",
        instance_identifier="test-cluster-instance-1",
        master_password="s3cret-Passw0rd",
        poll_delay=1,
        poll_max_attempts=3,
    )


@pytest.fixture
def mock_ec2():
    """EC2 client mock."""
    return MagicMock()


@pytest.fixture
def mock_rds():
    """RDS client mock."""
    return MagicMock()
