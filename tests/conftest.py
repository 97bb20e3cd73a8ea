"""
Shared pytest fixtures and configuration for lazyaws tests.

This module provides common fixtures used across unit and integration tests,
including a scripted fake transport, mocked boto3 clients and LocalStack clients.
"""

import os
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import boto3
import pytest

from lazyaws.request import Request
from lazyaws.transport import BotoTransport
from tests.helpers.fakes import FakeTransport, ImmediateExecutor

if TYPE_CHECKING:
    from tests.helpers.localstack import LocalStackHelper


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests against LocalStack")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer")


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def scan_request() -> Request:
    return Request("Scan", {"TableName": "test_items", "Limit": 2})


@pytest.fixture
def mock_client():
    """
    Creates a fully mocked boto3 client.

    This fixture provides a mock client for unit tests that don't need
    real AWS interactions.
    """
    return MagicMock()


@pytest.fixture
def boto_transport(mock_client):
    """BotoTransport over the mock client, dispatching synchronously."""
    return BotoTransport(mock_client, executor=ImmediateExecutor())


# Integration Test Fixtures


@pytest.fixture(scope="session")
def localstack_endpoint() -> str:
    """Get LocalStack endpoint URL from environment or default."""
    return os.getenv("LOCALSTACK_ENDPOINT", "http://localhost:4566")


@pytest.fixture(scope="session")
def localstack_client(localstack_endpoint: str):
    """
    Creates a boto3 DynamoDB client connected to LocalStack.

    This fixture is session-scoped to avoid creating multiple clients.
    """
    return boto3.client(
        "dynamodb",
        endpoint_url=localstack_endpoint,
        region_name="eu-south-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.fixture(scope="session")
def localstack_helper(localstack_endpoint: str) -> "LocalStackHelper":
    """Provides a LocalStackHelper instance for integration tests."""
    from tests.helpers.localstack import LocalStackHelper

    return LocalStackHelper(endpoint_url=localstack_endpoint)
