"""Fixtures for AWS client tests.

Provides factory-as-fixture pattern for creating configurable fake boto3 clients
used across AWS client unit tests.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.clients.aws import AWSClients
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.configuration.integrations.aws import AwsSettings


class FakeClient:
    """Configurable fake boto3 client for unit tests.

    Supports:
    - API method responses via `__getattr__` lookup
    - Static, callable or raising response configurations
    """

    def __init__(
        self,
        api_responses: Optional[Dict[str, Any]] = None,
    ):
        self._api_responses = api_responses or {}
        self.calls: List[Dict[str, Any]] = []

    def __getattr__(self, name: str):
        """Provide callable for API methods that returns configured responses."""
        if name.startswith("_") or name not in self._api_responses:
            raise AttributeError(name)
        resp = self._api_responses[name]

        def _call(*_args, **_kwargs):
            self.calls.append({"method": name, **_kwargs})
            if isinstance(resp, Exception):
                raise resp
            if callable(resp):
                return resp(**_kwargs)
            return resp

        return _call


@pytest.fixture
def make_fake_client():
    """Factory fixture for creating configurable fake boto3 clients.

    Usage:
        def test_something(monkeypatch, make_fake_client):
            client = make_fake_client(api_responses={"get_item": {...}})
            monkeypatch.setattr(executor, "get_boto3_client", lambda *a, **k: client)
    """

    def _factory(
        api_responses: Optional[Dict[str, Any]] = None,
    ) -> FakeClient:
        return FakeClient(api_responses=api_responses)

    return _factory


@pytest.fixture
def mock_aws_settings():
    """MagicMock AwsSettings with a DynamoDB role and a local endpoint.

    Tests can further customize this mock as needed:
        def test_something(mock_aws_settings):
            mock_aws_settings.AWS_REGION = "us-west-2"
    """
    settings = MagicMock(spec=AwsSettings)
    settings.AWS_REGION = "us-east-1"
    settings.SERVICE_ROLE_MAP = {
        "dynamodb": "arn:aws:iam::123456789012:role/DynamoDBRole",
    }
    settings.ENDPOINT_URL = "http://localhost:8001"
    settings.MAX_RETRIES = 2
    settings.BACKOFF_FACTOR = 0.1
    settings.THROTTLING_ERRS = ["ThrottlingException"]
    return settings


@pytest.fixture
def aws_factory(mock_aws_settings):
    """AWSClients instance built from the mock settings."""
    return AWSClients(aws_settings=mock_aws_settings)


@pytest.fixture
def session_provider():
    return SessionProvider(region="us-east-1")
