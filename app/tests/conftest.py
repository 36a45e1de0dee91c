import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.configuration`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from infrastructure.clients.aws import executor  # noqa: E402
from infrastructure.clients.aws.dynamodb import DynamoDBClient  # noqa: E402
from infrastructure.clients.aws.session_provider import SessionProvider  # noqa: E402
from infrastructure.configuration import Settings  # noqa: E402
from infrastructure.configuration.features import MessagesSettings  # noqa: E402
from infrastructure.configuration.infrastructure import ServerSettings  # noqa: E402
from infrastructure.configuration.integrations import AwsSettings  # noqa: E402
from modules.messages.payloads import PayloadService  # noqa: E402
from modules.messages.service import NorthMessagesService  # noqa: E402
from tests.factories.messages import make_audit_message  # noqa: E402
from tests.fixtures.dynamodb import FakeDynamoDB  # noqa: E402


@pytest.fixture
def make_settings():
    """Factory fixture building Settings isolated from the environment.

    Usage:
        def test_something(make_settings):
            settings = make_settings(MAX_TIME_RANGE_DAYS=7)
    """

    def _factory(prefix: str = "test_", **messages_overrides) -> Settings:
        return Settings(
            PREFIX=prefix,
            aws=AwsSettings(AWS_REGION="ca-central-1", ENDPOINT_URL=None),
            messages=MessagesSettings(**messages_overrides),
            server=ServerSettings(),
        )

    return _factory


@pytest.fixture
def messages_settings(make_settings):
    return make_settings()


@pytest.fixture
def fake_dynamodb(monkeypatch):
    """In-memory DynamoDB served to every boto3 client created by the executor."""
    store = FakeDynamoDB()

    def mock_boto3_client(
        service_name, session_config=None, client_config=None, role_arn=None
    ):
        return store

    monkeypatch.setattr(executor, "get_boto3_client", mock_boto3_client)
    monkeypatch.setattr(executor.time, "sleep", lambda _seconds: None)
    return store


@pytest.fixture
def dynamodb(fake_dynamodb):
    """DynamoDBClient wired to the in-memory store."""
    return DynamoDBClient(
        session_provider=SessionProvider(region="ca-central-1"),
        max_retries=2,
        backoff_factor=0,
    )


@pytest.fixture
def payload_service(dynamodb, messages_settings):
    return PayloadService(dynamodb=dynamodb, settings=messages_settings)


@pytest.fixture
def north_messages_service(dynamodb, payload_service, messages_settings):
    return NorthMessagesService(
        dynamodb=dynamodb,
        payload_service=payload_service,
        settings=messages_settings,
    )


@pytest.fixture
def audit_message():
    return make_audit_message()
