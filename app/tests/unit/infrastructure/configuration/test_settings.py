"""Unit tests for the settings aggregator and its sections."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from infrastructure.configuration import Settings
from infrastructure.configuration.features import MessagesSettings
from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.configuration.integrations import AwsSettings

ENV_VARS = [
    "PREFIX",
    "AWS_REGION",
    "AWS_ENDPOINT_URL",
    "AWS_DYNAMODB_ROLE_ARN",
    "MESSAGES_MAX_TIME_RANGE_DAYS",
    "MESSAGES_DEFAULT_FETCH_SIZE",
    "MESSAGES_RETENTION_DAYS",
    "MESSAGES_CREATE_TABLES",
    "ALLOWED_ORIGINS",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # No .env file in the working directory
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.mark.unit
class TestMessagesSettings:
    def test_defaults(self, clean_env):
        messages = MessagesSettings()
        assert messages.MAX_TIME_RANGE_DAYS == 31
        assert messages.DEFAULT_FETCH_SIZE == 1000
        assert messages.RETENTION_DAYS is None
        assert messages.CREATE_TABLES is False
        assert messages.max_time_range == timedelta(days=31)

    def test_read_from_environment(self, clean_env):
        clean_env.setenv("MESSAGES_MAX_TIME_RANGE_DAYS", "7")
        clean_env.setenv("MESSAGES_DEFAULT_FETCH_SIZE", "50")
        clean_env.setenv("MESSAGES_RETENTION_DAYS", "365")
        clean_env.setenv("MESSAGES_CREATE_TABLES", "true")

        messages = MessagesSettings()

        assert messages.max_time_range == timedelta(days=7)
        assert messages.DEFAULT_FETCH_SIZE == 50
        assert messages.RETENTION_DAYS == 365
        assert messages.CREATE_TABLES is True

    @pytest.mark.parametrize("field", ["MAX_TIME_RANGE_DAYS", "DEFAULT_FETCH_SIZE"])
    def test_limits_must_be_positive(self, clean_env, field):
        with pytest.raises(ValidationError):
            MessagesSettings(**{field: 0})


@pytest.mark.unit
class TestAwsSettings:
    def test_endpoint_and_role_from_environment(self, clean_env):
        clean_env.setenv("AWS_ENDPOINT_URL", "http://localhost:8001")
        clean_env.setenv("AWS_DYNAMODB_ROLE_ARN", "arn:aws:iam::1:role/Dynamo")

        aws = AwsSettings()

        assert aws.ENDPOINT_URL == "http://localhost:8001"
        assert aws.SERVICE_ROLE_MAP == {"dynamodb": "arn:aws:iam::1:role/Dynamo"}

    def test_no_role_means_empty_map(self, clean_env):
        assert AwsSettings().SERVICE_ROLE_MAP == {}


@pytest.mark.unit
class TestServerSettings:
    def test_allowed_origins_are_split(self, clean_env):
        clean_env.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        assert ServerSettings().allowed_origins == [
            "https://a.example",
            "https://b.example",
        ]


@pytest.mark.unit
class TestSettings:
    def test_sections_are_instantiated(self, clean_env):
        settings = Settings()
        assert isinstance(settings.aws, AwsSettings)
        assert isinstance(settings.messages, MessagesSettings)
        assert isinstance(settings.server, ServerSettings)

    def test_is_production_without_prefix(self, clean_env):
        assert Settings().is_production is True

    def test_prefix_means_non_production(self, clean_env):
        clean_env.setenv("PREFIX", "dev_")
        settings = Settings()
        assert settings.PREFIX == "dev_"
        assert settings.is_production is False

    def test_sections_can_be_overridden(self, clean_env):
        messages = MessagesSettings(DEFAULT_FETCH_SIZE=10)
        assert Settings(messages=messages).messages.DEFAULT_FETCH_SIZE == 10
