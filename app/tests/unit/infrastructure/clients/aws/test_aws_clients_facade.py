import pytest

from infrastructure.clients.aws import AWSClients, DynamoDBClient


@pytest.mark.unit
class TestAWSClients:
    def test_exposes_dynamodb_client(self, aws_factory):
        assert isinstance(aws_factory.dynamodb, DynamoDBClient)

    def test_dynamodb_uses_settings(self, aws_factory):
        dynamodb = aws_factory.dynamodb
        assert dynamodb._default_role_arn == "arn:aws:iam::123456789012:role/DynamoDBRole"
        assert dynamodb._max_retries == 2
        assert dynamodb._backoff_factor == 0.1
        assert dynamodb._throttling_errors == ("ThrottlingException",)

    def test_session_provider_carries_region_and_endpoint(self, mock_aws_settings):
        clients = AWSClients(aws_settings=mock_aws_settings)
        provider = clients._session_provider
        assert provider.region == "us-east-1"
        assert provider.endpoint_url == "http://localhost:8001"
