"""Tests for DynamoDBClient.

Validates DynamoDB operations with default role fallback, retry settings and
table bootstrap helpers.
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, WaiterError  # type: ignore

from infrastructure.clients.aws import executor as aws_client
from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.operations import OperationStatus


@pytest.mark.unit
class TestDynamoDBClient:
    """Test suite for DynamoDBClient."""

    def test_init_with_default_role_arn(self, session_provider):
        client = DynamoDBClient(
            session_provider=session_provider,
            default_role_arn="arn:aws:iam::123456789012:role/DynamoDBRole",
        )
        assert client._default_role_arn == "arn:aws:iam::123456789012:role/DynamoDBRole"
        assert client._service_name == "dynamodb"

    def test_get_item_uses_default_role(
        self, monkeypatch, make_fake_client, session_provider
    ):
        """get_item falls back to default_role_arn when not provided."""
        client = DynamoDBClient(
            session_provider=session_provider,
            default_role_arn="arn:aws:iam::123456789012:role/DefaultRole",
        )

        def mock_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            assert role_arn == "arn:aws:iam::123456789012:role/DefaultRole"
            assert session_config == {"region_name": "us-east-1"}
            return make_fake_client(
                api_responses={"get_item": {"Item": {"payload_id": {"S": "123"}}}}
            )

        monkeypatch.setattr(aws_client, "get_boto3_client", mock_boto3_client)

        result = client.get_item("payload_by_id", {"payload_id": {"S": "123"}})
        assert result.is_success
        assert result.data == {"Item": {"payload_id": {"S": "123"}}}

    def test_get_item_explicit_role_overrides_default(
        self, monkeypatch, make_fake_client, session_provider
    ):
        client = DynamoDBClient(
            session_provider=session_provider,
            default_role_arn="arn:aws:iam::123456789012:role/DefaultRole",
        )

        def mock_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            assert role_arn == "arn:aws:iam::999999999999:role/OverrideRole"
            return make_fake_client(api_responses={"get_item": {}})

        monkeypatch.setattr(aws_client, "get_boto3_client", mock_boto3_client)

        result = client.get_item(
            "payload_by_id",
            {"payload_id": {"S": "123"}},
            role_arn="arn:aws:iam::999999999999:role/OverrideRole",
        )
        assert result.is_success

    def test_put_item_passes_table_and_item(
        self, monkeypatch, make_fake_client, session_provider
    ):
        fake = make_fake_client(api_responses={"put_item": {}})
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: fake)
        client = DynamoDBClient(session_provider=session_provider)

        result = client.put_item("my_table", {"pk": {"S": "a"}, "sk": {"S": "b"}})

        assert result.is_success
        assert fake.calls == [
            {
                "method": "put_item",
                "TableName": "my_table",
                "Item": {"pk": {"S": "a"}, "sk": {"S": "b"}},
            }
        ]

    def test_query_returns_single_raw_page(
        self, monkeypatch, make_fake_client, session_provider
    ):
        page = {
            "Items": [{"pk": {"S": "a"}}],
            "Count": 1,
            "LastEvaluatedKey": {"pk": {"S": "a"}, "sk": {"S": "1"}},
        }
        fake = make_fake_client(api_responses={"query": page})
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: fake)
        client = DynamoDBClient(session_provider=session_provider)

        result = client.query(
            "my_table",
            KeyConditionExpression="#pk = :pk",
            ExpressionAttributeNames={"#pk": "pk"},
            ExpressionAttributeValues={":pk": {"S": "a"}},
            Limit=1,
        )

        assert result.data == page
        assert fake.calls[0]["Limit"] == 1
        assert fake.calls[0]["KeyConditionExpression"] == "#pk = :pk"

    def test_retry_settings_are_forwarded(self, monkeypatch, session_provider):
        captured = {}

        def fake_execute(service_name, method, **kwargs):
            captured.update(kwargs)
            return MagicMock()

        monkeypatch.setattr(
            "infrastructure.clients.aws.dynamodb.execute_aws_api_call", fake_execute
        )
        client = DynamoDBClient(
            session_provider=session_provider,
            max_retries=7,
            backoff_factor=0.25,
            throttling_errors=["ThrottlingException"],
        )

        client.get_item("my_table", {"pk": {"S": "a"}})

        assert captured["max_retries"] == 7
        assert captured["backoff_factor"] == 0.25
        assert captured["throttling_errors"] == ("ThrottlingException",)
        assert captured["TableName"] == "my_table"

    def test_describe_missing_table_is_not_found(
        self, monkeypatch, make_fake_client, session_provider
    ):
        error = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}},
            "DescribeTable",
        )
        fake = make_fake_client(api_responses={"describe_table": error})
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: fake)
        client = DynamoDBClient(session_provider=session_provider)

        result = client.describe_table("my_table")

        assert result.status == OperationStatus.NOT_FOUND
        assert len(fake.calls) == 1

    def test_create_table_sends_the_definition(
        self, monkeypatch, make_fake_client, session_provider
    ):
        fake = make_fake_client(api_responses={"create_table": {"TableDescription": {}}})
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: fake)
        client = DynamoDBClient(session_provider=session_provider)

        result = client.create_table(
            {"TableName": "t", "BillingMode": "PAY_PER_REQUEST"}
        )

        assert result.is_success
        assert fake.calls == [
            {"method": "create_table", "TableName": "t", "BillingMode": "PAY_PER_REQUEST"}
        ]

    def test_update_time_to_live(self, monkeypatch, make_fake_client, session_provider):
        fake = make_fake_client(api_responses={"update_time_to_live": {}})
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: fake)
        client = DynamoDBClient(session_provider=session_provider)

        client.update_time_to_live("t", "expires_at")

        assert fake.calls[0]["TimeToLiveSpecification"] == {
            "Enabled": True,
            "AttributeName": "expires_at",
        }

    def test_wait_until_table_exists(self, monkeypatch, session_provider):
        boto_client = MagicMock()
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: boto_client)
        client = DynamoDBClient(session_provider=session_provider)

        result = client.wait_until_table_exists("t", timeout_seconds=10)

        assert result.is_success
        boto_client.get_waiter.assert_called_once_with("table_exists")
        boto_client.get_waiter.return_value.wait.assert_called_once_with(
            TableName="t", WaiterConfig={"Delay": 2, "MaxAttempts": 5}
        )

    def test_wait_until_table_exists_timeout(self, monkeypatch, session_provider):
        boto_client = MagicMock()
        boto_client.get_waiter.return_value.wait.side_effect = WaiterError(
            name="TableExists", reason="Max attempts exceeded", last_response={}
        )
        monkeypatch.setattr(aws_client, "get_boto3_client", lambda *a, **k: boto_client)
        client = DynamoDBClient(session_provider=session_provider)

        result = client.wait_until_table_exists("t")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "TABLE_NOT_ACTIVE"
