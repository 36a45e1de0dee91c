"""DynamoDB client for AWS operations.

Provides access to the DynamoDB operations the message store needs (item
reads/writes, single-page queries, table bootstrap) with consistent error
handling and OperationResult return types.
"""

from typing import Any, Dict, Optional, Sequence

import structlog
from botocore.exceptions import BotoCoreError, WaiterError  # type: ignore

from infrastructure.clients.aws.executor import (
    DEFAULT_THROTTLING_ERRS,
    execute_aws_api_call,
)
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class DynamoDBClient:
    """Client for DynamoDB operations.

    All methods return OperationResult; ``data`` holds the raw boto3 response.

    Args:
        session_provider: SessionProvider instance for credential/config management
        default_role_arn: Role assumed when a call does not pass one
        max_retries: Retries for throttled calls
        backoff_factor: Base delay for exponential backoff between retries
        throttling_errors: AWS error codes treated as retryable
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        default_role_arn: Optional[str] = None,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        throttling_errors: Sequence[str] = DEFAULT_THROTTLING_ERRS,
    ) -> None:
        self._session_provider = session_provider
        self._default_role_arn = default_role_arn
        self._max_retries = max_retries
        self._backoff_factor = backoff_factor
        self._throttling_errors = tuple(throttling_errors)
        self._service_name = "dynamodb"
        self._logger = logger.bind(component="dynamodb_client")

    def _execute(
        self, method: str, role_arn: Optional[str] = None, **kwargs
    ) -> OperationResult:
        effective_role = role_arn or self._default_role_arn
        client_kwargs = self._session_provider.build_client_kwargs(
            service_name=self._service_name, role_arn=effective_role
        )
        kwargs.setdefault("max_retries", self._max_retries)
        return execute_aws_api_call(
            self._service_name,
            method,
            backoff_factor=self._backoff_factor,
            throttling_errors=self._throttling_errors,
            **client_kwargs,
            **kwargs,
        )

    def get_item(
        self,
        table_name: str,
        Key: Dict[str, Any],
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Get an item from DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Key: Primary key of the item (e.g., {"payload_id": {"S": "123"}})
            role_arn: Optional cross-account role ARN
            **kwargs: Additional DynamoDB get_item parameters

        Returns:
            OperationResult with the response (``Item`` absent when not found)
        """
        return self._execute(
            "get_item", role_arn=role_arn, TableName=table_name, Key=Key, **kwargs
        )

    def put_item(
        self,
        table_name: str,
        Item: Dict[str, Any],
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Put an item into DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Item: Item to store (DynamoDB format with type descriptors)
            role_arn: Optional cross-account role ARN
            **kwargs: Additional DynamoDB put_item parameters

        Returns:
            OperationResult with status
        """
        return self._execute(
            "put_item", role_arn=role_arn, TableName=table_name, Item=Item, **kwargs
        )

    def query(
        self,
        table_name: str,
        KeyConditionExpression: Any,
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Run a single Query page.

        Pagination is left to the caller: pass ``Limit`` and
        ``ExclusiveStartKey`` and read ``LastEvaluatedKey`` from the response.

        Args:
            table_name: Name of the DynamoDB table
            KeyConditionExpression: Key condition expression
            role_arn: Optional cross-account role ARN
            **kwargs: Additional DynamoDB query parameters

        Returns:
            OperationResult with the raw query response or error
        """
        return self._execute(
            "query",
            role_arn=role_arn,
            TableName=table_name,
            KeyConditionExpression=KeyConditionExpression,
            **kwargs,
        )

    def describe_table(
        self, table_name: str, role_arn: Optional[str] = None
    ) -> OperationResult:
        """Describe a table; NOT_FOUND status when it does not exist."""
        return self._execute(
            "describe_table", role_arn=role_arn, TableName=table_name, max_retries=0
        )

    def create_table(
        self,
        table_definition: Dict[str, Any],
        role_arn: Optional[str] = None,
    ) -> OperationResult:
        """Create a table from a full CreateTable request.

        An already existing table is reported as success.
        """
        return self._execute(
            "create_table",
            role_arn=role_arn,
            treat_conflict_as_success=True,
            **table_definition,
        )

    def update_time_to_live(
        self,
        table_name: str,
        attribute_name: str,
        role_arn: Optional[str] = None,
    ) -> OperationResult:
        """Enable TTL expiry on ``attribute_name``."""
        return self._execute(
            "update_time_to_live",
            role_arn=role_arn,
            TableName=table_name,
            TimeToLiveSpecification={"Enabled": True, "AttributeName": attribute_name},
        )

    def wait_until_table_exists(
        self,
        table_name: str,
        timeout_seconds: int = 60,
        role_arn: Optional[str] = None,
    ) -> OperationResult:
        """Block until ``table_name`` is ACTIVE or the timeout elapses."""
        delay = 2
        client = self._session_provider.get_boto3_client(
            self._service_name, role_arn=role_arn or self._default_role_arn
        )
        try:
            client.get_waiter("table_exists").wait(
                TableName=table_name,
                WaiterConfig={
                    "Delay": delay,
                    "MaxAttempts": max(1, timeout_seconds // delay),
                },
            )
        except (WaiterError, BotoCoreError) as e:
            self._logger.error(
                "dynamodb_table_wait_failed", table_name=table_name, error=str(e)
            )
            return OperationResult.transient_error(
                message=str(e), error_code="TABLE_NOT_ACTIVE"
            )
        return OperationResult.success(message=f"{table_name} is active")
