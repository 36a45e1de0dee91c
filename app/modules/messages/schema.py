"""Table bootstrap for the north messages store."""

from typing import TYPE_CHECKING, Any, Dict, List

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.logging import get_module_logger
from infrastructure.operations.status import OperationStatus
from modules.messages.errors import PersistenceError
from modules.messages.tables import (
    EXPIRES_AT_ATTRIBUTE,
    MESSAGE_TABLES,
    PARTITION_KEY,
    PAYLOAD_BY_ID_TABLE,
    PAYLOAD_ID_KEY,
    SORT_KEY,
    table_name,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def table_definitions(settings: "Settings") -> List[Dict[str, Any]]:
    """CreateTable requests for the three message tables and the payload table."""
    definitions: List[Dict[str, Any]] = [
        {
            "TableName": table_name(base_name, settings.PREFIX),
            "KeySchema": [
                {"AttributeName": PARTITION_KEY, "KeyType": "HASH"},
                {"AttributeName": SORT_KEY, "KeyType": "RANGE"},
            ],
            "AttributeDefinitions": [
                {"AttributeName": PARTITION_KEY, "AttributeType": "S"},
                {"AttributeName": SORT_KEY, "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        }
        for base_name in MESSAGE_TABLES
    ]
    definitions.append(
        {
            "TableName": table_name(PAYLOAD_BY_ID_TABLE, settings.PREFIX),
            "KeySchema": [{"AttributeName": PAYLOAD_ID_KEY, "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": PAYLOAD_ID_KEY, "AttributeType": "S"}
            ],
            "BillingMode": "PAY_PER_REQUEST",
        }
    )
    return definitions


def ensure_tables(dynamodb: DynamoDBClient, settings: "Settings") -> List[str]:
    """Create any missing table and wait for it to become active.

    When ``MESSAGES_RETENTION_DAYS`` is set, TTL is enabled on ``expires_at``
    for every table.

    Returns:
        Names of the tables created by this call.

    Raises:
        PersistenceError: a table could not be described, created or activated
    """
    created = []
    for definition in table_definitions(settings):
        name = definition["TableName"]
        described = dynamodb.describe_table(name)

        if described.status == OperationStatus.NOT_FOUND:
            result = dynamodb.create_table(definition)
            if not result.is_success:
                raise PersistenceError(f"could not create table {name}", result=result)
            waited = dynamodb.wait_until_table_exists(
                name, timeout_seconds=settings.messages.TABLE_WAIT_SECONDS
            )
            if not waited.is_success:
                raise PersistenceError(f"table {name} did not become active", result=waited)
            created.append(name)
            logger.info("table_created", table=name)
        elif not described.is_success:
            raise PersistenceError(f"could not describe table {name}", result=described)

        if settings.messages.RETENTION_DAYS:
            ttl = dynamodb.update_time_to_live(name, EXPIRES_AT_ATTRIBUTE)
            if ttl.is_success:
                logger.info("table_ttl_enabled", table=name, attribute=EXPIRES_AT_ATTRIBUTE)
            elif ttl.error_code == "ValidationException":
                # TTL already enabled
                logger.debug("table_ttl_unchanged", table=name, reason=ttl.message)
            else:
                raise PersistenceError(f"could not enable TTL on {name}", result=ttl)

    return created
