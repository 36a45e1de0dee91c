"""Payload side-table access."""

from typing import TYPE_CHECKING, Optional

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.logging import get_module_logger
from modules.messages.errors import PersistenceError
from modules.messages.mapper import (
    compute_expires_at,
    item_to_payload,
    payload_key,
    payload_to_item,
)
from modules.messages.models import Payload
from modules.messages.tables import PAYLOAD_BY_ID_TABLE, table_name

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


class PayloadService:
    """Stores and fetches message bodies by payload id.

    Usage:
        # Via dependency injection
        from infrastructure.services import PayloadServiceDep

        @router.get("/payloads/{payload_id}")
        def get_payload(payload_id: str, payloads: PayloadServiceDep):
            return payloads.get_message_payload(payload_id)
    """

    def __init__(self, dynamodb: DynamoDBClient, settings: "Settings"):
        self._dynamodb = dynamodb
        self._table = table_name(PAYLOAD_BY_ID_TABLE, settings.PREFIX)
        self._retention_days = settings.messages.RETENTION_DAYS

    @property
    def table(self) -> str:
        return self._table

    def save_payload(self, payload: Payload) -> None:
        """Write ``payload`` to the payload table.

        Raises:
            PersistenceError: the write failed
        """
        item = payload_to_item(payload, compute_expires_at(self._retention_days))
        result = self._dynamodb.put_item(self._table, Item=item)
        if not result.is_success:
            logger.error(
                "payload_write_failed",
                payload_id=payload.payload_id,
                error=result.message,
                error_code=result.error_code,
            )
            raise PersistenceError(
                f"could not write payload {payload.payload_id}", result=result
            )

        logger.debug("payload_written", payload_id=payload.payload_id)

    def get_message_payload(self, payload_id: str) -> Optional[Payload]:
        """Fetch a payload by id; None when no such payload exists.

        Raises:
            PersistenceError: the read failed
        """
        result = self._dynamodb.get_item(self._table, Key=payload_key(payload_id))
        if not result.is_success:
            logger.error(
                "payload_read_failed",
                payload_id=payload_id,
                error=result.message,
                error_code=result.error_code,
            )
            raise PersistenceError(f"could not read payload {payload_id}", result=result)

        item = (result.data or {}).get("Item")
        if not item:
            logger.debug("payload_not_found", payload_id=payload_id)
            return None
        return item_to_payload(item)
