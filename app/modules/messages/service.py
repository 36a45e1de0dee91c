# modules/messages/service.py
"""North messages service: fan-out writes and paged range reads."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, Type

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.logging import get_module_logger
from modules.messages.errors import (
    InvalidQueryError,
    PagingStateError,
    PersistenceError,
    TimeRangeTooBigError,
)
from modules.messages.mapper import (
    M,
    compute_expires_at,
    day_bucket,
    day_buckets,
    item_to_message,
    message_to_item,
    range_keys,
    user_partition,
    user_subject_partition,
)
from modules.messages.models import (
    AuditMessage,
    NorthMessageByInterval,
    NorthMessageByUserInterval,
    NorthMessageByUserSubjectInterval,
    Page,
    Payload,
    as_utc,
)
from modules.messages.paging import (
    PagingState,
    decode_paging_state,
    encode_paging_state,
    query_fingerprint,
)
from modules.messages.payloads import PayloadService
from modules.messages.tables import (
    NORTH_MESSAGES_BY_INTERVAL_TABLE,
    NORTH_MESSAGES_BY_USER_INTERVAL_TABLE,
    NORTH_MESSAGES_BY_USER_SUBJECT_INTERVAL_TABLE,
    PARTITION_KEY,
    SORT_KEY,
    table_name,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()

KEY_CONDITION = "#pk = :pk AND #sk BETWEEN :from AND :to"

# Rejections of an ExclusiveStartKey, by DynamoDB or by botocore before sending
RESUME_KEY_ERRORS = ("ValidationException", "ParamValidationError")


class NorthMessagesService:
    """Saves audit messages and queries them by interval, user and subject.

    Every read validates the requested window against the configured maximum
    before touching the store, then fills a page of at most ``fetch_size``
    rows, walking the query's partitions in order. The returned
    ``page_context`` resumes where the page stopped.

    Usage:
        service = NorthMessagesService(aws.dynamodb, payload_service, settings)
        payload_id = service.save(audit_message)

        page = service.get_messages_by_user_interval("alice", start, end)
        while page.page_context:
            page = service.get_messages_by_user_interval(
                "alice", start, end, page.page_context
            )
    """

    def __init__(
        self,
        dynamodb: DynamoDBClient,
        payload_service: PayloadService,
        settings: "Settings",
    ):
        self._dynamodb = dynamodb
        self._payloads = payload_service
        self._by_interval_table = table_name(
            NORTH_MESSAGES_BY_INTERVAL_TABLE, settings.PREFIX
        )
        self._by_user_interval_table = table_name(
            NORTH_MESSAGES_BY_USER_INTERVAL_TABLE, settings.PREFIX
        )
        self._by_user_subject_interval_table = table_name(
            NORTH_MESSAGES_BY_USER_SUBJECT_INTERVAL_TABLE, settings.PREFIX
        )
        self._max_time_range = settings.messages.max_time_range
        self._default_fetch_size = settings.messages.DEFAULT_FETCH_SIZE
        self._retention_days = settings.messages.RETENTION_DAYS

    def save(self, audit_message: AuditMessage) -> str:
        """Persist ``audit_message`` into the payload table and all three lookup tables.

        The payload goes first, then the rows. A failing write stops the
        fan-out and raises; rows already written stay in place.

        Args:
            audit_message: The message to store.

        Returns:
            The payload id shared by the payload and the three rows.

        Raises:
            PersistenceError: a write failed
        """
        payload_id = str(uuid.uuid4())
        self._payloads.save_payload(
            Payload(
                payload_id=payload_id,
                msg_payload=audit_message.msg_payload,
                occur_time=audit_message.occur_time,
            )
        )

        fields = audit_message.model_dump(exclude={"msg_payload"})
        expires_at = compute_expires_at(self._retention_days)
        rows = (
            (
                self._by_interval_table,
                NorthMessageByInterval(payload_id=payload_id, **fields),
                day_bucket(audit_message.occur_time),
            ),
            (
                self._by_user_interval_table,
                NorthMessageByUserInterval(payload_id=payload_id, **fields),
                user_partition(audit_message.user),
            ),
            (
                self._by_user_subject_interval_table,
                NorthMessageByUserSubjectInterval(payload_id=payload_id, **fields),
                user_subject_partition(audit_message.user, audit_message.subject),
            ),
        )
        for table, row, partition in rows:
            result = self._dynamodb.put_item(
                table, Item=message_to_item(row, partition, expires_at)
            )
            if not result.is_success:
                logger.error(
                    "north_message_write_failed",
                    table=table,
                    payload_id=payload_id,
                    error=result.message,
                    error_code=result.error_code,
                )
                raise PersistenceError(
                    f"could not write message {payload_id} to {table}", result=result
                )

        logger.info(
            "north_message_saved",
            payload_id=payload_id,
            user=audit_message.user,
            subject=audit_message.subject,
            occur_time=audit_message.occur_time.isoformat(),
        )
        return payload_id

    def get_messages_by_interval(
        self,
        from_time: datetime,
        to_time: datetime,
        page_context: Optional[str] = None,
        fetch_size: Optional[int] = None,
    ) -> Page[NorthMessageByInterval]:
        """Messages that occurred in ``[from_time, to_time]``.

        Raises:
            TimeRangeTooBigError: the window exceeds the configured maximum
            PagingStateError: ``page_context`` is invalid for this query
            PersistenceError: the store rejected the query
        """
        from_time, to_time = self._validate_time_range(from_time, to_time)
        return self._query_page(
            self._by_interval_table,
            NorthMessageByInterval,
            day_buckets(from_time, to_time),
            from_time,
            to_time,
            page_context,
            fetch_size,
        )

    def get_messages_by_user_interval(
        self,
        user: str,
        from_time: datetime,
        to_time: datetime,
        page_context: Optional[str] = None,
        fetch_size: Optional[int] = None,
    ) -> Page[NorthMessageByUserInterval]:
        """Messages of ``user`` that occurred in ``[from_time, to_time]``."""
        from_time, to_time = self._validate_time_range(from_time, to_time)
        _require("user", user)
        return self._query_page(
            self._by_user_interval_table,
            NorthMessageByUserInterval,
            [user_partition(user)],
            from_time,
            to_time,
            page_context,
            fetch_size,
        )

    def get_messages_by_user_subject_interval(
        self,
        user: str,
        subject: str,
        from_time: datetime,
        to_time: datetime,
        page_context: Optional[str] = None,
        fetch_size: Optional[int] = None,
    ) -> Page[NorthMessageByUserSubjectInterval]:
        """Messages of ``user`` about ``subject`` that occurred in ``[from_time, to_time]``."""
        from_time, to_time = self._validate_time_range(from_time, to_time)
        _require("user", user)
        _require("subject", subject)
        return self._query_page(
            self._by_user_subject_interval_table,
            NorthMessageByUserSubjectInterval,
            [user_subject_partition(user, subject)],
            from_time,
            to_time,
            page_context,
            fetch_size,
        )

    def _validate_time_range(
        self, from_time: datetime, to_time: datetime
    ) -> Tuple[datetime, datetime]:
        from_time, to_time = as_utc(from_time), as_utc(to_time)
        if to_time - from_time > self._max_time_range:
            logger.warning(
                "time_range_too_big",
                from_time=from_time.isoformat(),
                to_time=to_time.isoformat(),
                max_days=self._max_time_range.days,
            )
            raise TimeRangeTooBigError()
        return from_time, to_time

    def _resolve_fetch_size(self, fetch_size: Optional[int]) -> int:
        if fetch_size is None:
            return self._default_fetch_size
        if fetch_size < 1:
            raise InvalidQueryError("fetch size must be a positive integer")
        return fetch_size

    def _query_page(
        self,
        table: str,
        model: Type[M],
        partitions: Sequence[str],
        from_time: datetime,
        to_time: datetime,
        page_context: Optional[str],
        fetch_size: Optional[int],
    ) -> Page[M]:
        size = self._resolve_fetch_size(fetch_size)
        from_key, to_key = range_keys(from_time, to_time)
        fingerprint = query_fingerprint(table, partitions, from_key, to_key)

        index, start_key = 0, None
        if page_context is not None:
            state = decode_paging_state(page_context)
            if state.fingerprint != fingerprint or state.partition_index >= len(
                partitions
            ):
                raise PagingStateError("paging state does not belong to this query")
            index, start_key = state.partition_index, state.last_key
        if from_time > to_time:
            return Page[model](content=[])  # type: ignore[valid-type]
        resuming = start_key is not None

        items: List[Dict[str, Any]] = []
        while index < len(partitions) and len(items) < size:
            params: Dict[str, Any] = {
                "ExpressionAttributeNames": {"#pk": PARTITION_KEY, "#sk": SORT_KEY},
                "ExpressionAttributeValues": {
                    ":pk": {"S": partitions[index]},
                    ":from": {"S": from_key},
                    ":to": {"S": to_key},
                },
                "Limit": size - len(items),
            }
            if start_key:
                params["ExclusiveStartKey"] = start_key

            result = self._dynamodb.query(
                table, KeyConditionExpression=KEY_CONDITION, **params
            )
            if not result.is_success:
                if resuming and result.error_code in RESUME_KEY_ERRORS:
                    raise PagingStateError(result.message)
                logger.error(
                    "north_messages_query_failed",
                    table=table,
                    partition=partitions[index],
                    error=result.message,
                    error_code=result.error_code,
                )
                raise PersistenceError(f"query on {table} failed", result=result)
            resuming = False

            response = result.data or {}
            items.extend(response.get("Items", []))
            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                index += 1
                start_key = None

        next_context = None
        if index < len(partitions):
            next_context = encode_paging_state(
                PagingState(fingerprint, index, start_key)
            )

        logger.debug(
            "north_messages_page_fetched",
            table=table,
            rows=len(items),
            fetch_size=size,
            has_more=next_context is not None,
        )
        return Page[model](  # type: ignore[valid-type]
            content=[item_to_message(item, model) for item in items],
            page_context=next_context,
        )


def _require(name: str, value: str) -> None:
    if not value:
        raise InvalidQueryError(f"{name} must not be empty")
