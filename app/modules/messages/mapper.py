"""Conversion between message models and DynamoDB items.

Sort keys embed the occurrence time in a fixed-width UTC format so that
lexical order equals chronological order.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer  # type: ignore

from modules.messages.models import NorthMessage, Payload, as_utc
from modules.messages.tables import (
    EXPIRES_AT_ATTRIBUTE,
    PARTITION_KEY,
    PAYLOAD_ID_KEY,
    SORT_KEY,
)

OCCUR_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
DAY_BUCKET_FORMAT = "%Y-%m-%d"
# Sorts after any payload id, so the upper bound of a range is inclusive
RANGE_END_SUFFIX = "#~"

M = TypeVar("M", bound=NorthMessage)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def format_occur_time(value: datetime) -> str:
    return as_utc(value).strftime(OCCUR_TIME_FORMAT)


def parse_occur_time(value: str) -> datetime:
    return datetime.strptime(value, OCCUR_TIME_FORMAT).replace(tzinfo=timezone.utc)


def occur_key(occur_time: datetime, payload_id: str) -> str:
    """Sort key of a message row."""
    return f"{format_occur_time(occur_time)}#{payload_id}"


def range_keys(from_time: datetime, to_time: datetime) -> Tuple[str, str]:
    """Inclusive sort key bounds for ``[from_time, to_time]``."""
    return format_occur_time(from_time), format_occur_time(to_time) + RANGE_END_SUFFIX


def day_bucket(value: datetime) -> str:
    return as_utc(value).strftime(DAY_BUCKET_FORMAT)


def day_buckets(from_time: datetime, to_time: datetime) -> List[str]:
    """Every UTC day bucket touched by ``[from_time, to_time]``, oldest first."""
    day = as_utc(from_time).date()
    last = as_utc(to_time).date()
    buckets = []
    while day <= last:
        buckets.append(day.strftime(DAY_BUCKET_FORMAT))
        day += timedelta(days=1)
    return buckets


def user_partition(user: str) -> str:
    return user


def user_subject_partition(user: str, subject: str) -> str:
    # Length prefix keeps ("a#b", "c") and ("a", "b#c") apart
    return f"{len(user)}:{user}#{subject}"


def compute_expires_at(retention_days: Optional[int]) -> Optional[int]:
    """Epoch seconds after which DynamoDB TTL may delete the item."""
    if not retention_days:
        return None
    expiry = datetime.now(timezone.utc) + timedelta(days=retention_days)
    return int(expiry.timestamp())


def _serialize(values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _serializer.serialize(value)
        for key, value in values.items()
        if value is not None
    }


def _deserialize(item: Dict[str, Any]) -> Dict[str, Any]:
    return {key: _deserializer.deserialize(value) for key, value in item.items()}


def message_to_item(
    message: NorthMessage, partition: str, expires_at: Optional[int] = None
) -> Dict[str, Any]:
    """Build the DynamoDB item of a read-model row stored under ``partition``."""
    values = message.model_dump(exclude_none=True)
    values["occur_time"] = format_occur_time(message.occur_time)
    values[PARTITION_KEY] = partition
    values[SORT_KEY] = occur_key(message.occur_time, message.payload_id)
    values[EXPIRES_AT_ATTRIBUTE] = expires_at
    return _serialize(values)


def item_to_message(item: Dict[str, Any], model: Type[M]) -> M:
    values = _deserialize(item)
    for key in (PARTITION_KEY, SORT_KEY, EXPIRES_AT_ATTRIBUTE):
        values.pop(key, None)
    values["occur_time"] = parse_occur_time(values["occur_time"])
    return model.model_validate(values)


def payload_to_item(
    payload: Payload, expires_at: Optional[int] = None
) -> Dict[str, Any]:
    values = payload.model_dump()
    values["occur_time"] = format_occur_time(payload.occur_time)
    values[EXPIRES_AT_ATTRIBUTE] = expires_at
    return _serialize(values)


def item_to_payload(item: Dict[str, Any]) -> Payload:
    values = _deserialize(item)
    values.pop(EXPIRES_AT_ATTRIBUTE, None)
    values["occur_time"] = parse_occur_time(values["occur_time"])
    return Payload.model_validate(values)


def payload_key(payload_id: str) -> Dict[str, Any]:
    return {PAYLOAD_ID_KEY: {"S": payload_id}}
