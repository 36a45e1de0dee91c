"""Audit message models.

``AuditMessage`` is what callers save. Each save produces one ``Payload`` and
three read-model rows sharing its ``payload_id``; the rows carry every field
except the payload body so range scans stay small.
"""

from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC; naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MessageFields(BaseModel):
    """Fields shared by the source message and its read-model rows."""

    occur_time: datetime = Field(..., description="When the message occurred")
    user: str = Field(..., min_length=1, description="User the message belongs to")
    subject: str = Field(..., min_length=1, description="Entity the message is about")
    subject_type: Optional[str] = None
    name: Optional[str] = None
    msg_type: Optional[str] = None
    process: Optional[str] = None
    component: Optional[str] = None
    transaction_id: Optional[str] = None
    sequence_id: Optional[str] = None
    secured: bool = False
    msg_context: Optional[str] = None

    @field_validator("occur_time")
    @classmethod
    def normalize_occur_time(cls, v: datetime) -> datetime:
        """Store every occurrence time in UTC."""
        return as_utc(v)


class AuditMessage(MessageFields):
    """Audit message as received from the platform."""

    msg_payload: Optional[str] = Field(
        default=None, description="Message body, stored in the payload table"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "occur_time": "2016-01-01T00:00:00+00:00",
                "user": "alice",
                "subject": "device-0001",
                "subject_type": "DEVICE",
                "name": "OPERATION",
                "msg_type": "REQUEST",
                "process": "SOUTH",
                "component": "ADAPTER",
                "transaction_id": "tx-1",
                "sequence_id": "1",
                "secured": False,
                "msg_payload": '{"operation": "REBOOT"}',
            }
        },
    )


class NorthMessage(MessageFields):
    """Read-model row: message fields plus the id of its stored payload."""

    payload_id: str

    model_config = ConfigDict(frozen=True)


class NorthMessageByInterval(NorthMessage):
    """Row of the table partitioned by UTC day."""


class NorthMessageByUserInterval(NorthMessage):
    """Row of the table partitioned by user."""


class NorthMessageByUserSubjectInterval(NorthMessage):
    """Row of the table partitioned by user and subject."""


class Payload(BaseModel):
    """Message body stored once per saved message."""

    payload_id: str
    msg_payload: Optional[str] = None
    occur_time: datetime

    @field_validator("occur_time")
    @classmethod
    def normalize_occur_time(cls, v: datetime) -> datetime:
        return as_utc(v)


T = TypeVar("T", bound=NorthMessage)


class Page(BaseModel, Generic[T]):
    """One page of query results.

    Attributes:
        content: rows of this page, in sort-key order per partition
        page_context: opaque token for the next page, None when exhausted
    """

    content: List[T] = Field(default_factory=list)
    page_context: Optional[str] = None
