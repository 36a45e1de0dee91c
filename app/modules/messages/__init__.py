# modules/messages/__init__.py
"""North messages module.

Stores audit messages in DynamoDB, denormalized into three lookup tables
(by interval, by user + interval, by user + subject + interval) plus a
payload side-table, and serves paged range queries over them.
"""

from modules.messages.errors import (
    InvalidQueryError,
    MessageStoreError,
    PagingStateError,
    PersistenceError,
    TimeRangeTooBigError,
)
from modules.messages.models import (
    AuditMessage,
    NorthMessage,
    NorthMessageByInterval,
    NorthMessageByUserInterval,
    NorthMessageByUserSubjectInterval,
    Page,
    Payload,
)
from modules.messages.payloads import PayloadService
from modules.messages.service import NorthMessagesService

__all__ = [
    "AuditMessage",
    "NorthMessage",
    "NorthMessageByInterval",
    "NorthMessageByUserInterval",
    "NorthMessageByUserSubjectInterval",
    "Page",
    "Payload",
    "PayloadService",
    "NorthMessagesService",
    "MessageStoreError",
    "InvalidQueryError",
    "TimeRangeTooBigError",
    "PagingStateError",
    "PersistenceError",
]
