"""Errors for the north messages module."""

from typing import Optional

from infrastructure.operations.result import OperationResult


class MessageStoreError(Exception):
    """Base class for message store errors."""


class InvalidQueryError(MessageStoreError, ValueError):
    """Raised when query arguments are rejected before reaching the store."""


class TimeRangeTooBigError(InvalidQueryError):
    """Raised when a query spans more than the configured maximum window."""

    MESSAGE = "specified time range is too big, be more specific"

    def __init__(self, message: str = MESSAGE):
        super().__init__(message)


class PagingStateError(MessageStoreError):
    """Raised when a paging state token is malformed or belongs to another query."""


class PersistenceError(MessageStoreError):
    """Raised when a DynamoDB call fails.

    Attributes:
        message: human-friendly message
        result: the failing OperationResult returned by the DynamoDB client
    """

    def __init__(self, message: str, result: Optional[OperationResult] = None):
        super().__init__(message)
        self.result = result
