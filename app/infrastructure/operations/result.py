"""Operation result dataclass.

Every DynamoDB call made through the AWS clients returns one of these, so
the messages service can decide whether a failure is a paging problem, a
missing table or a plain persistence error.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Result of a single store operation.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human readable summary for logs
        data: Optional[Any] -- raw response payload (boto3 response dict)
        error_code: Optional[str] -- AWS error code, e.g. ``ValidationException``
        retry_after: Optional[int] -- seconds to wait when throttled
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True when the operation completed."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Build a SUCCESS result carrying ``data``."""
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Build an error result with an explicit status.

        Args:
            status: OperationStatus describing the failure
            message: Human readable error message
            error_code: Optional AWS error code
            retry_after: Optional seconds until retry (throttling)
            data: Optional payload kept for debugging

        Returns:
            OperationResult with the given status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Build a retryable error result (throttling, timeouts)."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Build a non-retryable error result (validation, bad keys, missing table)."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)
