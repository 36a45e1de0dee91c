"""Operation status enumeration."""

from enum import Enum


class OperationStatus(Enum):
    """Outcome of a store operation.

    Attributes:
        SUCCESS: The call completed
        TRANSIENT_ERROR: Throttled or temporarily unavailable; safe to retry
        PERMANENT_ERROR: Rejected request (validation, missing table, bad key)
        UNAUTHORIZED: Credentials or role assumption refused
        NOT_FOUND: Table or item does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
