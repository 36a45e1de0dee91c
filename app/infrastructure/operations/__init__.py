"""Operation result types and status enums.

Store calls never raise for expected AWS failures; they return an
``OperationResult`` that callers inspect and translate into domain errors.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
