"""Infrastructure modules for the north messages service.

Centralized infrastructure components:
- configuration: Settings management (settings, Settings)
- logging: Structured logging (get_module_logger, bind_request_context)
- clients: AWS clients (AWSClients, DynamoDBClient)
- operations: Operation results (OperationResult, OperationStatus)
- services: Dependency injection services (SettingsDep, get_settings)
"""

from infrastructure.configuration import settings
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "settings",
    "OperationResult",
    "OperationStatus",
]
