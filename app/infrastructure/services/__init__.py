"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    AWSClientsDep,
    PayloadServiceDep,
    NorthMessagesServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_aws_clients,
    get_payload_service,
    get_north_messages_service,
)

__all__ = [
    "SettingsDep",
    "AWSClientsDep",
    "PayloadServiceDep",
    "NorthMessagesServiceDep",
    "get_settings",
    "get_aws_clients",
    "get_payload_service",
    "get_north_messages_service",
]
