"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.clients.aws import AWSClients
from infrastructure.services.providers import (
    get_settings,
    get_aws_clients,
    get_payload_service,
    get_north_messages_service,
)
from modules.messages.payloads import PayloadService
from modules.messages.service import NorthMessagesService

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# AWS clients facade dependency
# Usage: aws.dynamodb.get_item(...)
AWSClientsDep = Annotated[AWSClients, Depends(get_aws_clients)]

# Message store services
PayloadServiceDep = Annotated[PayloadService, Depends(get_payload_service)]
NorthMessagesServiceDep = Annotated[
    NorthMessagesService, Depends(get_north_messages_service)
]

__all__ = [
    "SettingsDep",
    "AWSClientsDep",
    "PayloadServiceDep",
    "NorthMessagesServiceDep",
]
