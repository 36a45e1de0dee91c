"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure
services and the north messages services built on them.
"""

from functools import lru_cache

from infrastructure.clients.aws import AWSClients
from infrastructure.configuration import Settings
from modules.messages.payloads import PayloadService
from modules.messages.service import NorthMessagesService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_aws_clients() -> AWSClients:
    """Provider for the AWS clients facade.

    Credentials (temporary creds from assume_role or default providers) are
    created per API call, so caching this facade is safe.

    Returns:
        AWSClients: Configured facade instance for all AWS service calls
    """
    settings = get_settings()
    return AWSClients(aws_settings=settings.aws)


@lru_cache
def get_payload_service() -> PayloadService:
    """Provider for the payload side-table service."""
    return PayloadService(dynamodb=get_aws_clients().dynamodb, settings=get_settings())


@lru_cache
def get_north_messages_service() -> NorthMessagesService:
    """Provider for the north messages service.

    Usage:
        @router.get("/messages")
        def list_messages(service: NorthMessagesServiceDep):
            return service.get_messages_by_interval(start, end)
    """
    return NorthMessagesService(
        dynamodb=get_aws_clients().dynamodb,
        payload_service=get_payload_service(),
        settings=get_settings(),
    )
