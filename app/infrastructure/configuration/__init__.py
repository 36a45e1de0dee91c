"""Infrastructure configuration module - public API.

Centralized configuration for the north messages service using Pydantic
BaseSettings, organized by concern (integrations, features, infrastructure).

Exports:
    settings: Singleton Settings instance
    Settings: Main settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    region = settings.aws.AWS_REGION
    max_days = settings.messages.MAX_TIME_RANGE_DAYS
    ```
"""

from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "settings"]
