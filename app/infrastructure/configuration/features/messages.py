"""North messages feature settings."""

from datetime import timedelta
from typing import Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class MessagesSettings(FeatureSettings):
    """Audit message storage and query configuration.

    Environment Variables:
        MESSAGES_MAX_TIME_RANGE_DAYS: Widest time range a query may span (default: 31)
        MESSAGES_DEFAULT_FETCH_SIZE: Page size when the caller gives none (default: 1000)
        MESSAGES_RETENTION_DAYS: Expire items after this many days via DynamoDB TTL.
            Unset keeps items forever.
        MESSAGES_CREATE_TABLES: Create missing tables on startup (default: false)
        MESSAGES_TABLE_WAIT_SECONDS: Max wait for new tables to become active

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.messages.CREATE_TABLES:
            ...
        ```
    """

    MAX_TIME_RANGE_DAYS: int = Field(default=31, alias="MESSAGES_MAX_TIME_RANGE_DAYS")
    DEFAULT_FETCH_SIZE: int = Field(default=1000, alias="MESSAGES_DEFAULT_FETCH_SIZE")
    RETENTION_DAYS: Optional[int] = Field(default=None, alias="MESSAGES_RETENTION_DAYS")
    CREATE_TABLES: bool = Field(default=False, alias="MESSAGES_CREATE_TABLES")
    TABLE_WAIT_SECONDS: int = Field(default=60, alias="MESSAGES_TABLE_WAIT_SECONDS")

    @field_validator("MAX_TIME_RANGE_DAYS", "DEFAULT_FETCH_SIZE")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative windows and page sizes."""
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @property
    def max_time_range(self) -> timedelta:
        """Maximum query window as a timedelta."""
        return timedelta(days=self.MAX_TIME_RANGE_DAYS)
