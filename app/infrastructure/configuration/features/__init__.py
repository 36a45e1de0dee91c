"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.messages import MessagesSettings

__all__ = [
    "MessagesSettings",
]
