"""Structlog processors used by the logging setup.

Usage:
    from infrastructure.logging.formatters import truncate_large_values
"""

from typing import Any


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Message payloads can be arbitrarily large; this keeps a stray
    ``msg_payload=...`` from flooding the log stream.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor


def add_environment_info(environment: str):
    """Create a processor that adds the environment name to log entries.

    Args:
        environment: Environment name (the PREFIX, or "production").

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["environment"] = environment
        return event_dict

    return processor
