"""Table and attribute names for the north messages store.

The three message tables share one key layout:

- ``pk``: partition (UTC day bucket, user, or user + subject)
- ``sk``: ``<occur_time>#<payload_id>`` so a partition sorts by time

The payload table is keyed by ``payload_id`` alone.
"""

NORTH_MESSAGES_BY_INTERVAL_TABLE = "north_messages_by_interval"
NORTH_MESSAGES_BY_USER_INTERVAL_TABLE = "north_messages_by_user_interval"
NORTH_MESSAGES_BY_USER_SUBJECT_INTERVAL_TABLE = "north_messages_by_user_subject_interval"
PAYLOAD_BY_ID_TABLE = "payload_by_id"

PARTITION_KEY = "pk"
SORT_KEY = "sk"
PAYLOAD_ID_KEY = "payload_id"
EXPIRES_AT_ATTRIBUTE = "expires_at"

MESSAGE_TABLES = (
    NORTH_MESSAGES_BY_INTERVAL_TABLE,
    NORTH_MESSAGES_BY_USER_INTERVAL_TABLE,
    NORTH_MESSAGES_BY_USER_SUBJECT_INTERVAL_TABLE,
)


def table_name(base_name: str, prefix: str = "") -> str:
    """Physical table name for ``base_name`` in the environment ``prefix``."""
    return f"{prefix}{base_name}"
