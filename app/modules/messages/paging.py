"""Paging state tokens.

A token records where a paged range query stopped: the partition being
read and DynamoDB's ``LastEvaluatedKey`` inside it. It also carries a
fingerprint of the query so a token cannot be replayed against a different
table, partition set or time range.

Tokens are URL-safe base64 of compact JSON and are opaque to callers.
"""

import base64
import binascii
import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from modules.messages.errors import PagingStateError
from modules.messages.tables import PARTITION_KEY, SORT_KEY


@dataclass(frozen=True)
class PagingState:
    """Position of a paged query.

    Attributes:
        fingerprint: query_fingerprint() of the query that produced the state
        partition_index: index of the partition to resume in
        last_key: LastEvaluatedKey to resume after, None to start the partition
    """

    fingerprint: str
    partition_index: int
    last_key: Optional[Dict[str, Any]] = None


def query_fingerprint(
    table: str, partitions: Sequence[str], from_key: str, to_key: str
) -> str:
    digest = hashlib.sha256(
        "\n".join([table, from_key, to_key, *partitions]).encode("utf-8")
    )
    return digest.hexdigest()[:16]


def encode_paging_state(state: PagingState) -> str:
    raw = json.dumps(
        {"f": state.fingerprint, "i": state.partition_index, "k": state.last_key},
        separators=(",", ":"),
        sort_keys=True,
    )
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode_paging_state(token: str) -> PagingState:
    """Parse a token produced by encode_paging_state().

    Raises:
        PagingStateError: the token is not a paging state
    """
    try:
        padded = token + "=" * (-len(token) % 4)
        data = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except (ValueError, binascii.Error) as e:
        raise PagingStateError(f"invalid paging state: {token!r}") from e

    if not isinstance(data, dict):
        raise PagingStateError(f"invalid paging state: {token!r}")

    fingerprint = data.get("f")
    partition_index = data.get("i")
    last_key = data.get("k")
    if (
        not isinstance(fingerprint, str)
        or not isinstance(partition_index, int)
        or isinstance(partition_index, bool)
        or partition_index < 0
        or not (last_key is None or _is_message_key(last_key))
    ):
        raise PagingStateError(f"invalid paging state: {token!r}")

    return PagingState(fingerprint, partition_index, last_key)


def _is_message_key(value: Any) -> bool:
    """True for ``{"pk": {"S": str}, "sk": {"S": str}}``."""
    if not isinstance(value, dict) or set(value) != {PARTITION_KEY, SORT_KEY}:
        return False
    return all(
        isinstance(attr, dict) and set(attr) == {"S"} and isinstance(attr["S"], str)
        for attr in value.values()
    )
