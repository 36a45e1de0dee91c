"""Infrastructure AWS clients public API.

The main facade is AWSClients, which exposes per-service clients as
attributes around a shared SessionProvider:

    from infrastructure.services.dependencies import AWSClientsDep

    @router.get("/items/{item_id}")
    def get_item(item_id: str, aws: AWSClientsDep):
        result = aws.dynamodb.get_item("my_table", {"id": {"S": item_id}})
        if result.is_success:
            return result.data
"""

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.facade import AWSClients
from infrastructure.clients.aws.session_provider import SessionProvider

__all__ = [
    "AWSClients",
    "SessionProvider",
    "DynamoDBClient",
]
