"""AWS Clients facade.

Composes the per-service clients the application uses around one shared
SessionProvider. Only DynamoDB is needed by the message store.
"""

import structlog

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.configuration.integrations.aws import AwsSettings

logger = structlog.get_logger()


class AWSClients:
    """Facade for AWS service clients.

    Usage:
        @router.get("/items/{item_id}")
        def get_item(item_id: str, aws: AWSClientsDep):
            result = aws.dynamodb.get_item("my_table", {"id": {"S": item_id}})
            if result.is_success:
                return result.data
    """

    def __init__(self, aws_settings: AwsSettings) -> None:
        """Initialize AWS clients facade with settings.

        Args:
            aws_settings: AWS configuration from settings.aws
        """
        self._session_provider = SessionProvider(
            region=aws_settings.AWS_REGION,
            service_role_map=aws_settings.SERVICE_ROLE_MAP,
            endpoint_url=getattr(aws_settings, "ENDPOINT_URL", None),
        )

        self.dynamodb: DynamoDBClient = DynamoDBClient(
            self._session_provider,
            default_role_arn=self._session_provider.get_role_arn_for_service(
                "dynamodb"
            ),
            max_retries=aws_settings.MAX_RETRIES,
            backoff_factor=aws_settings.BACKOFF_FACTOR,
            throttling_errors=aws_settings.THROTTLING_ERRS,
        )

        logger.info(
            "aws_clients_initialized",
            region=aws_settings.AWS_REGION,
            endpoint_url=getattr(aws_settings, "ENDPOINT_URL", None),
        )
