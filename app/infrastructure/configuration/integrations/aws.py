"""AWS integration settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class AwsSettings(IntegrationSettings):
    """AWS configuration settings.

    Environment Variables:
        AWS_REGION: AWS region for DynamoDB (default: ca-central-1)
        AWS_ENDPOINT_URL: Custom DynamoDB endpoint (DynamoDB Local, LocalStack,
            Scylla Alternator). Unset means the regional AWS endpoint.
        AWS_DYNAMODB_ROLE_ARN: Optional role to assume for table access
        AWS_MAX_RETRIES: Retries for throttled calls (default: 3)
        AWS_BACKOFF_FACTOR: Base delay in seconds for exponential backoff

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        endpoint = settings.aws.ENDPOINT_URL
        ```
    """

    AWS_REGION: str = Field(default="ca-central-1", alias="AWS_REGION")
    ENDPOINT_URL: Optional[str] = Field(default=None, alias="AWS_ENDPOINT_URL")
    DYNAMODB_ROLE_ARN: str = Field(default="", alias="AWS_DYNAMODB_ROLE_ARN")
    MAX_RETRIES: int = Field(default=3, alias="AWS_MAX_RETRIES")
    BACKOFF_FACTOR: float = Field(default=0.5, alias="AWS_BACKOFF_FACTOR")

    THROTTLING_ERRS: list[str] = [
        "ThrottlingException",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
    ]

    @property
    def SERVICE_ROLE_MAP(self) -> dict[str, str]:
        """Mapping of service names to the role ARN assumed for them.

        Returns:
            Dict mapping service identifiers to role ARNs (empty values dropped)
        """
        return {
            name: arn
            for name, arn in {"dynamodb": self.DYNAMODB_ROLE_ARN}.items()
            if arn
        }
