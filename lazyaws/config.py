import os
from dataclasses import dataclass
from typing import Any

import boto3

DEFAULT_REGION = "us-east-1"


@dataclass
class ClientConfig:
    """
    Settings shared by the service clients.

    Attributes:
        region: AWS region used to build boto3 clients
        endpoint_url: Custom endpoint (LocalStack, VPC endpoints)
        max_workers: Size of the executor dispatching requests
        strict_decode: Reject response bodies that are not mappings
    """

    region: str = DEFAULT_REGION
    endpoint_url: str | None = None
    max_workers: int = 4
    strict_decode: bool = True

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Builds a config from the standard AWS environment variables.

        Reads AWS_REGION (falling back to AWS_DEFAULT_REGION) and AWS_ENDPOINT_URL.
        Keyword arguments take precedence over the environment.
        """
        values: dict[str, Any] = {
            "region": os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DEFAULT_REGION,
            "endpoint_url": os.getenv("AWS_ENDPOINT_URL") or None,
        }
        values.update(overrides)
        return cls(**values)

    def boto_client(self, service_name: str) -> Any:
        """Creates a low-level boto3 client for the given service."""
        kwargs: dict[str, Any] = {"region_name": self.region}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        return boto3.client(service_name, **kwargs)
