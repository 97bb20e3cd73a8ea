from typing import Any, ClassVar, TypeVar

from ._logging import logger
from .config import ClientConfig
from .request import Request
from .result import Result
from .transport import BotoTransport, Transport

T = TypeVar("T", bound=Result[Any])
C = TypeVar("C", bound="ServiceClient")


class ServiceClient:
    """
    Base class for the service clients.

    Every call is dispatched immediately and returns a lazy Result; the caller
    only waits when it reads the result.

    Usage:
        with DynamoDbClient.from_config() as client:
            for item in client.scan(TableName="users"):
                ...
    """

    service_name: ClassVar[str]

    def __init__(self, transport: Transport, config: ClientConfig | None = None) -> None:
        self.transport = transport
        self.config = config or ClientConfig()

    @classmethod
    def from_config(cls: type[C], config: ClientConfig | None = None) -> C:
        """Builds a client backed by a boto3 client for this service."""
        config = config or ClientConfig.from_env()
        transport = BotoTransport(
            config.boto_client(cls.service_name), max_workers=config.max_workers
        )
        return cls(transport, config)

    def close(self) -> None:
        """Releases the transport; requests that have not started are cancelled."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            logger.debug("Closing client", extra={"service": self.service_name})
            close()

    def __enter__(self: C) -> C:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _invoke(self, result_cls: type[T], operation: str, params: dict[str, Any]) -> T:
        request = Request(operation, params)
        logger.debug(
            "Invoking operation",
            extra={"service": self.service_name, "operation": operation},
        )
        handle = self.transport.send(request)
        return result_cls(handle, self.transport, request, strict=self.config.strict_decode)
