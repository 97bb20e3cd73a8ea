from typing import Any, ClassVar

from ._logging import logger
from .client import ServiceClient
from .pages import GetQueueUrlData, ListQueuesPage
from .result import PaginatedResult, Result


class ListQueuesResult(PaginatedResult[ListQueuesPage]):
    shape: ClassVar[type[ListQueuesPage]] = ListQueuesPage

    @property
    def queue_urls(self) -> tuple[str, ...]:
        return self.page.queue_urls

    @property
    def next_token(self) -> str | None:
        return self.page.next_token


class GetQueueUrlResult(Result[GetQueueUrlData]):
    shape: ClassVar[type[GetQueueUrlData]] = GetQueueUrlData

    @property
    def queue_url(self) -> str | None:
        return self.data.queue_url


class SqsClient(ServiceClient):
    service_name: ClassVar[str] = "sqs"

    def list_queues(self, **params: Any) -> ListQueuesResult:
        """Dispatches a ListQueues (QueueNamePrefix, MaxResults, NextToken)."""
        logger.info("Listing queues", extra={"prefix": params.get("QueueNamePrefix")})
        return self._invoke(ListQueuesResult, "ListQueues", params)

    def get_queue_url(self, **params: Any) -> GetQueueUrlResult:
        logger.info("Resolving queue url", extra={"queue": params.get("QueueName")})
        return self._invoke(GetQueueUrlResult, "GetQueueUrl", params)
