from .client import ServiceClient
from .config import ClientConfig
from .cursor import PrefetchSlot, iter_items, iter_pages
from .dynamodb import DeleteItemOutput, DynamoDbClient, QueryOutput, ScanOutput
from .exceptions import (
    AccessDeniedError,
    DecodeError,
    LazyAwsError,
    PreconditionError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ThrottlingError,
    UpstreamError,
    ValidationError,
)
from .pages import Page
from .pagination import PageResult
from .request import Request
from .result import PaginatedResult, Result
from .s3 import ListObjectsV2Output, RequestPayer, S3Client
from .sqs import GetQueueUrlResult, ListQueuesResult, SqsClient
from .transport import BotoTransport, ResponseHandle, Transport
from .values import AttributeValue

__all__ = [
    # Clients
    "ServiceClient",
    "DynamoDbClient",
    "S3Client",
    "SqsClient",
    "ClientConfig",
    # Results
    "Result",
    "PaginatedResult",
    "ScanOutput",
    "QueryOutput",
    "DeleteItemOutput",
    "ListObjectsV2Output",
    "ListQueuesResult",
    "GetQueueUrlResult",
    "Page",
    "PageResult",
    "RequestPayer",
    "AttributeValue",
    # Pagination engine
    "iter_pages",
    "iter_items",
    "PrefetchSlot",
    # Transport
    "Request",
    "ResponseHandle",
    "Transport",
    "BotoTransport",
    # Exceptions
    "LazyAwsError",
    "DecodeError",
    "PreconditionError",
    "UpstreamError",
    "ResourceNotFoundError",
    "ThrottlingError",
    "ValidationError",
    "AccessDeniedError",
    "RequestTimeoutError",
]
