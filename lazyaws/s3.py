from enum import Enum
from typing import Any, ClassVar

from ._logging import logger
from .client import ServiceClient
from .pages import CommonPrefix, ListObjectsV2Page, S3Object
from .pagination import PageResult
from .result import PaginatedResult


class RequestPayer(str, Enum):
    """Confirms that the requester knows they will be charged for the request."""

    REQUESTER = "requester"

    @classmethod
    def exists(cls, value: str) -> bool:
        return value in {member.value for member in cls}


class ListObjectsV2Output(PaginatedResult[ListObjectsV2Page]):
    shape: ClassVar[type[ListObjectsV2Page]] = ListObjectsV2Page

    @property
    def contents(self) -> tuple[S3Object, ...]:
        return self.page.contents

    @property
    def common_prefixes(self) -> tuple[CommonPrefix, ...]:
        return self.page.common_prefixes

    @property
    def key_count(self) -> int | None:
        return self.page.key_count

    @property
    def is_truncated(self) -> bool | None:
        return self.page.is_truncated

    @property
    def next_continuation_token(self) -> str | None:
        return self.page.next_continuation_token

    def to_page_result(self) -> PageResult[dict[str, Any]]:
        page = self.page
        items = [obj.model_dump(mode="json", exclude_none=True) for obj in page.contents]
        return PageResult(items=items, next_cursor=page.continuation_key, count=len(items))


class S3Client(ServiceClient):
    service_name: ClassVar[str] = "s3"

    def list_objects_v2(
        self, start_cursor: str | None = None, **params: Any
    ) -> ListObjectsV2Output:
        """
        Dispatches a ListObjectsV2.

        Args:
            start_cursor: Token from PageResult.next_cursor; sent as ContinuationToken
            **params: ListObjectsV2 parameters (Bucket, Prefix, MaxKeys, ...)

        Raises:
            ValueError: If RequestPayer is not a known value
        """
        payer = params.get("RequestPayer")
        if payer is not None and not RequestPayer.exists(payer):
            raise ValueError(f"Invalid parameter 'RequestPayer': '{payer}' is not a valid value")
        if start_cursor:
            params["ContinuationToken"] = start_cursor

        logger.info(
            "Listing objects",
            extra={
                "bucket": params.get("Bucket"),
                "prefix": params.get("Prefix"),
                "has_cursor": "ContinuationToken" in params,
            },
        )
        return self._invoke(ListObjectsV2Output, "ListObjectsV2", params)
