"""
DynamoDB results and client.

Scan and Query results are paginated: iterating a ScanOutput yields the items
of every page, issuing the follow-up Scan with ExclusiveStartKey set to the
previous page's LastEvaluatedKey.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from ._logging import logger
from .client import ServiceClient
from .pages import (
    ConsumedCapacity,
    DeleteItemData,
    ItemCollectionMetrics,
    ItemsPage,
    QueryPage,
    ScanPage,
)
from .pagination import PageResult
from .result import PaginatedResult, Result
from .serializer import DynamoSerializer
from .values import AttributeValue

_serializer = DynamoSerializer()


class ItemsOutput(PaginatedResult[ItemsPage]):
    """Accessors shared by ScanOutput and QueryOutput."""

    @property
    def count(self) -> int | None:
        return self.page.count

    @property
    def scanned_count(self) -> int | None:
        return self.page.scanned_count

    @property
    def consumed_capacity(self) -> ConsumedCapacity | None:
        return self.page.consumed_capacity

    @property
    def last_evaluated_key(self) -> dict[str, AttributeValue]:
        return self.page.last_evaluated_key

    def to_page_result(self) -> PageResult[dict[str, Any]]:
        """
        Returns the current page as plain Python items plus a plain cursor.

        Usage:
            page = client.scan(TableName="users", Limit=10).to_page_result()
            if page.has_more:
                client.scan(TableName="users", Limit=10, start_cursor=page.next_cursor)
        """
        page = self.page
        items = [_serializer.from_values(item) for item in page.items]
        cursor = None
        if page.raw_last_evaluated_key is not None:
            cursor = _serializer.serialize_cursor(page.raw_last_evaluated_key)
        return PageResult(items=items, next_cursor=cursor, count=len(items))


class ScanOutput(ItemsOutput):
    shape: ClassVar[type[ScanPage]] = ScanPage


class QueryOutput(ItemsOutput):
    shape: ClassVar[type[QueryPage]] = QueryPage


class DeleteItemOutput(Result[DeleteItemData]):
    shape: ClassVar[type[DeleteItemData]] = DeleteItemData

    @property
    def attributes(self) -> dict[str, AttributeValue]:
        """The item as it was before deletion (only with ReturnValues=ALL_OLD)."""
        return self.data.attributes

    @property
    def consumed_capacity(self) -> ConsumedCapacity | None:
        return self.data.consumed_capacity

    @property
    def item_collection_metrics(self) -> ItemCollectionMetrics | None:
        return self.data.item_collection_metrics


class DynamoDbClient(ServiceClient):
    service_name: ClassVar[str] = "dynamodb"

    def scan(self, start_cursor: Mapping[str, Any] | None = None, **params: Any) -> ScanOutput:
        """
        Dispatches a Scan.

        Args:
            start_cursor: Plain cursor from PageResult.next_cursor; converted to
                          ExclusiveStartKey
            **params: Scan parameters (TableName, Limit, FilterExpression, ...)
        """
        self._apply_cursor(params, start_cursor)
        logger.info(
            "Starting scan",
            extra={
                "table": params.get("TableName"),
                "index": params.get("IndexName"),
                "limit": params.get("Limit"),
                "has_cursor": "ExclusiveStartKey" in params,
            },
        )
        return self._invoke(ScanOutput, "Scan", params)

    def query(self, start_cursor: Mapping[str, Any] | None = None, **params: Any) -> QueryOutput:
        """
        Dispatches a Query.

        Args:
            start_cursor: Plain cursor from PageResult.next_cursor; converted to
                          ExclusiveStartKey
            **params: Query parameters (TableName, KeyConditionExpression, ...)
        """
        self._apply_cursor(params, start_cursor)
        logger.info(
            "Starting query",
            extra={
                "table": params.get("TableName"),
                "index": params.get("IndexName"),
                "limit": params.get("Limit"),
                "has_cursor": "ExclusiveStartKey" in params,
            },
        )
        return self._invoke(QueryOutput, "Query", params)

    def delete_item(self, **params: Any) -> DeleteItemOutput:
        logger.info("Deleting item", extra={"table": params.get("TableName")})
        return self._invoke(DeleteItemOutput, "DeleteItem", params)

    def _apply_cursor(
        self, params: dict[str, Any], start_cursor: Mapping[str, Any] | None
    ) -> None:
        if start_cursor:
            params["ExclusiveStartKey"] = _serializer.deserialize_cursor(start_cursor)
