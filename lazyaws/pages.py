"""
Response shapes for lazyaws.

Each operation's response is decoded once into a frozen pydantic model.
Paginated operations decode into a Page subclass, which also declares where
its items live, which response field carries the continuation key, and which
request field the key must be copied into to fetch the next page.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError
from .values import AttributeMap, AttributeValue, decode_attribute_map

S = TypeVar("S", bound="Shape")


class Shape(BaseModel):
    """Base for every decoded response (and nested value object)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def decode(cls: type[S], data: Mapping[str, Any]) -> S:
        """
        Decodes a response body into this shape.

        Raises:
            DecodeError: If a field is missing or has the wrong type
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Malformed {cls.__name__} response: {e.error_count()} invalid field(s)",
                shape=cls.__name__,
                original_error=e,
            ) from e


class Page(Shape):
    """
    One response's worth of items plus its continuation marker.

    Subclasses set:
        items_attr: attribute holding the page items
        token_attr: attribute holding the continuation key
        start_field: request parameter that resumes after the key
    """

    items_attr: ClassVar[str] = "items"
    token_attr: ClassVar[str]
    start_field: ClassVar[str]

    @property
    def page_items(self) -> tuple[Any, ...]:
        return tuple(getattr(self, self.items_attr))

    @property
    def continuation_key(self) -> Any | None:
        """The opaque continuation key, or None on the last page."""
        return getattr(self, self.token_attr) or None

    @property
    def has_more(self) -> bool:
        return self.continuation_key is not None


# --- DynamoDB ---


class Capacity(Shape):
    read_capacity_units: float | None = Field(default=None, alias="ReadCapacityUnits")
    write_capacity_units: float | None = Field(default=None, alias="WriteCapacityUnits")
    capacity_units: float | None = Field(default=None, alias="CapacityUnits")


class ConsumedCapacity(Shape):
    """Capacity consumed by an operation, only returned when ReturnConsumedCapacity is set."""

    table_name: str | None = Field(default=None, alias="TableName")
    capacity_units: float | None = Field(default=None, alias="CapacityUnits")
    read_capacity_units: float | None = Field(default=None, alias="ReadCapacityUnits")
    write_capacity_units: float | None = Field(default=None, alias="WriteCapacityUnits")
    table: Capacity | None = Field(default=None, alias="Table")
    local_secondary_indexes: dict[str, Capacity] = Field(
        default_factory=dict, alias="LocalSecondaryIndexes"
    )
    global_secondary_indexes: dict[str, Capacity] = Field(
        default_factory=dict, alias="GlobalSecondaryIndexes"
    )


class ItemCollectionMetrics(Shape):
    item_collection_key: AttributeMap = Field(default_factory=dict, alias="ItemCollectionKey")
    size_estimate_range_gb: tuple[float, ...] = Field(default=(), alias="SizeEstimateRangeGB")


class ItemsPage(Page):
    """A page of DynamoDB items (Scan and Query share this shape)."""

    token_attr: ClassVar[str] = "raw_last_evaluated_key"
    start_field: ClassVar[str] = "ExclusiveStartKey"

    items: tuple[AttributeMap, ...] = Field(default=(), alias="Items")
    count: int | None = Field(default=None, alias="Count")
    scanned_count: int | None = Field(default=None, alias="ScannedCount")
    # Kept in wire format: it goes back into ExclusiveStartKey unchanged
    raw_last_evaluated_key: dict[str, Any] | None = Field(default=None, alias="LastEvaluatedKey")
    consumed_capacity: ConsumedCapacity | None = Field(default=None, alias="ConsumedCapacity")

    @field_validator("raw_last_evaluated_key")
    @classmethod
    def _check_key(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if not value:
            return None
        decode_attribute_map(value)
        return value

    @property
    def last_evaluated_key(self) -> dict[str, AttributeValue]:
        """Typed view of the continuation key (empty on the last page)."""
        if self.raw_last_evaluated_key is None:
            return {}
        return decode_attribute_map(self.raw_last_evaluated_key)


class ScanPage(ItemsPage):
    pass


class QueryPage(ItemsPage):
    pass


class DeleteItemData(Shape):
    attributes: AttributeMap = Field(default_factory=dict, alias="Attributes")
    consumed_capacity: ConsumedCapacity | None = Field(default=None, alias="ConsumedCapacity")
    item_collection_metrics: ItemCollectionMetrics | None = Field(
        default=None, alias="ItemCollectionMetrics"
    )


# --- S3 ---


class S3Owner(Shape):
    display_name: str | None = Field(default=None, alias="DisplayName")
    id: str | None = Field(default=None, alias="ID")


class S3Object(Shape):
    key: str = Field(alias="Key")
    last_modified: datetime | None = Field(default=None, alias="LastModified")
    etag: str | None = Field(default=None, alias="ETag")
    size: int | None = Field(default=None, alias="Size")
    storage_class: str | None = Field(default=None, alias="StorageClass")
    owner: S3Owner | None = Field(default=None, alias="Owner")


class CommonPrefix(Shape):
    prefix: str = Field(alias="Prefix")


class ListObjectsV2Page(Page):
    items_attr: ClassVar[str] = "contents"
    token_attr: ClassVar[str] = "next_continuation_token"
    start_field: ClassVar[str] = "ContinuationToken"

    contents: tuple[S3Object, ...] = Field(default=(), alias="Contents")
    common_prefixes: tuple[CommonPrefix, ...] = Field(default=(), alias="CommonPrefixes")
    name: str | None = Field(default=None, alias="Name")
    prefix: str | None = Field(default=None, alias="Prefix")
    delimiter: str | None = Field(default=None, alias="Delimiter")
    max_keys: int | None = Field(default=None, alias="MaxKeys")
    key_count: int | None = Field(default=None, alias="KeyCount")
    is_truncated: bool | None = Field(default=None, alias="IsTruncated")
    continuation_token: str | None = Field(default=None, alias="ContinuationToken")
    next_continuation_token: str | None = Field(default=None, alias="NextContinuationToken")
    start_after: str | None = Field(default=None, alias="StartAfter")


# --- SQS ---


class ListQueuesPage(Page):
    items_attr: ClassVar[str] = "queue_urls"
    token_attr: ClassVar[str] = "next_token"
    start_field: ClassVar[str] = "NextToken"

    queue_urls: tuple[str, ...] = Field(default=(), alias="QueueUrls")
    next_token: str | None = Field(default=None, alias="NextToken")


class GetQueueUrlData(Shape):
    queue_url: str | None = Field(default=None, alias="QueueUrl")
