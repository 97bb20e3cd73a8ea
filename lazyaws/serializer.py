from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, cast
from uuid import UUID

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from .exceptions import DecodeError
from .values import AttributeValue


class DynamoSerializer:
    """
    Converts DynamoDB items and keys between wire format and plain Python.

    Used for the PageResult view: items and cursors handed to an API frontend
    must be JSON-friendly, and cursors coming back must be turned into an
    ExclusiveStartKey again.

    DynamoDB numbers arrive as Decimal; whole numbers are restored to int and
    the rest to float. Floats going out are converted to Decimal because
    boto3's TypeSerializer rejects them.
    """

    def __init__(self) -> None:
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def to_dynamo(self, data: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
        """Converts a plain Python dict to DynamoDB JSON format ({"S": "...", "N": "..."})."""
        clean_data = self._prepare_for_dynamo(dict(data))
        result = {}

        for k, v in clean_data.items():
            try:
                serialized = self._serializer.serialize(v)
            except TypeError as e:
                raise DecodeError(
                    f"Failed to serialize cursor field '{k}'. value={v!r} error={e!s}",
                    shape="Cursor",
                    original_error=e,
                ) from e
            result[k] = cast(dict[str, Any], serialized)
        return result

    def from_dynamo(self, item: Mapping[str, Any]) -> dict[str, Any]:
        """Converts DynamoDB JSON format back to a plain Python dict."""
        try:
            python_data = {k: self._deserializer.deserialize(v) for k, v in item.items()}
        except (TypeError, ValueError) as e:
            raise DecodeError(
                f"Failed to deserialize item: {e!s}", shape="Item", original_error=e
            ) from e
        result = self._restore_to_python(python_data)
        assert isinstance(result, dict)
        return result

    def from_values(self, values: Mapping[str, AttributeValue]) -> dict[str, Any]:
        """Converts a decoded item (typed attribute values) to a plain Python dict."""
        result = self._restore_to_python({k: v.to_python() for k, v in values.items()})
        assert isinstance(result, dict)
        return result

    def serialize_cursor(self, last_evaluated_key: Mapping[str, Any]) -> dict[str, Any]:
        """
        Converts a LastEvaluatedKey to a plain Python dict for the frontend.

        Input:  {"pk": {"S": "value"}, "sk": {"N": "123"}}
        Output: {"pk": "value", "sk": 123}
        """
        return self.from_dynamo(last_evaluated_key)

    def deserialize_cursor(self, cursor: Mapping[str, Any]) -> dict[str, Any]:
        """
        Converts a plain cursor from the frontend back to an ExclusiveStartKey.

        Input:  {"pk": "value", "sk": 123}
        Output: {"pk": {"S": "value"}, "sk": {"N": "123"}}
        """
        return self.to_dynamo(cursor)

    def _prepare_for_dynamo(self, value: Any) -> Any:
        """
        Recursively prepares Python values for Boto3 TypeSerializer.

        Converts:
        - float -> Decimal (boto3 requirement)
        - datetime/date -> ISO 8601 string
        - UUID -> string
        - Enum -> value
        """
        if isinstance(value, float):
            # Go through str to avoid float artifacts in the Decimal
            return Decimal(str(value))
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (set, frozenset)):
            return {self._prepare_for_dynamo(v) for v in value}
        if isinstance(value, list):
            return [self._prepare_for_dynamo(v) for v in value]
        if isinstance(value, dict):
            return {k: self._prepare_for_dynamo(v) for k, v in value.items()}
        return value

    def _restore_to_python(self, value: Any) -> Any:
        """
        Recursively restores DynamoDB values to Python-friendly types.

        Converts:
        - Decimal -> int (if whole number) or float
        """
        if isinstance(value, Decimal):
            if value % 1 == 0:
                return int(value)
            return float(value)
        if isinstance(value, (set, frozenset)):
            return {self._restore_to_python(v) for v in value}
        if isinstance(value, list):
            return [self._restore_to_python(v) for v in value]
        if isinstance(value, dict):
            return {k: self._restore_to_python(v) for k, v in value.items()}
        return value
