"""
DynamoDB attribute values as a closed set of typed variants.

Every wire shape ({"S": ...}, {"N": ...}, {"M": {...}}, ...) has its own frozen
dataclass. AttributeValue.create() dispatches on the single type tag of the
wire mapping instead of probing the Python type of the payload.
"""

import base64
import binascii
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, ClassVar

from pydantic import BeforeValidator, InstanceOf

from .exceptions import DecodeError


class AttributeValue:
    """Base class of the attribute value variants."""

    tag: ClassVar[str]

    @staticmethod
    def create(raw: Any) -> "AttributeValue":
        """
        Decodes a wire attribute value such as {"S": "hello"}.

        Raises:
            DecodeError: If the mapping does not have exactly one known tag
                         or the payload has the wrong type
        """
        if isinstance(raw, AttributeValue):
            return raw
        if not isinstance(raw, Mapping) or len(raw) != 1:
            raise DecodeError(
                f"Attribute value must be a single-key mapping, got {raw!r}",
                shape="AttributeValue",
            )

        ((tag, payload),) = raw.items()
        decoder = _DECODERS.get(tag)
        if decoder is None:
            raise DecodeError(f"Unknown attribute value type '{tag}'", shape="AttributeValue")
        return decoder(payload)

    def to_wire(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class StringValue(AttributeValue):
    tag: ClassVar[str] = "S"
    value: str

    def to_wire(self) -> dict[str, Any]:
        return {"S": self.value}

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberValue(AttributeValue):
    """Numbers travel as strings; to_python() returns an exact Decimal."""

    tag: ClassVar[str] = "N"
    value: str

    def to_wire(self) -> dict[str, Any]:
        return {"N": self.value}

    def to_python(self) -> Decimal:
        return Decimal(self.value)


@dataclass(frozen=True)
class BinaryValue(AttributeValue):
    tag: ClassVar[str] = "B"
    value: bytes

    def to_wire(self) -> dict[str, Any]:
        return {"B": self.value}

    def to_python(self) -> bytes:
        return self.value


@dataclass(frozen=True)
class StringSetValue(AttributeValue):
    tag: ClassVar[str] = "SS"
    values: tuple[str, ...]

    def to_wire(self) -> dict[str, Any]:
        return {"SS": list(self.values)}

    def to_python(self) -> set[str]:
        return set(self.values)


@dataclass(frozen=True)
class NumberSetValue(AttributeValue):
    tag: ClassVar[str] = "NS"
    values: tuple[str, ...]

    def to_wire(self) -> dict[str, Any]:
        return {"NS": list(self.values)}

    def to_python(self) -> set[Decimal]:
        return {Decimal(v) for v in self.values}


@dataclass(frozen=True)
class BinarySetValue(AttributeValue):
    tag: ClassVar[str] = "BS"
    values: tuple[bytes, ...]

    def to_wire(self) -> dict[str, Any]:
        return {"BS": list(self.values)}

    def to_python(self) -> set[bytes]:
        return set(self.values)


@dataclass(frozen=True)
class MapValue(AttributeValue):
    tag: ClassVar[str] = "M"
    value: dict[str, AttributeValue] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return {"M": {k: v.to_wire() for k, v in self.value.items()}}

    def to_python(self) -> dict[str, Any]:
        return {k: v.to_python() for k, v in self.value.items()}


@dataclass(frozen=True)
class ListValue(AttributeValue):
    tag: ClassVar[str] = "L"
    values: tuple[AttributeValue, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        return {"L": [v.to_wire() for v in self.values]}

    def to_python(self) -> list[Any]:
        return [v.to_python() for v in self.values]


@dataclass(frozen=True)
class BoolValue(AttributeValue):
    tag: ClassVar[str] = "BOOL"
    value: bool

    def to_wire(self) -> dict[str, Any]:
        return {"BOOL": self.value}

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class NullValue(AttributeValue):
    tag: ClassVar[str] = "NULL"

    def to_wire(self) -> dict[str, Any]:
        return {"NULL": True}

    def to_python(self) -> None:
        return None


# --- Wire decoders (one per tag) ---


def _wrong_payload(tag: str, payload: Any) -> DecodeError:
    return DecodeError(
        f"Invalid payload for attribute type '{tag}': {payload!r}", shape="AttributeValue"
    )


def _number(tag: str, payload: Any) -> str:
    if isinstance(payload, bool) or not isinstance(payload, (str, int, Decimal)):
        raise _wrong_payload(tag, payload)
    text = str(payload)
    try:
        Decimal(text)
    except InvalidOperation as e:
        raise DecodeError(
            f"Invalid number '{text}' for attribute type '{tag}'",
            shape="AttributeValue",
            original_error=e,
        ) from e
    return text


def _binary(tag: str, payload: Any) -> bytes:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str):
        # JSON wire format carries binaries base64-encoded
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise DecodeError(
                f"Invalid base64 payload for attribute type '{tag}'",
                shape="AttributeValue",
                original_error=e,
            ) from e
    raise _wrong_payload(tag, payload)


def _sequence(tag: str, payload: Any) -> list[Any]:
    if not isinstance(payload, (list, tuple, set, frozenset)):
        raise _wrong_payload(tag, payload)
    return list(payload)


def _decode_string(payload: Any) -> AttributeValue:
    if not isinstance(payload, str):
        raise _wrong_payload("S", payload)
    return StringValue(payload)


def _decode_string_set(payload: Any) -> AttributeValue:
    values = _sequence("SS", payload)
    if not all(isinstance(v, str) for v in values):
        raise _wrong_payload("SS", payload)
    return StringSetValue(tuple(values))


def _decode_number_set(payload: Any) -> AttributeValue:
    return NumberSetValue(tuple(_number("NS", v) for v in _sequence("NS", payload)))


def _decode_binary_set(payload: Any) -> AttributeValue:
    return BinarySetValue(tuple(_binary("BS", v) for v in _sequence("BS", payload)))


def _decode_map(payload: Any) -> AttributeValue:
    if not isinstance(payload, Mapping):
        raise _wrong_payload("M", payload)
    return MapValue(decode_attribute_map(payload))


def _decode_list(payload: Any) -> AttributeValue:
    return ListValue(tuple(AttributeValue.create(v) for v in _sequence("L", payload)))


def _decode_bool(payload: Any) -> AttributeValue:
    if not isinstance(payload, bool):
        raise _wrong_payload("BOOL", payload)
    return BoolValue(payload)


def _decode_null(payload: Any) -> AttributeValue:
    if payload is not True:
        raise _wrong_payload("NULL", payload)
    return NullValue()


_DECODERS: dict[str, Callable[[Any], AttributeValue]] = {
    "S": _decode_string,
    "N": lambda payload: NumberValue(_number("N", payload)),
    "B": lambda payload: BinaryValue(_binary("B", payload)),
    "SS": _decode_string_set,
    "NS": _decode_number_set,
    "BS": _decode_binary_set,
    "M": _decode_map,
    "L": _decode_list,
    "BOOL": _decode_bool,
    "NULL": _decode_null,
}


def decode_attribute_map(raw: Mapping[str, Any]) -> dict[str, AttributeValue]:
    """Decodes a wire item ({"name": {"S": ...}, ...}) into typed values."""
    return {name: AttributeValue.create(value) for name, value in raw.items()}


# Field type for pydantic shapes: accepts wire mappings or decoded values
TypedAttribute = Annotated[InstanceOf[AttributeValue], BeforeValidator(AttributeValue.create)]
AttributeMap = dict[str, TypedAttribute]
