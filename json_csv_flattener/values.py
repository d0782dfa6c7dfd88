"""Tagged, immutable representation of a parsed JSON document.

Numbers are kept as ``Decimal`` so parsing never rounds or hits the integer
digit limit; formatting to text happens only when a value lands in a cell.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Tuple, Union

# Beyond this many digits either side of the point, numbers keep scientific notation
_PLAIN_EXPONENT_LIMIT = 30


@dataclass(frozen=True)
class JsonNull:
    pass


@dataclass(frozen=True)
class JsonBool:
    value: bool


@dataclass(frozen=True)
class JsonNumber:
    value: Decimal


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonArray:
    items: Tuple["JsonValue", ...] = ()


@dataclass(frozen=True)
class JsonObject:
    members: Tuple[Tuple[str, "JsonValue"], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, "JsonValue"]]) -> "JsonObject":
        """Build an object, keeping the last value for duplicate keys."""
        merged: Dict[str, JsonValue] = {}
        for key, value in pairs:
            merged[key] = value
        return cls(tuple(merged.items()))

    def get(self, key: str, default: Any = None) -> Any:
        for name, value in self.members:
            if name == key:
                return value
        return default


JsonScalar = Union[JsonNull, JsonBool, JsonNumber, JsonString]
JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]

NULL = JsonNull()


def is_scalar(value: JsonValue) -> bool:
    return isinstance(value, (JsonNull, JsonBool, JsonNumber, JsonString))


def from_python(data: Any) -> JsonValue:
    """Wrap plain Python data (as produced by ``json.loads``) into JsonValues.

    Mostly useful for building documents in code and tests; the validator
    builds its values directly while it walks the parsed document.
    """
    if data is None:
        return NULL
    if isinstance(data, bool):
        return JsonBool(data)
    if isinstance(data, (int, Decimal)):
        return JsonNumber(Decimal(data))
    if isinstance(data, float):
        return JsonNumber(Decimal(repr(data)))
    if isinstance(data, str):
        return JsonString(data)
    if isinstance(data, dict):
        return JsonObject.from_pairs((str(k), from_python(v)) for k, v in data.items())
    if isinstance(data, (list, tuple)):
        return JsonArray(tuple(from_python(item) for item in data))
    raise TypeError(f"Unsupported JSON type: {type(data).__name__}")


def format_number(number: Decimal) -> str:
    """Format a number as a culture-invariant string.

    Integral values never carry a decimal point; fractional values use plain
    notation with trailing zeros removed. Very large or very small exponents
    keep Decimal's exact scientific form so the text stays short.

        >>> format_number(Decimal("30"))
        '30'
        >>> format_number(Decimal("1.0"))
        '1'
        >>> format_number(Decimal("95.50"))
        '95.5'
        >>> format_number(Decimal("1e2"))
        '100'
    """
    if number.is_zero():
        return "0"

    if abs(number.adjusted()) >= _PLAIN_EXPONENT_LIMIT:
        return str(number)

    if number == number.to_integral_value():
        return format(number.to_integral_value(), "f")

    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_scalar(value: JsonValue) -> str:
    """Format a scalar for a CSV cell. Containers format to an empty string."""
    if isinstance(value, JsonString):
        return value.value
    if isinstance(value, JsonBool):
        return "true" if value.value else "false"
    if isinstance(value, JsonNumber):
        return format_number(value.value)
    return ""
