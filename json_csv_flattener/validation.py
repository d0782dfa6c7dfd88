"""Parse raw JSON text into JsonValues while enforcing the input ceilings.

Size is checked before parsing; nesting depth and node count are checked
while the parsed document is walked, so the walk stops as soon as a limit
is crossed.
"""
from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from .limits import DEFAULT_LIMITS, MAX_JSON_BYTES, ConversionLimits
from .outcome import ConversionOutcome, ErrorKind, ValidationError
from .values import (
    NULL,
    JsonArray,
    JsonBool,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

logger = logging.getLogger(__name__)


class _Pairs(list):
    """Marks an object's (key, value) pairs coming out of json.loads."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid numeric literal: {name}")


def is_empty(json_text: Optional[str]) -> bool:
    return json_text is None or not json_text.strip()


def is_too_large(json_text: Optional[str], max_bytes: int = MAX_JSON_BYTES) -> bool:
    """True when the UTF-8 encoding of ``json_text`` is longer than ``max_bytes``."""
    if not json_text:
        return False
    return len(json_text.encode("utf-8", errors="surrogatepass")) > max_bytes


def _load(json_text: str) -> Any:
    try:
        return json.loads(
            json_text,
            object_pairs_hook=_Pairs,
            parse_float=Decimal,
            parse_int=Decimal,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid JSON: syntax error at line {e.lineno}, column {e.colno} ({e.msg})"
        )
    except RecursionError:
        raise ValidationError("Invalid JSON: structure is too deep or complex")
    except ValueError as e:
        raise ValidationError(f"Invalid JSON: {e}")


class _DocumentBuilder:
    """Turns json.loads output into JsonValues, counting nodes and depth."""

    def __init__(self, limits: ConversionLimits):
        self.limits = limits
        self.nodes = 0

    def _visit(self) -> None:
        self.nodes += 1
        if self.nodes > self.limits.max_nodes:
            raise ValidationError(
                f"Invalid JSON: document has too many elements ({self.nodes}). "
                f"Maximum allowed: {self.limits.max_nodes}"
            )

    def build(self, data: Any, depth: int = 0) -> JsonValue:
        self._visit()

        if isinstance(data, (_Pairs, list)):
            depth += 1
            if depth > self.limits.max_depth:
                raise ValidationError(
                    f"Invalid JSON: structure is too deep or complex "
                    f"(maximum nesting: {self.limits.max_depth})"
                )
            if isinstance(data, _Pairs):
                pairs: List[Tuple[str, JsonValue]] = [
                    (key, self.build(value, depth)) for key, value in data
                ]
                return JsonObject.from_pairs(pairs)
            return JsonArray(tuple(self.build(item, depth) for item in data))

        if data is None:
            return NULL
        if isinstance(data, bool):
            return JsonBool(data)
        if isinstance(data, Decimal):
            return JsonNumber(data)
        return JsonString(data)


def parse_document(json_text: Optional[str], limits: ConversionLimits = DEFAULT_LIMITS) -> JsonValue:
    """Parse and check ``json_text``; raise ValidationError on any violation."""
    if is_empty(json_text):
        raise ValidationError(
            "The JSON input is empty. Please provide a valid JSON document.",
            ErrorKind.EMPTY_JSON,
        )

    if is_too_large(json_text, limits.max_bytes):
        raise ValidationError(
            f"The JSON input is too large (maximum: {limits.max_bytes / (1024 * 1024):g}MB).",
            ErrorKind.TOO_LARGE,
        )

    data = _load(json_text)
    builder = _DocumentBuilder(limits)
    document = builder.build(data)
    logger.debug("Parsed JSON document with %d nodes", builder.nodes)
    return document


def validate(json_text: Optional[str], limits: ConversionLimits = DEFAULT_LIMITS) -> ConversionOutcome:
    """Check ``json_text`` against every input ceiling without converting it."""
    try:
        parse_document(json_text, limits)
    except ValidationError as e:
        return e.to_outcome()
    return ConversionOutcome.succeeded("")
