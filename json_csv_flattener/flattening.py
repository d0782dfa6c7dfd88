from __future__ import annotations

import logging
from typing import Dict, List

from .limits import (
    ARRAY_TRUNCATED_MARKER,
    DEFAULT_LIMITS,
    JOIN_TOKEN,
    PATH_SEPARATOR,
    ROWS_TRUNCATED_MARKER,
    TOO_DEEP_MARKER,
    ConversionLimits,
)
from .outcome import RowLimitError, UnsupportedShapeError
from .values import JsonArray, JsonObject, JsonValue, format_scalar, is_scalar

logger = logging.getLogger(__name__)

Row = Dict[str, str]


def join_path(prefix: str, name: str) -> str:
    return f"{prefix}{PATH_SEPARATOR}{name}" if prefix else name


def cartesian_product(rows_a: List[Row], rows_b: List[Row], limits: ConversionLimits = DEFAULT_LIMITS) -> List[Row]:
    """Combine every row of ``rows_a`` with every row of ``rows_b``.

    An empty side leaves the other side unchanged. Keys from ``rows_b`` win
    on conflict.
    """
    if not rows_b:
        return rows_a
    if not rows_a:
        return rows_b

    total = len(rows_a) * len(rows_b)
    if total > limits.max_output_rows:
        raise RowLimitError(
            f"CSV would have {total} data rows. Maximum allowed: {limits.max_output_rows}"
        )

    result: List[Row] = []
    for row_a in rows_a:
        for row_b in rows_b:
            combined = dict(row_a)
            combined.update(row_b)
            result.append(combined)
    return result


def expand_object(obj: JsonObject, prefix: str = '', depth: int = 0, limits: ConversionLimits = DEFAULT_LIMITS) -> List[Row]:
    """Expand an object into rows, multiplying rows across nested collections.

    Scalars are copied into every accumulated row; nested objects and arrays
    are expanded on their own and combined with the accumulated rows through
    a cartesian product.
    """
    if depth > limits.max_flatten_depth:
        return [{prefix: TOO_DEEP_MARKER}]

    rows: List[Row] = [{}]
    for name, value in obj.members:
        key = join_path(prefix, name)

        if isinstance(value, JsonObject):
            rows = cartesian_product(rows, expand_object(value, key, depth + 1, limits), limits)
        elif isinstance(value, JsonArray):
            rows = cartesian_product(rows, expand_array(value, key, depth, limits), limits)
        else:
            formatted = format_scalar(value)
            for row in rows:
                row[key] = formatted

    return rows


def expand_array(array: JsonArray, key: str, depth: int = 0, limits: ConversionLimits = DEFAULT_LIMITS) -> List[Row]:
    """Expand an array found under ``key``.

    Arrays of scalars collapse into one joined cell. Any other array yields
    one or more rows per element, concatenated in element order.
    """
    if depth > limits.max_flatten_depth:
        return [{key: TOO_DEEP_MARKER}]

    items = array.items
    if not items:
        return [{key: ""}]

    if len(items) > limits.max_array_elements:
        return [{key: ARRAY_TRUNCATED_MARKER.format(count=len(items), limit=limits.max_array_elements)}]

    if all(is_scalar(item) for item in items):
        return [{key: JOIN_TOKEN.join(format_scalar(item) for item in items)}]

    truncated = [{key: ROWS_TRUNCATED_MARKER.format(limit=limits.max_output_rows)}]
    all_rows: List[Row] = []
    for item in items:
        try:
            if isinstance(item, JsonObject):
                all_rows.extend(expand_object(item, key, depth + 1, limits))
            elif isinstance(item, JsonArray):
                all_rows.extend(expand_array(item, key, depth + 1, limits))
            else:
                all_rows.append({key: format_scalar(item)})
        except RowLimitError as e:
            logger.debug("Element of array at %r overflowed (%s), truncating", key, e.message)
            return truncated

        if len(all_rows) > limits.max_output_rows:
            logger.debug("Array at %r passed %d rows, truncating", key, limits.max_output_rows)
            return truncated

    return all_rows or [{key: ""}]


def expand(value: JsonValue, prefix: str = '', depth: int = 0, limits: ConversionLimits = DEFAULT_LIMITS) -> List[Row]:
    """Expand any JSON value into rows keyed by dot-joined paths."""
    if isinstance(value, JsonObject):
        return expand_object(value, prefix, depth, limits)
    if isinstance(value, JsonArray):
        return expand_array(value, prefix, depth, limits)
    if depth > limits.max_flatten_depth:
        return [{prefix: TOO_DEEP_MARKER}]
    return [{prefix: format_scalar(value)}]


def flatten_document(document: JsonValue, limits: ConversionLimits = DEFAULT_LIMITS) -> List[Row]:
    """Flatten a whole document: a single object, or a non-empty array of objects."""
    if isinstance(document, JsonObject):
        return expand_object(document, limits=limits)

    if isinstance(document, JsonArray):
        if not document.items:
            raise UnsupportedShapeError("The JSON array is empty.")
        if any(not isinstance(item, JsonObject) for item in document.items):
            raise UnsupportedShapeError("Only arrays of objects are supported.")

        rows: List[Row] = []
        for item in document.items:
            rows.extend(expand_object(item, limits=limits))
        logger.debug("Flattened %d objects into %d rows", len(document.items), len(rows))
        return rows

    raise UnsupportedShapeError("JSON must be an array of objects or a single object.")
