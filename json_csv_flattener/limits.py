"""Ceilings and fixed tokens used across the conversion pipeline.

Every recursive or combinatorial step in the pipeline checks one of the
limits below, so a conversion always terminates with bounded memory:

    - input text:      max_bytes (UTF-8), max_depth, max_nodes
    - flattening:      max_flatten_depth, max_array_elements, max_output_rows
    - table assembly:  max_columns, max_output_rows

Example:
    >>> from json_csv_flattener import convert
    >>> limits = ConversionLimits(max_columns=20)
    >>> convert('{"a": 1}', limits=limits).success
    True
"""
from __future__ import annotations

from dataclasses import dataclass

MAX_JSON_BYTES = 10 * 1024 * 1024
MAX_JSON_DEPTH = 10
MAX_JSON_NODES = 100_000

# Hard stop for the flattening recursion, deeper than what the validator lets through
MAX_FLATTEN_DEPTH = 50

MAX_ARRAY_ELEMENTS = 100
MAX_OUTPUT_ROWS = 10_000
MAX_COLUMNS = 500

# Column paths: {"address": {"street": ...}} -> "address.street"
PATH_SEPARATOR = "."

# Arrays of scalars stay on one row: ["a", "b"] -> "a; b"
JOIN_TOKEN = "; "

TOO_DEEP_MARKER = "[Object too deep]"
ARRAY_TRUNCATED_MARKER = "[Array truncated: {count} elements, limit: {limit}]"
ROWS_TRUNCATED_MARKER = "[Result truncated: limit: {limit} rows]"


@dataclass(frozen=True)
class ConversionLimits:
    max_bytes: int = MAX_JSON_BYTES
    max_depth: int = MAX_JSON_DEPTH
    max_nodes: int = MAX_JSON_NODES
    max_flatten_depth: int = MAX_FLATTEN_DEPTH
    max_array_elements: int = MAX_ARRAY_ELEMENTS
    max_output_rows: int = MAX_OUTPUT_ROWS
    max_columns: int = MAX_COLUMNS


DEFAULT_LIMITS = ConversionLimits()
