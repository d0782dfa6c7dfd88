"""Core logic for the JSON to CSV Flattener.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- validate JSON text against size, depth and node-count limits
- flatten nested objects/arrays into rows keyed by dot paths
- assemble rows into a table with ordinal-sorted headers
- encode the table as CSV with formula-injection protection
"""
from .converter import convert
from .csv_encoding import encode_field, encode_table
from .limits import DEFAULT_LIMITS, ConversionLimits
from .masking import contains_sensitive_data, mask_sensitive_data
from .outcome import ConversionOutcome, ErrorKind
from .validation import is_empty, is_too_large, validate

__all__ = [
    "ConversionLimits",
    "ConversionOutcome",
    "DEFAULT_LIMITS",
    "ErrorKind",
    "contains_sensitive_data",
    "convert",
    "encode_field",
    "encode_table",
    "is_empty",
    "is_too_large",
    "mask_sensitive_data",
    "validate",
]
