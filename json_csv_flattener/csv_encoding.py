"""CSV serialization with formula-injection protection.

The dialect is fixed: ``,`` between fields, ``"`` for quoting (doubled
inside quoted fields) and CRLF after every record.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .table import Table

SEPARATOR = ","
QUOTE = '"'
RECORD_TERMINATOR = "\r\n"

# Leading characters that spreadsheet applications evaluate as formulas
FORMULA_PREFIXES = ("=", "+", "-", "@")
FORMULA_MARKERS = ("DDE", "CMD")


def sanitize_formula(value: str) -> str:
    """Prefix a single apostrophe to values a spreadsheet could run as a formula."""
    if not value:
        return value
    if value.startswith(FORMULA_PREFIXES) or any(marker in value for marker in FORMULA_MARKERS):
        return "'" + value
    return value


def needs_quotes(value: str) -> bool:
    return SEPARATOR in value or QUOTE in value or "\n" in value or "\r" in value


def encode_field(value: Optional[str]) -> str:
    """Encode one cell. Sanitizing happens before the quoting decision.

        >>> encode_field('John, Jr.')
        '"John, Jr."'
        >>> encode_field('=SUM(A1:A2)')
        "'=SUM(A1:A2)"
    """
    if not value:
        return ""

    sanitized = sanitize_formula(value)
    if needs_quotes(sanitized):
        return QUOTE + sanitized.replace(QUOTE, QUOTE * 2) + QUOTE
    return sanitized


def encode_record(values: Iterable[Optional[str]]) -> str:
    return SEPARATOR.join(encode_field(value) for value in values)


def encode_table(table: Table) -> str:
    lines = [encode_record(table.headers)]
    lines.extend(encode_record(values) for values in table.records())
    return "".join(line + RECORD_TERMINATOR for line in lines)
