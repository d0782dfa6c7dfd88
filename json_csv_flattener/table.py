from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set

from .limits import DEFAULT_LIMITS, ConversionLimits
from .outcome import ColumnLimitError, RowLimitError

logger = logging.getLogger(__name__)


@dataclass
class Table:
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def records(self) -> Iterator[List[str]]:
        """Yield each row projected onto the headers; missing cells are empty."""
        for row in self.rows:
            yield [row.get(header, "") for header in self.headers]


def collect_headers(rows: List[Dict[str, str]], max_columns: int) -> List[str]:
    """Union of all row keys, sorted by code point so ordering never depends on locale."""
    keys: Set[str] = set()
    for row in rows:
        for key in row:
            if key in keys:
                continue
            keys.add(key)
            if len(keys) > max_columns:
                raise ColumnLimitError(
                    f"CSV would have {len(keys)} columns. Maximum allowed: {max_columns}"
                )
    return sorted(keys)


def assemble(rows: List[Dict[str, str]], limits: ConversionLimits = DEFAULT_LIMITS) -> Table:
    headers = collect_headers(rows, limits.max_columns)

    if len(rows) > limits.max_output_rows:
        raise RowLimitError(
            f"CSV would have {len(rows)} data rows. Maximum allowed: {limits.max_output_rows}"
        )

    logger.debug("Assembled table with %d columns and %d rows", len(headers), len(rows))
    return Table(headers=headers, rows=rows)
