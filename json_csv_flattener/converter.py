from __future__ import annotations

import logging
from typing import Callable, Optional

from .csv_encoding import encode_table
from .flattening import flatten_document
from .limits import DEFAULT_LIMITS, ConversionLimits
from .outcome import ConversionFailure, ConversionOutcome, ErrorKind
from .table import assemble
from .validation import is_empty, parse_document

logger = logging.getLogger(__name__)

Masker = Callable[[str], str]


def _apply_mask(json_text: str, mask: Optional[Masker]) -> str:
    if mask is None:
        return json_text
    try:
        return mask(json_text)
    except Exception as e:
        logger.warning("Masking failed, converting the original text: %s", e)
        return json_text


def convert(
    json_text: Optional[str],
    mask: Optional[Masker] = None,
    limits: ConversionLimits = DEFAULT_LIMITS,
) -> ConversionOutcome:
    """Convert a JSON object, or an array of objects, into CSV text.

    Never raises: every problem comes back as a failed ConversionOutcome
    whose ``error_kind`` says which check rejected the input.
    """
    if is_empty(json_text):
        return ConversionOutcome.failed("The JSON input is empty.", ErrorKind.EMPTY_JSON)

    try:
        text = _apply_mask(json_text, mask)
        document = parse_document(text, limits)
        rows = flatten_document(document, limits)
        table = assemble(rows, limits)
        csv_text = encode_table(table)
    except ConversionFailure as e:
        logger.debug("Conversion rejected (%s): %s", e.kind.value, e.message)
        return e.to_outcome()
    except Exception as e:
        logger.exception("Unexpected error while converting JSON to CSV")
        return ConversionOutcome.failed(f"Conversion error: {e}", ErrorKind.CONVERSION_ERROR)

    logger.debug("Converted %d rows into %d CSV characters", len(table.rows), len(csv_text))
    return ConversionOutcome.succeeded(csv_text)
