from __future__ import annotations

import csv
import io
import logging
from typing import Dict, List

import gradio as gr

from .converter import convert
from .io_utils import read_json_text, write_csv_file
from .masking import mask_sensitive_data
from .validation import validate

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 3


def preview_rows(csv_text: str, limit: int = PREVIEW_LIMIT) -> List[Dict[str, str]]:
    """Read back the first ``limit`` data rows of a CSV string as dicts."""
    if not csv_text:
        return []
    reader = csv.DictReader(io.StringIO(csv_text, newline=''))
    rows: List[Dict[str, str]] = []
    for row in reader:
        rows.append(dict(row))
        if len(rows) >= max(1, int(limit)):
            break
    return rows


def count_data_rows(csv_text: str) -> int:
    if not csv_text:
        return 0
    return max(0, sum(1 for _ in csv.reader(io.StringIO(csv_text, newline=''))) - 1)


def load_json_file(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded."

    try:
        text = read_json_text(file_obj)
    except Exception as e:
        return gr.update(), f"Error reading file: {str(e)}"

    return text, f"Loaded {len(text.encode('utf-8'))} bytes. Press Validate or Convert."


def validate_handler(json_text: str) -> str:
    outcome = validate(json_text)
    if outcome.success:
        return "JSON is valid."
    return outcome.error


def convert_handler(json_text: str, mask_sensitive: bool = False, file_name: str = ""):
    outcome = convert(json_text, mask=mask_sensitive_data if mask_sensitive else None)
    if not outcome.success:
        return None, f"Error: {outcome.error}", None

    try:
        path = write_csv_file(outcome.csv, file_name)
    except Exception as e:
        logger.exception("Could not write CSV file")
        return None, f"Error during export: {str(e)}", None

    rows = preview_rows(outcome.csv)
    status = f"Conversion successful! {count_data_rows(outcome.csv)} rows saved to {path}"
    return path, status, rows if rows else None


def clear_handler():
    return "", "", None, None
