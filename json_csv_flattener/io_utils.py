from __future__ import annotations

import os
import tempfile


def read_json_text(file_obj) -> str:
    """Read raw JSON text from an uploaded file or file path.

    The text is returned unparsed so validation sees exactly what was uploaded.
    """
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8-sig')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8-sig') as f:
        return f.read()


def write_csv_file(csv_text: str, file_name: str = "") -> str:
    """Save CSV text in the temp directory and return its path.

    Written as UTF-8 without a byte-order mark; ``newline=''`` keeps the CRLF
    record terminators untouched.
    """
    if not file_name or not file_name.strip():
        file_name = "output"
    file_name = os.path.basename(file_name.strip())

    if not file_name.lower().endswith(".csv"):
        file_name += ".csv"

    path = os.path.join(tempfile.gettempdir(), file_name)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        f.write(csv_text)
    return path
