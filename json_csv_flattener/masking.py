"""Masking of sensitive string values in raw JSON text.

Works on the text itself so the document keeps its exact layout. String
tokens are matched whole and left to right, which keeps escaped quotes
inside strings from being mistaken for token boundaries.

    >>> mask_sensitive_data('{"user": "ana", "password": "hunter2"}')
    '{"user": "ana", "password": "***"}'
"""
from __future__ import annotations

import json
import re
from typing import Optional

MASK = "***"

SENSITIVE_KEYS = (
    "password",
    "passwd",
    "senha",
    "secret",
    "token",
    "api_key",
    "apikey",
    "access_key",
    "private_key",
    "credit_card",
    "card_number",
    "cvv",
    "cpf",
    "cnpj",
    "ssn",
)

_STRING = r'"(?:[^"\\]|\\.)*"'
_TOKEN_RE = re.compile(
    rf'(?P<key>{_STRING})(?P<sep>\s*:\s*)(?P<value>{_STRING})|{_STRING}',
    re.DOTALL,
)


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(name in lowered for name in SENSITIVE_KEYS)


def _decoded_key(match: "re.Match[str]") -> Optional[str]:
    token = match.group("key")
    if token is None:
        return None
    try:
        return json.loads(token)
    except ValueError:
        return None


def contains_sensitive_data(json_text: Optional[str]) -> bool:
    if not json_text:
        return False
    for match in _TOKEN_RE.finditer(json_text):
        key = _decoded_key(match)
        if key is not None and is_sensitive_key(key):
            return True
    return False


def mask_sensitive_data(json_text: str) -> str:
    """Replace string values of sensitive keys with ``"***"``.

    Only string values are rewritten, so the shape of the document never
    changes and masking twice gives the same text.
    """
    def replace(match: "re.Match[str]") -> str:
        key = _decoded_key(match)
        if key is None or not is_sensitive_key(key):
            return match.group(0)
        return f'{match.group("key")}{match.group("sep")}"{MASK}"'

    return _TOKEN_RE.sub(replace, json_text)
