# job-tracker-backend\src\job_tracker\core\list_codec.py

"""Stores a list of strings (tags, attachment paths, roles) in one text column.

An empty list is stored as NULL rather than ``"[]"``, and anything that cannot
be read back as a list of strings decodes to an empty list.
"""

import json
import logging
from typing import Iterable, Optional

from sqlalchemy import or_

logger = logging.getLogger(__name__)


def encode_list(values: Optional[Iterable[str]]) -> Optional[str]:
    """Serializes a list of strings to JSON text, or None when the list is empty."""
    items = list(values or [])
    if not items:
        return None
    return json.dumps(items)


def decode_list(raw: Optional[str]) -> list[str]:
    """Reads a stored list back. Absent or malformed data yields []."""
    if raw is None or not raw.strip():
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed list value: {raw[:80]!r}")
        return []

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        logger.warning(f"Ignoring non string-list value: {raw[:80]!r}")
        return []
    return parsed


def encoded_item(value: str) -> str:
    """The exact text a single item occupies inside an encoded list.

    Used to build substring filters that match whole items only.
    """
    return json.dumps(value)


def contains_item(column, value: str):
    """SQL clause that is true when the encoded list in ``column`` holds ``value``.

    Items are written as ``["a", "b"]``; a quote inside an item is always
    escaped, so anchoring on the brackets and the ``", "`` separator only
    matches whole items.
    """
    item = encoded_item(value)
    return or_(
        column == f"[{item}]",
        column.startswith(f"[{item}, ", autoescape=True),
        column.contains(f", {item}, ", autoescape=True),
        column.endswith(f", {item}]", autoescape=True),
    )


def any_item_contains(raw: Optional[str], term: str) -> bool:
    """Case-insensitive substring match against the decoded items."""
    needle = term.lower()
    return any(needle in item.lower() for item in decode_list(raw))
