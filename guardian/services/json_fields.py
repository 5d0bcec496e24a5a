"""
Helpers for the JSON-text list columns (alert methods, quiet hours days,
notified contacts, delivery results).

Reads are lenient: a malformed or non-list value decodes to an empty list
so one bad column never fails a whole read.
"""
import json
import logging

logger = logging.getLogger(__name__)


def encode_list(values) -> str:
    return json.dumps(list(values or []))


def decode_list(raw, field: str = "value") -> list:
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return raw
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning("Error parsing %s: %s", field, e)
        return []
    if not isinstance(decoded, list):
        logger.warning("Error parsing %s: expected a list, got %s", field, type(decoded).__name__)
        return []
    return decoded
