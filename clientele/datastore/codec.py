"""JSON codec for document data.

Datetimes are stored as fixed-width UTC ISO-8601 strings so that
ordering and range comparisons on the encoded JSON agree with
comparisons on the original values. Naive datetimes are taken as UTC.
"""

import json
import re
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}\+00:00$"
)


def as_utc(value: datetime) -> datetime:
    """Return the same instant in UTC, taking naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def normalize(value: Any) -> Any:
    """Convert every datetime in a document to UTC.

    Backends that keep documents as Python objects apply this on write so
    that stored values compare the way encoded ones do.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, dict):
        return {k: normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize(v) for v in value]
    return value


def encode_datetime(value: datetime) -> str:
    return as_utc(value).isoformat(timespec="microseconds")


def _default(obj: Any) -> Any:
    """Serialize values json does not handle natively."""
    if isinstance(obj, datetime):
        return encode_datetime(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, Decimal):
        return float(obj)
    if hasattr(obj, "value"):  # Enum
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode(value: Any) -> str:
    """Encode a document or a single value as JSON text."""
    if isinstance(value, datetime):
        value = encode_datetime(value)
    return json.dumps(value, default=_default)


def _restore(value: Any) -> Any:
    if isinstance(value, str) and _DATETIME_PATTERN.match(value):
        return datetime.fromisoformat(value)
    if isinstance(value, dict):
        return {k: _restore(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_restore(v) for v in value]
    return value


def decode(text: str) -> Any:
    """Decode JSON text, restoring encoded datetimes."""
    return _restore(json.loads(text))
