"""Scan record helpers shared by the loader and the analytics modules."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Any, Optional

# A loaded scan: the scanner's JSON object plus the derived `_ts` key.
ScanRecord = Mapping[str, Any]

TS_KEY = "_ts"


def parse_timestamp_ms(value: Any) -> int:
    """
    Convert a scan timestamp to milliseconds since the epoch.

    ISO-8601 strings (with ``Z``, an offset, or naive and read as UTC) and
    numeric epoch milliseconds are accepted. Anything else yields 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    if not isinstance(value, str) or not value.strip():
        return 0

    text = value.strip()
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return 0

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def deep_freeze(value: Any) -> Any:
    """Recursively convert JSON objects to read-only mappings and arrays to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: deep_freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(deep_freeze(v) for v in value)
    return value


def is_array(value: Any) -> bool:
    """True for a JSON array, whether still a list or already frozen to a tuple."""
    return isinstance(value, (list, tuple))


def freeze_record(data: Mapping[str, Any]) -> ScanRecord:
    """Return a deeply read-only copy of a raw scan with `_ts` derived from its timestamp."""
    record = {k: deep_freeze(v) for k, v in data.items()}
    record[TS_KEY] = parse_timestamp_ms(data.get("timestamp"))
    return MappingProxyType(record)


def split_halves(scans: Sequence[ScanRecord]) -> tuple[Sequence[ScanRecord], Sequence[ScanRecord]]:
    """Split scans at floor(n / 2) into (first half, second half)."""
    mid = len(scans) // 2
    return scans[:mid], scans[mid:]


def as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None for anything non-numeric."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def as_count(value: Any) -> Optional[int]:
    """Return value as an integer mention count, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    number = as_number(value)
    return int(number) if number is not None else None


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero on the exact binary value."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
