"""Scan builders shared across tests."""

from datetime import datetime, timedelta, timezone

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def iso(hours_ago: float) -> str:
    """ISO timestamp `hours_ago` hours before NOW, Z-suffixed like the scanner writes."""
    return (NOW - timedelta(hours=hours_ago)).isoformat().replace("+00:00", "Z")


def scan(hours_ago: float = 1, **fields) -> dict:
    """Build a raw scan object."""
    return {"timestamp": iso(hours_ago), **fields}
