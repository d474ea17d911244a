"""Shared clock helpers."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def now() -> int:
    """Return the current Unix timestamp in whole seconds."""
    return int(time.time())


def epoch_to_datetime(value: int | None) -> datetime | None:
    """Convert epoch seconds into a timezone-aware datetime for logging."""
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
