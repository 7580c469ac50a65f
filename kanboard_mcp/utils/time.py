from __future__ import annotations

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis() -> int:
    return int(time.time() * 1000)
