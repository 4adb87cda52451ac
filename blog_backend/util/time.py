from __future__ import annotations

from datetime import datetime, timezone


def now_ms() -> int:
    """Current UTC time as integer epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
