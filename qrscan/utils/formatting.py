"""Mini README: Display formatting helpers shared by history views.

The history search matches against the same rendering the UI shows, so the
formatter lives here rather than in the presentation layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

UNKNOWN_TIMESTAMP = "Unknown"


def format_timestamp(value: Optional[datetime], pattern: Optional[str] = None) -> str:
    """Render a scan time as ``Oct 9, 2026, 3:04 PM`` (or with ``pattern``)."""

    if value is None:
        return UNKNOWN_TIMESTAMP
    if pattern:
        return value.strftime(pattern)
    hour = value.hour % 12 or 12
    return f"{value:%b} {value.day}, {value.year}, {hour}:{value:%M} {'AM' if value.hour < 12 else 'PM'}"
