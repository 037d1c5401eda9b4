"""Date range presets for selecting the commits of a changelog."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple


DATE_RANGE_DAYS: Dict[str, int] = {
    "7days": 7,
    "30days": 30,
    "90days": 90,
}
DATE_RANGE_PRESETS = tuple(DATE_RANGE_DAYS)


def get_date_range_preset(
    preset: str, now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """Return the ``(since, until)`` window for a preset such as ``"30days"``.

    Raises
    ------
    ValueError
        If the preset is unknown.
    """
    if preset not in DATE_RANGE_DAYS:
        raise ValueError(
            f"Unknown date range '{preset}'; expected one of {', '.join(DATE_RANGE_PRESETS)}"
        )
    until = now or datetime.now(timezone.utc)
    since = until - timedelta(days=DATE_RANGE_DAYS[preset])
    return since, until
