"""Opening-hours evaluation for franchises."""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from org_hierarchy.models.franchise import WEEKDAYS

logger = logging.getLogger(__name__)


def franchise_timezone(settings: Optional[Mapping[str, Any]]) -> tzinfo:
    name = (settings or {}).get("timezone") or "UTC"
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown franchise timezone {name!r}, falling back to UTC")
        return timezone.utc


def local_time(settings: Optional[Mapping[str, Any]], at: datetime) -> datetime:
    """
    Wall-clock time at the franchise.

    Aware datetimes are converted to the franchise timezone; naive ones are
    already taken as local time there.
    """
    if at.tzinfo is None:
        return at
    return at.astimezone(franchise_timezone(settings))


def is_open_at(operating_hours: Optional[Mapping[str, Any]], at: datetime) -> bool:
    """
    Whether the hours of ``at``'s weekday include its time of day.

    Times compare as zero-padded "HH:MM" strings, both bounds inclusive. A
    day that is missing, flagged closed, or lacks an open/close time is closed.
    """
    day = (operating_hours or {}).get(WEEKDAYS[at.weekday()])
    if not day or day.get("closed"):
        return False

    opens, closes = day.get("open"), day.get("close")
    if not opens or not closes:
        return False

    current = at.strftime("%H:%M")
    return opens <= current <= closes


def is_open(franchise, at: Optional[datetime] = None) -> bool:
    """Whether ``franchise`` is open at ``at`` (default: now)."""
    settings = franchise.settings or {}
    if at is None:
        at = datetime.now(franchise_timezone(settings))
    return is_open_at(settings.get("operatingHours"), local_time(settings, at))
