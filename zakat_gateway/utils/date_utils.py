"""Date manipulation utilities"""

from datetime import datetime, timezone
from typing import List, Optional


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 indexer timestamp ("2024-03-01T10:00:00Z"), None if unusable"""
    if not isinstance(value, str) or not value:
        return None
    try:
        return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        return None


def month_key(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"


def trailing_month_keys(now: datetime, count: int = 12) -> List[str]:
    """Month keys for the last `count` calendar months, oldest first, current month last"""
    keys = []
    for offset in range(count - 1, -1, -1):
        year, month = divmod(now.year * 12 + (now.month - 1) - offset, 12)
        keys.append(f"{year:04d}-{month + 1:02d}")
    return keys


def one_year_before(moment: datetime) -> datetime:
    """Same calendar day one year earlier (Feb 29 falls back to Feb 28)"""
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:
        return moment.replace(year=moment.year - 1, day=28)
