# habitquest/utils/datetime_utils.py
from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_utc_aware(dt: Optional[datetime]) -> Optional[datetime]:
    # Mongo hands back naive datetimes that are already UTC
    if dt is None:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def seconds_since(dt: datetime, now: datetime) -> float:
    return (to_utc_aware(now) - to_utc_aware(dt)).total_seconds()
