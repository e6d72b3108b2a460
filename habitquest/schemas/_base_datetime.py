from datetime import datetime, timezone

from pydantic import PlainSerializer
from typing_extensions import Annotated

_DATETIME_FMT = "%Y-%m-%dT%H:%M:%S.%f"


def _to_utc_iso(v: datetime) -> str:
    # naive values from Mongo are UTC; emit millisecond precision with "Z"
    if v.tzinfo is not None:
        v = v.astimezone(timezone.utc)
    return v.replace(tzinfo=None).strftime(_DATETIME_FMT)[:-3] + "Z"


# Serialized as YYYY-MM-DDTHH:mm:ss.SSSZ, the format the mini-app parses with `new Date()`
UtcDatetime = Annotated[datetime, PlainSerializer(_to_utc_iso, return_type=str)]
