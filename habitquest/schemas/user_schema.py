# habitquest/schemas/user_schema.py
from typing import List, Optional

from pydantic import Field

from ._base_datetime import UtcDatetime
from ._common import CamelModel, StrId


class ProfileSyncRequest(CamelModel):
    telegram_id: StrId = Field(..., min_length=1)
    first_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None


class CompletedDateRequest(CamelModel):
    date: Optional[str] = None


class UserResponse(CamelModel):
    id: str
    telegram_id: str
    first_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None
    pts: int = 0
    registered_at: Optional[UtcDatetime] = None
    completed_dates: List[str] = []


def user_to_response(doc: dict) -> UserResponse:
    return UserResponse(
        id=str(doc["_id"]),
        telegram_id=str(doc["telegram_id"]),
        first_name=doc.get("first_name"),
        username=doc.get("username"),
        photo_url=doc.get("photo_url"),
        pts=int(doc.get("pts", 0) or 0),
        registered_at=doc.get("registered_at"),
        completed_dates=list(doc.get("completed_dates") or []),
    )
