# habitquest/schemas/achievement_schema.py
from typing import List, Optional

from pydantic import Field

from ..models.goal_model import LifecycleStatus
from ._common import CamelModel, StrId


class AchievementInput(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    requirement: Optional[str] = None
    status: LifecycleStatus = LifecycleStatus.NOT_STARTED
    image: Optional[str] = None
    points: int = 0
    type: Optional[str] = None
    goal_ids: List[StrId] = []
    target: Optional[float] = None


class AchievementStatusRequest(CamelModel):
    status: Optional[str] = None


class AchievementResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    requirement: Optional[str] = None
    status: str
    image: Optional[str] = None
    points: int = 0
    type: Optional[str] = None
    goal_ids: List[str] = []
    target: Optional[float] = None


def achievement_to_response(doc: dict) -> AchievementResponse:
    return AchievementResponse(
        id=str(doc["_id"]),
        user_id=str(doc["user_id"]),
        title=doc["title"],
        description=doc.get("description"),
        requirement=doc.get("requirement"),
        status=doc.get("status", LifecycleStatus.NOT_STARTED.value),
        image=doc.get("image"),
        points=int(doc.get("points", 0) or 0),
        type=doc.get("type"),
        goal_ids=[str(g) for g in (doc.get("goal_ids") or [])],
        target=doc.get("target"),
    )
