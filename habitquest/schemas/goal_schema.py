# habitquest/schemas/goal_schema.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..models.goal_model import LifecycleStatus
from ._base_datetime import UtcDatetime
from ._common import CamelModel, StrId


class GoalInput(CamelModel):
    id: StrId = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    points: int = Field(..., gt=0)
    status: LifecycleStatus
    description: str = Field(..., min_length=1)
    start_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None


class InitializeGoalsRequest(CamelModel):
    goals_array: List[GoalInput]


class StatusUpdateRequest(CamelModel):
    new_status: Optional[str] = None


class GoalResponse(CamelModel):
    id: str
    goal_id: str
    user_id: str
    title: str
    points: int
    description: str
    status: str
    progress: int = 0
    start_date: Optional[UtcDatetime] = None
    completion_date: Optional[UtcDatetime] = None


class MessageResponse(CamelModel):
    message: str


def goal_to_response(doc: dict) -> GoalResponse:
    return GoalResponse(
        id=str(doc["_id"]),
        goal_id=str(doc.get("goal_id") or doc["_id"]),
        user_id=str(doc["user_id"]),
        title=doc.get("title", ""),
        points=int(doc.get("points", 0) or 0),
        description=doc.get("description", ""),
        status=doc.get("status", LifecycleStatus.NOT_STARTED.value),
        progress=int(doc.get("progress", 0) or 0),
        start_date=doc.get("start_date"),
        completion_date=doc.get("completion_date"),
    )
