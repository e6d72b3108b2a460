# habitquest/models/goal_model.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class LifecycleStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def goal_key(user_id: str, goal_id: str) -> str:
    """Storage id of a goal: client ids are only unique per user."""
    return f"{user_id}_{goal_id}"


class GoalModel(BaseModel):
    id: str = Field(alias="_id")     # "{user_id}_{goal_id}"
    goal_id: str                     # id chosen by the client
    user_id: str
    title: str
    points: int
    description: str
    status: LifecycleStatus = LifecycleStatus.NOT_STARTED
    progress: int = 0
    start_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
        "extra": "ignore",
    }
