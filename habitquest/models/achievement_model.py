# habitquest/models/achievement_model.py
from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from .goal_model import LifecycleStatus
from .user_model import PyObjectId


class AchievementModel(BaseModel):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    user_id: str
    title: str                              # unique per user
    description: Optional[str] = None
    requirement: Optional[str] = None       # human readable, e.g. "Complete 5 goals"
    status: LifecycleStatus = LifecycleStatus.NOT_STARTED
    image: Optional[str] = None
    points: int = 0
    type: Optional[str] = None
    goal_ids: List[str] = []
    target: Optional[float] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
        "use_enum_values": True,
        "json_encoders": {ObjectId: str},
    }
