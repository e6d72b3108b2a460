# habitquest/controllers/goal_controller.py
import logging
from typing import List

from pymongo.errors import DuplicateKeyError

from ..db.mongo import Stores
from ..exceptions import ValidationException
from ..models.goal_model import GoalModel, goal_key
from ..schemas.goal_schema import (
    GoalResponse,
    InitializeGoalsRequest,
    MessageResponse,
    goal_to_response,
)
from ..services import goal_lifecycle
from ..utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


async def list_goals(stores: Stores, user_id: str) -> List[GoalResponse]:
    return [goal_to_response(g) async for g in stores.goals.find({"user_id": str(user_id)})]


async def initialize_goals(stores: Stores, user_id: str, data: InitializeGoalsRequest) -> MessageResponse:
    """
    Upsert keyed by "{user_id}_{goal_id}". The whole body is validated
    before anything is written; progress survives re-initialization.
    """
    user_id = str(user_id)
    now = now_utc()

    upserted = 0
    for goal in data.goals_array:
        start_date, completion_date = goal_lifecycle.normalize_timestamps(
            goal.status, goal.start_date, goal.completion_date, now
        )
        doc = GoalModel(
            id=goal_key(user_id, goal.id),
            goal_id=goal.id,
            user_id=user_id,
            title=goal.title,
            points=goal.points,
            description=goal.description,
            status=goal.status,
            start_date=start_date,
            completion_date=completion_date,
        )
        try:
            # A goal stored under the same _id for another user never matches
            result = await stores.goals.update_one(
                {"_id": doc.id, "user_id": user_id},
                {
                    "$set": doc.model_dump(exclude={"id", "progress", "created_at"}),
                    "$setOnInsert": {"progress": 0, "created_at": now},
                },
                upsert=True,
            )
        except DuplicateKeyError:
            raise ValidationException("id", f"goal id {goal.id} clashes with a goal of another user")
        if result.upserted_id is not None:
            upserted += 1

    logger.info("Initialized %d goals for %s (%d new)", len(data.goals_array), user_id, upserted)
    return MessageResponse(message="Goals initialized")


async def update_goal_status(stores: Stores, user_id: str, goal_id: str, new_status) -> GoalResponse:
    goal = await goal_lifecycle.set_status(stores, user_id, goal_id, new_status)
    return goal_to_response(goal)


async def check_completion(stores: Stores, user_id: str) -> List[GoalResponse]:
    goals = await goal_lifecycle.sweep(stores, user_id)
    return [goal_to_response(g) for g in goals]
