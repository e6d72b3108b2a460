# habitquest/routes/goals.py
from typing import List

from fastapi import APIRouter, Depends

from ..controllers import goal_controller
from ..db.mongo import Stores, get_stores
from ..schemas.goal_schema import (
    GoalResponse,
    InitializeGoalsRequest,
    MessageResponse,
    StatusUpdateRequest,
)

router = APIRouter(prefix="/api", tags=["Goals"])


@router.get("/goals/{user_id}", response_model=List[GoalResponse], summary="List goals of a user")
async def list_goals_route(user_id: str, stores: Stores = Depends(get_stores)):
    return await goal_controller.list_goals(stores, user_id)


@router.post("/initialize-goals/{user_id}", response_model=MessageResponse, summary="Bulk upsert goals")
async def initialize_goals_route(
    user_id: str,
    data: InitializeGoalsRequest,
    stores: Stores = Depends(get_stores),
):
    return await goal_controller.initialize_goals(stores, user_id, data)


@router.put("/goals/{user_id}/{goal_id}", response_model=GoalResponse, summary="Move a goal to a new status")
async def update_goal_status_route(
    user_id: str,
    goal_id: str,
    data: StatusUpdateRequest,
    stores: Stores = Depends(get_stores),
):
    return await goal_controller.update_goal_status(stores, user_id, goal_id, data.new_status)


# Polled by the mini-app; reverts timed-out goals before returning them
@router.post("/check-completion/{user_id}", response_model=List[GoalResponse], summary="Expire stale goals")
async def check_completion_route(user_id: str, stores: Stores = Depends(get_stores)):
    return await goal_controller.check_completion(stores, user_id)
