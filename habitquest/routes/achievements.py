# habitquest/routes/achievements.py
from typing import List

from fastapi import APIRouter, Depends

from ..controllers import achievement_controller, report_controller
from ..db.mongo import Stores, get_stores
from ..schemas.achievement_schema import (
    AchievementInput,
    AchievementResponse,
    AchievementStatusRequest,
)
from ..schemas.share_schema import ShareRequest, ShareResponse

router = APIRouter(prefix="/api", tags=["Achievements"])


@router.post(
    "/users/{user_id}/achievements",
    response_model=List[AchievementResponse],
    summary="Create achievements; existing titles are returned unchanged",
)
async def upsert_achievements_route(
    user_id: str,
    data: List[AchievementInput],
    stores: Stores = Depends(get_stores),
):
    return await achievement_controller.upsert_achievements(stores, user_id, data)


@router.get("/users/{user_id}/achievements", response_model=List[AchievementResponse], summary="List achievements")
async def list_achievements_route(user_id: str, stores: Stores = Depends(get_stores)):
    return await achievement_controller.list_achievements(stores, user_id)


@router.put(
    "/users/{user_id}/achievements/{achievement_id}/status",
    response_model=AchievementResponse,
    summary="Update achievement status",
)
async def update_achievement_status_route(
    user_id: str,
    achievement_id: str,
    data: AchievementStatusRequest,
    stores: Stores = Depends(get_stores),
):
    return await achievement_controller.update_achievement_status(stores, user_id, achievement_id, data)


@router.post("/achievement/share", response_model=ShareResponse, summary="Render a share card as a data URI")
async def share_achievement_route(data: ShareRequest):
    return report_controller.share_achievement(data)
