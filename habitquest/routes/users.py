# habitquest/routes/users.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..controllers import points_controller, user_controller
from ..db.mongo import Stores, get_stores
from ..schemas.points_schema import PointsIncrementRequest, PointsIncrementResponse
from ..schemas.user_schema import CompletedDateRequest, ProfileSyncRequest, UserResponse

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("", response_model=UserResponse, summary="Create or update a profile (repairs stale registrations)")
async def sync_profile_route(data: ProfileSyncRequest, stores: Stores = Depends(get_stores)):
    return await user_controller.sync_profile(stores, data)


@router.get("", response_model=List[UserResponse], summary="List all profiles")
async def list_users_route(stores: Stores = Depends(get_stores)):
    return await user_controller.list_users(stores)


@router.get("/{telegram_id}", response_model=UserResponse, summary="Get one profile by telegram id")
async def get_user_route(telegram_id: str, stores: Stores = Depends(get_stores)):
    return await user_controller.get_user(stores, telegram_id)


@router.post("/{telegram_id}/completed-dates", response_model=UserResponse, summary="Append a completed date")
async def add_completed_date_route(
    telegram_id: str,
    data: CompletedDateRequest,
    stores: Stores = Depends(get_stores),
):
    return await user_controller.add_completed_date(stores, telegram_id, data)


@router.get("/{telegram_id}/completed-dates", response_model=List[str], summary="List completed dates")
async def get_completed_dates_route(telegram_id: str, stores: Stores = Depends(get_stores)):
    return await user_controller.get_completed_dates(stores, telegram_id)


@router.post("/{user_id}/pts/increment", response_model=PointsIncrementResponse, summary="Atomically add points")
async def increment_points_route(
    user_id: str,
    data: Optional[PointsIncrementRequest] = None,
    stores: Stores = Depends(get_stores),
):
    amount = data.amount if data is not None else 1
    return await points_controller.increment_points(stores, user_id, amount)
