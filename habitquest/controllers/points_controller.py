# habitquest/controllers/points_controller.py
import logging
from typing import Any

from bson import ObjectId
from pymongo import ReturnDocument

from ..db.mongo import Stores
from ..exceptions import UserNotFoundException, ValidationException
from ..schemas.points_schema import PointsIncrementResponse, PointsUserSummary

logger = logging.getLogger(__name__)


def validate_amount(amount: Any) -> int:
    # bool is an int subclass; `true` must not count as 1 point
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationException("amount", "amount must be a positive integer")
    if amount <= 0:
        raise ValidationException("amount", "amount must be a positive integer")
    return amount


def _user_filter(user_id: str) -> dict:
    # The mini-app addresses users by telegram id; the Mongo id works too
    if ObjectId.is_valid(user_id):
        return {"$or": [{"telegram_id": user_id}, {"_id": ObjectId(user_id)}]}
    return {"telegram_id": user_id}


async def increment_points(stores: Stores, user_id: str, amount: Any = 1) -> PointsIncrementResponse:
    user_id = (user_id or "").strip()
    if not user_id:
        raise ValidationException("id", "user id is required")
    amount = validate_amount(amount)

    # Single server-side $inc: concurrent increments never lose updates
    user = await stores.users.find_one_and_update(
        _user_filter(user_id),
        {"$inc": {"pts": amount}},
        projection={"telegram_id": 1, "pts": 1},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise UserNotFoundException(user_id)

    logger.info("User %s +%d pts -> %d", user["telegram_id"], amount, user["pts"])
    return PointsIncrementResponse(
        success=True,
        user=PointsUserSummary(
            id=str(user["_id"]),
            telegram_id=str(user["telegram_id"]),
            pts=int(user["pts"]),
        ),
    )


async def reset_all_points(stores: Stores) -> int:
    result = await stores.users.update_many({}, {"$set": {"pts": 0}})
    return result.modified_count
