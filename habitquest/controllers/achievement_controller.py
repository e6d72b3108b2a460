# habitquest/controllers/achievement_controller.py
import logging
from typing import List

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..db.mongo import Stores
from ..exceptions import AchievementNotFoundException
from ..models.achievement_model import AchievementModel
from ..schemas.achievement_schema import (
    AchievementInput,
    AchievementResponse,
    AchievementStatusRequest,
    achievement_to_response,
)
from ..services.goal_lifecycle import parse_status

logger = logging.getLogger(__name__)


async def _get_or_create(stores: Stores, user_id: str, item: AchievementInput) -> dict:
    """
    One record per (user, title). A second submission of the same title gets
    the stored record back untouched, even if the other fields differ.
    """
    existing = await stores.achievements.find_one({"user_id": user_id, "title": item.title})
    if existing:
        return existing

    doc = AchievementModel(user_id=user_id, **item.model_dump()).model_dump(by_alias=True, exclude_none=True)
    try:
        result = await stores.achievements.insert_one(doc)
    except DuplicateKeyError:
        # another request inserted the same title in between
        return await stores.achievements.find_one({"user_id": user_id, "title": item.title})

    doc["_id"] = result.inserted_id
    logger.info("Achievement '%s' created for %s", item.title, user_id)
    return doc


async def upsert_achievements(stores: Stores, user_id: str, items: List[AchievementInput]) -> List[AchievementResponse]:
    user_id = str(user_id)
    return [achievement_to_response(await _get_or_create(stores, user_id, item)) for item in items]


async def list_achievements(stores: Stores, user_id: str) -> List[AchievementResponse]:
    return [
        achievement_to_response(a)
        async for a in stores.achievements.find({"user_id": str(user_id)})
    ]


async def update_achievement_status(
    stores: Stores,
    user_id: str,
    achievement_id: str,
    data: AchievementStatusRequest,
) -> AchievementResponse:
    status = parse_status(data.status, field="status")

    # a malformed id can't match anything
    if not ObjectId.is_valid(achievement_id):
        raise AchievementNotFoundException(achievement_id)

    updated = await stores.achievements.find_one_and_update(
        {"_id": ObjectId(achievement_id), "user_id": str(user_id)},
        {"$set": {"status": status.value}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise AchievementNotFoundException(achievement_id)
    return achievement_to_response(updated)
