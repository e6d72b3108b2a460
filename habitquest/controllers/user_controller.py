# habitquest/controllers/user_controller.py
import logging
from typing import List

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..db.mongo import Stores
from ..exceptions import UserNotFoundException, ValidationException
from ..models.user_model import UserModel
from ..schemas.user_schema import (
    CompletedDateRequest,
    ProfileSyncRequest,
    UserResponse,
    user_to_response,
)
from ..utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------

async def _find_user(stores: Stores, telegram_id: str) -> dict:
    user = await stores.users.find_one({"telegram_id": str(telegram_id)})
    if not user:
        raise UserNotFoundException(telegram_id)
    return user


async def _create_user(stores: Stores, data: ProfileSyncRequest) -> dict:
    doc = UserModel(
        telegram_id=data.telegram_id,
        first_name=data.first_name,
        username=data.username,
        photo_url=data.photo_url,
        pts=0,
        registered_at=now_utc(),
        completed_dates=[],
    ).model_dump(by_alias=True, exclude_none=True)
    result = await stores.users.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


def needs_reconciliation(user: dict) -> bool:
    """Only a missing registration timestamp marks an abandoned registration."""
    return user.get("registered_at") is None


# ---------------------------
# Profile sync / reconciliation
# ---------------------------

async def reconcile_stale_registration(stores: Stores, user: dict, data: ProfileSyncRequest) -> dict:
    """
    Destructive repair for a profile whose registration never finished:
    drop the user's achievements and the user document, then register afresh.
    """
    if not needs_reconciliation(user):
        raise ValueError("reconcile_stale_registration called on a registered user")

    telegram_id = str(user["telegram_id"])
    # Clients may have filed achievements under either id
    removed = await stores.achievements.delete_many(
        {"user_id": {"$in": [telegram_id, str(user["_id"])]}}
    )
    await stores.users.delete_one({"_id": user["_id"]})
    logger.warning(
        "Stale registration for %s repaired: removed user %s and %d achievements",
        telegram_id, user["_id"], removed.deleted_count,
    )
    return await _create_user(stores, data)


async def sync_profile(stores: Stores, data: ProfileSyncRequest) -> UserResponse:
    user = await stores.users.find_one({"telegram_id": data.telegram_id})

    if not user:
        try:
            user = await _create_user(stores, data)
            logger.info("Registered user %s", data.telegram_id)
        except DuplicateKeyError:
            # another sync registered the same telegram id in between
            user = await _find_user(stores, data.telegram_id)
    elif needs_reconciliation(user):
        user = await reconcile_stale_registration(stores, user, data)
    else:
        changes = data.model_dump(include={"first_name", "username", "photo_url"}, exclude_none=True)
        if changes:
            user = await stores.users.find_one_and_update(
                {"_id": user["_id"]},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )

    return user_to_response(user)


# ---------------------------
# Reads
# ---------------------------

async def list_users(stores: Stores) -> List[UserResponse]:
    return [user_to_response(u) async for u in stores.users.find()]


async def get_user(stores: Stores, telegram_id: str) -> UserResponse:
    return user_to_response(await _find_user(stores, telegram_id))


# ---------------------------
# Completed dates
# ---------------------------

async def add_completed_date(stores: Stores, telegram_id: str, data: CompletedDateRequest) -> UserResponse:
    day = (data.date or "").strip()
    if not day:
        raise ValidationException("date", "date is required")

    user = await stores.users.find_one_and_update(
        {"telegram_id": str(telegram_id)},
        {"$push": {"completed_dates": day}},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise UserNotFoundException(telegram_id)
    return user_to_response(user)


async def get_completed_dates(stores: Stores, telegram_id: str) -> List[str]:
    user = await _find_user(stores, telegram_id)
    return list(user.get("completed_dates") or [])
