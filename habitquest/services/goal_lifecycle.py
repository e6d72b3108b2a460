"""
Goal lifecycle engine.

Owns the status state machine of a single goal and the sweep that reverts
stale states:

    not_started -> in_progress -> completed
    in_progress --(30s)--> not_started
    completed   --(20s)--> not_started

The timeouts are a gamification timer, not an SLA, so they are fixed here
rather than stored per goal.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ReturnDocument

from ..db.mongo import Stores
from ..exceptions import GoalNotFoundException, ValidationException
from ..models.goal_model import LifecycleStatus, goal_key
from ..utils.datetime_utils import now_utc, seconds_since

logger = logging.getLogger(__name__)

IN_PROGRESS_TIMEOUT = timedelta(seconds=30)
COMPLETED_TIMEOUT = timedelta(seconds=20)

RESET_FIELDS: Dict[str, Any] = {
    "status": LifecycleStatus.NOT_STARTED.value,
    "start_date": None,
    "completion_date": None,
}


def parse_status(value: Any, field: str = "newStatus") -> LifecycleStatus:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationException(field, f"{field} is required")
    try:
        return LifecycleStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in LifecycleStatus)
        raise ValidationException(field, f"'{value}' is not one of: {allowed}")


def transition_update(goal: dict, status: LifecycleStatus, now: datetime) -> Dict[str, Any]:
    """
    Build the Mongo update document moving `goal` into `status`.

    - in_progress: start_date only set when missing (re-entry keeps the timer);
      a leftover completion_date is cleared
    - completed: completion_date = now, progress += 1 on every call
    - not_started: both timestamps cleared
    """
    if status is LifecycleStatus.IN_PROGRESS:
        return {"$set": {
            "status": status.value,
            "start_date": goal.get("start_date") or now,
            "completion_date": None,
        }}

    if status is LifecycleStatus.COMPLETED:
        return {
            "$set": {"status": status.value, "completion_date": now},
            "$inc": {"progress": 1},
        }

    return {"$set": dict(RESET_FIELDS)}


def normalize_timestamps(
    status: LifecycleStatus,
    start_date: Optional[datetime],
    completion_date: Optional[datetime],
    now: datetime,
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Timestamp pair for client-supplied goals so the stored record agrees with its status."""
    if status is LifecycleStatus.IN_PROGRESS:
        return start_date or now, None
    if status is LifecycleStatus.COMPLETED:
        return start_date, completion_date or now
    return None, None


def is_stale(goal: dict, now: datetime) -> bool:
    status = goal.get("status")
    if status == LifecycleStatus.IN_PROGRESS.value and goal.get("start_date"):
        return seconds_since(goal["start_date"], now) >= IN_PROGRESS_TIMEOUT.total_seconds()
    if status == LifecycleStatus.COMPLETED.value and goal.get("completion_date"):
        return seconds_since(goal["completion_date"], now) >= COMPLETED_TIMEOUT.total_seconds()
    return False


async def set_status(
    stores: Stores,
    user_id: str,
    goal_id: str,
    new_status: Any,
    now: Optional[datetime] = None,
) -> dict:
    status = parse_status(new_status)
    now = now or now_utc()

    # Ownership: a goal of another user is indistinguishable from a missing one
    query = {"_id": goal_key(user_id, goal_id), "user_id": str(user_id)}
    goal = await stores.goals.find_one(query)
    if not goal:
        raise GoalNotFoundException(goal_id)

    updated = await stores.goals.find_one_and_update(
        query,
        transition_update(goal, status, now),
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise GoalNotFoundException(goal_id)

    logger.info("Goal %s of user %s: %s -> %s", goal["_id"], user_id, goal.get("status"), status.value)
    return updated


async def sweep(stores: Stores, user_id: str, now: Optional[datetime] = None) -> List[dict]:
    """
    Revert every stale goal of `user_id` to not_started.

    Each revert is written on its own before returning; the result holds
    every goal of the user, reverted or not.
    """
    now = now or now_utc()
    goals = [g async for g in stores.goals.find({"user_id": str(user_id)})]

    result: List[dict] = []
    for goal in goals:
        if is_stale(goal, now):
            await stores.goals.update_one({"_id": goal["_id"]}, {"$set": dict(RESET_FIELDS)})
            logger.info("Goal %s of user %s expired from %s", goal["_id"], user_id, goal.get("status"))
            goal = {**goal, **RESET_FIELDS}
        result.append(goal)
    return result
