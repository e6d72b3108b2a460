# habitquest/db/mongo.py
import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from ..config import Settings

logger = logging.getLogger(__name__)


class Stores:
    """
    Both database handles in one place. Built once at startup, kept on
    app.state and handed to controllers through `get_stores`.

    - profiles database: `users`
    - goals database: `goals`, `achievements`
    """

    def __init__(
        self,
        profiles_client,
        goals_client,
        profile_db_name: str = "habitquest",
        goals_db_name: str = "habitquest_goals",
    ):
        self.profiles_client = profiles_client
        self.goals_client = goals_client

        profiles_db = profiles_client[profile_db_name]
        goals_db = goals_client[goals_db_name]

        # Collections
        self.users = profiles_db["users"]
        self.goals = goals_db["goals"]
        self.achievements = goals_db["achievements"]

    @classmethod
    def from_settings(cls, settings: Settings) -> "Stores":
        profiles_client = AsyncIOMotorClient(settings.mongodb_url)
        if settings.database_url == settings.mongodb_url:
            goals_client = profiles_client
        else:
            goals_client = AsyncIOMotorClient(settings.database_url)
        return cls(
            profiles_client,
            goals_client,
            profile_db_name=settings.profile_db_name,
            goals_db_name=settings.goals_db_name,
        )

    async def ping(self) -> None:
        await self.profiles_client.admin.command("ping")
        logger.info("Profile store connected")
        if self.goals_client is not self.profiles_client:
            await self.goals_client.admin.command("ping")
        logger.info("Goal store connected")

    async def init_indexes(self) -> None:
        # Users: one profile per telegram account
        await self.users.create_index("telegram_id", unique=True)

        # Goals: namespaced _id already unique; keep the pair explicit too
        await self.goals.create_index(
            [("user_id", 1), ("goal_id", 1)],
            unique=True,
            name="user_goal_unique",
        )

        # Achievements: one record per (user, title)
        await self.achievements.create_index(
            [("user_id", 1), ("title", 1)],
            unique=True,
            name="user_title_unique",
        )

    def close(self) -> None:
        self.profiles_client.close()
        if self.goals_client is not self.profiles_client:
            self.goals_client.close()


def get_stores(request: Request) -> Stores:
    stores: Optional[Stores] = getattr(request.app.state, "stores", None)
    if stores is None:
        raise RuntimeError("Stores are not initialized")
    return stores
