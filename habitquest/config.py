# habitquest/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    mongodb_url: str                 # user profiles
    database_url: str                # goals + achievements
    profile_db_name: str = "habitquest"
    goals_db_name: str = "habitquest_goals"
    port: int = 5002
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Read configuration from the environment (and `.env` if present).

    Raises RuntimeError when MONGODB_URL is missing; the caller treats that as
    fatal at startup. DATABASE_URL falls back to MONGODB_URL so a single
    cluster can host both databases.
    """
    load_dotenv(env_file)

    mongodb_url = os.getenv("MONGODB_URL")
    if not mongodb_url:
        raise RuntimeError("MONGODB_URL env var is not set")

    return Settings(
        mongodb_url=mongodb_url,
        database_url=os.getenv("DATABASE_URL") or mongodb_url,
        profile_db_name=os.getenv("PROFILE_DB_NAME", "habitquest"),
        goals_db_name=os.getenv("GOALS_DB_NAME", "habitquest_goals"),
        port=int(os.getenv("PORT", "5002")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
