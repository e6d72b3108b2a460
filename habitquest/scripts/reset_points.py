# habitquest/scripts/reset_points.py
# Sets pts = 0 on every user document. Run: python -m habitquest.scripts.reset_points
import asyncio
import logging

from habitquest.config import load_settings
from habitquest.controllers.points_controller import reset_all_points
from habitquest.db.mongo import Stores

logger = logging.getLogger("habitquest.scripts.reset_points")


async def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    stores = Stores.from_settings(settings)
    try:
        modified = await reset_all_points(stores)
        logger.info("Updated %d users, set pts = 0", modified)
    finally:
        stores.close()

if __name__ == "__main__":
    asyncio.run(main())
