"""
Schema setup for the request log.

- Connects with async SQLAlchemy
- Creates the recommendations table if it does not exist (idempotent)

Run:
    python -m movie_recommender.db.init_db
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from movie_recommender.db.tables import metadata

logger = logging.getLogger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """Create the request log tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("✅ Database schema ready")


async def main() -> None:
    from movie_recommender.web.utils.database import engine

    try:
        await init_db(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())
