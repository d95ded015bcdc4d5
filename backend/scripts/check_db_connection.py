"""
Database check script
=====================

Connects to the request log database, makes sure the schema exists and
prints the most recent recommendations.

Usage:
    python backend/scripts/check_db_connection.py [LIMIT]
"""

import asyncio
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from movie_recommender.db.init_db import init_db
from movie_recommender.recommender.errors import PersistenceError
from movie_recommender.web.services.request_log_service import RequestLog
from movie_recommender.web.utils.database import AsyncSessionLocal, engine, mask_url


async def check_connection(limit: int) -> bool:
    print("=" * 60)
    print("DATABASE CHECK")
    print("=" * 60)
    print(f"\nURL: {mask_url(str(engine.url))}")

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("✅ Connection OK")

        await init_db(engine)
        entries = await RequestLog(AsyncSessionLocal).recent(limit=limit)
    except (OSError, SQLAlchemyError, PersistenceError) as e:
        print(f"❌ ERROR: {e}")
        return False
    finally:
        await engine.dispose()

    print(f"\nLast {len(entries)} recommendations:")
    for entry in entries:
        print(f"  #{entry.id} [{entry.timestamp}] {entry.user_input!r}")
        print(f"      -> {entry.recommended_movies}")
    return True


if __name__ == "__main__":
    limit = int(sys.argv[1]) if len(sys.argv) > 1 else 10
    ok = asyncio.run(check_connection(limit))
    sys.exit(0 if ok else 1)
