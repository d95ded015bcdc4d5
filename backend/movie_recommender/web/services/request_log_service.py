"""
Request Log Service
===================

Append-only log of (preference, recommended movies) pairs.

RequestLog writes one row; RequestLogWriter runs those writes as
background asyncio tasks so the response never waits on the database.
"""

import asyncio
import logging
from typing import List, Set

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from movie_recommender.db.tables import recommendations_table
from movie_recommender.recommender.errors import PersistenceError
from movie_recommender.web.schemas.recommendation import LogEntry

logger = logging.getLogger(__name__)


class RequestLog:
    """
    Durable store for request/response pairs.

    Rows are only ever inserted; ids and timestamps come from the database.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def insert(self, user_input: str, recommended_movies: str) -> None:
        """
        Append one entry.

        Raises:
            PersistenceError: the write failed (not retried)
        """
        try:
            async with self.session_factory() as session:
                try:
                    await session.execute(
                        insert(recommendations_table).values(
                            user_input=user_input,
                            recommended_movies=recommended_movies
                        )
                    )
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except Exception as e:
            # Driver errors (e.g. ConnectionRefusedError from asyncpg) are not SQLAlchemyError
            raise PersistenceError(f"Failed to save recommendation: {e}") from e

        logger.debug(f"Logged recommendation: user_input={user_input!r}")

    async def recent(self, limit: int = 10) -> List[LogEntry]:
        """Newest entries first; for operational scripts, not the API."""
        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    select(recommendations_table)
                    .order_by(recommendations_table.c.id.desc())
                    .limit(limit)
                )
            except SQLAlchemyError as e:
                raise PersistenceError(f"Failed to read recommendations: {e}") from e
            return [LogEntry.model_validate(dict(row)) for row in result.mappings()]


class RequestLogWriter:
    """
    Fire-and-forget front for RequestLog.

    submit() schedules the write and returns at once. Failures are logged
    and counted in `failures`; they never reach the caller.
    """

    def __init__(self, request_log: RequestLog):
        self.request_log = request_log
        self.failures = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, user_input: str, recommended_movies: str) -> asyncio.Task:
        """Schedule one write on the running event loop."""
        task = asyncio.create_task(self._write(user_input, recommended_movies))
        # Hold a reference until done so the task is not garbage-collected
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled write to finish; never raises for a failed write."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _write(self, user_input: str, recommended_movies: str) -> None:
        try:
            await self.request_log.insert(user_input, recommended_movies)
        except Exception as e:
            self.failures += 1
            logger.error(f"❌ Database save failed: {e}")
            return

        logger.info("💾 Saved to database successfully")
