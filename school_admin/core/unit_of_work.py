# school_admin/core/unit_of_work.py
"""Transaction boundary shared by every store operation of a request."""
from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Wraps one AsyncSession so services can share a single transaction.

    `transaction()` commits when the block exits cleanly and rolls back on any
    exception. `savepoint()` scopes a nested transaction, used by
    find-or-create to recover from a concurrent insert without losing the
    outer transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["UnitOfWork"]:
        try:
            yield self
            await self.session.commit()
        except Exception:
            logger.warning("Rolling back transaction")
            await self.session.rollback()
            raise

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator["UnitOfWork"]:
        async with self.session.begin_nested():
            yield self
