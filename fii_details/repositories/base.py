"""
Generic async repository (Data Access Layer).

Implements the Repository pattern on top of SQLAlchemy's ``AsyncSession``.
Concrete repositories inherit from ``BaseRepository[T]`` and add their own
entity-specific queries.

- Table creation is a single ``CREATE TABLE IF NOT EXISTS`` statement, so two
  first-time callers racing on an empty database both succeed.
- **IntegrityError** is NOT caught here; callers decide what it means.
- **OperationalError** (connection loss, lock timeout) on commit rolls the
  session back and is re-raised, so no dirty transaction leaks.
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.schema import CreateTable
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository for SQLModel entities.

    Parameters
    ----------
    model : Type[ModelType]
        The SQLModel class this repository manages.
    db : AsyncSession
        An active async database session, owned by the caller.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    # ── Internal helpers ──

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except OperationalError:
            await self.db.rollback()
            logger.error("OperationalError during %s for %s", operation, self.model.__name__)
            raise

    # ── Schema ──

    async def ensure_table(self) -> None:
        """Create the model's table if it does not exist yet."""
        conn = await self.db.connection()
        await conn.execute(CreateTable(self.model.__table__, if_not_exists=True))
        await self._commit("create table")

    # ── Queries ──

    async def get(self, id: Any) -> Optional[ModelType]:
        """Fetch a single entity by primary key.  Returns ``None`` if not found."""
        return await self.db.get(self.model, id)

    async def count(self) -> int:
        """Return the total number of entities of this type."""
        stmt = select(func.count()).select_from(self.model)
        result = await self.db.execute(stmt)
        return result.scalar_one()
