"""
Database model registry.

Importing this module ensures every table model is registered with
SQLModel's metadata, which ``init_db()`` and ``create_all()`` rely on.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

from fii_details.models.fii_detail import FiiDetail  # noqa: F401

logger = logging.getLogger(__name__)


async def init_db(bind: AsyncEngine) -> None:
    """Create every registered table that does not exist yet."""
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ready: %s", ", ".join(sorted(SQLModel.metadata.tables)))
