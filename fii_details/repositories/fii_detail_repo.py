"""
FII detail repository: data-access layer for the ``fii_details`` table.

Adds insert-or-ignore on CNPJ and the two code look-ups on top of the
generic repository.
"""

from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fii_details.core.exceptions import UnsupportedDialect
from fii_details.models.fii_detail import FiiDetail
from fii_details.repositories.base import BaseRepository
from fii_details.schemas.fund_code import FundCode

# Dialect-specific INSERT constructs that support ON CONFLICT DO NOTHING.
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class FiiDetailRepository(BaseRepository[FiiDetail]):
    """Concrete repository for :class:`FiiDetail` entities."""

    def __init__(self, db: AsyncSession):
        super().__init__(FiiDetail, db)

    def _insert(self):
        """Pick the INSERT construct for the session's database dialect."""
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_INSERTS[dialect](self.model)
        except KeyError:
            raise UnsupportedDialect(dialect) from None

    async def ensure_table(self) -> None:
        """Create ``fii_details`` if missing, once the dialect is known to be supported."""
        self._insert()
        await super().ensure_table()

    async def insert_ignore(self, record: FiiDetail) -> bool:
        """
        Insert a row unless one with the same CNPJ already exists.

        Existing rows are left untouched.  Returns ``True`` when a row was
        actually inserted.
        """
        stmt = (
            self._insert()
            .values(
                cnpj=record.cnpj,
                acronym=record.acronym,
                trading_code=record.trading_code,
            )
            .on_conflict_do_nothing(index_elements=["cnpj"])
        )
        result = await self.db.execute(stmt)
        await self._commit("insert")
        return result.rowcount == 1

    async def find_by_code(self, code: FundCode) -> Optional[FiiDetail]:
        """Return the fund whose acronym or trading code matches ``code``."""
        column = getattr(self.model, code.column)
        stmt = select(self.model).where(column == code.value)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def find_cnpj_by_code(self, code: FundCode) -> Optional[str]:
        """Return only the CNPJ of the fund matching ``code``."""
        column = getattr(self.model, code.column)
        stmt = select(self.model.cnpj).where(column == code.value)
        result = await self.db.execute(stmt)
        return result.scalars().first()
