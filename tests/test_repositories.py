"""
Tests for the repository layer.

Tests cover:
- ensure_table: idempotent CREATE TABLE IF NOT EXISTS
- insert_ignore: inserted vs ignored, existing row untouched
- find_by_code / find_cnpj_by_code: column dispatch, no match
- OperationalError on commit: rollback + re-raise
- unsupported dialects
"""

import pytest
from sqlalchemy.exc import OperationalError

from fii_details.core.exceptions import UnsupportedDialect
from fii_details.models.fii_detail import FiiDetail
from fii_details.repositories.fii_detail_repo import FiiDetailRepository
from fii_details.schemas.fund_code import FundCode

from .conftest import CNPJ


def _record(**overrides) -> FiiDetail:
    fields = {"cnpj": CNPJ, "acronym": "ABCD", "trading_code": "ABCD11"}
    fields.update(overrides)
    return FiiDetail(**fields)


@pytest.fixture()
def repo(db_session):
    return FiiDetailRepository(db_session)


class TestEnsureTable:
    @pytest.mark.asyncio
    async def test_creates_empty_table(self, repo):
        await repo.ensure_table()
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_idempotent(self, repo):
        await repo.ensure_table()
        await repo.insert_ignore(_record())
        await repo.ensure_table()

        assert await repo.count() == 1


class TestInsertIgnore:
    @pytest.mark.asyncio
    async def test_insert_reports_new_row(self, repo):
        await repo.ensure_table()

        assert await repo.insert_ignore(_record()) is True
        assert await repo.get(CNPJ) is not None

    @pytest.mark.asyncio
    async def test_duplicate_reports_ignored(self, repo):
        await repo.ensure_table()
        await repo.insert_ignore(_record())

        assert await repo.insert_ignore(_record(acronym="WXYZ")) is False

        row = await repo.find_by_code(FundCode.parse("ABCD"))
        assert row is not None
        assert row.cnpj == CNPJ
        assert await repo.find_by_code(FundCode.parse("WXYZ")) is None

    @pytest.mark.asyncio
    async def test_unsupported_dialect(self, mock_db):
        mock_db.get_bind.return_value.dialect.name = "mssql"
        repo = FiiDetailRepository(mock_db)

        with pytest.raises(UnsupportedDialect, match="mssql") as exc_info:
            await repo.insert_ignore(_record())
        assert exc_info.value.dialect == "mssql"
        mock_db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_dialect_rejected_before_ddl(self, mock_db):
        mock_db.get_bind.return_value.dialect.name = "oracle"
        repo = FiiDetailRepository(mock_db)

        with pytest.raises(UnsupportedDialect):
            await repo.ensure_table()
        mock_db.connection.assert_not_awaited()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_postgresql_dialect_supported(self, mock_db):
        mock_db.get_bind.return_value.dialect.name = "postgresql"
        repo = FiiDetailRepository(mock_db)

        await repo.insert_ignore(_record())

        mock_db.execute.assert_awaited_once()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_operational_error_on_commit_rolls_back(self, mock_db):
        mock_db.commit.side_effect = OperationalError("COMMIT", {}, Exception("database is locked"))
        repo = FiiDetailRepository(mock_db)

        with pytest.raises(OperationalError):
            await repo.insert_ignore(_record())
        mock_db.rollback.assert_awaited_once()


class TestFindByCode:
    @pytest.mark.asyncio
    async def test_acronym_and_trading_code(self, repo):
        await repo.ensure_table()
        await repo.insert_ignore(_record())

        by_acronym = await repo.find_by_code(FundCode.parse("ABCD"))
        by_trading_code = await repo.find_by_code(FundCode.parse("ABCD11"))

        assert by_acronym.cnpj == by_trading_code.cnpj == CNPJ

    @pytest.mark.asyncio
    async def test_acronym_not_matched_against_trading_code(self, repo):
        await repo.ensure_table()
        # A 4-character trading code is never looked up by a 4-character code
        await repo.insert_ignore(_record(acronym="ABCD", trading_code="WXYZ"))

        assert await repo.find_cnpj_by_code(FundCode.parse("WXYZ")) is None

    @pytest.mark.asyncio
    async def test_cnpj_by_code(self, repo):
        await repo.ensure_table()
        await repo.insert_ignore(_record())

        assert await repo.find_cnpj_by_code(FundCode.parse("ABCD11")) == CNPJ
        assert await repo.find_cnpj_by_code(FundCode.parse("ZZZZ11")) is None
