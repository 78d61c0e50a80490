"""
Shared pytest fixtures for unit tests.

All tests run with ``USE_SQLITE=true``.  Store tests use a real in-memory
``sqlite+aiosqlite`` database (one per test) so the SQL is exercised end to
end; tests that must prove "no I/O" use a mocked ``AsyncSession`` instead.
"""

import json
import os
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

# Must be set before any fii_details module reads Settings.
os.environ.setdefault("USE_SQLITE", "true")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fii_details.db.session import build_sessionmaker  # noqa: E402
from fii_details.services.fund_detail_store import FundDetailStore  # noqa: E402

# ────────────────────────────────────────────────────────────────────────────
# Factory helpers: build feed payloads with sensible defaults
# ────────────────────────────────────────────────────────────────────────────

CNPJ = "12.345.678/0001-90"
ACRONYM = "ABCD"
TRADING_CODE = "ABCD11"


def make_detail_fund(**overrides: Any) -> Dict[str, Any]:
    """Build a ``detailFund`` JSON object as published by the exchange feed."""
    detail_fund: Dict[str, Any] = {
        "acronym": ACRONYM,
        "tradingName": "FII ABCD",
        "tradingCode": TRADING_CODE,
        "tradingCodeOthers": "",
        "cnpj": CNPJ,
        "classification": "",
        "webSite": "www.abcd-fii.com.br",
        "fundAddress": "AV PAULISTA, 1000",
        "fundPhoneNumberDDD": "11",
        "fundPhoneNumber": "30000000",
        "fundPhoneNumberFax": "",
        "positionManager": "",
        "managerName": "JOAO DA SILVA",
        "companyAddress": "AV PAULISTA, 1000",
        "companyPhoneNumberDDD": "11",
        "companyPhoneNumber": "30000001",
        "companyPhoneNumberFax": "",
        "companyEmail": "ri@abcd-fii.com.br",
        "companyName": "ABCD ADMINISTRADORA LTDA",
        "quotaCount": "1000000",
        "quotaDateApproved": "01/02/2020",
        "codes": ["ABCD11", "ABCD12"],
        "codesOther": None,
        "segment": None,
    }
    detail_fund.update(overrides)
    return detail_fund


def make_share_holder(**overrides: Any) -> Dict[str, Any]:
    """Build a ``shareHolder`` JSON object."""
    share_holder: Dict[str, Any] = {
        "shareHolderName": "BANCO ESCRITURADOR S.A.",
        "shareHolderAddress": "RUA DIREITA, 1",
        "shareHolderPhoneNumberDDD": "11",
        "shareHolderPhoneNumber": "40000000",
        "shareHolderFaxNumber": "",
        "shareHolderEmail": "escrituracao@banco.com.br",
    }
    share_holder.update(overrides)
    return share_holder


def make_payload(**detail_fund_overrides: Any) -> bytes:
    """Serialise a full feed payload to bytes, overriding ``detailFund`` fields."""
    return json.dumps(
        {
            "detailFund": make_detail_fund(**detail_fund_overrides),
            "shareHolder": make_share_holder(),
        }
    ).encode("utf-8")


# ────────────────────────────────────────────────────────────────────────────
# Pytest fixtures
# ────────────────────────────────────────────────────────────────────────────


@pytest_asyncio.fixture()
async def db_session():
    """An AsyncSession on a fresh, private in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    session_factory = build_sessionmaker(engine)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture()
def store(db_session):
    """FundDetailStore wired to the in-memory database."""
    return FundDetailStore(db_session)


@pytest.fixture()
def unset_store():
    """FundDetailStore built without a session (persistence disabled)."""
    return FundDetailStore(None)


@pytest.fixture()
def mock_db():
    """A mocked AsyncSession that records every call without doing I/O."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    session.connection = AsyncMock(return_value=AsyncMock())
    session.get = AsyncMock()
    session.get_bind = MagicMock()
    session.get_bind.return_value.dialect.name = "sqlite"
    return session
