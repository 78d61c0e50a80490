"""
FII details store: persists fund identities and answers code look-ups.

Wraps an injected ``AsyncSession``.  A store built with ``None`` is a valid,
degraded instance: every operation raises :class:`StoreUnset` before touching
the database, which lets callers wire the store up when persistence is
disabled.

Storage errors are never wrapped or retried; they reach the caller as the
original SQLAlchemy exception.

Not-found handling differs between the two look-ups on purpose:
``resolve_cnpj`` returns ``""`` while ``get_fund_details`` raises
:class:`NotFound`.
"""

import logging
from typing import Optional, Union

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from fii_details.core.exceptions import (
    DeserializationFailed,
    InvalidIdentity,
    NotFound,
    StoreUnset,
)
from fii_details.repositories.fii_detail_repo import FiiDetailRepository
from fii_details.schemas.fund_code import FundCode
from fii_details.schemas.fund_details import FundDetails

logger = logging.getLogger(__name__)


class FundDetailStore:
    """Store and look up :class:`FundDetails` keyed by CNPJ."""

    def __init__(self, db: Optional[AsyncSession]):
        self._repo = FiiDetailRepository(db) if db is not None else None
        self._schema_ready = False

    def _require_repo(self) -> FiiDetailRepository:
        if self._repo is None:
            raise StoreUnset()
        return self._repo

    async def _ensure_schema(self, repo: FiiDetailRepository) -> None:
        if self._schema_ready:
            return
        await repo.ensure_table()
        self._schema_ready = True

    # ── Commands ──

    async def store_fund_details(self, raw_payload: Union[bytes, str]) -> None:
        """
        Parse a feed payload and persist its CNPJ, acronym and trading code.

        A payload whose CNPJ is already stored is silently ignored.

        Raises :class:`StoreUnset`, :class:`DeserializationFailed` or
        :class:`InvalidIdentity`; storage errors propagate unchanged.
        """
        repo = self._require_repo()
        await self._ensure_schema(repo)

        try:
            details = FundDetails.model_validate_json(raw_payload)
        except ValidationError as exc:
            logger.warning("Rejected FII payload: %d validation error(s)", exc.error_count())
            raise DeserializationFailed(exc) from exc

        record = details.trimmed().to_record()
        if not record.cnpj:
            logger.warning("Rejected FII payload with empty CNPJ (acronym=%r)", record.acronym)
            raise InvalidIdentity(record.cnpj)

        if await repo.insert_ignore(record):
            logger.info("Stored FII details %r", record, extra={"cnpj": record.cnpj})
        else:
            logger.debug("FII details for CNPJ %s already stored", record.cnpj)

    # ── Queries ──

    async def resolve_cnpj(self, code: str) -> str:
        """
        Return the CNPJ of the fund with the given acronym or trading code.

        Returns ``""`` when no fund matches.
        """
        repo = self._require_repo()
        fund_code = FundCode.parse(code)

        cnpj = await repo.find_cnpj_by_code(fund_code)
        if cnpj is None:
            logger.debug(
                "No CNPJ for %s %s", fund_code.kind.value, fund_code, extra={"code": code}
            )
            return ""
        return cnpj

    async def get_fund_details(self, code: str) -> FundDetails:
        """
        Return the stored identity of the fund with the given code.

        The result is a partial :class:`FundDetails`: only CNPJ, acronym and
        trading code are populated.

        Raises :class:`NotFound` if no fund matches.
        """
        repo = self._require_repo()
        fund_code = FundCode.parse(code)

        record = await repo.find_by_code(fund_code)
        if record is None:
            raise NotFound(code)
        return FundDetails.from_record(record)
