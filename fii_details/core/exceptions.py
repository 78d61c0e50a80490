"""
Domain exceptions for the FII details store.

Every error raised on purpose by the store derives from :class:`FundStoreError`
so callers can catch the whole family in one place.  Low-level storage errors
are NOT wrapped: SQLAlchemy exceptions reach the caller as-is, and
``StorageFailure`` is exported as an alias for their common base class.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

# Storage-engine errors (schema creation, insert, query) propagate unwrapped.
StorageFailure = SQLAlchemyError


class FundStoreError(Exception):
    """Base exception for all store-level errors."""

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


class StoreUnset(FundStoreError):
    """The store was built without a database session."""

    def __init__(self) -> None:
        super().__init__(message="database not set")


class DeserializationFailed(FundStoreError):
    """The raw payload could not be parsed into :class:`FundDetails`."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(message=f"invalid FII payload: {cause}")


class InvalidIdentity(FundStoreError):
    """CNPJ is empty once surrounding whitespace is stripped."""

    def __init__(self, cnpj: str):
        self.cnpj = cnpj
        super().__init__(message=f"invalid CNPJ: '{cnpj}'", details={"cnpj": cnpj})


class InvalidCode(FundStoreError):
    """Lookup code is neither an acronym (4 chars) nor a trading code (6 chars)."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(message=f"invalid code '{code}'", details={"code": code})


class NotFound(FundStoreError):
    """No fund row matches the lookup code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(message=f"fund with code '{code}' not found")


class UnsupportedDialect(FundStoreError):
    """The session's database has no insert-or-ignore construct."""

    def __init__(self, dialect: str):
        self.dialect = dialect
        super().__init__(
            message=f"insert-or-ignore is not supported on '{dialect}'",
            details={"dialect": dialect},
        )
