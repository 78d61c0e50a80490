"""
Tagged identifier for FII lookups.

A lookup code is either a fund acronym (4 characters, e.g. ``ABCD``) or a
trading code (6 characters, e.g. ``ABCD11``).  Length is the only
discriminator; codes are not normalised.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from fii_details.core.exceptions import InvalidCode


class CodeKind(str, Enum):
    """Kinds of lookup code, valued by the column they are matched against."""

    ACRONYM = "acronym"
    TRADING_CODE = "trading_code"


_KIND_BY_LENGTH: dict[int, CodeKind] = {
    4: CodeKind.ACRONYM,
    6: CodeKind.TRADING_CODE,
}


class FundCode(BaseModel):
    """A lookup code together with the kind its length implies."""

    model_config = ConfigDict(frozen=True)

    kind: CodeKind
    value: str

    @property
    def column(self) -> str:
        """Name of the ``fii_details`` column this code is matched against."""
        return self.kind.value

    @classmethod
    def parse(cls, code: str) -> "FundCode":
        """
        Classify ``code`` by length.

        Raises :class:`InvalidCode` for any length other than 4 or 6.
        """
        kind = _KIND_BY_LENGTH.get(len(code))
        if kind is None:
            raise InvalidCode(code)
        return cls(kind=kind, value=code)

    def __str__(self) -> str:
        return self.value
