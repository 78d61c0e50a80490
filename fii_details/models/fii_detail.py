"""
FII detail domain model.

The persisted projection of a fund payload, stored in the ``fii_details``
table.  Only the three identity fields survive; everything else in the
external payload is parsed and dropped.
"""

from sqlmodel import Field, SQLModel


class FiiDetail(SQLModel, table=True):
    """
    SQLModel / SQLAlchemy table definition for FII details.

    ``cnpj`` is the primary key: its uniqueness is what lets
    ``INSERT ... ON CONFLICT DO NOTHING`` ignore repeated stores.
    """

    __tablename__ = "fii_details"  # type: ignore[assignment]

    cnpj: str = Field(primary_key=True)
    acronym: str = Field(default="")
    trading_code: str = Field(default="")

    def __repr__(self) -> str:
        return (
            f"<FiiDetail cnpj='{self.cnpj}' acronym='{self.acronym}' "
            f"trading_code='{self.trading_code}'>"
        )
