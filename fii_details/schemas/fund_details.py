"""
Pydantic schemas for the FII details payload.

``FundDetails`` mirrors the JSON document published by the exchange feed
(``detailFund`` + ``shareHolder``).  It is kept separate from the
``FiiDetail`` table model: only CNPJ, acronym and trading code are persisted,
the remaining fields are parsed and discarded.
"""

from typing import Any, List, get_origin

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from fii_details.models.fii_detail import FiiDetail


class _FeedModel(BaseModel):
    """Common config for feed payload models."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def fold_keys(cls, data: Any) -> Any:
        """
        Read ``null`` as an empty object and match keys case-insensitively.

        When several keys fold to the same field, the last one wins.
        """
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data
        aliases = {
            (field.alias or name).casefold(): field.alias or name
            for name, field in cls.model_fields.items()
        }
        folded = {}
        for key, value in data.items():
            alias = aliases.get(key.casefold()) if isinstance(key, str) else None
            folded[alias or key] = value
        return folded

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any, info: ValidationInfo) -> Any:
        """Treat JSON ``null`` as the empty value of the field's type."""
        if v is not None:
            return v
        annotation = cls.model_fields[info.field_name].annotation
        if annotation is str:
            return ""
        if annotation is list or get_origin(annotation) is list:
            return []
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return {}
        return v


class DetailFund(_FeedModel):
    """Fund identification, contact and quota data."""

    acronym: str = Field(default="", alias="acronym")
    trading_name: str = Field(default="", alias="tradingName")
    trading_code: str = Field(default="", alias="tradingCode")
    trading_code_others: str = Field(default="", alias="tradingCodeOthers")
    cnpj: str = Field(default="", alias="cnpj")
    classification: str = Field(default="", alias="classification")
    web_site: str = Field(default="", alias="webSite")
    fund_address: str = Field(default="", alias="fundAddress")
    fund_phone_number_ddd: str = Field(default="", alias="fundPhoneNumberDDD")
    fund_phone_number: str = Field(default="", alias="fundPhoneNumber")
    fund_phone_number_fax: str = Field(default="", alias="fundPhoneNumberFax")
    position_manager: str = Field(default="", alias="positionManager")
    manager_name: str = Field(default="", alias="managerName")
    company_address: str = Field(default="", alias="companyAddress")
    company_phone_number_ddd: str = Field(default="", alias="companyPhoneNumberDDD")
    company_phone_number: str = Field(default="", alias="companyPhoneNumber")
    company_phone_number_fax: str = Field(default="", alias="companyPhoneNumberFax")
    company_email: str = Field(default="", alias="companyEmail")
    company_name: str = Field(default="", alias="companyName")
    quota_count: str = Field(default="", alias="quotaCount")
    quota_date_approved: str = Field(default="", alias="quotaDateApproved")
    codes: List[str] = Field(default_factory=list, alias="codes")
    # Shape varies between feed versions; kept as raw JSON.
    codes_other: Any = Field(default=None, alias="codesOther")
    segment: Any = Field(default=None, alias="segment")

    @field_validator("codes", mode="before")
    @classmethod
    def null_codes_as_empty(cls, v: Any) -> Any:
        if isinstance(v, list):
            return ["" if item is None else item for item in v]
        return v


class ShareHolder(_FeedModel):
    """Shareholder service contact."""

    share_holder_name: str = Field(default="", alias="shareHolderName")
    share_holder_address: str = Field(default="", alias="shareHolderAddress")
    share_holder_phone_number_ddd: str = Field(default="", alias="shareHolderPhoneNumberDDD")
    share_holder_phone_number: str = Field(default="", alias="shareHolderPhoneNumber")
    share_holder_fax_number: str = Field(default="", alias="shareHolderFaxNumber")
    share_holder_email: str = Field(default="", alias="shareHolderEmail")


class FundDetails(_FeedModel):
    """
    Full FII details document.

    The identity key is ``detail_fund.cnpj``.
    """

    detail_fund: DetailFund = Field(default_factory=DetailFund, alias="detailFund")
    share_holder: ShareHolder = Field(default_factory=ShareHolder, alias="shareHolder")

    def trimmed(self) -> "FundDetails":
        """Return a copy with the persisted fields stripped of surrounding whitespace."""
        fund = self.detail_fund
        return self.model_copy(
            update={
                "detail_fund": fund.model_copy(
                    update={
                        "cnpj": fund.cnpj.strip(),
                        "acronym": fund.acronym.strip(),
                        "trading_code": fund.trading_code.strip(),
                    }
                )
            }
        )

    def to_record(self) -> FiiDetail:
        """Project onto the persisted ``FiiDetail`` row."""
        return FiiDetail(
            cnpj=self.detail_fund.cnpj,
            acronym=self.detail_fund.acronym,
            trading_code=self.detail_fund.trading_code,
        )

    @classmethod
    def from_record(cls, record: FiiDetail) -> "FundDetails":
        """
        Build a partial ``FundDetails`` from a stored row.

        Only CNPJ, acronym and trading code are populated; every other field
        keeps its empty default.
        """
        return cls(
            detail_fund=DetailFund(
                cnpj=record.cnpj,
                acronym=record.acronym,
                trading_code=record.trading_code,
            )
        )
