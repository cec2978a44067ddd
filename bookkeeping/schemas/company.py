"""
Pydantic schemas for company operations.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# UAE Tax Registration Numbers are 15 digits
TRN_PATTERN = r"^\d{15}$"

VatFilingFrequency = Literal["monthly", "quarterly", "annually"]


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    base_currency: str | None = Field(default=None, min_length=3, max_length=3)
    locale: Literal["en", "ar"] = "en"
    trn: str | None = Field(default=None, pattern=TRN_PATTERN)
    vat_filing_frequency: VatFilingFrequency | None = None
    seed_accounts: bool = True


class CompanyUpdate(BaseModel):
    """
    Partial update; omitted fields are left unchanged.

    trn and vat_filing_frequency are cleared by sending null.
    """
    name: str | None = Field(default=None, min_length=1, max_length=200)
    locale: Literal["en", "ar"] | None = None
    trn: str | None = Field(default=None, pattern=TRN_PATTERN)
    vat_filing_frequency: VatFilingFrequency | None = None


class CompanyResponse(BaseModel):
    id: int
    name: str
    base_currency: str
    locale: str
    trn: str | None
    vat_filing_frequency: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
