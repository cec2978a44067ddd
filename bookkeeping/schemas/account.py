"""
Pydantic schemas for chart of accounts operations.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.models.enums import AccountType, VatType, EntrySource, EntryStatus


class AccountCreate(BaseModel):
    code: str = Field(min_length=1, max_length=20)
    name_en: str = Field(min_length=1, max_length=100)
    name_ar: str | None = Field(default=None, max_length=100)
    account_type: AccountType
    vat_type: VatType = VatType.NONE


class AccountUpdate(BaseModel):
    """
    Partial update of an account.

    The account type cannot change once created: existing
    balances would silently flip sign.
    """
    name_en: str | None = Field(default=None, min_length=1, max_length=100)
    name_ar: str | None = Field(default=None, max_length=100)
    vat_type: VatType | None = None
    is_active: bool | None = None


class AccountResponse(BaseModel):
    id: int
    company_id: int
    code: str
    name_en: str
    name_ar: str | None
    account_type: AccountType
    vat_type: VatType
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class LedgerLine(BaseModel):
    """One journal line as seen from a single account."""
    journal_entry_id: int
    journal_line_id: int
    entry_number: str
    entry_date: date
    description: str
    memo: str | None
    source: EntrySource
    status: EntryStatus
    debit: Decimal
    credit: Decimal
    running_balance: Decimal


class AccountLedgerResponse(BaseModel):
    account: AccountResponse
    opening_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal
    closing_balance: Decimal
    total_count: int
    lines: list[LedgerLine]
