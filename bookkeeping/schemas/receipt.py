"""
Pydantic schemas for expense receipts.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ReceiptCreate(BaseModel):
    merchant: str | None = Field(default=None, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    receipt_date: date
    amount: Decimal = Field(ge=0, decimal_places=2)
    vat_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class PostReceiptRequest(BaseModel):
    """The expense account to debit and the cash or bank account to credit."""
    expense_account_id: int
    payment_account_id: int


class ReceiptResponse(BaseModel):
    id: int
    company_id: int
    merchant: str | None
    category: str | None
    receipt_date: date
    amount: Decimal
    vat_amount: Decimal
    currency: str
    expense_account_id: int | None
    payment_account_id: int | None
    posted: bool
    journal_entry_id: int | None
    created_by: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
