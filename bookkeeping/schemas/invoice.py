"""
Pydantic schemas for sales invoices.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.models.enums import InvoiceStatus
from bookkeeping.schemas.company import TRN_PATTERN


class InvoiceLineCreate(BaseModel):
    description: str = Field(min_length=1, max_length=255)
    quantity: Decimal = Field(gt=0, decimal_places=4)
    unit_price: Decimal = Field(ge=0, decimal_places=2)
    vat_rate: Decimal | None = Field(default=None, ge=0, le=1)


class InvoiceCreate(BaseModel):
    number: str = Field(min_length=1, max_length=50)
    customer_name: str = Field(min_length=1, max_length=200)
    customer_trn: str | None = Field(default=None, pattern=TRN_PATTERN)
    invoice_date: date
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    lines: list[InvoiceLineCreate] = Field(min_length=1)


class InvoiceLineResponse(BaseModel):
    id: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal

    model_config = {"from_attributes": True}


class InvoiceResponse(BaseModel):
    id: int
    company_id: int
    number: str
    customer_name: str
    customer_trn: str | None
    invoice_date: date
    currency: str
    subtotal: Decimal
    vat_amount: Decimal
    total: Decimal
    status: InvoiceStatus
    created_at: datetime
    lines: list[InvoiceLineResponse]

    model_config = {"from_attributes": True}


class InvoiceStatusUpdate(BaseModel):
    """
    Move an invoice to a new status.

    Marking an invoice paid records the payment against
    payment_account_id, a cash or bank account.
    """
    status: InvoiceStatus
    payment_account_id: int | None = None
    payment_date: date | None = None


class PostInvoiceResponse(BaseModel):
    invoice: InvoiceResponse
    posted_entry_ids: list[int]
