"""
Pydantic schemas for journal entry operations.

Request schemas check the shape of each line. Whether an
entry as a whole balances is checked by the JournalService,
which also re-checks the stored lines when a draft is posted.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import (
    BaseModel, Field, computed_field, field_validator, model_validator,
)

from bookkeeping.models.enums import EntrySource, EntryStatus


# --- Request Schemas ---

class JournalLineCreate(BaseModel):
    """A single line: either a debit or a credit against one account."""
    account_id: int
    debit: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    credit: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    description: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def one_side_only(self) -> "JournalLineCreate":
        if self.debit > 0 and self.credit > 0:
            raise ValueError("a line cannot carry both a debit and a credit")
        if self.debit == 0 and self.credit == 0:
            raise ValueError("a line must carry a debit or a credit")
        return self


class JournalEntryCreate(BaseModel):
    entry_date: date
    memo: str | None = Field(default=None, max_length=500)
    status: EntryStatus = EntryStatus.DRAFT
    source: EntrySource = EntrySource.MANUAL
    source_id: int | None = None
    lines: list[JournalLineCreate] = Field(min_length=2)

    @field_validator("status")
    @classmethod
    def draft_or_posted(cls, v: EntryStatus) -> EntryStatus:
        if v == EntryStatus.REVERSED:
            raise ValueError("new entries must be draft or posted")
        return v

    @field_validator("source")
    @classmethod
    def reversal_source_is_reserved(cls, v: EntrySource) -> EntrySource:
        if v == EntrySource.REVERSAL:
            raise ValueError("reversal entries are created by reversing a posted entry")
        return v


class JournalEntryUpdate(BaseModel):
    """Replaces the date, memo and all lines of a draft."""
    entry_date: date
    memo: str | None = Field(default=None, max_length=500)
    lines: list[JournalLineCreate] = Field(min_length=2)


class ReverseEntryRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)
    entry_date: date | None = None


# --- Response Schemas ---

class JournalLineResponse(BaseModel):
    id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    description: str | None

    model_config = {"from_attributes": True}


class JournalEntryResponse(BaseModel):
    id: int
    company_id: int
    entry_number: str
    entry_date: date
    memo: str | None
    status: EntryStatus
    source: EntrySource
    source_id: int | None
    reversed_entry_id: int | None
    reversal_reason: str | None
    created_by: str | None
    created_at: datetime
    posted_by: str | None
    posted_at: datetime | None
    updated_by: str | None
    updated_at: datetime | None
    lines: list[JournalLineResponse]

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @computed_field
    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))
