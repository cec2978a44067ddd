"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from bookkeeping.models.base import Base
from bookkeeping.models.enums import (
    AccountType,
    VatType,
    EntryStatus,
    EntrySource,
    InvoiceStatus,
    ActivityAction,
)
from bookkeeping.models.company import Company
from bookkeeping.models.account import Account
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.journal_line import JournalLine
from bookkeeping.models.invoice import Invoice, InvoiceLine
from bookkeeping.models.receipt import Receipt
from bookkeeping.models.activity_log import ActivityLog

__all__ = [
    "Base",
    "AccountType",
    "VatType",
    "EntryStatus",
    "EntrySource",
    "InvoiceStatus",
    "ActivityAction",
    "Company",
    "Account",
    "JournalEntry",
    "JournalLine",
    "Invoice",
    "InvoiceLine",
    "Receipt",
    "ActivityLog",
]
