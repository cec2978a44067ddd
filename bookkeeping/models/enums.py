"""
Shared enumerations for database models.

Enums are mapped to database enums so that only valid
values can be stored.
"""

import enum


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def is_debit_normal(self) -> bool:
        return self in (AccountType.ASSET, AccountType.EXPENSE)


class VatType(str, enum.Enum):
    """Which side of the VAT return an account feeds."""
    INPUT = "input"
    OUTPUT = "output"
    NONE = "none"


class EntryStatus(str, enum.Enum):
    DRAFT = "draft"
    POSTED = "posted"
    REVERSED = "reversed"


class EntrySource(str, enum.Enum):
    """Where a journal entry came from."""
    MANUAL = "manual"
    INVOICE = "invoice"
    RECEIPT = "receipt"
    PAYMENT = "payment"
    ADJUSTMENT = "adjustment"
    REVERSAL = "reversal"


class InvoiceStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    VOID = "void"


class ActivityAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    POST = "post"
    REVERSE = "reverse"
    SEED = "seed"


# Statuses whose lines have reached the ledger and count towards balances.
LEDGER_STATUSES = (EntryStatus.POSTED, EntryStatus.REVERSED)
