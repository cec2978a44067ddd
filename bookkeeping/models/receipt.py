"""
Expense receipt model.

A receipt is captured first and posted later. Posting records
a posted journal entry (source=receipt, source_id=receipt.id)
and links it back through journal_entry_id.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Boolean, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base


class Receipt(Base):
    __tablename__ = "receipts"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    merchant: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    receipt_date: Mapped[date] = mapped_column(Date, nullable=False)
    # Net of VAT
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    vat_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 2), nullable=False, default=Decimal("0.00")
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="AED")

    # Filled in when the receipt is posted
    expense_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True
    )
    payment_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True
    )
    posted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    journal_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=True
    )

    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Receipt {self.merchant} {self.amount} {self.currency}>"
