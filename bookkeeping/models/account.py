"""
Account model (chart of accounts).

Every amount in the journal is posted against one of these
accounts. Accounts are scoped to a company and identified
within it by their code.
"""

from datetime import datetime

from sqlalchemy import (
    String, Boolean, DateTime, ForeignKey, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base
from bookkeeping.models.enums import AccountType, VatType


class Account(Base):
    """
    A single account in a company's chart of accounts.

    An account that has journal lines is never deleted, only
    deactivated via is_active=False.
    """

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("company_id", "code", name="uq_account_company_code"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    code: Mapped[str] = mapped_column(String(20), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), nullable=False)
    name_ar: Mapped[str | None] = mapped_column(String(100), nullable=True)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum"),
        nullable=False,
    )
    vat_type: Mapped[VatType] = mapped_column(
        SAEnum(VatType, name="vat_type_enum"),
        nullable=False,
        default=VatType.NONE,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    company: Mapped["Company"] = relationship(back_populates="accounts")
    lines: Mapped[list["JournalLine"]] = relationship(back_populates="account")

    def __repr__(self) -> str:
        return f"<Account {self.code} ({self.account_type.value})>"
