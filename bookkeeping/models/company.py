"""
Company model.

A company is the tenant of the bookkeeping system. Accounts,
journal entries, invoices and activity logs all belong to
exactly one company.
"""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base


class Company(Base):
    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    base_currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="AED"
    )
    locale: Mapped[str] = mapped_column(String(2), nullable=False, default="en")
    # UAE Tax Registration Number
    trn: Mapped[str | None] = mapped_column(String(15), nullable=True)
    vat_filing_frequency: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    accounts: Mapped[list["Account"]] = relationship(
        back_populates="company", order_by="Account.code"
    )

    def __repr__(self) -> str:
        return f"<Company {self.name}>"
