"""
Journal entry model.

An entry groups two or more journal lines. Entries start as
drafts, which can be edited or deleted freely. Once posted an
entry is immutable: the only way to undo it is to reverse it,
which creates a new entry with every debit and credit swapped.
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Date, DateTime, ForeignKey, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base
from bookkeeping.models.enums import EntryStatus, EntrySource


class JournalEntry(Base):
    __tablename__ = "journal_entries"
    __table_args__ = (
        UniqueConstraint(
            "company_id", "entry_number", name="uq_journal_entry_company_number"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # JE-YYYYMMDD-NNN, sequential per company and day
    entry_number: Mapped[str] = mapped_column(String(30), nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    memo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[EntryStatus] = mapped_column(
        SAEnum(
            EntryStatus,
            name="entry_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=EntryStatus.DRAFT,
    )
    source: Mapped[EntrySource] = mapped_column(
        SAEnum(
            EntrySource,
            name="entry_source_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=EntrySource.MANUAL,
    )
    source_id: Mapped[int | None] = mapped_column(nullable=True)
    reversed_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=True
    )
    reversal_reason: Mapped[str | None] = mapped_column(
        String(500), nullable=True
    )

    # Audit trail
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    posted_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    posted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    lines: Mapped[list["JournalLine"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.id",
    )
    reversed_entry: Mapped["JournalEntry | None"] = relationship(
        remote_side=[id]
    )

    def __repr__(self) -> str:
        return f"<JournalEntry {self.entry_number} ({self.status.value})>"
