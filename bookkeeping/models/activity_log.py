"""
Activity log model.

Records who did what to which record. Together with the
journal itself this forms the audit trail of a company.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base
from bookkeeping.models.enums import ActivityAction


class ActivityLog(Base):
    """
    Immutable record of a user action.

    Activity logs are append-only. You never update or delete
    an activity record.
    """

    __tablename__ = "activity_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int | None] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=True, index=True
    )
    user_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    action: Mapped[ActivityAction] = mapped_column(
        SAEnum(ActivityAction, name="activity_action_enum"),
        nullable=False,
    )
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # JSON-encoded extra context
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
