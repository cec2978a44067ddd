"""
Activity service: the application audit trail.

Other services call record() for every mutation they commit.
Records are append-only; there is no update or delete.
"""

import json
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.models.activity_log import ActivityLog
from bookkeeping.models.enums import ActivityAction

logger = logging.getLogger(__name__)


class ActivityService:

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        *,
        action: ActivityAction,
        entity_type: str,
        entity_id,
        description: str,
        company_id: int | None = None,
        user_id: str | None = None,
        details: dict | None = None,
    ) -> ActivityLog:
        log = ActivityLog(
            company_id=company_id,
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            description=description,
            details=json.dumps(details, default=str) if details else None,
        )
        self.db.add(log)
        logger.debug(
            "activity company=%s user=%s %s %s:%s",
            company_id, user_id, action.value, entity_type, entity_id,
        )
        return log

    def list_for_company(self, company_id: int, limit: int = 100) -> list[ActivityLog]:
        logs = self.db.execute(
            select(ActivityLog)
            .where(ActivityLog.company_id == company_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(logs)

    def list_all(self, limit: int = 100) -> list[ActivityLog]:
        logs = self.db.execute(
            select(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(logs)
