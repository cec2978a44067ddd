"""
Pydantic schemas for the activity log.
"""

from datetime import datetime

from pydantic import BaseModel

from bookkeeping.models.enums import ActivityAction


class ActivityLogResponse(BaseModel):
    id: int
    company_id: int | None
    user_id: str | None
    action: ActivityAction
    entity_type: str
    entity_id: str | None
    description: str
    details: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
