"""
Activity log endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.models.base import get_db
from bookkeeping.models.company import Company
from bookkeeping.services.activity_service import ActivityService
from bookkeeping.schemas.activity import ActivityLogResponse

router = APIRouter(tags=["Activity"])


@router.get("/activity", response_model=list[ActivityLogResponse])
def list_activity(
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Most recent activity across all companies."""
    return ActivityService(db).list_all(limit)


@router.get(
    "/companies/{company_id}/activity",
    response_model=list[ActivityLogResponse],
)
def list_company_activity(
    company_id: int,
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    if not db.get(Company, company_id):
        raise HTTPException(
            status_code=404, detail=f"Company {company_id} not found"
        )
    return ActivityService(db).list_for_company(company_id, limit)
