"""
Journal entry API endpoints.

The API layer is thin: it handles HTTP concerns (status codes,
response formatting) and delegates all bookkeeping rules to
the JournalService.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bookkeeping.api.deps import get_actor
from bookkeeping.models.base import get_db
from bookkeeping.models.enums import EntrySource, EntryStatus
from bookkeeping.services.journal_service import JournalService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.schemas.journal import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalEntryResponse,
    ReverseEntryRequest,
)

router = APIRouter(prefix="/companies/{company_id}/journal", tags=["Journal"])


@router.get("", response_model=list[JournalEntryResponse])
def list_entries(
    company_id: int,
    status: EntryStatus | None = None,
    source: EntrySource | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    """List journal entries with their lines, newest first."""
    service = JournalService(db)
    try:
        return service.list_entries(
            company_id,
            status=status,
            source=source,
            date_from=date_from,
            date_to=date_to,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=JournalEntryResponse, status_code=201)
def create_entry(
    company_id: int,
    request: JournalEntryCreate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """
    Create a journal entry.

    Debits must equal credits. With status=draft (the default) the
    entry is saved for later editing. With status=posted it becomes
    immutable straight away.
    """
    service = JournalService(db)
    try:
        entry = service.create_entry(company_id, request, actor)
        db.commit()
        return entry
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{entry_id}", response_model=JournalEntryResponse)
def get_entry(
    company_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
):
    service = JournalService(db)
    try:
        return service.get_entry(company_id, entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{entry_id}", response_model=JournalEntryResponse)
def update_entry(
    company_id: int,
    entry_id: int,
    request: JournalEntryUpdate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """Replace a draft's date, memo and lines. Posted entries are rejected."""
    service = JournalService(db)
    try:
        entry = service.update_entry(company_id, entry_id, request, actor)
        db.commit()
        return entry
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{entry_id}/post", response_model=JournalEntryResponse)
def post_entry(
    company_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """Post a draft. Rejected with 400 unless debits equal credits."""
    service = JournalService(db)
    try:
        entry = service.post_entry(company_id, entry_id, actor)
        db.commit()
        return entry
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{entry_id}/reverse",
    response_model=JournalEntryResponse,
    status_code=201,
)
def reverse_entry(
    company_id: int,
    entry_id: int,
    request: ReverseEntryRequest | None = None,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """
    Reverse a posted entry.

    Returns the new reversal entry. The original is marked
    reversed and keeps its lines.
    """
    service = JournalService(db)
    try:
        reversal = service.reverse_entry(
            company_id, entry_id, request or ReverseEntryRequest(), actor
        )
        db.commit()
        return reversal
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{entry_id}", status_code=204)
def delete_entry(
    company_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """Delete a draft. Posted and reversed entries are kept for the audit trail."""
    service = JournalService(db)
    try:
        service.delete_entry(company_id, entry_id, actor)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)
