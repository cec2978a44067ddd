"""
Expense receipt API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.api.deps import get_actor
from bookkeeping.models.base import get_db
from bookkeeping.services.receipt_service import ReceiptService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.schemas.receipt import (
    ReceiptCreate,
    ReceiptResponse,
    PostReceiptRequest,
)

router = APIRouter(prefix="/companies/{company_id}/receipts", tags=["Receipts"])


@router.get("", response_model=list[ReceiptResponse])
def list_receipts(
    company_id: int,
    posted: bool | None = None,
    db: Session = Depends(get_db),
):
    try:
        return ReceiptService(db).list_receipts(company_id, posted)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ReceiptResponse, status_code=201)
def create_receipt(
    company_id: int,
    request: ReceiptCreate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    service = ReceiptService(db)
    try:
        receipt = service.create_receipt(company_id, request, actor)
        db.commit()
        return receipt
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{receipt_id}", response_model=ReceiptResponse)
def get_receipt(
    company_id: int,
    receipt_id: int,
    db: Session = Depends(get_db),
):
    try:
        return ReceiptService(db).get_receipt(company_id, receipt_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{receipt_id}/post", response_model=ReceiptResponse)
def post_receipt(
    company_id: int,
    receipt_id: int,
    request: PostReceiptRequest,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """Post the receipt as an expense entry in the journal."""
    service = ReceiptService(db)
    try:
        receipt = service.post_receipt(company_id, receipt_id, request, actor)
        db.commit()
        return receipt
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
