"""
Sales invoice API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.api.deps import get_actor
from bookkeeping.models.base import get_db
from bookkeeping.services.invoice_service import InvoiceService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.schemas.invoice import (
    InvoiceCreate,
    InvoiceResponse,
    InvoiceStatusUpdate,
    PostInvoiceResponse,
)

router = APIRouter(prefix="/companies/{company_id}/invoices", tags=["Invoices"])


@router.get("", response_model=list[InvoiceResponse])
def list_invoices(
    company_id: int,
    db: Session = Depends(get_db),
):
    try:
        return InvoiceService(db).list_invoices(company_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=InvoiceResponse, status_code=201)
def create_invoice(
    company_id: int,
    request: InvoiceCreate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """
    Raise an invoice.

    VAT is computed per line and a draft revenue entry is
    recorded in the journal.
    """
    service = InvoiceService(db)
    try:
        invoice = service.create_invoice(company_id, request, actor)
        db.commit()
        return invoice
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    company_id: int,
    invoice_id: int,
    db: Session = Depends(get_db),
):
    try:
        return InvoiceService(db).get_invoice(company_id, invoice_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{invoice_id}/post", response_model=PostInvoiceResponse)
def post_invoice(
    company_id: int,
    invoice_id: int,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """Post the invoice's draft journal entries."""
    service = InvoiceService(db)
    try:
        invoice, entry_ids = service.post_invoice(company_id, invoice_id, actor)
        db.commit()
        return PostInvoiceResponse(
            invoice=InvoiceResponse.model_validate(invoice),
            posted_entry_ids=entry_ids,
        )
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(
    company_id: int,
    invoice_id: int,
    request: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """
    Change the invoice status.

    status=paid requires payment_account_id and posts the payment
    entry. status=void unwinds the invoice's revenue entries.
    """
    service = InvoiceService(db)
    try:
        invoice = service.update_status(company_id, invoice_id, request, actor)
        db.commit()
        return invoice
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
