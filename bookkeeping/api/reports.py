"""
Financial report endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.models.base import get_db
from bookkeeping.services.report_service import ReportService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.schemas.report import (
    TrialBalanceResponse,
    ProfitAndLossResponse,
    BalanceSheetResponse,
    VatSummaryResponse,
)

router = APIRouter(prefix="/companies/{company_id}/reports", tags=["Reports"])


@router.get("/trial-balance", response_model=TrialBalanceResponse)
def trial_balance(
    company_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    try:
        return ReportService(db).trial_balance(company_id, date_from, date_to)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/profit-and-loss", response_model=ProfitAndLossResponse)
def profit_and_loss(
    company_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    try:
        return ReportService(db).profit_and_loss(company_id, date_from, date_to)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/balance-sheet", response_model=BalanceSheetResponse)
def balance_sheet(
    company_id: int,
    as_of: date | None = None,
    db: Session = Depends(get_db),
):
    try:
        return ReportService(db).balance_sheet(company_id, as_of)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/vat-summary", response_model=VatSummaryResponse)
def vat_summary(
    company_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    """Output VAT, input VAT and the net amount due for the period."""
    try:
        return ReportService(db).vat_summary(company_id, date_from, date_to)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
