"""
Chart of accounts API endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from bookkeeping.api.deps import get_actor
from bookkeeping.models.base import get_db
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.report_service import ReportService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountLedgerResponse,
)

router = APIRouter(prefix="/companies/{company_id}/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    company_id: int,
    include_inactive: bool = True,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        return service.list_accounts(company_id, include_inactive)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    company_id: int,
    request: AccountCreate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    service = AccountService(db)
    try:
        account = service.create_account(company_id, request, actor)
        db.commit()
        return account
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    company_id: int,
    account_id: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    service = AccountService(db)
    try:
        account = service.update_account(company_id, account_id, request, actor)
        db.commit()
        return account
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{account_id}", status_code=204)
def delete_account(
    company_id: int,
    account_id: int,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """Delete an account that no journal line references."""
    service = AccountService(db)
    try:
        service.delete_account(company_id, account_id, actor)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)


@router.get("/{account_id}/ledger", response_model=AccountLedgerResponse)
def get_account_ledger(
    company_id: int,
    account_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    search: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Get the ledger of one account with a running balance.

    Only posted (and later reversed) entries appear; drafts
    do not affect balances.
    """
    service = ReportService(db)
    try:
        return service.account_ledger(
            company_id,
            account_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
            limit=limit,
            offset=offset,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
