"""
Company API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.api.deps import get_actor
from bookkeeping.models.base import get_db
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.company_service import CompanyService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.schemas.account import AccountResponse
from bookkeeping.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", response_model=CompanyResponse, status_code=201)
def create_company(
    request: CompanyCreate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """
    Create a company.

    Unless seed_accounts is false, the UAE default chart of
    accounts is created along with it.
    """
    service = CompanyService(db)
    try:
        company = service.create_company(request, actor)
        db.commit()
        return company
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[CompanyResponse])
def list_companies(db: Session = Depends(get_db)):
    return CompanyService(db).list_companies()


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(
    company_id: int,
    db: Session = Depends(get_db),
):
    service = CompanyService(db)
    try:
        return service.get_company(company_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: int,
    request: CompanyUpdate,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    service = CompanyService(db)
    try:
        company = service.update_company(company_id, request, actor)
        db.commit()
        return company
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{company_id}/seed-accounts",
    response_model=list[AccountResponse],
)
def seed_accounts(
    company_id: int,
    db: Session = Depends(get_db),
    actor: str | None = Depends(get_actor),
):
    """
    Create any missing default accounts.

    Safe to call repeatedly. Returns the full chart of accounts.
    """
    service = AccountService(db)
    try:
        service.seed_default_accounts(company_id, actor)
        db.commit()
        return service.list_accounts(company_id)
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
