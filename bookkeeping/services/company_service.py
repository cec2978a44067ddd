"""
Company service: the tenants of the bookkeeping system.

Creating a company also seeds its chart of accounts, so a new
company can record journal entries straight away.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.config import get_settings
from bookkeeping.models.company import Company
from bookkeeping.models.enums import ActivityAction
from bookkeeping.schemas.company import CompanyCreate, CompanyUpdate
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.activity_service import ActivityService
from bookkeeping.services.errors import NotFoundError

logger = logging.getLogger(__name__)

# Nullable fields a PATCH may reset by sending null
CLEARABLE_COMPANY_FIELDS = {"trn", "vat_filing_frequency"}


class CompanyService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)
        self.activity = ActivityService(db)

    def _find_by_name(self, name: str) -> Company | None:
        return self.db.execute(
            select(Company).where(Company.name == name)
        ).scalar_one_or_none()

    def create_company(
        self, request: CompanyCreate, actor: str | None = None
    ) -> Company:
        """Create a company and, unless disabled, seed its accounts."""
        if self._find_by_name(request.name):
            raise ValueError(f"Company '{request.name}' already exists")

        company = Company(
            name=request.name,
            base_currency=(
                request.base_currency or get_settings().DEFAULT_CURRENCY
            ).upper(),
            locale=request.locale,
            trn=request.trn,
            vat_filing_frequency=request.vat_filing_frequency,
        )
        self.db.add(company)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.CREATE,
            entity_type="company",
            entity_id=company.id,
            company_id=company.id,
            user_id=actor,
            description=f"Created company {company.name}",
        )
        logger.info("Created company %s (%s)", company.id, company.name)

        if request.seed_accounts:
            self.account_service.seed_default_accounts(company.id, actor)
        return company

    def get_company(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    def list_companies(self) -> list[Company]:
        companies = self.db.execute(
            select(Company).order_by(Company.name)
        ).scalars().all()
        return list(companies)

    def update_company(
        self,
        company_id: int,
        request: CompanyUpdate,
        actor: str | None = None,
    ) -> Company:
        company = self.get_company(company_id)
        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_COMPANY_FIELDS
        }

        new_name = changes.get("name")
        if new_name and new_name != company.name and self._find_by_name(new_name):
            raise ValueError(f"Company '{new_name}' already exists")

        for field, value in changes.items():
            setattr(company, field, value)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.UPDATE,
            entity_type="company",
            entity_id=company.id,
            company_id=company.id,
            user_id=actor,
            description=f"Updated company {company.name}",
            details=changes,
        )
        return company
