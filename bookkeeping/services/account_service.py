"""
Account service: the chart of accounts of a company.

Accounts are created, renamed, deactivated and, as long as no
journal line references them, deleted. New companies are seeded
with a UAE default chart of accounts.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.models.account import Account
from bookkeeping.models.company import Company
from bookkeeping.models.journal_line import JournalLine
from bookkeeping.models.enums import AccountType, VatType, ActivityAction
from bookkeeping.schemas.account import AccountCreate, AccountUpdate
from bookkeeping.services.activity_service import ActivityService
from bookkeeping.services.errors import NotFoundError

logger = logging.getLogger(__name__)


# Codes other services rely on to find their counter-accounts.
CASH_CODE = "1000"
BANK_CODE = "1010"
ACCOUNTS_RECEIVABLE_CODE = "1100"
VAT_RECEIVABLE_CODE = "1200"
ACCOUNTS_PAYABLE_CODE = "2000"
VAT_PAYABLE_CODE = "2100"
SALES_REVENUE_CODE = "4000"

# (code, English name, Arabic name, type, VAT side)
UAE_DEFAULT_ACCOUNTS: list[tuple[str, str, str, AccountType, VatType]] = [
    (CASH_CODE, "Cash", "نقد", AccountType.ASSET, VatType.NONE),
    (BANK_CODE, "Bank", "بنك", AccountType.ASSET, VatType.NONE),
    (ACCOUNTS_RECEIVABLE_CODE, "Accounts Receivable", "حسابات مدينة", AccountType.ASSET, VatType.NONE),
    (VAT_RECEIVABLE_CODE, "VAT Receivable", "ضريبة مستردة", AccountType.ASSET, VatType.INPUT),
    (ACCOUNTS_PAYABLE_CODE, "Accounts Payable", "حسابات دائنة", AccountType.LIABILITY, VatType.NONE),
    (VAT_PAYABLE_CODE, "VAT Payable", "ضريبة مستحقة", AccountType.LIABILITY, VatType.OUTPUT),
    ("3000", "Owner's Equity", "حقوق الملكية", AccountType.EQUITY, VatType.NONE),
    (SALES_REVENUE_CODE, "Sales Revenue", "إيرادات المبيعات", AccountType.INCOME, VatType.NONE),
    ("4100", "Other Income", "إيرادات أخرى", AccountType.INCOME, VatType.NONE),
    ("5000", "COGS", "تكلفة البضاعة المباعة", AccountType.EXPENSE, VatType.NONE),
    ("5100", "Rent Expense", "مصروف الإيجار", AccountType.EXPENSE, VatType.NONE),
    ("5200", "Utilities Expense", "مصروف المرافق", AccountType.EXPENSE, VatType.NONE),
    ("5300", "Marketing Expense", "مصروف التسويق", AccountType.EXPENSE, VatType.NONE),
    ("5400", "Office Supplies", "مستلزمات مكتبية", AccountType.EXPENSE, VatType.NONE),
    ("5500", "Travel Expenses", "مصروفات السفر", AccountType.EXPENSE, VatType.NONE),
]

# Nullable fields a PATCH may reset by sending null
CLEARABLE_ACCOUNT_FIELDS = {"name_ar"}


class AccountService:

    def __init__(self, db: Session):
        self.db = db
        self.activity = ActivityService(db)

    def _get_company(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    def _find_by_code(self, company_id: int, code: str) -> Account | None:
        return self.db.execute(
            select(Account).where(
                Account.company_id == company_id,
                Account.code == code,
            )
        ).scalar_one_or_none()

    def create_account(
        self,
        company_id: int,
        request: AccountCreate,
        actor: str | None = None,
    ) -> Account:
        """
        Create an account in the company's chart of accounts.

        Raises ValueError if the code is already used in this company.
        """
        self._get_company(company_id)

        if self._find_by_code(company_id, request.code):
            raise ValueError(
                f"Account with code '{request.code}' already exists"
            )

        account = Account(
            company_id=company_id,
            code=request.code,
            name_en=request.name_en,
            name_ar=request.name_ar,
            account_type=request.account_type,
            vat_type=request.vat_type,
        )
        self.db.add(account)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.CREATE,
            entity_type="account",
            entity_id=account.id,
            company_id=company_id,
            user_id=actor,
            description=f"Created account {account.code} {account.name_en}",
        )
        return account

    def get_account(self, company_id: int, account_id: int) -> Account:
        account = self.db.get(Account, account_id)
        if not account or account.company_id != company_id:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    def get_by_code(self, company_id: int, code: str) -> Account | None:
        return self._find_by_code(company_id, code)

    def list_accounts(
        self, company_id: int, include_inactive: bool = True
    ) -> list[Account]:
        self._get_company(company_id)
        query = select(Account).where(Account.company_id == company_id)
        if not include_inactive:
            query = query.where(Account.is_active.is_(True))
        accounts = self.db.execute(query.order_by(Account.code)).scalars().all()
        return list(accounts)

    def update_account(
        self,
        company_id: int,
        account_id: int,
        request: AccountUpdate,
        actor: str | None = None,
    ) -> Account:
        account = self.get_account(company_id, account_id)
        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_ACCOUNT_FIELDS
        }
        for field, value in changes.items():
            setattr(account, field, value)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.UPDATE,
            entity_type="account",
            entity_id=account.id,
            company_id=company_id,
            user_id=actor,
            description=f"Updated account {account.code}",
            details=changes,
        )
        return account

    def has_transactions(self, account_id: int) -> bool:
        line = self.db.execute(
            select(JournalLine.id)
            .where(JournalLine.account_id == account_id)
            .limit(1)
        ).scalar_one_or_none()
        return line is not None

    def delete_account(
        self,
        company_id: int,
        account_id: int,
        actor: str | None = None,
    ) -> None:
        """
        Delete an account that has never been used.

        Accounts with journal lines keep the audit trail intact;
        deactivate them instead.
        """
        account = self.get_account(company_id, account_id)
        if self.has_transactions(account.id):
            raise ValueError(
                "Cannot delete account with existing transactions. "
                "Deactivate it instead."
            )

        code = account.code
        self.db.delete(account)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.DELETE,
            entity_type="account",
            entity_id=account_id,
            company_id=company_id,
            user_id=actor,
            description=f"Deleted account {code}",
        )

    def seed_default_accounts(
        self, company_id: int, actor: str | None = None
    ) -> list[Account]:
        """
        Create the UAE default chart of accounts.

        Idempotent: accounts whose code already exists are skipped.
        Returns only the accounts created by this call.
        """
        self._get_company(company_id)

        created = []
        for code, name_en, name_ar, account_type, vat_type in UAE_DEFAULT_ACCOUNTS:
            if self._find_by_code(company_id, code):
                continue
            account = Account(
                company_id=company_id,
                code=code,
                name_en=name_en,
                name_ar=name_ar,
                account_type=account_type,
                vat_type=vat_type,
            )
            self.db.add(account)
            created.append(account)
        self.db.flush()

        if created:
            logger.info(
                "Seeded %d default accounts for company %s",
                len(created), company_id,
            )
            self.activity.record(
                action=ActivityAction.SEED,
                entity_type="company",
                entity_id=company_id,
                company_id=company_id,
                user_id=actor,
                description=f"Seeded {len(created)} default accounts",
            )
        return created
