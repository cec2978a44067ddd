"""
Receipt service: expense receipts.

Posting a receipt records a posted journal entry:

    DEBIT  Expense account      (net amount)
    DEBIT  VAT Receivable       (input VAT, when there is any)
    CREDIT Cash or Bank         (total)

When the company has no VAT Receivable account the VAT is
folded into the expense line.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.models.company import Company
from bookkeeping.models.receipt import Receipt
from bookkeeping.models.enums import (
    AccountType,
    ActivityAction,
    EntrySource,
    EntryStatus,
)
from bookkeeping.schemas.journal import JournalEntryCreate, JournalLineCreate
from bookkeeping.schemas.receipt import PostReceiptRequest, ReceiptCreate
from bookkeeping.services.account_service import AccountService, VAT_RECEIVABLE_CODE
from bookkeeping.services.activity_service import ActivityService
from bookkeeping.services.errors import EntryStateError, NotFoundError
from bookkeeping.services.journal_service import JournalService
from bookkeeping.services.posting import to_money

logger = logging.getLogger(__name__)


class ReceiptService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)
        self.journal_service = JournalService(db)
        self.activity = ActivityService(db)

    def _get_company(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    def get_receipt(self, company_id: int, receipt_id: int) -> Receipt:
        receipt = self.db.get(Receipt, receipt_id)
        if not receipt or receipt.company_id != company_id:
            raise NotFoundError(f"Receipt {receipt_id} not found")
        return receipt

    def list_receipts(self, company_id: int, posted: bool | None = None) -> list[Receipt]:
        self._get_company(company_id)
        query = select(Receipt).where(Receipt.company_id == company_id)
        if posted is not None:
            query = query.where(Receipt.posted.is_(posted))
        receipts = self.db.execute(
            query.order_by(Receipt.receipt_date.desc(), Receipt.id.desc())
        ).scalars().all()
        return list(receipts)

    def create_receipt(
        self,
        company_id: int,
        request: ReceiptCreate,
        actor: str | None = None,
    ) -> Receipt:
        company = self._get_company(company_id)
        receipt = Receipt(
            company_id=company_id,
            merchant=request.merchant,
            category=request.category,
            receipt_date=request.receipt_date,
            amount=to_money(request.amount),
            vat_amount=to_money(request.vat_amount),
            currency=(request.currency or company.base_currency).upper(),
            posted=False,
            created_by=actor,
        )
        self.db.add(receipt)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.CREATE,
            entity_type="receipt",
            entity_id=receipt.id,
            company_id=company_id,
            user_id=actor,
            description=f"Captured receipt from {receipt.merchant or 'unknown merchant'}",
            details={"amount": receipt.amount, "vat_amount": receipt.vat_amount},
        )
        return receipt

    def post_receipt(
        self,
        company_id: int,
        receipt_id: int,
        request: PostReceiptRequest,
        actor: str | None = None,
    ) -> Receipt:
        """
        Post a receipt to the journal.

        The expense account must be an expense account and the
        payment account an asset (cash or bank) account, both of
        the receipt's company.
        """
        receipt = self.get_receipt(company_id, receipt_id)
        if receipt.posted:
            raise EntryStateError("Receipt has already been posted")

        total = receipt.amount + receipt.vat_amount
        if total <= 0:
            raise ValueError("Receipt amount must be greater than zero")

        expense_account = self.account_service.get_account(
            company_id, request.expense_account_id
        )
        payment_account = self.account_service.get_account(
            company_id, request.payment_account_id
        )
        if expense_account.account_type != AccountType.EXPENSE:
            raise ValueError("Selected account must be an expense account")
        if payment_account.account_type != AccountType.ASSET:
            raise ValueError("Payment account must be a cash or bank account")

        merchant = receipt.merchant or "Expense"
        category = receipt.category or "General"

        expense_amount = receipt.amount
        vat_account = None
        if receipt.vat_amount > 0:
            vat_account = self.account_service.get_by_code(company_id, VAT_RECEIVABLE_CODE)
            if vat_account is None:
                expense_amount = total

        lines = []
        if expense_amount > 0:
            lines.append(JournalLineCreate(
                account_id=expense_account.id,
                debit=expense_amount,
                description=f"{merchant} - {category}",
            ))
        if vat_account is not None:
            lines.append(JournalLineCreate(
                account_id=vat_account.id,
                debit=receipt.vat_amount,
                description=f"VAT input - {merchant}",
            ))
        lines.append(JournalLineCreate(
            account_id=payment_account.id,
            credit=total,
            description=f"Payment for {merchant}",
        ))

        entry = self.journal_service.create_entry(
            company_id,
            JournalEntryCreate(
                entry_date=receipt.receipt_date,
                memo=f"Receipt: {merchant} - {category}",
                status=EntryStatus.POSTED,
                source=EntrySource.RECEIPT,
                source_id=receipt.id,
                lines=lines,
            ),
            actor,
        )

        receipt.posted = True
        receipt.journal_entry_id = entry.id
        receipt.expense_account_id = expense_account.id
        receipt.payment_account_id = payment_account.id
        self.db.flush()

        self.activity.record(
            action=ActivityAction.POST,
            entity_type="receipt",
            entity_id=receipt.id,
            company_id=company_id,
            user_id=actor,
            description=f"Posted receipt from {merchant} as {entry.entry_number}",
            details={"journal_entry_id": entry.id, "total": total},
        )
        logger.info(
            "Receipt %s posted as journal entry %s", receipt.id, entry.entry_number
        )
        return receipt
