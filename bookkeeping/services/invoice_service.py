"""
Invoice service: sales invoices with UAE VAT.

Raising an invoice records a draft revenue-recognition entry:

    DEBIT  Accounts Receivable  (total)
    CREDIT Sales Revenue        (subtotal)
    CREDIT VAT Payable          (VAT, when there is any)

The entry stays a draft until the invoice is posted, so the
invoice can still be checked before it reaches the ledger.

Marking an invoice paid records the payment:

    DEBIT  Cash or Bank         (total)
    CREDIT Accounts Receivable  (total)

Voiding an invoice removes its draft entries and reverses the
posted ones.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookkeeping.config import get_settings
from bookkeeping.models.company import Company
from bookkeeping.models.invoice import Invoice, InvoiceLine
from bookkeeping.models.enums import (
    AccountType,
    ActivityAction,
    EntrySource,
    EntryStatus,
    InvoiceStatus,
)
from bookkeeping.schemas.invoice import InvoiceCreate, InvoiceStatusUpdate
from bookkeeping.schemas.journal import (
    JournalEntryCreate,
    JournalLineCreate,
    ReverseEntryRequest,
)
from bookkeeping.services.account_service import (
    AccountService,
    ACCOUNTS_RECEIVABLE_CODE,
    SALES_REVENUE_CODE,
    VAT_PAYABLE_CODE,
)
from bookkeeping.services.activity_service import ActivityService
from bookkeeping.services.errors import EntryStateError, NotFoundError
from bookkeeping.services.journal_service import JournalService
from bookkeeping.services.posting import to_money

logger = logging.getLogger(__name__)


def invoice_totals(
    lines, default_vat_rate: Decimal
) -> tuple[Decimal, Decimal, Decimal]:
    """
    Return (subtotal, vat, total) in fils.

    Each line's net and VAT are rounded separately, as they are
    printed on a UAE tax invoice.
    """
    subtotal = Decimal("0.00")
    vat = Decimal("0.00")
    for line in lines:
        rate = line.vat_rate if line.vat_rate is not None else default_vat_rate
        net = to_money(line.quantity * line.unit_price)
        subtotal += net
        vat += to_money(net * rate)
    return subtotal, vat, subtotal + vat


class InvoiceService:

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

    def get_invoice(self, company_id: int, invoice_id: int) -> Invoice:
        invoice = self.db.execute(
            select(Invoice)
            .options(selectinload(Invoice.lines))
            .where(Invoice.id == invoice_id)
        ).scalar_one_or_none()
        if not invoice or invoice.company_id != company_id:
            raise NotFoundError(f"Invoice {invoice_id} not found")
        return invoice

    def list_invoices(self, company_id: int) -> list[Invoice]:
        self._get_company(company_id)
        invoices = self.db.execute(
            select(Invoice)
            .options(selectinload(Invoice.lines))
            .where(Invoice.company_id == company_id)
            .order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
        ).scalars().all()
        return list(invoices)

    def create_invoice(
        self,
        company_id: int,
        request: InvoiceCreate,
        actor: str | None = None,
    ) -> Invoice:
        company = self._get_company(company_id)

        existing = self.db.execute(
            select(Invoice).where(
                Invoice.company_id == company_id,
                Invoice.number == request.number,
            )
        ).scalar_one_or_none()
        if existing:
            raise ValueError(f"Invoice '{request.number}' already exists")

        default_rate = get_settings().DEFAULT_VAT_RATE
        subtotal, vat_amount, total = invoice_totals(request.lines, default_rate)

        invoice = Invoice(
            company_id=company_id,
            number=request.number,
            customer_name=request.customer_name,
            customer_trn=request.customer_trn,
            invoice_date=request.invoice_date,
            currency=(request.currency or company.base_currency).upper(),
            subtotal=subtotal,
            vat_amount=vat_amount,
            total=total,
            status=InvoiceStatus.DRAFT,
        )
        invoice.lines = [
            InvoiceLine(
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                vat_rate=line.vat_rate if line.vat_rate is not None else default_rate,
            )
            for line in request.lines
        ]
        self.db.add(invoice)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.CREATE,
            entity_type="invoice",
            entity_id=invoice.id,
            company_id=company_id,
            user_id=actor,
            description=f"Created invoice {invoice.number} for {invoice.customer_name}",
            details={"total": total, "vat_amount": vat_amount},
        )

        self._record_revenue_entry(invoice, actor)
        return invoice

    def _record_revenue_entry(self, invoice: Invoice, actor: str | None) -> None:
        """Draft the revenue-recognition entry, if the accounts exist."""
        company_id = invoice.company_id
        receivable = self.account_service.get_by_code(company_id, ACCOUNTS_RECEIVABLE_CODE)
        revenue = self.account_service.get_by_code(company_id, SALES_REVENUE_CODE)
        vat_payable = self.account_service.get_by_code(company_id, VAT_PAYABLE_CODE)

        if not receivable or not revenue or (invoice.vat_amount > 0 and not vat_payable):
            logger.warning(
                "Invoice %s: revenue entry not recorded, default accounts missing",
                invoice.number,
            )
            return
        if invoice.total == 0:
            return

        lines = [
            JournalLineCreate(
                account_id=receivable.id,
                debit=invoice.total,
                description=f"Invoice {invoice.number} - {invoice.customer_name}",
            ),
        ]
        if invoice.subtotal > 0:
            lines.append(JournalLineCreate(
                account_id=revenue.id,
                credit=invoice.subtotal,
                description=f"Sales revenue - Invoice {invoice.number}",
            ))
        if invoice.vat_amount > 0:
            lines.append(JournalLineCreate(
                account_id=vat_payable.id,
                credit=invoice.vat_amount,
                description=f"VAT output - Invoice {invoice.number}",
            ))

        entry = self.journal_service.create_entry(
            company_id,
            JournalEntryCreate(
                entry_date=invoice.invoice_date,
                memo=f"Sales Invoice {invoice.number} - {invoice.customer_name}",
                status=EntryStatus.DRAFT,
                source=EntrySource.INVOICE,
                source_id=invoice.id,
                lines=lines,
            ),
            actor,
        )
        logger.info(
            "Invoice %s: revenue entry %s drafted",
            invoice.number, entry.entry_number,
        )

    def post_invoice(
        self,
        company_id: int,
        invoice_id: int,
        actor: str | None = None,
    ) -> tuple[Invoice, list[int]]:
        """Post every draft entry of an invoice and mark it sent."""
        invoice = self.get_invoice(company_id, invoice_id)
        if invoice.status == InvoiceStatus.VOID:
            raise EntryStateError("Void invoices cannot be posted")

        posted_ids = self._post_revenue_entries(invoice, actor)
        if not posted_ids:
            raise EntryStateError("No draft entries to post")

        if invoice.status == InvoiceStatus.DRAFT:
            invoice.status = InvoiceStatus.SENT
        self.db.flush()

        self.activity.record(
            action=ActivityAction.POST,
            entity_type="invoice",
            entity_id=invoice.id,
            company_id=company_id,
            user_id=actor,
            description=f"Posted invoice {invoice.number}",
            details={"entry_ids": posted_ids},
        )
        return invoice, posted_ids

    def _post_revenue_entries(self, invoice: Invoice, actor: str | None) -> list[int]:
        drafts = self.journal_service.find_by_source(
            invoice.company_id, EntrySource.INVOICE, invoice.id,
            status=EntryStatus.DRAFT,
        )
        for entry in drafts:
            self.journal_service.post_entry(invoice.company_id, entry.id, actor)
        return [entry.id for entry in drafts]

    def update_status(
        self,
        company_id: int,
        invoice_id: int,
        request: InvoiceStatusUpdate,
        actor: str | None = None,
    ) -> Invoice:
        """
        Change an invoice's status.

        draft and sent may be swapped freely. paid records the
        payment entry and void unwinds the revenue entries. Paid
        and void invoices cannot change status again.
        """
        invoice = self.get_invoice(company_id, invoice_id)
        old_status = invoice.status
        new_status = request.status
        if new_status == old_status:
            return invoice

        if old_status == InvoiceStatus.VOID:
            raise EntryStateError("Void invoices cannot change status")
        if old_status == InvoiceStatus.PAID:
            raise EntryStateError(
                "Paid invoices cannot change status. "
                "Reverse the payment entry instead."
            )

        if new_status == InvoiceStatus.PAID:
            self._record_payment(invoice, request, actor)
        elif new_status == InvoiceStatus.VOID:
            self._void_entries(invoice, actor)

        invoice.status = new_status
        self.db.flush()

        self.activity.record(
            action=ActivityAction.UPDATE,
            entity_type="invoice",
            entity_id=invoice.id,
            company_id=company_id,
            user_id=actor,
            description=(
                f"Invoice {invoice.number}: {old_status.value} -> {new_status.value}"
            ),
            details={"payment_account_id": request.payment_account_id},
        )
        logger.info(
            "Invoice %s status %s -> %s",
            invoice.number, old_status.value, new_status.value,
        )
        return invoice

    def _record_payment(
        self,
        invoice: Invoice,
        request: InvoiceStatusUpdate,
        actor: str | None,
    ) -> None:
        """
        Post the payment entry against the chosen cash or bank account.

        Revenue entries still in draft are posted first, so the
        receivable is recognised before it is cleared.
        """
        company_id = invoice.company_id
        if request.payment_account_id is None:
            raise ValueError(
                "Payment account is required when marking an invoice paid"
            )
        payment_account = self.account_service.get_account(
            company_id, request.payment_account_id
        )
        if payment_account.account_type != AccountType.ASSET:
            raise ValueError("Payment account must be a cash or bank account")

        receivable = self.account_service.get_by_code(
            company_id, ACCOUNTS_RECEIVABLE_CODE
        )
        if not receivable:
            raise ValueError("Accounts Receivable account not found")

        self._post_revenue_entries(invoice, actor)
        if invoice.total == 0:
            return

        entry = self.journal_service.create_entry(
            company_id,
            JournalEntryCreate(
                entry_date=request.payment_date or date.today(),
                memo=f"Payment received for Invoice {invoice.number}",
                status=EntryStatus.POSTED,
                source=EntrySource.PAYMENT,
                source_id=invoice.id,
                lines=[
                    JournalLineCreate(
                        account_id=payment_account.id,
                        debit=invoice.total,
                        description=f"Payment received - Invoice {invoice.number}",
                    ),
                    JournalLineCreate(
                        account_id=receivable.id,
                        credit=invoice.total,
                        description=f"Clear A/R - Invoice {invoice.number}",
                    ),
                ],
            ),
            actor,
        )
        logger.info(
            "Invoice %s: payment entry %s posted to %s",
            invoice.number, entry.entry_number, payment_account.code,
        )

    def _void_entries(self, invoice: Invoice, actor: str | None) -> None:
        """Delete draft revenue entries and reverse posted ones."""
        entries = self.journal_service.find_by_source(
            invoice.company_id, EntrySource.INVOICE, invoice.id
        )
        for entry in entries:
            if entry.status == EntryStatus.DRAFT:
                self.journal_service.delete_entry(invoice.company_id, entry.id, actor)
            elif entry.status == EntryStatus.POSTED:
                self.journal_service.reverse_entry(
                    invoice.company_id,
                    entry.id,
                    ReverseEntryRequest(reason=f"Invoice {invoice.number} voided"),
                    actor,
                )
