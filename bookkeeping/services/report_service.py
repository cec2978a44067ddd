"""
Report service: balances and financial statements.

Balances are never stored. They are always derived from the
journal lines of entries that reached the ledger (posted and
reversed). Drafts never affect a balance. Because a reversal is
itself a posted entry, a reversed entry and its reversal net to
zero on every account.

For ASSET and EXPENSE accounts:   balance = debits - credits
For LIABILITY, EQUITY and INCOME: balance = credits - debits
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from bookkeeping.models.account import Account
from bookkeeping.models.company import Company
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.journal_line import JournalLine
from bookkeeping.models.enums import AccountType, VatType, LEDGER_STATUSES
from bookkeeping.schemas.account import (
    AccountLedgerResponse,
    AccountResponse,
    LedgerLine,
)
from bookkeeping.schemas.report import (
    AccountBalance,
    BalanceSheetResponse,
    ProfitAndLossResponse,
    ReportLine,
    TrialBalanceResponse,
    VatSummaryResponse,
)
from bookkeeping.services.errors import NotFoundError

ZERO = Decimal("0.00")


def normal_balance(account_type: AccountType, debit: Decimal, credit: Decimal) -> Decimal:
    """Balance of an account on its normal side."""
    if account_type.is_debit_normal:
        return debit - credit
    return credit - debit


class ReportService:

    def __init__(self, db: Session):
        self.db = db

    def _get_company(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    def _totals_by_account(
        self,
        company_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict[int, tuple[Decimal, Decimal]]:
        """Sum debits and credits of ledger lines per account."""
        query = (
            select(
                JournalLine.account_id,
                func.coalesce(func.sum(JournalLine.debit), 0),
                func.coalesce(func.sum(JournalLine.credit), 0),
            )
            .join(JournalEntry, JournalLine.entry_id == JournalEntry.id)
            .where(
                JournalEntry.company_id == company_id,
                JournalEntry.status.in_(LEDGER_STATUSES),
            )
            .group_by(JournalLine.account_id)
        )
        if date_from is not None:
            query = query.where(JournalEntry.entry_date >= date_from)
        if date_to is not None:
            query = query.where(JournalEntry.entry_date <= date_to)

        totals = {}
        for account_id, debit, credit in self.db.execute(query).all():
            totals[account_id] = (
                Decimal(str(debit)).quantize(ZERO),
                Decimal(str(credit)).quantize(ZERO),
            )
        return totals

    def account_balances(
        self,
        company_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[AccountBalance]:
        """Debit total, credit total and balance for every account."""
        self._get_company(company_id)
        totals = self._totals_by_account(company_id, date_from, date_to)
        accounts = self.db.execute(
            select(Account)
            .where(Account.company_id == company_id)
            .order_by(Account.code)
        ).scalars().all()

        balances = []
        for account in accounts:
            debit, credit = totals.get(account.id, (ZERO, ZERO))
            balances.append(AccountBalance(
                account_id=account.id,
                code=account.code,
                name_en=account.name_en,
                account_type=account.account_type,
                debit_total=debit,
                credit_total=credit,
                balance=normal_balance(account.account_type, debit, credit),
            ))
        return balances

    def trial_balance(
        self,
        company_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> TrialBalanceResponse:
        balances = self.account_balances(company_id, date_from, date_to)
        total_debit = sum((b.debit_total for b in balances), ZERO)
        total_credit = sum((b.credit_total for b in balances), ZERO)
        return TrialBalanceResponse(
            date_from=date_from,
            date_to=date_to,
            accounts=balances,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=total_debit == total_credit,
        )

    def account_ledger(
        self,
        company_id: int,
        account_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> AccountLedgerResponse:
        """
        Every ledger line of one account, oldest first, with a running balance.

        Lines dated before date_from are folded into the opening
        balance. Search and pagination apply after the running
        balance is computed, so each line keeps its true balance.
        """
        account = self.db.get(Account, account_id)
        if not account or account.company_id != company_id:
            raise NotFoundError(f"Account {account_id} not found")

        base = (
            select(JournalLine, JournalEntry)
            .join(JournalEntry, JournalLine.entry_id == JournalEntry.id)
            .where(
                JournalLine.account_id == account_id,
                JournalEntry.status.in_(LEDGER_STATUSES),
            )
        )

        opening = ZERO
        if date_from is not None:
            prior_debit, prior_credit = self.db.execute(
                select(
                    func.coalesce(func.sum(JournalLine.debit), 0),
                    func.coalesce(func.sum(JournalLine.credit), 0),
                )
                .join(JournalEntry, JournalLine.entry_id == JournalEntry.id)
                .where(
                    JournalLine.account_id == account_id,
                    JournalEntry.status.in_(LEDGER_STATUSES),
                    JournalEntry.entry_date < date_from,
                )
            ).one()
            opening = normal_balance(
                account.account_type,
                Decimal(str(prior_debit)).quantize(ZERO),
                Decimal(str(prior_credit)).quantize(ZERO),
            )
            base = base.where(JournalEntry.entry_date >= date_from)
        if date_to is not None:
            base = base.where(JournalEntry.entry_date <= date_to)

        rows = self.db.execute(
            base.order_by(JournalEntry.entry_date, JournalEntry.id, JournalLine.id)
        ).all()

        running = opening
        total_debit = ZERO
        total_credit = ZERO
        lines = []
        for line, entry in rows:
            debit = Decimal(str(line.debit)).quantize(ZERO)
            credit = Decimal(str(line.credit)).quantize(ZERO)
            total_debit += debit
            total_credit += credit
            running += normal_balance(account.account_type, debit, credit)
            lines.append(LedgerLine(
                journal_entry_id=entry.id,
                journal_line_id=line.id,
                entry_number=entry.entry_number,
                entry_date=entry.entry_date,
                description=line.description or entry.memo or "",
                memo=entry.memo,
                source=entry.source,
                status=entry.status,
                debit=debit,
                credit=credit,
                running_balance=running,
            ))

        closing = opening + normal_balance(
            account.account_type, total_debit, total_credit
        )

        if search:
            needle = search.lower()
            lines = [
                ln for ln in lines
                if needle in ln.entry_number.lower()
                or needle in (ln.memo or "").lower()
                or needle in ln.description.lower()
            ]
        total_count = len(lines)
        if limit is None:
            lines = lines[offset:]
        else:
            lines = lines[offset:offset + limit]

        return AccountLedgerResponse(
            account=AccountResponse.model_validate(account),
            opening_balance=opening,
            total_debit=total_debit,
            total_credit=total_credit,
            closing_balance=closing,
            total_count=total_count,
            lines=lines,
        )

    def profit_and_loss(
        self,
        company_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ProfitAndLossResponse:
        balances = self.account_balances(company_id, date_from, date_to)

        income = [
            ReportLine(account_id=b.account_id, code=b.code, name_en=b.name_en, amount=b.balance)
            for b in balances
            if b.account_type == AccountType.INCOME and b.balance != 0
        ]
        expenses = [
            ReportLine(account_id=b.account_id, code=b.code, name_en=b.name_en, amount=b.balance)
            for b in balances
            if b.account_type == AccountType.EXPENSE and b.balance != 0
        ]
        total_income = sum((r.amount for r in income), ZERO)
        total_expenses = sum((r.amount for r in expenses), ZERO)

        return ProfitAndLossResponse(
            date_from=date_from,
            date_to=date_to,
            income=income,
            expenses=expenses,
            total_income=total_income,
            total_expenses=total_expenses,
            net_profit=total_income - total_expenses,
        )

    def balance_sheet(
        self, company_id: int, as_of: date | None = None
    ) -> BalanceSheetResponse:
        """
        Assets, liabilities and equity as of a date.

        Income and expense accounts are not closed into equity by
        this system, so their net is shown as current net income.
        """
        balances = self.account_balances(company_id, date_to=as_of)

        def section(account_type: AccountType) -> list[ReportLine]:
            return [
                ReportLine(account_id=b.account_id, code=b.code, name_en=b.name_en, amount=b.balance)
                for b in balances
                if b.account_type == account_type
            ]

        assets = section(AccountType.ASSET)
        liabilities = section(AccountType.LIABILITY)
        equity = section(AccountType.EQUITY)
        total_assets = sum((r.amount for r in assets), ZERO)
        total_liabilities = sum((r.amount for r in liabilities), ZERO)
        total_equity = sum((r.amount for r in equity), ZERO)
        net_income = sum(
            (b.balance for b in balances if b.account_type == AccountType.INCOME),
            ZERO,
        ) - sum(
            (b.balance for b in balances if b.account_type == AccountType.EXPENSE),
            ZERO,
        )

        return BalanceSheetResponse(
            as_of=as_of,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            total_equity=total_equity,
            net_income=net_income,
            is_balanced=total_assets == total_liabilities + total_equity + net_income,
        )

    def vat_summary(
        self,
        company_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> VatSummaryResponse:
        """
        Output VAT collected, input VAT recoverable, and the net due.

        Output VAT is read on the credit side of output-VAT accounts,
        input VAT on the debit side of input-VAT accounts, whatever
        their account type.
        """
        self._get_company(company_id)
        totals = self._totals_by_account(company_id, date_from, date_to)
        vat_accounts = self.db.execute(
            select(Account).where(
                Account.company_id == company_id,
                or_(
                    Account.vat_type == VatType.OUTPUT,
                    Account.vat_type == VatType.INPUT,
                ),
            )
        ).scalars().all()

        output_vat = ZERO
        input_vat = ZERO
        for account in vat_accounts:
            debit, credit = totals.get(account.id, (ZERO, ZERO))
            if account.vat_type == VatType.OUTPUT:
                output_vat += credit - debit
            else:
                input_vat += debit - credit

        return VatSummaryResponse(
            date_from=date_from,
            date_to=date_to,
            output_vat=output_vat,
            input_vat=input_vat,
            net_vat_payable=output_vat - input_vat,
        )
