"""
Journal service: the core of the bookkeeping system.

This service enforces the double-entry rules:
1. Debits must equal credits on every entry, draft or posted
2. Posted entries are immutable; they are never edited or deleted
3. A posted entry is undone by reversal: a new posted entry with
   every debit and credit swapped, linked back to the original,
   which is marked reversed
4. Lines must reference active accounts of the entry's company

No other service writes journal entries directly. Invoices and
other sources go through create_entry() and post_entry().
"""

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookkeeping.models.account import Account
from bookkeeping.models.company import Company
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.journal_line import JournalLine
from bookkeeping.models.enums import (
    ActivityAction,
    EntrySource,
    EntryStatus,
)
from bookkeeping.schemas.journal import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalLineCreate,
    ReverseEntryRequest,
)
from bookkeeping.services.activity_service import ActivityService
from bookkeeping.services.errors import EntryStateError, NotFoundError
from bookkeeping.services.posting import (
    ensure_balanced,
    line_totals,
    mirror_amounts,
    to_money,
)

logger = logging.getLogger(__name__)


class JournalService:
    """
    All journal operations pass through this service.

    The service takes a database session as a constructor
    argument. The caller controls the transaction boundary:
    they decide when to commit or rollback.
    """

    def __init__(self, db: Session):
        self.db = db
        self.activity = ActivityService(db)

    # --- Lookups ---

    def _get_company(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    def get_entry(self, company_id: int, entry_id: int) -> JournalEntry:
        entry = self.db.execute(
            select(JournalEntry)
            .options(selectinload(JournalEntry.lines))
            .where(JournalEntry.id == entry_id)
        ).scalar_one_or_none()
        if not entry or entry.company_id != company_id:
            raise NotFoundError(f"Journal entry {entry_id} not found")
        return entry

    def list_entries(
        self,
        company_id: int,
        status: EntryStatus | None = None,
        source: EntrySource | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[JournalEntry]:
        """Return the company's entries, newest first."""
        self._get_company(company_id)

        query = (
            select(JournalEntry)
            .options(selectinload(JournalEntry.lines))
            .where(JournalEntry.company_id == company_id)
        )
        if status is not None:
            query = query.where(JournalEntry.status == status)
        if source is not None:
            query = query.where(JournalEntry.source == source)
        if date_from is not None:
            query = query.where(JournalEntry.entry_date >= date_from)
        if date_to is not None:
            query = query.where(JournalEntry.entry_date <= date_to)

        entries = self.db.execute(
            query.order_by(
                JournalEntry.entry_date.desc(), JournalEntry.id.desc()
            )
        ).scalars().all()
        return list(entries)

    def find_by_source(
        self,
        company_id: int,
        source: EntrySource,
        source_id: int,
        status: EntryStatus | None = None,
    ) -> list[JournalEntry]:
        query = select(JournalEntry).where(
            JournalEntry.company_id == company_id,
            JournalEntry.source == source,
            JournalEntry.source_id == source_id,
        )
        if status is not None:
            query = query.where(JournalEntry.status == status)
        return list(self.db.execute(query.order_by(JournalEntry.id)).scalars().all())

    # --- Validation helpers ---

    def _next_entry_number(self, company_id: int, entry_date: date) -> str:
        """
        Generate the next JE-YYYYMMDD-NNN number for a company and day.

        Uses the highest existing sequence rather than a count, so a
        deleted draft never causes a number to be handed out twice.
        """
        prefix = f"JE-{entry_date:%Y%m%d}"
        numbers = self.db.execute(
            select(JournalEntry.entry_number).where(
                JournalEntry.company_id == company_id,
                JournalEntry.entry_number.like(f"{prefix}-%"),
            )
        ).scalars().all()

        highest = 0
        for number in numbers:
            suffix = number.rsplit("-", 1)[-1]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return f"{prefix}-{highest + 1:03d}"

    def _validate_accounts(self, company_id: int, account_ids: set[int]) -> None:
        """Check all accounts exist, belong to the company and are active."""
        accounts = self.db.execute(
            select(Account).where(
                Account.id.in_(account_ids),
                Account.company_id == company_id,
            )
        ).scalars().all()
        accounts_by_id = {a.id: a for a in accounts}

        missing = account_ids - set(accounts_by_id.keys())
        if missing:
            raise NotFoundError(f"Accounts not found: {sorted(missing)}")

        for account in accounts_by_id.values():
            if not account.is_active:
                raise ValueError(f"Account {account.code} is not active")

    def _build_lines(self, lines: list[JournalLineCreate]) -> list[JournalLine]:
        return [
            JournalLine(
                account_id=line.account_id,
                debit=to_money(line.debit),
                credit=to_money(line.credit),
                description=line.description,
            )
            for line in lines
        ]

    @staticmethod
    def _require_draft(entry: JournalEntry, action: str) -> None:
        if entry.status == EntryStatus.POSTED:
            raise EntryStateError(
                f"Posted journal entries cannot be {action}. "
                f"Use reversal to correct posted entries."
            )
        if entry.status == EntryStatus.REVERSED:
            raise EntryStateError(
                f"Reversed journal entries cannot be {action}."
            )

    # --- Operations ---

    def create_entry(
        self,
        company_id: int,
        request: JournalEntryCreate,
        actor: str | None = None,
    ) -> JournalEntry:
        """
        Record a journal entry as a draft, or post it immediately.

        The lines must balance whatever the requested status.
        """
        self._get_company(company_id)
        self._validate_accounts(
            company_id, {line.account_id for line in request.lines}
        )
        ensure_balanced(request.lines)

        posting = request.status == EntryStatus.POSTED

        now = datetime.utcnow()
        entry = JournalEntry(
            company_id=company_id,
            entry_number=self._next_entry_number(company_id, request.entry_date),
            entry_date=request.entry_date,
            memo=request.memo,
            status=EntryStatus.POSTED if posting else EntryStatus.DRAFT,
            source=request.source,
            source_id=request.source_id,
            created_by=actor,
            posted_by=actor if posting else None,
            posted_at=now if posting else None,
        )
        entry.lines = self._build_lines(request.lines)
        self.db.add(entry)
        self.db.flush()

        total_debit, total_credit = line_totals(entry.lines)
        self.activity.record(
            action=ActivityAction.POST if posting else ActivityAction.CREATE,
            entity_type="journal_entry",
            entity_id=entry.id,
            company_id=company_id,
            user_id=actor,
            description=(
                f"{'Posted' if posting else 'Drafted'} journal entry "
                f"{entry.entry_number}"
            ),
            details={
                "source": entry.source.value,
                "total_debit": total_debit,
                "total_credit": total_credit,
            },
        )
        logger.info(
            "Created journal entry %s (%s) for company %s",
            entry.entry_number, entry.status.value, company_id,
        )
        return entry

    def update_entry(
        self,
        company_id: int,
        entry_id: int,
        request: JournalEntryUpdate,
        actor: str | None = None,
    ) -> JournalEntry:
        """Replace the date, memo and lines of a draft entry."""
        entry = self.get_entry(company_id, entry_id)
        self._require_draft(entry, "edited")
        self._validate_accounts(
            company_id, {line.account_id for line in request.lines}
        )
        ensure_balanced(request.lines)

        entry.entry_date = request.entry_date
        entry.memo = request.memo
        # delete-orphan cascade removes the old lines
        entry.lines = self._build_lines(request.lines)
        entry.updated_by = actor
        entry.updated_at = datetime.utcnow()
        self.db.flush()

        self.activity.record(
            action=ActivityAction.UPDATE,
            entity_type="journal_entry",
            entity_id=entry.id,
            company_id=company_id,
            user_id=actor,
            description=f"Updated draft journal entry {entry.entry_number}",
        )
        return entry

    def post_entry(
        self,
        company_id: int,
        entry_id: int,
        actor: str | None = None,
    ) -> JournalEntry:
        """
        Post a draft entry, making it immutable.

        Raises UnbalancedEntryError if debits do not equal credits,
        and EntryStateError if the entry is not a draft.
        """
        entry = self.get_entry(company_id, entry_id)
        if entry.status == EntryStatus.POSTED:
            raise EntryStateError("Entry is already posted")
        if entry.status == EntryStatus.REVERSED:
            raise EntryStateError("Reversed entries cannot be posted again")

        self._validate_accounts(
            company_id, {line.account_id for line in entry.lines}
        )
        ensure_balanced(entry.lines)

        entry.status = EntryStatus.POSTED
        entry.posted_by = actor
        entry.posted_at = datetime.utcnow()
        self.db.flush()

        self.activity.record(
            action=ActivityAction.POST,
            entity_type="journal_entry",
            entity_id=entry.id,
            company_id=company_id,
            user_id=actor,
            description=f"Posted journal entry {entry.entry_number}",
        )
        logger.info("Posted journal entry %s", entry.entry_number)
        return entry

    def reverse_entry(
        self,
        company_id: int,
        entry_id: int,
        request: ReverseEntryRequest,
        actor: str | None = None,
    ) -> JournalEntry:
        """
        Reverse a posted entry by posting a mirrored entry.

        The original's lines are left untouched; only its status
        changes to reversed. The reversal is a new posted entry
        whose lines swap debit and credit, so the pair nets to
        zero on every account. Returns the reversal entry.
        """
        original = self.get_entry(company_id, entry_id)
        if original.status != EntryStatus.POSTED:
            raise EntryStateError("Only posted entries can be reversed")

        reversal_lines = []
        for line in original.lines:
            debit, credit = mirror_amounts(line)
            reversal_lines.append(JournalLine(
                account_id=line.account_id,
                debit=debit,
                credit=credit,
                description=f"Reversal: {line.description or ''}".rstrip(),
            ))
        ensure_balanced(reversal_lines)

        reversal_date = request.entry_date or date.today()
        now = datetime.utcnow()
        reason = request.reason or "No reason provided"

        reversal = JournalEntry(
            company_id=company_id,
            entry_number=self._next_entry_number(company_id, reversal_date),
            entry_date=reversal_date,
            memo=f"Reversal of {original.entry_number}: {reason}",
            status=EntryStatus.POSTED,
            source=EntrySource.REVERSAL,
            source_id=original.id,
            reversed_entry_id=original.id,
            reversal_reason=request.reason,
            created_by=actor,
            posted_by=actor,
            posted_at=now,
        )
        reversal.lines = reversal_lines
        self.db.add(reversal)

        original.status = EntryStatus.REVERSED
        original.updated_by = actor
        original.updated_at = now
        self.db.flush()

        self.activity.record(
            action=ActivityAction.REVERSE,
            entity_type="journal_entry",
            entity_id=original.id,
            company_id=company_id,
            user_id=actor,
            description=(
                f"Reversed journal entry {original.entry_number} "
                f"with {reversal.entry_number}"
            ),
            details={"reversal_id": reversal.id, "reason": request.reason},
        )
        logger.info(
            "Reversed journal entry %s -> %s",
            original.entry_number, reversal.entry_number,
        )
        return reversal

    def delete_entry(
        self,
        company_id: int,
        entry_id: int,
        actor: str | None = None,
    ) -> None:
        """Delete a draft. Posted and reversed entries stay for the audit trail."""
        entry = self.get_entry(company_id, entry_id)
        self._require_draft(entry, "deleted")

        entry_number = entry.entry_number
        self.db.delete(entry)
        self.db.flush()

        self.activity.record(
            action=ActivityAction.DELETE,
            entity_type="journal_entry",
            entity_id=entry_id,
            company_id=company_id,
            user_id=actor,
            description=f"Deleted draft journal entry {entry_number}",
        )
