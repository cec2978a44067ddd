"""
Tests for the JournalService.

Tests cover:
- Draft creation and entry numbering
- Posting balanced entries, rejecting unbalanced ones
- Immutability of posted and reversed entries
- Reversal: mirrored lines, links and status change
- Account checks (inactive, foreign, unknown)
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from bookkeeping.models.activity_log import ActivityLog
from bookkeeping.models.enums import ActivityAction, EntrySource, EntryStatus
from bookkeeping.schemas.account import AccountUpdate
from bookkeeping.schemas.company import CompanyCreate
from bookkeeping.schemas.journal import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalLineCreate,
    ReverseEntryRequest,
)
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.company_service import CompanyService
from bookkeeping.services.errors import (
    EntryStateError,
    NotFoundError,
    UnbalancedEntryError,
)
from bookkeeping.services.journal_service import JournalService


ENTRY_DATE = date(2024, 3, 15)


# --- Helpers ---

def make_request(debit_account, credit_account, amount="1000.00",
                 credit_amount=None, status=EntryStatus.DRAFT, memo="Capital"):
    return JournalEntryCreate(
        entry_date=ENTRY_DATE,
        memo=memo,
        status=status,
        lines=[
            JournalLineCreate(
                account_id=debit_account.id,
                debit=Decimal(amount),
                description="Cash in",
            ),
            JournalLineCreate(
                account_id=credit_account.id,
                credit=Decimal(credit_amount or amount),
                description="Owner contribution",
            ),
        ],
    )


def cash_and_equity(accounts):
    return accounts["1000"], accounts["3000"]


# --- Create Tests ---

class TestCreateEntry:

    def test_create_draft(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(
            company.id, make_request(*cash_and_equity(accounts)), actor="u-1"
        )
        db_session.commit()

        assert entry.id is not None
        assert entry.status == EntryStatus.DRAFT
        assert entry.source == EntrySource.MANUAL
        assert entry.created_by == "u-1"
        assert entry.posted_at is None
        assert len(entry.lines) == 2

    def test_unbalanced_draft_rejected(self, db_session, company, accounts):
        service = JournalService(db_session)
        with pytest.raises(UnbalancedEntryError, match="must equal credits"):
            service.create_entry(
                company.id,
                make_request(*cash_and_equity(accounts), amount="100.00", credit_amount="1.00"),
            )
        db_session.rollback()

        assert service.list_entries(company.id) == []

    def test_create_posted(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(
            company.id,
            make_request(*cash_and_equity(accounts), status=EntryStatus.POSTED),
            actor="u-1",
        )
        db_session.commit()

        assert entry.status == EntryStatus.POSTED
        assert entry.posted_by == "u-1"
        assert entry.posted_at is not None

    def test_create_posted_unbalanced_rejected(self, db_session, company, accounts):
        service = JournalService(db_session)
        with pytest.raises(UnbalancedEntryError):
            service.create_entry(
                company.id,
                make_request(
                    *cash_and_equity(accounts),
                    amount="100.00",
                    credit_amount="99.99",
                    status=EntryStatus.POSTED,
                ),
            )

    def test_entry_numbers_are_sequential_per_day(self, db_session, company, accounts):
        service = JournalService(db_session)
        first = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        second = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        assert first.entry_number == "JE-20240315-001"
        assert second.entry_number == "JE-20240315-002"

    def test_deleted_draft_number_not_reused(self, db_session, company, accounts):
        service = JournalService(db_session)
        first = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        second = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        service.delete_entry(company.id, first.id)
        db_session.commit()

        third = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()
        assert second.entry_number == "JE-20240315-002"
        assert third.entry_number == "JE-20240315-003"

    def test_inactive_account_rejected(self, db_session, company, accounts):
        cash, equity = cash_and_equity(accounts)
        AccountService(db_session).update_account(
            company.id, cash.id, AccountUpdate(is_active=False)
        )
        db_session.commit()

        service = JournalService(db_session)
        with pytest.raises(ValueError, match="not active"):
            service.create_entry(company.id, make_request(cash, equity))

    def test_account_of_other_company_rejected(self, db_session, company, accounts):
        other = CompanyService(db_session).create_company(
            CompanyCreate(name="Oasis Foods LLC")
        )
        db_session.commit()
        other_cash = AccountService(db_session).get_by_code(other.id, "1000")

        service = JournalService(db_session)
        with pytest.raises(NotFoundError, match="Accounts not found"):
            service.create_entry(
                company.id, make_request(other_cash, accounts["3000"])
            )

    def test_unknown_account_not_found(self, db_session, company, accounts):
        service = JournalService(db_session)
        request = make_request(*cash_and_equity(accounts))
        request.lines[0].account_id = 99999
        with pytest.raises(NotFoundError, match="99999"):
            service.create_entry(company.id, request)

    def test_unknown_company_rejected(self, db_session, company, accounts):
        service = JournalService(db_session)
        with pytest.raises(NotFoundError):
            service.create_entry(9999, make_request(*cash_and_equity(accounts)))

    def test_create_records_activity(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(
            company.id, make_request(*cash_and_equity(accounts)), actor="u-7"
        )
        db_session.commit()

        log = db_session.query(ActivityLog).filter_by(
            entity_type="journal_entry", entity_id=str(entry.id)
        ).one()
        assert log.action == ActivityAction.CREATE
        assert log.user_id == "u-7"


class TestLineValidation:

    def test_line_with_both_sides_rejected(self):
        with pytest.raises(ValidationError):
            JournalLineCreate(account_id=1, debit=Decimal("1"), credit=Decimal("1"))

    def test_line_with_no_amount_rejected(self):
        with pytest.raises(ValidationError):
            JournalLineCreate(account_id=1)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            JournalLineCreate(account_id=1, debit=Decimal("-5"))

    def test_single_line_entry_rejected(self):
        with pytest.raises(ValidationError):
            JournalEntryCreate(
                entry_date=ENTRY_DATE,
                lines=[JournalLineCreate(account_id=1, debit=Decimal("5"))],
            )

    def test_reversed_status_not_accepted_on_create(self):
        with pytest.raises(ValidationError):
            JournalEntryCreate(
                entry_date=ENTRY_DATE,
                status=EntryStatus.REVERSED,
                lines=[
                    JournalLineCreate(account_id=1, debit=Decimal("5")),
                    JournalLineCreate(account_id=2, credit=Decimal("5")),
                ],
            )


# --- Post Tests ---

class TestPostEntry:

    def test_post_balanced_draft(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        posted = service.post_entry(company.id, entry.id, actor="u-2")
        db_session.commit()

        assert posted.status == EntryStatus.POSTED
        assert posted.posted_by == "u-2"
        total_debit = sum(line.debit for line in posted.lines)
        total_credit = sum(line.credit for line in posted.lines)
        assert total_debit == total_credit == Decimal("1000.00")

    def test_post_rechecks_stored_lines(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        # Edited directly, bypassing the service
        entry.lines[1].credit = Decimal("90.00")
        db_session.commit()

        with pytest.raises(UnbalancedEntryError, match="must equal credits"):
            service.post_entry(company.id, entry.id)
        db_session.rollback()

        assert service.get_entry(company.id, entry.id).status == EntryStatus.DRAFT

    def test_post_twice_rejected(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(
            company.id, make_request(*cash_and_equity(accounts), status=EntryStatus.POSTED)
        )
        db_session.commit()

        with pytest.raises(EntryStateError, match="already posted"):
            service.post_entry(company.id, entry.id)

    def test_entry_of_other_company_not_found(self, db_session, company, accounts):
        other = CompanyService(db_session).create_company(
            CompanyCreate(name="Oasis Foods LLC", seed_accounts=False)
        )
        service = JournalService(db_session)
        entry = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        with pytest.raises(NotFoundError):
            service.post_entry(other.id, entry.id)


# --- Immutability Tests ---

class TestImmutability:

    def _posted(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(
            company.id, make_request(*cash_and_equity(accounts), status=EntryStatus.POSTED)
        )
        db_session.commit()
        return service, entry

    def test_update_draft(self, db_session, company, accounts):
        service = JournalService(db_session)
        cash, equity = cash_and_equity(accounts)
        entry = service.create_entry(company.id, make_request(cash, equity))
        db_session.commit()

        updated = service.update_entry(
            company.id,
            entry.id,
            JournalEntryUpdate(
                entry_date=date(2024, 3, 16),
                memo="Corrected",
                lines=[
                    JournalLineCreate(account_id=cash.id, debit=Decimal("500.00")),
                    JournalLineCreate(account_id=equity.id, credit=Decimal("500.00")),
                ],
            ),
            actor="u-3",
        )
        db_session.commit()

        assert updated.memo == "Corrected"
        assert updated.updated_by == "u-3"
        assert [line.debit for line in updated.lines] == [Decimal("500.00"), Decimal("0.00")]

    def test_update_with_unbalanced_lines_rejected(self, db_session, company, accounts):
        service = JournalService(db_session)
        cash, equity = cash_and_equity(accounts)
        entry = service.create_entry(company.id, make_request(cash, equity))
        db_session.commit()

        with pytest.raises(UnbalancedEntryError):
            service.update_entry(
                company.id,
                entry.id,
                JournalEntryUpdate(
                    entry_date=ENTRY_DATE,
                    lines=[
                        JournalLineCreate(account_id=cash.id, debit=Decimal("500.00")),
                        JournalLineCreate(account_id=equity.id, credit=Decimal("400.00")),
                    ],
                ),
            )
        db_session.rollback()

        unchanged = service.get_entry(company.id, entry.id)
        assert [line.debit for line in unchanged.lines] == [Decimal("1000.00"), Decimal("0.00")]

    def test_posted_entry_cannot_be_updated(self, db_session, company, accounts):
        service, entry = self._posted(db_session, company, accounts)
        cash, equity = cash_and_equity(accounts)
        with pytest.raises(EntryStateError, match="Use reversal"):
            service.update_entry(
                company.id,
                entry.id,
                JournalEntryUpdate(
                    entry_date=ENTRY_DATE,
                    lines=[
                        JournalLineCreate(account_id=cash.id, debit=Decimal("1.00")),
                        JournalLineCreate(account_id=equity.id, credit=Decimal("1.00")),
                    ],
                ),
            )

    def test_posted_entry_cannot_be_deleted(self, db_session, company, accounts):
        service, entry = self._posted(db_session, company, accounts)
        with pytest.raises(EntryStateError):
            service.delete_entry(company.id, entry.id)

    def test_reversed_entry_cannot_be_deleted(self, db_session, company, accounts):
        service, entry = self._posted(db_session, company, accounts)
        service.reverse_entry(company.id, entry.id, ReverseEntryRequest())
        db_session.commit()

        with pytest.raises(EntryStateError, match="Reversed"):
            service.delete_entry(company.id, entry.id)

    def test_delete_draft(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        service.delete_entry(company.id, entry.id)
        db_session.commit()

        with pytest.raises(NotFoundError):
            service.get_entry(company.id, entry.id)


# --- Reversal Tests ---

class TestReverseEntry:

    def _posted(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(
            company.id, make_request(*cash_and_equity(accounts), status=EntryStatus.POSTED)
        )
        db_session.commit()
        return service, entry

    def test_reversal_swaps_every_line(self, db_session, company, accounts):
        service, original = self._posted(db_session, company, accounts)
        reversal = service.reverse_entry(
            company.id, original.id, ReverseEntryRequest(reason="Duplicate")
        )
        db_session.commit()

        assert len(reversal.lines) == len(original.lines)
        for orig_line, rev_line in zip(original.lines, reversal.lines):
            assert rev_line.account_id == orig_line.account_id
            assert rev_line.debit == orig_line.credit
            assert rev_line.credit == orig_line.debit
            assert rev_line.description.startswith("Reversal: ")

    def test_reversal_links_and_marks_original(self, db_session, company, accounts):
        service, original = self._posted(db_session, company, accounts)
        reversal = service.reverse_entry(
            company.id,
            original.id,
            ReverseEntryRequest(reason="Duplicate", entry_date=date(2024, 3, 20)),
            actor="u-4",
        )
        db_session.commit()

        assert reversal.status == EntryStatus.POSTED
        assert reversal.source == EntrySource.REVERSAL
        assert reversal.reversed_entry_id == original.id
        assert reversal.entry_date == date(2024, 3, 20)
        assert reversal.memo == f"Reversal of {original.entry_number}: Duplicate"
        assert reversal.posted_by == "u-4"

        refreshed = service.get_entry(company.id, original.id)
        assert refreshed.status == EntryStatus.REVERSED
        assert [line.debit for line in refreshed.lines] == [Decimal("1000.00"), Decimal("0.00")]

    def test_reversal_defaults_to_today(self, db_session, company, accounts):
        service, original = self._posted(db_session, company, accounts)
        reversal = service.reverse_entry(company.id, original.id, ReverseEntryRequest())
        db_session.commit()

        assert reversal.entry_date == date.today()
        assert reversal.memo.endswith("No reason provided")

    def test_draft_cannot_be_reversed(self, db_session, company, accounts):
        service = JournalService(db_session)
        entry = service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        with pytest.raises(EntryStateError, match="Only posted entries"):
            service.reverse_entry(company.id, entry.id, ReverseEntryRequest())

    def test_entry_cannot_be_reversed_twice(self, db_session, company, accounts):
        service, original = self._posted(db_session, company, accounts)
        service.reverse_entry(company.id, original.id, ReverseEntryRequest())
        db_session.commit()

        with pytest.raises(EntryStateError):
            service.reverse_entry(company.id, original.id, ReverseEntryRequest())

    def test_reversed_entry_cannot_be_posted(self, db_session, company, accounts):
        service, original = self._posted(db_session, company, accounts)
        service.reverse_entry(company.id, original.id, ReverseEntryRequest())
        db_session.commit()

        with pytest.raises(EntryStateError, match="cannot be posted again"):
            service.post_entry(company.id, original.id)


# --- Listing Tests ---

class TestListEntries:

    def test_filters_by_status(self, db_session, company, accounts):
        service = JournalService(db_session)
        service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        service.create_entry(
            company.id, make_request(*cash_and_equity(accounts), status=EntryStatus.POSTED)
        )
        db_session.commit()

        drafts = service.list_entries(company.id, status=EntryStatus.DRAFT)
        posted = service.list_entries(company.id, status=EntryStatus.POSTED)
        assert len(drafts) == 1
        assert len(posted) == 1

    def test_filters_by_date_range(self, db_session, company, accounts):
        service = JournalService(db_session)
        service.create_entry(company.id, make_request(*cash_and_equity(accounts)))
        db_session.commit()

        assert service.list_entries(company.id, date_from=date(2024, 3, 16)) == []
        assert len(service.list_entries(
            company.id, date_from=date(2024, 3, 1), date_to=date(2024, 3, 31)
        )) == 1

    def test_newest_first(self, db_session, company, accounts):
        service = JournalService(db_session)
        cash, equity = cash_and_equity(accounts)
        older = service.create_entry(company.id, make_request(cash, equity))
        newer = service.create_entry(company.id, JournalEntryCreate(
            entry_date=date(2024, 4, 1),
            lines=[
                JournalLineCreate(account_id=cash.id, debit=Decimal("5.00")),
                JournalLineCreate(account_id=equity.id, credit=Decimal("5.00")),
            ],
        ))
        db_session.commit()

        assert [e.id for e in service.list_entries(company.id)] == [newer.id, older.id]
