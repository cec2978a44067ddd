"""
Tests for the AccountService: chart of accounts and seeding.
"""

from datetime import date
from decimal import Decimal

import pytest

from bookkeeping.models.enums import AccountType, EntryStatus, VatType
from bookkeeping.schemas.account import AccountCreate, AccountUpdate
from bookkeeping.schemas.company import CompanyCreate
from bookkeeping.schemas.journal import JournalEntryCreate, JournalLineCreate
from bookkeeping.services.account_service import (
    AccountService,
    UAE_DEFAULT_ACCOUNTS,
)
from bookkeeping.services.company_service import CompanyService
from bookkeeping.services.errors import NotFoundError
from bookkeeping.services.journal_service import JournalService


def make_account(service, company_id, code="6000", name="Bank Charges",
                 account_type=AccountType.EXPENSE):
    return service.create_account(company_id, AccountCreate(
        code=code,
        name_en=name,
        account_type=account_type,
    ))


class TestCreateAccount:

    def test_create_account_succeeds(self, db_session, company):
        service = AccountService(db_session)
        account = make_account(service, company.id)
        db_session.commit()

        assert account.id is not None
        assert account.code == "6000"
        assert account.account_type == AccountType.EXPENSE
        assert account.vat_type == VatType.NONE
        assert account.is_active is True

    def test_duplicate_code_rejected(self, db_session, company):
        service = AccountService(db_session)
        with pytest.raises(ValueError, match="already exists"):
            make_account(service, company.id, code="1000", name="Petty Cash",
                         account_type=AccountType.ASSET)

    def test_same_code_allowed_in_other_company(self, db_session, company):
        other = CompanyService(db_session).create_company(
            CompanyCreate(name="Oasis Foods LLC", seed_accounts=False)
        )
        service = AccountService(db_session)
        account = make_account(service, other.id, code="1000", name="Cash",
                               account_type=AccountType.ASSET)
        db_session.commit()
        assert account.company_id == other.id

    def test_unknown_company_rejected(self, db_session):
        service = AccountService(db_session)
        with pytest.raises(NotFoundError):
            make_account(service, 42)


class TestSeedAccounts:

    def test_company_is_seeded_on_create(self, db_session, company):
        accounts = AccountService(db_session).list_accounts(company.id)
        assert len(accounts) == len(UAE_DEFAULT_ACCOUNTS)
        assert [a.code for a in accounts] == sorted(a.code for a in accounts)

    def test_vat_accounts_are_tagged(self, accounts):
        assert accounts["2100"].vat_type == VatType.OUTPUT
        assert accounts["1200"].vat_type == VatType.INPUT
        assert accounts["2100"].name_ar is not None

    def test_seeding_is_idempotent(self, db_session, company):
        service = AccountService(db_session)
        created = service.seed_default_accounts(company.id)
        db_session.commit()

        assert created == []
        assert len(service.list_accounts(company.id)) == len(UAE_DEFAULT_ACCOUNTS)

    def test_seeding_fills_gaps(self, db_session, company, accounts):
        service = AccountService(db_session)
        service.delete_account(company.id, accounts["5500"].id)
        db_session.commit()

        created = service.seed_default_accounts(company.id)
        db_session.commit()
        assert [a.code for a in created] == ["5500"]


class TestUpdateAndDelete:

    def test_deactivate_account(self, db_session, company, accounts):
        service = AccountService(db_session)
        account = service.update_account(
            company.id, accounts["5300"].id, AccountUpdate(is_active=False)
        )
        db_session.commit()

        assert account.is_active is False
        active = service.list_accounts(company.id, include_inactive=False)
        assert "5300" not in [a.code for a in active]

    def test_rename_keeps_other_fields(self, db_session, company, accounts):
        service = AccountService(db_session)
        account = service.update_account(
            company.id, accounts["5100"].id, AccountUpdate(name_en="Office Rent")
        )
        db_session.commit()

        assert account.name_en == "Office Rent"
        assert account.account_type == AccountType.EXPENSE

    def test_clear_arabic_name(self, db_session, company, accounts):
        service = AccountService(db_session)
        account = service.update_account(
            company.id, accounts["5100"].id, AccountUpdate(name_ar=None)
        )
        db_session.commit()

        assert account.name_ar is None
        assert account.name_en == "Rent Expense"

    def test_null_for_required_field_is_ignored(self, db_session, company, accounts):
        service = AccountService(db_session)
        account = service.update_account(
            company.id, accounts["5100"].id, AccountUpdate(name_en=None, is_active=None)
        )
        db_session.commit()

        assert account.name_en == "Rent Expense"
        assert account.is_active is True

    def test_delete_unused_account(self, db_session, company):
        service = AccountService(db_session)
        account = make_account(service, company.id)
        db_session.commit()

        service.delete_account(company.id, account.id)
        db_session.commit()

        with pytest.raises(NotFoundError):
            service.get_account(company.id, account.id)

    def test_account_with_transactions_cannot_be_deleted(
        self, db_session, company, accounts
    ):
        JournalService(db_session).create_entry(company.id, JournalEntryCreate(
            entry_date=date(2024, 1, 1),
            status=EntryStatus.DRAFT,
            lines=[
                JournalLineCreate(account_id=accounts["1000"].id, debit=Decimal("10.00")),
                JournalLineCreate(account_id=accounts["3000"].id, credit=Decimal("10.00")),
            ],
        ))
        db_session.commit()

        service = AccountService(db_session)
        with pytest.raises(ValueError, match="existing transactions"):
            service.delete_account(company.id, accounts["1000"].id)

    def test_account_of_other_company_not_found(self, db_session, company, accounts):
        other = CompanyService(db_session).create_company(
            CompanyCreate(name="Oasis Foods LLC", seed_accounts=False)
        )
        db_session.commit()

        with pytest.raises(NotFoundError):
            AccountService(db_session).get_account(other.id, accounts["1000"].id)
