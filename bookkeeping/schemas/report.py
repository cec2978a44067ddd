"""
Pydantic schemas for financial reports.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from bookkeeping.models.enums import AccountType


class AccountBalance(BaseModel):
    account_id: int
    code: str
    name_en: str
    account_type: AccountType
    debit_total: Decimal
    credit_total: Decimal
    balance: Decimal


class TrialBalanceResponse(BaseModel):
    date_from: date | None
    date_to: date | None
    accounts: list[AccountBalance]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool


class ReportLine(BaseModel):
    account_id: int
    code: str
    name_en: str
    amount: Decimal


class ProfitAndLossResponse(BaseModel):
    date_from: date | None
    date_to: date | None
    income: list[ReportLine]
    expenses: list[ReportLine]
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal


class BalanceSheetResponse(BaseModel):
    as_of: date | None
    assets: list[ReportLine]
    liabilities: list[ReportLine]
    equity: list[ReportLine]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    net_income: Decimal
    is_balanced: bool


class VatSummaryResponse(BaseModel):
    date_from: date | None
    date_to: date | None
    output_vat: Decimal
    input_vat: Decimal
    net_vat_payable: Decimal
