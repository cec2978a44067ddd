"""Business logic services."""

from bookkeeping.services.activity_service import ActivityService
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.company_service import CompanyService
from bookkeeping.services.journal_service import JournalService
from bookkeeping.services.report_service import ReportService
from bookkeeping.services.invoice_service import InvoiceService
from bookkeeping.services.receipt_service import ReceiptService

__all__ = [
    "ActivityService",
    "AccountService",
    "CompanyService",
    "JournalService",
    "ReportService",
    "InvoiceService",
    "ReceiptService",
]
