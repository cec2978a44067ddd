"""
UAE Bookkeeping API: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from bookkeeping.config import get_settings
from bookkeeping.logging_config import configure_logging
from bookkeeping.api.health import router as health_router
from bookkeeping.api.companies import router as companies_router
from bookkeeping.api.accounts import router as accounts_router
from bookkeeping.api.journal import router as journal_router
from bookkeeping.api.reports import router as reports_router
from bookkeeping.api.invoices import router as invoices_router
from bookkeeping.api.receipts import router as receipts_router
from bookkeeping.api.activity import router as activity_router

settings = get_settings()
configure_logging(settings)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry bookkeeping and VAT for UAE companies",
)

# Register routers
app.include_router(health_router)
app.include_router(companies_router)
app.include_router(accounts_router)
app.include_router(journal_router)
app.include_router(reports_router)
app.include_router(invoices_router)
app.include_router(receipts_router)
app.include_router(activity_router)
