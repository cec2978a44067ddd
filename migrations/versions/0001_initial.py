"""create bookkeeping tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


account_type_enum = sa.Enum(
    "ASSET", "LIABILITY", "EQUITY", "INCOME", "EXPENSE", name="account_type_enum"
)
vat_type_enum = sa.Enum("INPUT", "OUTPUT", "NONE", name="vat_type_enum")
entry_status_enum = sa.Enum("DRAFT", "POSTED", "REVERSED", name="entry_status_enum")
entry_source_enum = sa.Enum(
    "MANUAL", "INVOICE", "RECEIPT", "PAYMENT", "ADJUSTMENT", "REVERSAL",
    name="entry_source_enum",
)
invoice_status_enum = sa.Enum("DRAFT", "SENT", "PAID", "VOID", name="invoice_status_enum")
activity_action_enum = sa.Enum(
    "CREATE", "UPDATE", "DELETE", "POST", "REVERSE", "SEED",
    name="activity_action_enum",
)


def upgrade():
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False, unique=True),
        sa.Column("base_currency", sa.String(length=3), nullable=False),
        sa.Column("locale", sa.String(length=2), nullable=False),
        sa.Column("trn", sa.String(length=15), nullable=True),
        sa.Column("vat_filing_frequency", sa.String(length=20), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "company_id", sa.Integer(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("name_en", sa.String(length=100), nullable=False),
        sa.Column("name_ar", sa.String(length=100), nullable=True),
        sa.Column("account_type", account_type_enum, nullable=False),
        sa.Column("vat_type", vat_type_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("company_id", "code", name="uq_account_company_code"),
    )
    op.create_index("ix_accounts_company_id", "accounts", ["company_id"])

    op.create_table(
        "journal_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "company_id", sa.Integer(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("entry_number", sa.String(length=30), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("memo", sa.String(length=500), nullable=True),
        sa.Column("status", entry_status_enum, nullable=False),
        sa.Column("source", entry_source_enum, nullable=False),
        sa.Column("source_id", sa.Integer(), nullable=True),
        sa.Column(
            "reversed_entry_id", sa.Integer(),
            sa.ForeignKey("journal_entries.id"), nullable=True,
        ),
        sa.Column("reversal_reason", sa.String(length=500), nullable=True),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("posted_by", sa.String(length=100), nullable=True),
        sa.Column("posted_at", sa.DateTime(), nullable=True),
        sa.Column("updated_by", sa.String(length=100), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "company_id", "entry_number", name="uq_journal_entry_company_number"
        ),
    )
    op.create_index("ix_journal_entries_company_id", "journal_entries", ["company_id"])
    op.create_index("ix_journal_entries_entry_date", "journal_entries", ["entry_date"])

    op.create_table(
        "journal_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "entry_id", sa.Integer(),
            sa.ForeignKey("journal_entries.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("debit", sa.Numeric(19, 2), nullable=False),
        sa.Column("credit", sa.Numeric(19, 2), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_journal_lines_entry_id", "journal_lines", ["entry_id"])
    op.create_index("ix_journal_lines_account_id", "journal_lines", ["account_id"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "company_id", sa.Integer(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("number", sa.String(length=50), nullable=False),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("customer_trn", sa.String(length=15), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("subtotal", sa.Numeric(19, 2), nullable=False),
        sa.Column("vat_amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("total", sa.Numeric(19, 2), nullable=False),
        sa.Column("status", invoice_status_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("company_id", "number", name="uq_invoice_company_number"),
    )
    op.create_index("ix_invoices_company_id", "invoices", ["company_id"])

    op.create_table(
        "invoice_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "invoice_id", sa.Integer(),
            sa.ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(19, 4), nullable=False),
        sa.Column("unit_price", sa.Numeric(19, 2), nullable=False),
        sa.Column("vat_rate", sa.Numeric(5, 4), nullable=False),
    )
    op.create_index("ix_invoice_lines_invoice_id", "invoice_lines", ["invoice_id"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "company_id", sa.Integer(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("user_id", sa.String(length=100), nullable=True),
        sa.Column("action", activity_action_enum, nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.String(length=50), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_activity_logs_company_id", "activity_logs", ["company_id"])
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])


def downgrade():
    op.drop_table("activity_logs")
    op.drop_table("invoice_lines")
    op.drop_table("invoices")
    op.drop_table("journal_lines")
    op.drop_table("journal_entries")
    op.drop_table("accounts")
    op.drop_table("companies")

    bind = op.get_bind()
    for enum in (
        activity_action_enum,
        invoice_status_enum,
        entry_source_enum,
        entry_status_enum,
        vat_type_enum,
        account_type_enum,
    ):
        enum.drop(bind, checkfirst=True)
