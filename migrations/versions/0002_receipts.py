"""add expense receipts

Revision ID: 0002_receipts
Revises: 0001_initial
Create Date: 2026-10-20 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0002_receipts"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "receipts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "company_id", sa.Integer(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("merchant", sa.String(length=200), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("receipt_date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("vat_amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("expense_account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("payment_account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("posted", sa.Boolean(), nullable=False),
        sa.Column(
            "journal_entry_id", sa.Integer(),
            sa.ForeignKey("journal_entries.id"), nullable=True,
        ),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_receipts_company_id", "receipts", ["company_id"])


def downgrade():
    op.drop_index("ix_receipts_company_id", table_name="receipts")
    op.drop_table("receipts")
