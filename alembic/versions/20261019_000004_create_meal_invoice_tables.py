"""Create meal_invoices and meal_payments tables

Revision ID: 20261019_000004
Revises: 20261019_000003
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000004"
down_revision: Union[str, None] = "20261019_000003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PAYMENT_METHODS = ("Cash", "Bank Transfer", "Card", "Online")


def upgrade() -> None:
    op.create_table(
        "meal_invoices",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("invoice_code", sa.String(20), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column("supplier_id", sa.String(64), nullable=False),
        sa.Column("order_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("unpaid", "paid", name="meal_invoice_status", create_constraint=True),
            nullable=False,
            server_default="unpaid",
        ),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_meal_invoices_invoice_code", "meal_invoices", ["invoice_code"], unique=True)
    op.create_index("ix_meal_invoices_month", "meal_invoices", ["month"])
    op.create_index("ix_meal_invoices_supplier_id", "meal_invoices", ["supplier_id"])
    op.create_index("ix_meal_invoices_status", "meal_invoices", ["status"])

    op.create_table(
        "meal_payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("payment_code", sa.String(20), nullable=False),
        sa.Column("invoice_id", sa.Integer(), nullable=False),
        sa.Column("supplier_id", sa.String(64), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum(*PAYMENT_METHODS, name="meal_payment_method", create_constraint=True),
            nullable=False,
        ),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["invoice_id"],
            ["meal_invoices.id"],
            name="fk_meal_payments_invoice_id",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_meal_payments_payment_code", "meal_payments", ["payment_code"], unique=True)
    op.create_index("ix_meal_payments_invoice_id", "meal_payments", ["invoice_id"], unique=True)
    op.create_index("ix_meal_payments_supplier_id", "meal_payments", ["supplier_id"])


def downgrade() -> None:
    op.drop_index("ix_meal_payments_supplier_id", table_name="meal_payments")
    op.drop_index("ix_meal_payments_invoice_id", table_name="meal_payments")
    op.drop_index("ix_meal_payments_payment_code", table_name="meal_payments")
    op.drop_table("meal_payments")
    op.drop_index("ix_meal_invoices_status", table_name="meal_invoices")
    op.drop_index("ix_meal_invoices_supplier_id", table_name="meal_invoices")
    op.drop_index("ix_meal_invoices_month", table_name="meal_invoices")
    op.drop_index("ix_meal_invoices_invoice_code", table_name="meal_invoices")
    op.drop_table("meal_invoices")
