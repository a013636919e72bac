"""Create utility_bills, utility_payments and finance_reports tables

Revision ID: 20261019_000003
Revises: 20261019_000002
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000003"
down_revision: Union[str, None] = "20261019_000002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PAYMENT_METHODS = ("Cash", "Bank Transfer", "Card", "Online")


def upgrade() -> None:
    op.create_table(
        "utility_bills",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bill_code", sa.String(20), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column(
            "type",
            sa.Enum("water", "electricity", name="utility_type", create_constraint=True),
            nullable=False,
        ),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("unpaid", "paid", name="utility_bill_status", create_constraint=True),
            nullable=False,
            server_default="unpaid",
        ),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["properties.id"],
            name="fk_utility_bills_property_id",
            ondelete="NO ACTION",
        ),
        sa.UniqueConstraint("property_id", "month", "type", name="uq_utility_bills_property_month_type"),
    )
    op.create_index("ix_utility_bills_bill_code", "utility_bills", ["bill_code"], unique=True)
    op.create_index("ix_utility_bills_property_id", "utility_bills", ["property_id"])
    op.create_index("ix_utility_bills_month", "utility_bills", ["month"])

    op.create_table(
        "utility_payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("payment_code", sa.String(20), nullable=False),
        sa.Column("bill_id", sa.Integer(), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("amount_paid", sa.Integer(), nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum(*PAYMENT_METHODS, name="utility_payment_method", create_constraint=True),
            nullable=False,
        ),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["bill_id"],
            ["utility_bills.id"],
            name="fk_utility_payments_bill_id",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["properties.id"],
            name="fk_utility_payments_property_id",
            ondelete="NO ACTION",
        ),
    )
    op.create_index("ix_utility_payments_payment_code", "utility_payments", ["payment_code"], unique=True)
    op.create_index("ix_utility_payments_bill_id", "utility_payments", ["bill_id"], unique=True)
    op.create_index("ix_utility_payments_property_id", "utility_payments", ["property_id"])
    op.create_index("ix_utility_payments_month", "utility_payments", ["month"])

    op.create_table(
        "finance_reports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("report_code", sa.String(20), nullable=False),
        sa.Column("report_type", sa.String(20), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column("generated_by", sa.String(64), nullable=True),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("report_type", "month", name="uq_finance_reports_type_month"),
    )
    op.create_index("ix_finance_reports_report_code", "finance_reports", ["report_code"], unique=True)
    op.create_index("ix_finance_reports_month", "finance_reports", ["month"])


def downgrade() -> None:
    op.drop_index("ix_finance_reports_month", table_name="finance_reports")
    op.drop_index("ix_finance_reports_report_code", table_name="finance_reports")
    op.drop_table("finance_reports")
    op.drop_index("ix_utility_payments_month", table_name="utility_payments")
    op.drop_index("ix_utility_payments_property_id", table_name="utility_payments")
    op.drop_index("ix_utility_payments_bill_id", table_name="utility_payments")
    op.drop_index("ix_utility_payments_payment_code", table_name="utility_payments")
    op.drop_table("utility_payments")
    op.drop_index("ix_utility_bills_month", table_name="utility_bills")
    op.drop_index("ix_utility_bills_property_id", table_name="utility_bills")
    op.drop_index("ix_utility_bills_bill_code", table_name="utility_bills")
    op.drop_table("utility_bills")
