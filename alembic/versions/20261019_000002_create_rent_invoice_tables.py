"""Create counters, rent_invoices and payments tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Monthly rent invoices, their one-per-invoice payments and the sequence
counters behind INV/PMT codes.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000002"
down_revision: Union[str, None] = "20261019_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PAYMENT_METHODS = ("Cash", "Bank Transfer", "Card", "Online")


def upgrade() -> None:
    op.create_table(
        "counters",
        sa.Column("kind", sa.String(50), nullable=False),
        sa.Column("seq", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("prefix", sa.String(20), nullable=False, server_default=""),
        sa.Column("pad", sa.Integer(), nullable=False, server_default="3"),
        sa.PrimaryKeyConstraint("kind"),
    )

    op.create_table(
        "rent_invoices",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("invoice_code", sa.String(20), nullable=False),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("room_id", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column("base_rent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("utility_share", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("meal_cost", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "paid", name="rent_invoice_status", create_constraint=True),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["properties.id"],
            name="fk_rent_invoices_property_id",
            ondelete="NO ACTION",
        ),
        sa.ForeignKeyConstraint(
            ["room_id"],
            ["rooms.id"],
            name="fk_rent_invoices_room_id",
            ondelete="NO ACTION",
        ),
        sa.UniqueConstraint("tenant_id", "month", name="uq_rent_invoices_tenant_month"),
    )
    op.create_index("ix_rent_invoices_invoice_code", "rent_invoices", ["invoice_code"], unique=True)
    op.create_index("ix_rent_invoices_tenant_id", "rent_invoices", ["tenant_id"])
    op.create_index("ix_rent_invoices_property_id", "rent_invoices", ["property_id"])
    op.create_index("ix_rent_invoices_month", "rent_invoices", ["month"])
    op.create_index("ix_rent_invoices_status", "rent_invoices", ["status"])
    op.create_index(
        "ix_rent_invoices_month_property_tenant",
        "rent_invoices",
        ["month", "property_id", "tenant_id"],
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("payment_code", sa.String(20), nullable=False),
        sa.Column("invoice_id", sa.Integer(), nullable=False),
        sa.Column("amount_paid", sa.Integer(), nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum(*PAYMENT_METHODS, name="payment_method", create_constraint=True),
            nullable=False,
        ),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["invoice_id"],
            ["rent_invoices.id"],
            name="fk_payments_invoice_id",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_payments_payment_code", "payments", ["payment_code"], unique=True)
    op.create_index("ix_payments_invoice_id", "payments", ["invoice_id"], unique=True)
    op.create_index("ix_payments_payment_date", "payments", ["payment_date"])


def downgrade() -> None:
    op.drop_index("ix_payments_payment_date", table_name="payments")
    op.drop_index("ix_payments_invoice_id", table_name="payments")
    op.drop_index("ix_payments_payment_code", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_rent_invoices_month_property_tenant", table_name="rent_invoices")
    op.drop_index("ix_rent_invoices_status", table_name="rent_invoices")
    op.drop_index("ix_rent_invoices_month", table_name="rent_invoices")
    op.drop_index("ix_rent_invoices_property_id", table_name="rent_invoices")
    op.drop_index("ix_rent_invoices_tenant_id", table_name="rent_invoices")
    op.drop_index("ix_rent_invoices_invoice_code", table_name="rent_invoices")
    op.drop_table("rent_invoices")
    op.drop_table("counters")
