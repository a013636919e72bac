"""Create property, room, user and meal order tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Tables owned by the property, user and meal subsystems. Finance only
reads them; they are created here so a standalone database can be
migrated from scratch.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('room_no', sa.String(50), nullable=False),
        sa.Column('base_rent', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_rooms_property_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_rooms_property_id', 'rooms', ['property_id'])
    op.create_index('ix_rooms_is_active', 'rooms', ['is_active'])

    op.create_table(
        'room_occupants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(64), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['room_id'],
            ['rooms.id'],
            name='fk_room_occupants_room_id',
            ondelete='CASCADE'
        ),
        sa.UniqueConstraint('room_id', 'tenant_id', name='uq_room_occupants_room_tenant'),
    )
    op.create_index('ix_room_occupants_room_id', 'room_occupants', ['room_id'])
    op.create_index('ix_room_occupants_tenant_id', 'room_occupants', ['tenant_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False, server_default='tenant'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('total_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'PREPARING', 'DELIVERED', 'CANCELLED', name='order_status', create_constraint=True),
            nullable=False,
            server_default='PENDING'
        ),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_orders_created_at', table_name='orders')
    op.drop_index('ix_orders_status', table_name='orders')
    op.drop_index('ix_orders_user_id', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_room_occupants_tenant_id', table_name='room_occupants')
    op.drop_index('ix_room_occupants_room_id', table_name='room_occupants')
    op.drop_table('room_occupants')
    op.drop_index('ix_rooms_is_active', table_name='rooms')
    op.drop_index('ix_rooms_property_id', table_name='rooms')
    op.drop_table('rooms')
    op.drop_table('properties')
