"""initial tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('phone_number', sa.String(20), nullable=False),
        sa.Column('role', sa.String(16), nullable=False, server_default='student'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_phone_number', 'users', ['phone_number'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table('time_slots',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time_range', sa.String(11), nullable=False),
        sa.Column('max_capacity', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('current_bookings', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('date', 'time_range', name='uq_time_slot_date_range'),
        sa.CheckConstraint('current_bookings >= 0', name='ck_time_slot_bookings_non_negative'),
    )
    op.create_index('ix_time_slots_date', 'time_slots', ['date'])
    op.create_index('ix_time_slot_date_active', 'time_slots', ['date', 'is_active'])

    op.create_table('batches',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='created'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    op.create_table('laundry_orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_name', sa.String(200), nullable=False),
        sa.Column('room_number', sa.String(50), nullable=False),
        sa.Column('phone_number', sa.String(20), nullable=False),
        sa.Column('laundry_type', sa.String(16), nullable=False, server_default='normal'),
        sa.Column('preferred_date', sa.Date(), nullable=False),
        sa.Column('preferred_time', sa.String(11), nullable=False),
        sa.Column('slot_id', sa.String(36), sa.ForeignKey('time_slots.id', ondelete='SET NULL'), nullable=True),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        sa.Column('barcode', sa.String(32), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('batch_id', sa.String(36), sa.ForeignKey('batches.id', ondelete='SET NULL'), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.Column('slot_note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_laundry_orders_user_id', 'laundry_orders', ['user_id'])
    op.create_index('ix_laundry_orders_barcode', 'laundry_orders', ['barcode'], unique=True)
    op.create_index('ix_laundry_orders_status', 'laundry_orders', ['status'])
    op.create_index('ix_laundry_orders_created_at', 'laundry_orders', ['created_at'])

    op.create_table('clothing_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('laundry_orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('clothing_type', sa.String(32), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_clothing_items_order_id', 'clothing_items', ['order_id'])

    op.create_table('batch_orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('batch_id', sa.String(36), sa.ForeignKey('batches.id', ondelete='CASCADE'), nullable=False),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('laundry_orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_batch_orders_batch_id', 'batch_orders', ['batch_id'])
    op.create_index('ix_batch_orders_order_id', 'batch_orders', ['order_id'])

    op.create_table('notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('laundry_orders.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

def downgrade():
    op.drop_table('notifications')
    op.drop_table('batch_orders')
    op.drop_table('clothing_items')
    op.drop_table('laundry_orders')
    op.drop_table('batches')
    op.drop_table('time_slots')
    op.drop_table('users')
