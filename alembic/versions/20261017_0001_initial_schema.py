"""Create initial schema

Revision ID: 20261017_0001
Revises: 
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261017_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False

def upgrade() -> None:
    bind = op.get_bind()

    bookingstatus_enum = sa.Enum('unconfirmed', 'checked-in', 'checked-out', name='bookingstatus')

    # Create cabins table
    if not _has_table(bind, 'cabins'):
        op.create_table('cabins',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('max_capacity', sa.Integer(), server_default='2', nullable=False),
            sa.Column('regular_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('discount', sa.Numeric(precision=10, scale=2), server_default='0', nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('image', sa.String(length=500), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_cabins_id'), 'cabins', ['id'], unique=False)

    # Create guests table
    if not _has_table(bind, 'guests'):
        op.create_table('guests',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('full_name', sa.String(length=200), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('nationality', sa.String(length=100), nullable=True),
            sa.Column('national_id', sa.String(length=50), nullable=True),
            sa.Column('country_flag', sa.String(length=500), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_guests_email'), 'guests', ['email'], unique=True)
        op.create_index(op.f('ix_guests_id'), 'guests', ['id'], unique=False)

    # Create bookings table
    if not _has_table(bind, 'bookings'):
        op.create_table('bookings',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=False),
            sa.Column('num_nights', sa.Integer(), nullable=False),
            sa.Column('num_guests', sa.Integer(), nullable=False),
            sa.Column('cabin_price', sa.Numeric(precision=10, scale=2), nullable=True),
            sa.Column('extras_price', sa.Numeric(precision=10, scale=2), nullable=True),
            sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=True),
            sa.Column('status', bookingstatus_enum, server_default='unconfirmed', nullable=False),
            sa.Column('has_breakfast', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('is_paid', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('observations', sa.Text(), nullable=True),
            sa.Column('cabin_id', sa.Integer(), nullable=False),
            sa.Column('guest_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['cabin_id'], ['cabins.id'], ),
            sa.ForeignKeyConstraint(['guest_id'], ['guests.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_bookings_cabin_id'), 'bookings', ['cabin_id'], unique=False)
        op.create_index(op.f('ix_bookings_end_date'), 'bookings', ['end_date'], unique=False)
        op.create_index(op.f('ix_bookings_guest_id'), 'bookings', ['guest_id'], unique=False)
        op.create_index(op.f('ix_bookings_id'), 'bookings', ['id'], unique=False)
        op.create_index(op.f('ix_bookings_start_date'), 'bookings', ['start_date'], unique=False)
        # composite indexes for the availability and guest-bookings queries
        op.create_index('ix_bookings_cabin_start_end', 'bookings', ['cabin_id', 'start_date', 'end_date'], unique=False)
        op.create_index('ix_bookings_guest_start', 'bookings', ['guest_id', 'start_date'], unique=False)

    # Create settings table and seed its single row
    if not _has_table(bind, 'settings'):
        settings_table = op.create_table('settings',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('min_booking_length', sa.Integer(), nullable=False),
            sa.Column('max_booking_length', sa.Integer(), nullable=False),
            sa.Column('max_guests_per_booking', sa.Integer(), nullable=False),
            sa.Column('breakfast_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.bulk_insert(settings_table, [
            {'min_booking_length': 3, 'max_booking_length': 90, 'max_guests_per_booking': 8, 'breakfast_price': 15},
        ])


def downgrade() -> None:
    bind = op.get_bind()
    dialect_name = bind.dialect.name
    op.drop_table('settings')
    op.drop_table('bookings')
    op.drop_table('guests')
    op.drop_table('cabins')

    # Drop ENUM types for PostgreSQL
    if dialect_name == 'postgresql':
        sa.Enum(name='bookingstatus').drop(bind, checkfirst=True)
