"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""
from typing import List, Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamps() -> List[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def booking_fk() -> sa.Column:
    return sa.Column('booking_id', sa.Integer(), sa.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False)


def upgrade() -> None:
    """Create all tables with indexes and constraints."""

    # Accounts
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, comment='passlib pbkdf2_sha256 hash'),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_created_at'), 'users', ['created_at'], unique=False)

    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('nationality', sa.String(length=100), nullable=True),
        sa.Column('street', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_customers')),
    )
    op.create_index(op.f('ix_customers_email'), 'customers', ['email'], unique=True)
    op.create_index(op.f('ix_customers_name'), 'customers', ['name'], unique=False)
    op.create_index(op.f('ix_customers_created_at'), 'customers', ['created_at'], unique=False)

    # Catalogue
    op.create_table(
        'destinations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('region', sa.String(length=100), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('review_count', sa.Integer(), nullable=False),
        sa.Column('price_amount', sa.Float(), nullable=False),
        sa.Column('price_currency', sa.String(length=3), nullable=False),
        sa.Column('price_period', sa.String(length=20), nullable=False, comment="'per day', 'per person', 'per group' or 'total'"),
        sa.Column('min_days', sa.Integer(), nullable=False),
        sa.Column('max_days', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=20), nullable=False, comment='easy, moderate, challenging, difficult or extreme'),
        sa.Column('activities', sa.JSON(), nullable=False),
        sa.Column('seasons', sa.JSON(), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_destinations')),
    )
    for column in ('name', 'country', 'featured', 'rating', 'difficulty', 'created_at'):
        op.create_index(op.f(f'ix_destinations_{column}'), 'destinations', [column], unique=False)

    op.create_table(
        'guides',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('photo', sa.String(length=500), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('region', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('languages', sa.JSON(), nullable=False),
        sa.Column('specialties', sa.JSON(), nullable=False),
        sa.Column('experience_years', sa.Integer(), nullable=False),
        sa.Column('experience_level', sa.String(length=20), nullable=False, comment='beginner, intermediate, expert or master'),
        sa.Column('expeditions', sa.Integer(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('hourly_rate', sa.Float(), nullable=False),
        sa.Column('availability', sa.String(length=30), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('review_count', sa.Integer(), nullable=False),
        sa.Column('instagram', sa.String(length=255), nullable=True),
        sa.Column('facebook', sa.String(length=255), nullable=True),
        sa.Column('twitter', sa.String(length=255), nullable=True),
        sa.Column('linkedin', sa.String(length=255), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_guides')),
        sa.UniqueConstraint('email', name=op.f('uq_guides_email')),
    )
    for column in ('name', 'availability', 'rating', 'created_at'):
        op.create_index(op.f(f'ix_guides_{column}'), 'guides', [column], unique=False)

    op.create_table(
        'guide_destinations',
        sa.Column('guide_id', sa.Integer(), sa.ForeignKey('guides.id', ondelete='CASCADE'), nullable=False),
        sa.Column('destination_id', sa.Integer(), sa.ForeignKey('destinations.id', ondelete='CASCADE'), nullable=False),
        sa.PrimaryKeyConstraint('guide_id', 'destination_id', name=op.f('pk_guide_destinations')),
    )

    op.create_table(
        'guide_certifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guide_id', sa.Integer(), sa.ForeignKey('guides.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('issued_by', sa.String(length=200), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('expiry_year', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_guide_certifications')),
    )
    op.create_index(op.f('ix_guide_certifications_guide_id'), 'guide_certifications', ['guide_id'], unique=False)

    op.create_table(
        'guide_available_dates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guide_id', sa.Integer(), sa.ForeignKey('guides.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date_from', sa.Date(), nullable=False),
        sa.Column('date_to', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_guide_available_dates')),
    )
    op.create_index(op.f('ix_guide_available_dates_guide_id'), 'guide_available_dates', ['guide_id'], unique=False)

    op.create_table(
        'guide_schedules',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guide_id', sa.Integer(), sa.ForeignKey('guides.id', ondelete='CASCADE'), nullable=False),
        sa.Column('destination', sa.String(length=200), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, comment='confirmed, pending, completed or cancelled'),
        sa.Column('difficulty', sa.String(length=20), nullable=False),
        sa.Column('itinerary', sa.Text(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_guide_schedules')),
    )
    for column in ('guide_id', 'start_date', 'created_at'):
        op.create_index(op.f(f'ix_guide_schedules_{column}'), 'guide_schedules', [column], unique=False)

    # Bookings
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_number', sa.String(length=20), nullable=False, comment='B-YYYYMMDD-XXXX'),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('destination_id', sa.Integer(), sa.ForeignKey('destinations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('guide_id', sa.Integer(), sa.ForeignKey('guides.id', ondelete='SET NULL'), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False, comment='Trip length in days'),
        sa.Column('adults_count', sa.Integer(), nullable=False),
        sa.Column('children_count', sa.Integer(), nullable=False),
        sa.Column('infants_count', sa.Integer(), nullable=False),
        sa.Column('total_travelers', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('deposit_amount', sa.Float(), nullable=True),
        sa.Column('deposit_paid', sa.Boolean(), nullable=False),
        sa.Column('balance_due_date', sa.Date(), nullable=True),
        sa.Column('special_requests', sa.JSON(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_bookings')),
    )
    op.create_index(op.f('ix_bookings_booking_number'), 'bookings', ['booking_number'], unique=True)
    for column in ('status', 'customer_id', 'destination_id', 'guide_id', 'start_date', 'payment_status', 'created_at'):
        op.create_index(op.f(f'ix_bookings_{column}'), 'bookings', [column], unique=False)

    op.create_table(
        'booking_accommodations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('check_in', sa.Date(), nullable=True),
        sa.Column('check_out', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_accommodations')),
    )

    op.create_table(
        'booking_transportation',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('departure_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('departure_location', sa.String(length=200), nullable=True),
        sa.Column('arrival_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('arrival_location', sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_transportation')),
    )

    op.create_table(
        'booking_activities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('duration', sa.String(length=50), nullable=True),
        sa.Column('included', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_activities')),
    )

    op.create_table(
        'booking_equipment_rentals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('item', sa.String(length=200), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price_per_unit', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_equipment_rentals')),
    )

    op.create_table(
        'booking_transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('reference', sa.String(length=100), nullable=True, comment='Payment provider reference'),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('method', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, comment='pending, completed, failed or refunded'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_transactions')),
    )

    op.create_table(
        'booking_documents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('upload_date', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_documents')),
    )

    op.create_table(
        'booking_notes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('author', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_notes')),
    )

    op.create_table(
        'booking_emergency_contacts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        booking_fk(),
        sa.Column('contact_name', sa.String(length=100), nullable=False),
        sa.Column('relationship', sa.String(length=50), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_booking_emergency_contacts')),
        sa.UniqueConstraint('booking_id', name=op.f('uq_booking_emergency_contacts_booking_id')),
    )

    for table in (
        'booking_accommodations',
        'booking_transportation',
        'booking_activities',
        'booking_equipment_rentals',
        'booking_transactions',
        'booking_documents',
        'booking_notes',
    ):
        op.create_index(op.f(f'ix_{table}_booking_id'), table, ['booking_id'], unique=False)

    # Reviews
    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('author_name', sa.String(length=100), nullable=False),
        sa.Column('destination_id', sa.Integer(), sa.ForeignKey('destinations.id', ondelete='CASCADE'), nullable=True),
        sa.Column('guide_id', sa.Integer(), sa.ForeignKey('guides.id', ondelete='CASCADE'), nullable=True),
        sa.Column('trip_start_date', sa.Date(), nullable=True),
        sa.Column('trip_end_date', sa.Date(), nullable=True),
        sa.Column('trip_duration', sa.Integer(), nullable=True),
        sa.Column('trip_type', sa.String(length=50), nullable=True),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('helpful_count', sa.Integer(), nullable=False),
        sa.Column('unhelpful_count', sa.Integer(), nullable=False),
        sa.Column('response', sa.Text(), nullable=True),
        sa.Column('response_date', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_reviews')),
    )
    for column in ('rating', 'date', 'author_id', 'destination_id', 'guide_id', 'created_at'):
        op.create_index(op.f(f'ix_reviews_{column}'), 'reviews', [column], unique=False)

    # Notifications
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, comment='success, info, warning or error'),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('action_url', sa.String(length=500), nullable=True),
        sa.Column('action_label', sa.String(length=100), nullable=True),
        sa.Column('related_entity_type', sa.String(length=50), nullable=True),
        sa.Column('related_entity_id', sa.String(length=50), nullable=True),
        sa.Column('related_entity_name', sa.String(length=200), nullable=True),
        sa.Column('recipient_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_notifications')),
    )
    for column in ('read', 'timestamp', 'recipient_id', 'created_at'):
        op.create_index(op.f(f'ix_notifications_{column}'), 'notifications', [column], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('notifications')
    op.drop_table('reviews')
    op.drop_table('booking_emergency_contacts')
    op.drop_table('booking_notes')
    op.drop_table('booking_documents')
    op.drop_table('booking_transactions')
    op.drop_table('booking_equipment_rentals')
    op.drop_table('booking_activities')
    op.drop_table('booking_transportation')
    op.drop_table('booking_accommodations')
    op.drop_table('bookings')
    op.drop_table('guide_schedules')
    op.drop_table('guide_available_dates')
    op.drop_table('guide_certifications')
    op.drop_table('guide_destinations')
    op.drop_table('guides')
    op.drop_table('destinations')
    op.drop_table('customers')
    op.drop_table('users')
