"""Initial schema: users, flight searches, price records, alerts

Revision ID: 001
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001'
down_revision = None
branch_labels = None
depends_on = None

alert_type = sa.Enum('price_drop', 'price_increase', 'price_target_reached', name='alert_type')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('telegram_chat_id', sa.String(64), nullable=True),
        sa.Column('notification_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'flight_searches',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('origin_city', sa.String(100), nullable=False),
        sa.Column('destination_city', sa.String(100), nullable=False),
        sa.Column('departure_date', sa.DateTime(), nullable=False),
        sa.Column('return_date', sa.DateTime(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'price_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('flight_search_id', sa.Integer(), sa.ForeignKey('flight_searches.id', ondelete='CASCADE'), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),  # cents
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('provider', sa.String(100), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'alerts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('flight_search_id', sa.Integer(), sa.ForeignKey('flight_searches.id', ondelete='CASCADE'), nullable=False),
        sa.Column('alert_type', alert_type, nullable=False),
        sa.Column('old_price', sa.Integer(), nullable=True),
        sa.Column('new_price', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_flight_searches_user_id', 'flight_searches', ['user_id'])
    op.create_index('idx_flight_searches_active_departure', 'flight_searches', ['is_active', 'departure_date'])
    op.create_index('idx_price_records_search_recorded', 'price_records', ['flight_search_id', 'recorded_at'])
    op.create_index('idx_alerts_search_created', 'alerts', ['flight_search_id', 'created_at'])
    op.create_index('ix_alerts_is_read', 'alerts', ['is_read'])


def downgrade():
    op.drop_table('alerts')
    op.drop_table('price_records')
    op.drop_table('flight_searches')
    op.drop_table('users')
    alert_type.drop(op.get_bind(), checkfirst=True)
