"""Initial schema - all tables

Revision ID: 001
Revises: 
Create Date: 2025-01-01 00:00:00.000000

This migration creates all initial tables for WorkHours:
- users: Accounts that own time entries
- time_entries: Daily time records with approval status
- user_sessions: Authentication sessions
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.config import get_settings

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Get schema from config
settings = get_settings()
SCHEMA = settings.db_schema or None


def _fk(target: str) -> str:
    return f'{SCHEMA}.{target}' if SCHEMA else target


def upgrade() -> None:
    # Create schema if specified and doesn't exist (SQL Server only)
    if SCHEMA and op.get_bind().dialect.name == 'mssql':
        op.execute(f"IF NOT EXISTS (SELECT * FROM sys.schemas WHERE name = '{SCHEMA}') EXEC('CREATE SCHEMA {SCHEMA}')")

    # Users table
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('display_name', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('user_id'),
        schema=SCHEMA,
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True, schema=SCHEMA)

    # Time entries table
    op.create_table(
        'time_entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('login_time', sa.DateTime(), nullable=True),
        sa.Column('logout_time', sa.DateTime(), nullable=True),
        sa.Column('total_hours', sa.Numeric(precision=5, scale=2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("status IN ('pending', 'approved')", name='ck_time_entries_status'),
        sa.ForeignKeyConstraint(['user_id'], [_fk('users.user_id')], name='fk_time_entries_user'),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )
    op.create_index('ix_time_entries_user_id', 'time_entries', ['user_id'], schema=SCHEMA)
    op.create_index('ix_time_entries_user_status_date', 'time_entries', ['user_id', 'status', 'date'], schema=SCHEMA)
    op.create_index('ix_time_entries_status_date', 'time_entries', ['status', 'date'], schema=SCHEMA)

    # User sessions table
    op.create_table(
        'user_sessions',
        sa.Column('session_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('session_token', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('last_activity_at', sa.DateTime(), nullable=True),
        sa.Column('logged_out_at', sa.DateTime(), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], [_fk('users.user_id')], name='fk_user_sessions_user'),
        sa.PrimaryKeyConstraint('session_id'),
        sa.UniqueConstraint('session_token', name='uq_user_sessions_token'),
        schema=SCHEMA,
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'], schema=SCHEMA)
    op.create_index('ix_user_sessions_user_active', 'user_sessions', ['user_id', 'is_active'], schema=SCHEMA)


def downgrade() -> None:
    op.drop_table('user_sessions', schema=SCHEMA)
    op.drop_table('time_entries', schema=SCHEMA)
    op.drop_table('users', schema=SCHEMA)
