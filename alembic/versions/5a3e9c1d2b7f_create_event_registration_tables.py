"""Create users, events, registrations, teams and attendance tables

Revision ID: 5a3e9c1d2b7f
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5a3e9c1d2b7f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('college', sa.String(200), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('reg_no', sa.String(50), nullable=True),
        sa.Column('year', sa.String(10), nullable=True),
        sa.Column('phone', sa.String(10), nullable=True),
        sa.Column('accommodation', sa.String(20), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(10), nullable=False, server_default='user'),
        sa.Column('pass_type', sa.String(20), nullable=True),
        sa.Column('transaction_id', sa.String(12), nullable=True),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('qr_code_id', sa.String(50), nullable=True),
        sa.Column('reset_token', sa.String(64), nullable=True),
        sa.Column('reset_expires', sa.BigInteger(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('qr_code_id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'])
    op.create_index(op.f('ix_users_qr_code_id'), 'users', ['qr_code_id'])

    # Create events table
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('time', sa.Time(), nullable=True),
        sa.Column('venue', sa.String(200), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Create registrations table
    op.create_table(
        'registrations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'event_id', name='uq_registrations_user_event')
    )
    op.create_index(op.f('ix_registrations_user_id'), 'registrations', ['user_id'])
    op.create_index(op.f('ix_registrations_event_id'), 'registrations', ['event_id'])

    # Create teams table
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('members', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_teams_event_id'), 'teams', ['event_id'])

    # Create attendance table
    op.create_table(
        'attendance',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=True),
        sa.Column('attendance_status', sa.String(20), nullable=False, server_default='present'),
        sa.Column('marked_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_attendance_event_user')
    )
    op.create_index(op.f('ix_attendance_event_id'), 'attendance', ['event_id'])
    op.create_index(op.f('ix_attendance_user_id'), 'attendance', ['user_id'])


def downgrade():
    op.drop_table('attendance')
    op.drop_table('teams')
    op.drop_table('registrations')
    op.drop_table('events')
    op.drop_table('users')
