"""create club account tables

Revision ID: 3c9a1f0d72b4
Revises:
Create Date: 2026-10-18 09:12:40

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9a1f0d72b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


PERMISSION_COLUMNS = [
    'can_view_dashboard',
    'can_manage_players',
    'can_upload_matches',
    'can_edit_club_profile',
    'can_manage_staff',
    'can_use_ai_scouting',
    'can_view_messages',
    'can_manage_transfers',
    'can_view_club_history',
    'can_modify_settings',
    'can_explore_talent',
    'can_view_analytics',
    'can_export_data',
    'can_manage_subscriptions',
]

CLUB_ACTIONS = (
    'CREATE_PLAYER',
    'RESET_PLAYER_PASSWORD',
    'DELETE_PLAYER',
    'CREATE_STAFF',
    'RESET_STAFF_PASSWORD',
    'UPDATE_STAFF_PERMISSIONS',
    'SET_STAFF_STATUS',
    'DELETE_STAFF',
)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.Enum('CLUB', 'SCOUT', 'PLAYER', 'STAFF', name='role'), nullable=False),
        sa.Column('password_reset_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'clubs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('owner_id', sa.UUID(), nullable=False),
        sa.Column('club_name', sa.String(length=120), nullable=False),
        sa.Column('league', sa.String(length=120), nullable=True),
        sa.Column('division', sa.String(length=60), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', name='uq_clubs_owner_id'),
    )

    op.create_table(
        'players',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('club_id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('first_name', sa.String(length=60), nullable=False),
        sa.Column('last_name', sa.String(length=60), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('position', sa.String(length=30), nullable=True),
        sa.Column('jersey_number', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('create_request_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
        sa.ForeignKeyConstraint(['profile_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id', name='uq_players_profile_id'),
        sa.UniqueConstraint('create_request_id', name='uq_players_create_request_id'),
    )
    op.create_index('ix_players_club_id', 'players', ['club_id'])

    op.create_table(
        'club_staff',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('club_id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('staff_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('contact_number', sa.String(length=40), nullable=True),
        sa.Column('staff_username', sa.String(length=120), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by', sa.UUID(), nullable=False),
        sa.Column('create_request_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
        sa.ForeignKeyConstraint(['profile_id'], ['users.id']),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id', name='uq_club_staff_profile_id'),
        sa.UniqueConstraint('create_request_id', name='uq_club_staff_create_request_id'),
    )
    op.create_index('ix_club_staff_club_id', 'club_staff', ['club_id'])

    op.create_table(
        'staff_permissions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('staff_id', sa.UUID(), nullable=False),
        *[sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.false()) for name in PERMISSION_COLUMNS],
        sa.Column('updated_by', sa.UUID(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['staff_id'], ['club_staff.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['updated_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('staff_id', name='uq_staff_permissions_staff_id'),
    )

    op.create_table(
        'club_action_logs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('actor_id', sa.UUID(), nullable=False),
        sa.Column('club_id', sa.UUID(), nullable=False),
        sa.Column('target_id', sa.UUID(), nullable=True),
        sa.Column('action', sa.Enum(*CLUB_ACTIONS, name='club_action'), nullable=False),
        sa.Column('detail', sa.String(length=500), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id']),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_club_action_logs_club_id', 'club_action_logs', ['club_id'])


def downgrade() -> None:
    op.drop_index('ix_club_action_logs_club_id', table_name='club_action_logs')
    op.drop_table('club_action_logs')
    op.drop_table('staff_permissions')
    op.drop_index('ix_club_staff_club_id', table_name='club_staff')
    op.drop_table('club_staff')
    op.drop_index('ix_players_club_id', table_name='players')
    op.drop_table('players')
    op.drop_table('clubs')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    sa.Enum(name='club_action').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='role').drop(op.get_bind(), checkfirst=True)
