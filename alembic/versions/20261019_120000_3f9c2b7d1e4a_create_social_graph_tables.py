"""Create social graph tables

Revision ID: 3f9c2b7d1e4a
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2b7d1e4a'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('username', sa.String(30), nullable=True),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('photo_url', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'settings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_private', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_notifications', sa.Boolean(), nullable=True),
        sa.Column('push_notifications', sa.Boolean(), nullable=True),
        sa.Column('theme', sa.String(50), nullable=True),
        sa.Column('interests', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_settings_user_id', 'settings', ['user_id'], unique=True)

    op.create_table(
        'social_profiles',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('friends', sa.JSON(), nullable=False),
        sa.Column('followers', sa.JSON(), nullable=False),
        sa.Column('following', sa.JSON(), nullable=False),
        sa.Column('blocked_users', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    # Authoritative guard for concurrent get-or-create
    op.create_index('ix_social_profiles_owner_id', 'social_profiles', ['owner_id'], unique=True)

    op.create_table(
        'friend_requests',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('requester_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('requester_id', 'recipient_id', name='uq_friend_request_pair'),
    )
    op.create_index('ix_friend_requests_requester_id', 'friend_requests', ['requester_id'])
    op.create_index('ix_friend_requests_recipient_id', 'friend_requests', ['recipient_id'])

    op.create_table(
        'follow_requests',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('requester_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_follow_requests_requester_id', 'follow_requests', ['requester_id'])
    op.create_index('ix_follow_requests_recipient_id', 'follow_requests', ['recipient_id'])
    # One pending request per ordered pair; decided rows stay as history
    op.create_index(
        'uq_follow_request_pending',
        'follow_requests',
        ['requester_id', 'recipient_id', 'status'],
        unique=True,
        postgresql_where=sa.text("status = 'pending'")
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('link_url', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    op.create_table(
        'groups',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('members', sa.JSON(), nullable=False),
        sa.Column('icon_url', sa.Text(), nullable=True),
        sa.Column('icon_key', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_groups_owner_id', 'groups', ['owner_id'])


def downgrade() -> None:
    op.drop_table('groups')
    op.drop_table('notifications')
    op.drop_index('uq_follow_request_pending', table_name='follow_requests')
    op.drop_table('follow_requests')
    op.drop_table('friend_requests')
    op.drop_table('social_profiles')
    op.drop_table('settings')
    op.drop_table('users')
