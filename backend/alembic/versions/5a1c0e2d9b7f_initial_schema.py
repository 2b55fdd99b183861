"""Initial schema: accounts, contexts, notes, tags, bookmarks, live sessions

Revision ID: 5a1c0e2d9b7f
Revises:
Create Date: 2025-10-02 09:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5a1c0e2d9b7f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _uuid_fk(name, target, nullable=False, ondelete=None, unique=False):
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
        unique=unique,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('username', sa.String(length=50), nullable=False, unique=True),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False),
        sa.CheckConstraint('length(username) <= 50', name='ck_users_username_len'),
        sa.CheckConstraint('first_name IS NULL OR length(first_name) <= 100', name='ck_users_first_name_len'),
        sa.CheckConstraint('last_name IS NULL OR length(last_name) <= 100', name='ck_users_last_name_len'),
    )
    op.create_index('idx_users_username', 'users', ['username'])
    op.create_index('idx_users_enabled', 'users', ['enabled'])

    op.create_table(
        'roles',
        *_base_columns(),
        sa.Column('role_name', sa.String(length=50), nullable=False, unique=True),
    )

    op.create_table(
        'user_roles',
        *_base_columns(),
        _uuid_fk('user_id', 'users.id', ondelete='CASCADE'),
        _uuid_fk('role_id', 'roles.id', ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'role_id', name='uq_user_roles_user_role'),
    )
    op.create_index('idx_user_roles_user_id', 'user_roles', ['user_id'])

    op.create_table(
        'activation_keys',
        *_base_columns(),
        sa.Column('activation_key', sa.String(length=36), nullable=False, unique=True),
        _uuid_fk('user_id', 'users.id', ondelete='CASCADE', unique=True),
    )
    op.create_index('idx_activation_keys_key', 'activation_keys', ['activation_key'])

    op.create_table(
        'tags',
        *_base_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.UniqueConstraint('name', name='uq_tags_name'),
        sa.CheckConstraint('name = lower(name)', name='ck_tags_name_lowercase'),
        sa.CheckConstraint('length(name) <= 50', name='ck_tags_name_len'),
    )
    op.create_index('idx_tags_name', 'tags', ['name'])

    op.create_table(
        'contexts',
        *_base_columns(),
        sa.Column('context_name', sa.String(length=1024), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=True),
        sa.Column('description_as_note', sa.Text(), nullable=True),
        _uuid_fk('owner_id', 'users.id', ondelete='CASCADE'),
    )
    op.create_index('idx_contexts_owner_id', 'contexts', ['owner_id'])

    op.create_table(
        'notes',
        *_base_columns(),
        sa.Column('content', sa.Text(), nullable=False),
        _uuid_fk('author_id', 'users.id'),
        _uuid_fk('context_id', 'contexts.id', nullable=True),
        _uuid_fk('fragment_tag_id', 'tags.id', nullable=True),
        _uuid_fk('parent_note_id', 'notes.id', nullable=True),
    )
    op.create_index('idx_notes_author_id', 'notes', ['author_id'])
    op.create_index('idx_notes_context_id', 'notes', ['context_id'])
    op.create_index('idx_notes_created_at', 'notes', ['created_at'])
    op.create_index('idx_notes_parent_note_id', 'notes', ['parent_note_id'])
    op.create_index('idx_notes_context_fragment', 'notes', ['context_id', 'fragment_tag_id'])

    op.create_table(
        'note_tags',
        *_base_columns(),
        _uuid_fk('note_id', 'notes.id'),
        _uuid_fk('tag_id', 'tags.id', ondelete='CASCADE'),
    )
    op.create_index('idx_note_tags_note_id', 'note_tags', ['note_id'])
    op.create_index('idx_note_tags_tag_id', 'note_tags', ['tag_id'])

    op.create_table(
        'note_mentions',
        *_base_columns(),
        _uuid_fk('note_id', 'notes.id'),
        _uuid_fk('mention_id', 'users.id', ondelete='CASCADE'),
    )
    op.create_index('idx_note_mentions_note_id', 'note_mentions', ['note_id'])
    op.create_index('idx_note_mentions_mention_id', 'note_mentions', ['mention_id'])

    op.create_table(
        'bookmarks',
        *_base_columns(),
        _uuid_fk('note_id', 'notes.id'),
        _uuid_fk('user_id', 'users.id', ondelete='CASCADE'),
        sa.UniqueConstraint('note_id', 'user_id', name='uq_bookmarks_note_user'),
    )
    op.create_index('idx_bookmarks_note_id', 'bookmarks', ['note_id'])
    op.create_index('idx_bookmarks_user_id', 'bookmarks', ['user_id'])

    op.create_table(
        'live_sessions',
        *_base_columns(),
        _uuid_fk('note_id', 'notes.id'),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_live_sessions_note_id', 'live_sessions', ['note_id'])

    op.create_table(
        'live_session_responses',
        *_base_columns(),
        _uuid_fk('live_session_id', 'live_sessions.id'),
        _uuid_fk('user_id', 'users.id', ondelete='CASCADE'),
        sa.Column('answer_as_string', sa.Text(), nullable=True),
        sa.Column('percent_credit', sa.Float(), nullable=True),
        sa.UniqueConstraint('live_session_id', 'user_id', name='uq_live_session_responses_user'),
    )
    op.create_index(
        'idx_live_session_responses_session_id', 'live_session_responses', ['live_session_id']
    )


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'live_session_responses',
        'live_sessions',
        'bookmarks',
        'note_mentions',
        'note_tags',
        'notes',
        'contexts',
        'tags',
        'activation_keys',
        'user_roles',
        'roles',
        'users',
    ):
        op.drop_table(table)
