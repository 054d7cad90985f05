"""Create identity tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create organizations, users and invitations."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.execute("CREATE TYPE user_role AS ENUM ('admin', 'manager', 'user')")
    op.execute(
        "CREATE TYPE invitation_status AS ENUM ('pending', 'accepted', 'expired', 'revoked')"
    )

    op.create_table(
        'organizations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('LENGTH(name) > 0', name='organization_name_not_empty'),
        sa.CheckConstraint('LENGTH(slug) > 0', name='organization_slug_not_empty'),
    )
    op.create_index('idx_organizations_slug', 'organizations', ['slug'], unique=True)
    op.create_index('idx_organizations_deleted_at', 'organizations', ['deleted_at'])

    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('org_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', postgresql.ENUM('admin', 'manager', 'user', name='user_role', create_type=False), nullable=False, server_default='user'),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_users_org_id', 'users', ['org_id'])
    # Email is unique across all organizations
    op.create_index('idx_users_email', 'users', ['email'], unique=True)
    op.create_index('idx_users_deleted_at', 'users', ['deleted_at'])

    op.create_table(
        'invitations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('org_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('invitor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('token', sa.String(128), nullable=False),
        sa.Column('role', postgresql.ENUM('admin', 'manager', 'user', name='user_role', create_type=False), nullable=False),
        sa.Column('status', postgresql.ENUM('pending', 'accepted', 'expired', 'revoked', name='invitation_status', create_type=False), nullable=False, server_default='pending'),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
    )
    op.create_index('idx_invitations_token', 'invitations', ['token'], unique=True)
    op.create_index('idx_invitations_org_id', 'invitations', ['org_id'])
    op.create_index('idx_invitations_email', 'invitations', ['email'])
    op.create_index('idx_invitations_expires_at', 'invitations', ['expires_at'])


def downgrade() -> None:
    """Drop identity tables."""
    op.drop_table('invitations')
    op.drop_table('users')
    op.drop_table('organizations')

    op.execute('DROP TYPE IF EXISTS invitation_status')
    op.execute('DROP TYPE IF EXISTS user_role')
