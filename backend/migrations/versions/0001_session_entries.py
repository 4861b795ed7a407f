"""session key-value store

Revision ID: 0001_session_entries
Revises: 
Create Date: 2026-10-19
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_session_entries'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('session_entries',
        sa.Column('key', sa.String(length=64), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    )


def downgrade():
    op.drop_table('session_entries')
